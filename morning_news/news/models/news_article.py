from enum import Enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON
from sqlalchemy.sql import func

from ...core.database import Base


class CategoryLabel(str, Enum):
    NEWS = "news"
    SPORTS = "sports"
    BUSINESS = "business"
    POLITICS = "politics"
    OPINION = "opinion"
    ENTERTAINMENT = "entertainment"
    LIFE = "life"

    @classmethod
    def values(cls) -> list:
        return [label.value for label in cls]


class NewsArticle(Base):
    """
    A news article, either synced from the upstream feed or curated through
    the admin API (is_custom=True).

    external_id is the feed's identifier and is unique across both origins.
    content_si keeps whatever shape the feed delivered: a string or a list of
    strings and objects.
    """
    __tablename__ = "news_articles"

    # Store identity, used by the admin API
    id = Column(Integer, primary_key=True, autoincrement=True)
    external_id = Column(String(255), nullable=False, unique=True, index=True)

    title_si = Column(Text, nullable=False)
    title_en = Column(Text, default="")
    cover = Column(String(1000))
    published_at = Column(DateTime, default=func.now(), index=True)
    content_si = Column(JSON)
    share_url = Column(String(1000))

    # Raw upstream category, kept for audit only
    category = Column(JSON)
    category_label = Column(String(32), nullable=False, default=CategoryLabel.NEWS.value, index=True)
    is_custom = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<NewsArticle(id={self.id}, external_id='{self.external_id}', label='{self.category_label}')>"
