"""
Read-only News Service for API endpoints
Handles only database reads; syncing lives in news_sync_service
"""

import math
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from ...exceptions import ArticleNotFoundError, ValidationError
from ...repositories.news_repository import NewsRepository
from ...utils.id_utils import normalize_numeric_id
from ..models.news_article import CategoryLabel, NewsArticle
from ..schemas.responses import (
    ArticleResponse,
    CategoryNewsListResponse,
    NewsCategoriesResponse,
    NewsCategoryCount,
    NewsDetailResponse,
    NewsListResponse,
)


def parse_positive_int(value: Any, default: int, maximum: Optional[int] = None) -> int:
    """Lenient query parsing: anything that is not a positive integer yields the default."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    if maximum is not None:
        number = min(number, maximum)
    return number


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


class NewsService:
    """Read-only news service for API endpoints"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = NewsRepository(db)

    def list_articles(self, page: int = 1, limit: int = 10) -> NewsListResponse:
        """Newest-first page over every article, synced or custom"""
        total = self.repository.count()
        articles = self._page(total, page, limit)

        return NewsListResponse(
            count=len(articles),
            page=page,
            total_pages=total_pages(total, limit),
            total_news=total,
            data=[ArticleResponse.from_article(a) for a in articles],
        )

    def list_articles_by_category(self, category: str, page: int = 1, limit: int = 20) -> CategoryNewsListResponse:
        label = self.validate_category(category)
        total = self.repository.count(category_label=label.value)
        articles = self._page(total, page, limit, category_label=label.value)

        return CategoryNewsListResponse(
            category=label.value,
            count=len(articles),
            page=page,
            total_pages=total_pages(total, limit),
            total_news=total,
            total=total,
            data=[ArticleResponse.from_article(a) for a in articles],
        )

    def _page(self, total: int, page: int, limit: int, category_label: Optional[str] = None) -> List[NewsArticle]:
        # Past the last page: nothing to fetch
        offset = (page - 1) * limit
        if offset >= total:
            return []
        return self.repository.list(category_label=category_label, offset=offset, limit=limit)

    def get_article(self, raw_id: str) -> NewsDetailResponse:
        article = self.find_article(raw_id)
        if article is None:
            raise ArticleNotFoundError(raw_id)
        return NewsDetailResponse(data=ArticleResponse.from_article(article))

    def find_article(self, raw_id: str) -> Optional[NewsArticle]:
        """
        Look up by external id as given, then by its numeric canonical form
        for records stored with legacy numeric ids.
        """
        article = self.repository.get_by_external_id(raw_id)
        if article is not None:
            return article

        numeric_id = normalize_numeric_id(raw_id)
        if numeric_id is not None and numeric_id != raw_id:
            return self.repository.get_by_external_id(numeric_id)
        return None

    def get_categories(self) -> NewsCategoriesResponse:
        counts = self.repository.count_by_category()
        return NewsCategoriesResponse(
            data=[
                NewsCategoryCount(category=label.value, count=counts.get(label.value, 0))
                for label in CategoryLabel
            ]
        )

    @staticmethod
    def validate_category(category: str) -> CategoryLabel:
        try:
            return CategoryLabel(category)
        except ValueError:
            raise ValidationError(
                "Invalid category",
                details={"category": category, "allowed": CategoryLabel.values()}
            )
