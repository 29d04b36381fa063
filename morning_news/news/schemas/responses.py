"""News API response schemas (camelCase on the wire)"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..services.content_normalizer import detect_kind, normalize_content


# ============================================================================
# Content blocks
# ============================================================================

class ContentBlockResponse(BaseModel):
    """One normalized piece of an article body"""
    type: str  # plain_text, rich_item
    kind: str  # paragraph, image, document, link
    text: str
    attributes: Dict[str, Any] = {}


def build_content_blocks(raw: Any) -> List[ContentBlockResponse]:
    return [
        ContentBlockResponse(
            type=block.type,
            kind=detect_kind(block.text),
            text=block.text,
            attributes=getattr(block, "attributes", {}),
        )
        for block in normalize_content(raw)
    ]


# ============================================================================
# Article
# ============================================================================

class ArticleResponse(BaseModel):
    """Serialized article; `_id` is the store identity, `id` the external id"""
    model_config = ConfigDict(populate_by_name=True)

    store_id: int = Field(alias="_id")
    external_id: str = Field(alias="id")
    title_si: str = Field(alias="titleSi")
    title_en: Optional[str] = Field(default="", alias="titleEn")
    cover: Optional[str] = None
    published_at: Optional[datetime] = Field(default=None, alias="published")
    content_si: Any = Field(default=None, alias="contentSi")
    share_url: Optional[str] = None
    category: Any = None
    category_label: str = Field(default="news", alias="categoryLabel")
    is_custom: bool = Field(default=False, alias="isCustom")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @computed_field(alias="contentBlocks")
    @property
    def content_blocks(self) -> List[ContentBlockResponse]:
        return build_content_blocks(self.content_si)

    @classmethod
    def from_article(cls, article) -> "ArticleResponse":
        return cls(
            store_id=article.id,
            external_id=article.external_id,
            title_si=article.title_si,
            title_en=article.title_en,
            cover=article.cover,
            published_at=article.published_at,
            content_si=article.content_si,
            share_url=article.share_url,
            category=article.category,
            category_label=article.category_label,
            is_custom=bool(article.is_custom),
            created_at=article.created_at,
            updated_at=article.updated_at,
        )


# ============================================================================
# Envelopes
# ============================================================================

class NewsListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    count: int
    page: int
    total_pages: int = Field(alias="totalPages")
    total_news: int = Field(alias="totalNews")
    data: List[ArticleResponse]


class CategoryNewsListResponse(NewsListResponse):
    category: str
    total: int


class NewsDetailResponse(BaseModel):
    success: bool = True
    data: ArticleResponse


class NewsCategoryCount(BaseModel):
    category: str
    count: int


class NewsCategoriesResponse(BaseModel):
    success: bool = True
    data: List[NewsCategoryCount]


class MessageResponse(BaseModel):
    success: bool = True
    message: str
    data: Dict[str, Any] = {}
