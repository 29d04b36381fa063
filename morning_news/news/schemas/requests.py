"""News API request schemas"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.news_article import CategoryLabel


class _ArticleFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title_en: Optional[str] = Field(default=None, alias="titleEn")
    cover: Optional[str] = None
    published: Optional[datetime] = None
    content_si: Any = Field(default=None, alias="contentSi")
    share_url: Optional[str] = None
    category: Any = None
    category_label: Optional[CategoryLabel] = Field(default=None, alias="categoryLabel")


class CustomNewsCreateRequest(_ArticleFields):
    """Body of POST /api/admin/news"""
    id: Optional[str] = Field(default=None, max_length=255, description="External id; generated when absent")
    title_si: str = Field(..., min_length=1, alias="titleSi")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        if value is None or value == "":
            return None
        return str(value)


class CustomNewsUpdateRequest(_ArticleFields):
    """Body of PUT /api/admin/news/{id}; only supplied fields are applied"""
    id: Optional[str] = Field(default=None, max_length=255)
    title_si: Optional[str] = Field(default=None, min_length=1, alias="titleSi")
    is_custom: Optional[bool] = Field(default=None, alias="isCustom")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        if value is None:
            return None
        return str(value)
