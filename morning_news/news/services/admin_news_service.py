"""Admin CRUD for custom (hand-curated) articles, addressed by store identity."""

from typing import Any, Dict

import structlog
from sqlalchemy.orm import Session

from ...exceptions import ArticleNotFoundError, DuplicateArticleError, ValidationError
from ...repositories.news_repository import NewsRepository
from ...utils.date_utils import utc_now
from ...utils.id_utils import generate_custom_id, generate_unique_suffix
from ..models.news_article import CategoryLabel, NewsArticle
from ..schemas.requests import CustomNewsCreateRequest, CustomNewsUpdateRequest

logger = structlog.get_logger(__name__)

# request field -> model column
UPDATE_FIELD_MAP = {
    "id": "external_id",
    "title_si": "title_si",
    "title_en": "title_en",
    "cover": "cover",
    "published": "published_at",
    "content_si": "content_si",
    "share_url": "share_url",
    "category": "category",
    "category_label": "category_label",
    "is_custom": "is_custom",
}

NOT_NULL_FIELDS = ("external_id", "title_si", "category_label")


class AdminNewsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = NewsRepository(db)

    def _new_external_id(self) -> str:
        external_id = generate_custom_id()
        if self.repository.exists(external_id):
            external_id = f"{external_id}-{generate_unique_suffix()}"
        return external_id

    def create_article(self, request: CustomNewsCreateRequest) -> NewsArticle:
        external_id = request.id or self._new_external_id()
        label = request.category_label or CategoryLabel.NEWS

        article = self.repository.create(
            external_id,
            title_si=request.title_si,
            title_en=request.title_en or "",
            cover=request.cover,
            published_at=request.published or utc_now(),
            content_si=request.content_si,
            share_url=request.share_url,
            category=request.category,
            category_label=label.value,
            is_custom=True,
        )
        logger.info("custom_article_created", article_id=article.id, external_id=external_id)
        return article

    def update_article(self, article_id: int, request: CustomNewsUpdateRequest) -> NewsArticle:
        article = self.repository.get_by_id(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)

        fields = self._build_update_fields(request)
        if "external_id" in fields and fields["external_id"] != article.external_id:
            if self.repository.exists(fields["external_id"]):
                raise DuplicateArticleError(fields["external_id"])

        article = self.repository.update(article, fields)
        logger.info("custom_article_updated", article_id=article.id, fields=sorted(fields))
        return article

    def delete_article(self, article_id: int) -> None:
        article = self.repository.get_by_id(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)

        self.repository.delete(article)
        logger.info("custom_article_deleted", article_id=article_id, external_id=article.external_id)

    @staticmethod
    def _build_update_fields(request: CustomNewsUpdateRequest) -> Dict[str, Any]:
        supplied = request.model_dump(exclude_unset=True)
        fields = {}
        for key, value in supplied.items():
            column = UPDATE_FIELD_MAP.get(key)
            if column is None:
                continue
            if column in NOT_NULL_FIELDS and (value is None or value == ""):
                raise ValidationError(f"{key} cannot be empty", details={"field": key})
            if isinstance(value, CategoryLabel):
                value = value.value
            fields[column] = value

        if "is_custom" not in fields:
            fields["is_custom"] = True
        return fields
