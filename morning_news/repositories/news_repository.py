from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import DuplicateArticleError
from ..news.models.news_article import NewsArticle


class NewsRepository:
    def __init__(self, db: Session):
        self.db = db

    def _query(self, category_label: Optional[str] = None):
        query = self.db.query(NewsArticle)
        if category_label:
            query = query.filter(NewsArticle.category_label == category_label)
        return query

    def list(self, category_label: Optional[str] = None, offset: int = 0, limit: int = 10) -> List[NewsArticle]:
        return (
            self._query(category_label)
            .order_by(desc(NewsArticle.published_at), desc(NewsArticle.id))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self, category_label: Optional[str] = None) -> int:
        return self._query(category_label).count()

    def count_by_category(self) -> Dict[str, int]:
        rows = (
            self.db.query(NewsArticle.category_label, func.count(NewsArticle.id))
            .group_by(NewsArticle.category_label)
            .all()
        )
        return {label: count for label, count in rows}

    def get_by_id(self, article_id: int) -> Optional[NewsArticle]:
        return self.db.query(NewsArticle).filter(NewsArticle.id == article_id).first()

    def get_by_external_id(self, external_id: str) -> Optional[NewsArticle]:
        return self.db.query(NewsArticle).filter(NewsArticle.external_id == external_id).first()

    def exists(self, external_id: str) -> bool:
        return self.get_by_external_id(external_id) is not None

    def upsert(self, external_id: str, fields: Dict[str, Any]) -> Tuple[NewsArticle, bool]:
        """
        Insert or overwrite the article keyed by external_id.

        Returns the stored article and True when a new row was created. A
        concurrent insert of the same key is resolved by retrying as an update.
        """
        existing = self.get_by_external_id(external_id)
        if existing is not None:
            return self._overwrite(existing, fields), False

        article = NewsArticle(external_id=external_id, **fields)
        self.db.add(article)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.get_by_external_id(external_id)
            if existing is None:
                raise
            return self._overwrite(existing, fields), False

        self.db.refresh(article)
        return article, True

    def _overwrite(self, article: NewsArticle, fields: Dict[str, Any]) -> NewsArticle:
        for key, value in fields.items():
            setattr(article, key, value)
        self.db.commit()
        self.db.refresh(article)
        return article

    def create(self, external_id: str, **fields) -> NewsArticle:
        article = NewsArticle(external_id=external_id, **fields)
        self.db.add(article)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateArticleError(external_id)
        self.db.refresh(article)
        return article

    def update(self, article: NewsArticle, fields: Dict[str, Any]) -> NewsArticle:
        for key, value in fields.items():
            setattr(article, key, value)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateArticleError(fields.get("external_id", article.external_id))
        self.db.refresh(article)
        return article

    def delete(self, article: NewsArticle) -> None:
        self.db.delete(article)
        self.db.commit()
