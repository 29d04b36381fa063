"""
News Sync Service
One sync cycle against the upstream feed:
1. Fetch the article list
2. Classify each article from its English title
3. Upsert it by external id, overwriting the sync-owned fields

Articles created through the admin API are never overwritten. A failing
record is logged and skipped; the rest of the cycle carries on.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import structlog
from sqlalchemy.orm import Session

from ...core.database import SessionLocal
from ...exceptions import FeedUnavailableError
from ...repositories.news_repository import NewsRepository
from ...utils.date_utils import parse_datetime, utc_now
from .category_classifier import classify
from .feed_client import FeedArticle, NewsFeedClient, parse_article

logger = structlog.get_logger(__name__)


@dataclass
class SyncResult:
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    failed_ids: List[str] = field(default_factory=list)
    skipped_ids: List[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=utc_now)
    finished_at: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def processed(self) -> int:
        return self.inserted + self.updated + self.skipped + self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "inserted": self.inserted,
            "updated": self.updated,
            "skipped": self.skipped,
            "failed": self.failed,
            "failed_ids": list(self.failed_ids),
            "skipped_ids": list(self.skipped_ids),
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "error": self.error,
        }


def build_sync_fields(article: FeedArticle) -> Dict[str, Any]:
    """Every field a sync cycle owns, derived from one feed record."""
    return {
        "title_si": article.titleSi,
        "title_en": article.titleEn or "",
        "cover": article.cover_url,
        "published_at": parse_datetime(article.published) or utc_now(),
        "content_si": article.contentSi,
        "share_url": article.share_url,
        "category": article.category,
        "category_label": classify(article.titleEn).value,
        "is_custom": False,
    }


class NewsSyncService:
    """Fetch-classify-upsert pass over the upstream feed"""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        feed_client: Optional[NewsFeedClient] = None,
    ):
        self.session_factory = session_factory
        self.feed_client = feed_client or NewsFeedClient()

    async def run_sync_cycle(self) -> SyncResult:
        """
        Run one sync cycle. Never raises: feed errors produce an empty result
        with `error` set, store errors are recorded per record, and a store
        that stops responding ends the cycle early with `error` set.
        """
        result = SyncResult()
        logger.info("news_sync_started")

        try:
            records = await self.feed_client.fetch_articles()
        except FeedUnavailableError as e:
            logger.error("news_sync_feed_failed", error=e.message, **e.details)
            result.error = e.message
            result.finished_at = utc_now()
            return result

        db = self.session_factory()
        try:
            repository = NewsRepository(db)
            for record in records:
                self._sync_record(repository, record, result)
        except Exception as e:
            logger.error("news_sync_store_failed", error=str(e), exc_info=e)
            result.error = f"Store error: {e}"
        finally:
            db.close()

        result.finished_at = utc_now()
        logger.info(
            "news_sync_completed",
            inserted=result.inserted,
            updated=result.updated,
            skipped=result.skipped,
            failed=result.failed,
        )
        return result

    def _sync_record(self, repository: NewsRepository, record: Any, result: SyncResult) -> None:
        article = parse_article(record)
        external_id = article.external_id if article else None

        if article is None or external_id is None or not article.titleSi:
            result.failed += 1
            result.failed_ids.append(external_id or "<missing>")
            logger.warning("news_sync_record_incomplete", external_id=external_id)
            return

        try:
            existing = repository.get_by_external_id(external_id)
            if existing is not None and existing.is_custom:
                result.skipped += 1
                result.skipped_ids.append(external_id)
                logger.warning("news_sync_custom_collision", external_id=external_id, article_id=existing.id)
                return

            _, created = repository.upsert(external_id, build_sync_fields(article))
        except Exception as e:
            result.failed += 1
            result.failed_ids.append(external_id)
            logger.error("news_sync_record_failed", external_id=external_id, error=str(e), exc_info=e)
            repository.db.rollback()
            return

        if created:
            result.inserted += 1
        else:
            result.updated += 1


async def run_news_sync_job() -> SyncResult:
    """Entry point for a single sync run outside the API process."""
    service = NewsSyncService()
    return await service.run_sync_cycle()


if __name__ == "__main__":
    import asyncio

    asyncio.run(run_news_sync_job())
