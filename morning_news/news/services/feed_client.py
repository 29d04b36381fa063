"""Client for the upstream news feed (a single JSON endpoint)."""

from typing import Any, List, Optional, Union

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from ...config import get_settings
from ...exceptions import FeedFormatError, FeedUnavailableError

logger = structlog.get_logger(__name__)


class FeedArticle(BaseModel):
    """One record from news_data.data; unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[Union[int, str]] = None
    titleSi: Optional[str] = None
    titleEn: Optional[str] = None
    cover: Optional[str] = None
    thumb: Optional[str] = None
    published: Any = None
    contentSi: Any = None
    share_url: Optional[str] = None
    category: Any = None

    @property
    def external_id(self) -> Optional[str]:
        return None if self.id is None else str(self.id)

    @property
    def cover_url(self) -> Optional[str]:
        return self.cover or self.thumb


def extract_articles(payload: Any) -> List[dict]:
    """Pull the article list out of the {news_data: {data: [...]}} envelope."""
    if not isinstance(payload, dict):
        raise FeedFormatError("Feed payload is not a JSON object")

    news_data = payload.get("news_data")
    if not isinstance(news_data, dict):
        raise FeedFormatError("Feed payload has no news_data object")

    articles = news_data.get("data")
    if not isinstance(articles, list):
        raise FeedFormatError("Feed payload has no news_data.data list")

    return articles


def parse_article(record: Any) -> Optional[FeedArticle]:
    if not isinstance(record, dict):
        return None
    try:
        return FeedArticle.model_validate(record)
    except PydanticValidationError as e:
        logger.warning("feed_record_invalid", error=str(e))
        return None


class NewsFeedClient:
    def __init__(self, feed_url: Optional[str] = None, timeout_seconds: Optional[float] = None):
        settings = get_settings()
        self.feed_url = feed_url or settings.news_feed_url
        self.timeout_seconds = timeout_seconds or settings.news_feed_timeout_seconds

    async def fetch_payload(self) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(self.feed_url)
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException:
            raise FeedUnavailableError("Feed request timed out", details={"url": self.feed_url})
        except httpx.HTTPStatusError as e:
            raise FeedUnavailableError(
                f"Feed returned HTTP {e.response.status_code}",
                details={"url": self.feed_url, "status_code": e.response.status_code}
            )
        except httpx.HTTPError as e:
            raise FeedUnavailableError(f"Feed request failed: {e}", details={"url": self.feed_url})
        except ValueError:
            raise FeedFormatError("Feed response is not valid JSON", details={"url": self.feed_url})

    async def fetch_articles(self) -> List[Any]:
        """
        Fetch the raw article records in feed order.

        Raises:
            FeedUnavailableError: network or HTTP failure
            FeedFormatError: the payload does not have the expected shape
        """
        payload = await self.fetch_payload()
        records = extract_articles(payload)
        logger.info("news_feed_fetched", url=self.feed_url, article_count=len(records))
        return records
