"""
Watermark removal proxy
Downloads an image, forwards it to the RapidAPI watermark remover and returns
the cleaned image as a base64 data URL. Nothing is cached or retried.
"""

import base64
from typing import Optional

import httpx
import structlog

from ..config import Settings, get_settings
from ..exceptions import ConfigurationError, WatermarkServiceError

logger = structlog.get_logger(__name__)

DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"
DEFAULT_RESULT_CONTENT_TYPE = "image/png"
USER_AGENT = "Mozilla/5.0 (compatible; NewsBot/1.0)"

GENERIC_FAILURE_MESSAGE = "Failed to remove watermark. Please try again."
STATUS_MESSAGES = {
    403: "API key invalid or quota exceeded. Check your RapidAPI subscription.",
    429: "Rate limit reached. Please wait a moment and try again.",
}
TIMEOUT_MESSAGE = "Request timed out. The image may be too large or the service is slow."
NOT_CONFIGURED_MESSAGE = "Watermark API key not configured. Add WATERMARK_API_KEY to .env"


def image_filename(content_type: str) -> str:
    subtype = content_type.split("/", 1)[1] if "/" in content_type else ""
    ext = subtype.split(";", 1)[0].strip() or "jpg"
    return f"news-image.{ext}"


def to_data_url(content: bytes, content_type: str) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


class WatermarkService:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    async def remove_watermark(self, image_url: str) -> str:
        if not self.settings.watermark_configured:
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

        try:
            image_bytes, content_type = await self._download_image(image_url)
            return await self._clean_image(image_bytes, content_type)
        except httpx.TimeoutException as e:
            logger.error("watermark_removal_timeout", image_url=image_url, error=str(e))
            raise WatermarkServiceError(TIMEOUT_MESSAGE, details={"reason": "timeout"})
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error("watermark_removal_http_error", image_url=image_url, status_code=status_code)
            raise WatermarkServiceError(
                STATUS_MESSAGES.get(status_code, GENERIC_FAILURE_MESSAGE),
                details={"status_code": status_code}
            )
        except httpx.HTTPError as e:
            logger.error("watermark_removal_failed", image_url=image_url, error=str(e))
            raise WatermarkServiceError(GENERIC_FAILURE_MESSAGE, details={"reason": str(e)})

    async def _download_image(self, image_url: str):
        headers = {"User-Agent": USER_AGENT, "Referer": image_url}
        async with httpx.AsyncClient(timeout=self.settings.watermark_download_timeout_seconds) as client:
            response = await client.get(image_url, headers=headers, follow_redirects=True)
            response.raise_for_status()

        content_type = response.headers.get("content-type") or DEFAULT_IMAGE_CONTENT_TYPE
        logger.info("watermark_image_downloaded", image_url=image_url, size=len(response.content))
        return response.content, content_type

    async def _clean_image(self, image_bytes: bytes, content_type: str) -> str:
        headers = {
            "X-RapidAPI-Key": self.settings.watermark_api_key,
            "X-RapidAPI-Host": self.settings.watermark_api_host,
        }
        files = {"image": (image_filename(content_type), image_bytes, content_type)}

        async with httpx.AsyncClient(timeout=self.settings.watermark_api_timeout_seconds) as client:
            response = await client.post(self.settings.watermark_api_url, headers=headers, files=files)
            response.raise_for_status()

        result_type = response.headers.get("content-type") or DEFAULT_RESULT_CONTENT_TYPE
        return to_data_url(response.content, result_type)
