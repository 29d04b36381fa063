import base64
import pytest
import httpx
from unittest.mock import patch, MagicMock, AsyncMock

from morning_news.exceptions import ConfigurationError, WatermarkServiceError
from morning_news.services.watermark_service import (
    WatermarkService,
    image_filename,
    to_data_url,
)


def _status_error(status_code):
    response = MagicMock()
    response.status_code = status_code
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=None, response=response)


class TestHelpers:
    @pytest.mark.parametrize("content_type, filename", [
        ("image/png", "news-image.png"),
        ("image/jpeg; charset=binary", "news-image.jpeg"),
        ("application/octet-stream", "news-image.octet-stream"),
        ("garbage", "news-image.jpg"),
    ])
    def test_image_filename(self, content_type, filename):
        assert image_filename(content_type) == filename

    def test_to_data_url(self):
        assert to_data_url(b"abc", "image/png") == "data:image/png;base64," + base64.b64encode(b"abc").decode()


class TestWatermarkService:
    @pytest.fixture(autouse=True)
    def setup_service(self, mock_settings):
        self.settings = mock_settings
        self.service = WatermarkService(settings=mock_settings)

    @pytest.mark.asyncio
    async def test_unconfigured_key(self):
        self.settings.watermark_configured = False

        with pytest.raises(ConfigurationError, match="not configured"):
            await self.service.remove_watermark("https://cdn.example.com/a.jpg")

    @patch('httpx.AsyncClient')
    @pytest.mark.asyncio
    async def test_remove_watermark(self, mock_client, mock_httpx_response):
        source = MagicMock()
        source.content = b"jpeg-bytes"
        source.headers = {"content-type": "image/jpeg"}
        source.raise_for_status = MagicMock()

        http = mock_client.return_value.__aenter__.return_value
        http.get = AsyncMock(return_value=source)
        http.post = AsyncMock(return_value=mock_httpx_response)

        data_url = await self.service.remove_watermark("https://cdn.example.com/a.jpg")

        assert data_url == "data:image/png;base64," + base64.b64encode(b"\x89PNGfake").decode()

        _, get_kwargs = http.get.call_args
        assert get_kwargs["headers"]["Referer"] == "https://cdn.example.com/a.jpg"

        post_args, post_kwargs = http.post.call_args
        assert post_args[0] == self.settings.watermark_api_url
        assert post_kwargs["headers"]["X-RapidAPI-Key"] == "test-rapidapi-key"
        assert post_kwargs["files"]["image"] == ("news-image.jpeg", b"jpeg-bytes", "image/jpeg")

    @patch('httpx.AsyncClient')
    @pytest.mark.asyncio
    async def test_missing_content_types_fall_back(self, mock_client):
        source = MagicMock()
        source.content = b"raw"
        source.headers = {}
        source.raise_for_status = MagicMock()
        cleaned = MagicMock()
        cleaned.content = b"clean"
        cleaned.headers = {}
        cleaned.raise_for_status = MagicMock()

        http = mock_client.return_value.__aenter__.return_value
        http.get = AsyncMock(return_value=source)
        http.post = AsyncMock(return_value=cleaned)

        data_url = await self.service.remove_watermark("https://cdn.example.com/a")

        assert data_url.startswith("data:image/png;base64,")
        assert http.post.call_args.kwargs["files"]["image"][0] == "news-image.jpeg"

    @pytest.mark.parametrize("status_code, message", [
        (403, "API key invalid or quota exceeded"),
        (429, "Rate limit reached"),
        (500, "Failed to remove watermark"),
    ])
    @patch('httpx.AsyncClient')
    @pytest.mark.asyncio
    async def test_upstream_status_messages(self, mock_client, status_code, message):
        http = mock_client.return_value.__aenter__.return_value
        http.get = AsyncMock(side_effect=_status_error(status_code))

        with pytest.raises(WatermarkServiceError, match=message):
            await self.service.remove_watermark("https://cdn.example.com/a.jpg")

    @patch('httpx.AsyncClient')
    @pytest.mark.asyncio
    async def test_timeout_message(self, mock_client):
        source = MagicMock()
        source.content = b"jpeg-bytes"
        source.headers = {"content-type": "image/jpeg"}
        source.raise_for_status = MagicMock()

        http = mock_client.return_value.__aenter__.return_value
        http.get = AsyncMock(return_value=source)
        http.post = AsyncMock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(WatermarkServiceError, match="timed out"):
            await self.service.remove_watermark("https://cdn.example.com/a.jpg")

    @patch('httpx.AsyncClient')
    @pytest.mark.asyncio
    async def test_connection_error_is_generic(self, mock_client):
        http = mock_client.return_value.__aenter__.return_value
        http.get = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(WatermarkServiceError, match="Failed to remove watermark"):
            await self.service.remove_watermark("https://cdn.example.com/a.jpg")
