import pytest
from unittest.mock import MagicMock, AsyncMock
import httpx


@pytest.fixture
def session_factory(tmp_path):
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker
    from morning_news.core.database import Base
    from morning_news.news.models import news_article  # noqa: F401

    # File-backed SQLite so every session gets its own connection
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def test_db(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_article(test_db):
    from datetime import datetime, timedelta
    from morning_news.news.models.news_article import NewsArticle

    base_time = datetime(2026, 1, 1, 8, 0, 0)

    def _make(external_id, minutes=0, **overrides):
        fields = {
            "external_id": str(external_id),
            "title_si": f"ශීර්ෂය {external_id}",
            "title_en": f"Headline {external_id}",
            "published_at": base_time + timedelta(minutes=minutes),
            "content_si": ["පළමු ඡේදය", {"data": "දෙවන ඡේදය"}],
            "category_label": "news",
            "is_custom": False,
        }
        fields.update(overrides)
        article = NewsArticle(**fields)
        test_db.add(article)
        test_db.commit()
        test_db.refresh(article)
        return article

    return _make


@pytest.fixture
def feed_records():
    return [
        {
            "id": 101,
            "titleSi": "ක්‍රිකට් තරගය",
            "titleEn": "Sri Lanka win cricket match against India",
            "cover": "https://cdn.example.com/101.jpg",
            "published": "2026-01-05T06:30:00Z",
            "contentSi": ["පළමු ඡේදය", {"data": "https://cdn.example.com/inline.png"}],
            "share_url": "https://example.com/news/101",
            "category": 3,
        },
        {
            "id": "102",
            "titleSi": "අයවැය",
            "titleEn": "Budget deficit widens as tax revenue falls",
            "thumb": "https://cdn.example.com/102-thumb.jpg",
            "published": "2026-01-05T07:00:00+05:30",
            "contentSi": "Plain string body",
            "share_url": "https://example.com/news/102",
            "category": 1,
        },
        {
            "id": 103,
            "titleSi": "කාලගුණය",
            "titleEn": "",
            "contentSi": None,
            "category": None,
        },
    ]


@pytest.fixture
def mock_feed_client(feed_records):
    client = MagicMock()
    client.fetch_articles = AsyncMock(return_value=feed_records)
    return client


@pytest.fixture
def sync_service(session_factory, mock_feed_client):
    from morning_news.news.services.news_sync_service import NewsSyncService
    return NewsSyncService(session_factory=session_factory, feed_client=mock_feed_client)


@pytest.fixture
def mock_settings():
    settings = MagicMock()
    settings.watermark_configured = True
    settings.watermark_api_key = "test-rapidapi-key"
    settings.watermark_api_host = "watermark-remover2.p.rapidapi.com"
    settings.watermark_api_url = "https://watermark-remover2.p.rapidapi.com/remove-watermark"
    settings.watermark_download_timeout_seconds = 30
    settings.watermark_api_timeout_seconds = 90
    return settings


@pytest.fixture
def mock_httpx_response():
    response = MagicMock(spec=httpx.Response)
    response.content = b"\x89PNGfake"
    response.headers = {"content-type": "image/png"}
    response.raise_for_status = MagicMock()
    return response


@pytest.fixture
async def async_client(test_db):
    from httpx import AsyncClient, ASGITransport
    from morning_news.main import app
    from morning_news.core.database import get_db

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # Use ASGITransport for direct app interaction
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
    if hasattr(app.state, "sync_scheduler"):
        del app.state.sync_scheduler
