from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..news.services.admin_news_service import AdminNewsService
from ..news.services.news_service import NewsService
from ..news.services.sync_scheduler import NewsSyncScheduler
from ..services.watermark_service import WatermarkService


def get_news_service(db: Session = Depends(get_db)) -> NewsService:
    return NewsService(db)


def get_admin_news_service(db: Session = Depends(get_db)) -> AdminNewsService:
    return AdminNewsService(db)


def get_watermark_service() -> WatermarkService:
    return WatermarkService()


def get_sync_scheduler(request: Request) -> NewsSyncScheduler:
    scheduler = getattr(request.app.state, "sync_scheduler", None)
    if scheduler is None:
        raise HTTPException(status_code=503, detail="News sync is not available")
    return scheduler
