import structlog
from fastapi import APIRouter, Depends, HTTPException

from morning_news.api.dependencies import get_admin_news_service, get_sync_scheduler
from morning_news.api.v1.schemas import SyncStatusResponse, SyncTriggerResponse
from morning_news.exceptions import ArticleNotFoundError, ValidationError
from morning_news.news.schemas.requests import CustomNewsCreateRequest, CustomNewsUpdateRequest
from morning_news.news.schemas.responses import ArticleResponse, MessageResponse, NewsDetailResponse
from morning_news.news.services.admin_news_service import AdminNewsService
from morning_news.news.services.sync_scheduler import NewsSyncScheduler

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/news", response_model=NewsDetailResponse, status_code=201)
async def add_custom_news(
    request: CustomNewsCreateRequest,
    service: AdminNewsService = Depends(get_admin_news_service)
):
    try:
        article = service.create_article(request)
    except ValidationError as e:
        logger.warning("custom_article_rejected", error=e.message)
        raise HTTPException(status_code=400, detail=f"Error adding news: {e.message}")
    return NewsDetailResponse(data=ArticleResponse.from_article(article))


@router.put("/news/{article_id}", response_model=NewsDetailResponse)
async def update_custom_news(
    article_id: int,
    request: CustomNewsUpdateRequest,
    service: AdminNewsService = Depends(get_admin_news_service)
):
    try:
        article = service.update_article(article_id, request)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="News not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Error updating news: {e.message}")
    return NewsDetailResponse(data=ArticleResponse.from_article(article))


@router.delete("/news/{article_id}", response_model=MessageResponse)
async def delete_custom_news(
    article_id: int,
    service: AdminNewsService = Depends(get_admin_news_service)
):
    try:
        service.delete_article(article_id)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="News not found")
    return MessageResponse(message="News deleted successfully")


@router.post("/sync", response_model=SyncTriggerResponse)
async def trigger_news_sync(scheduler: NewsSyncScheduler = Depends(get_sync_scheduler)):
    """Run one sync cycle now and report what it did"""
    result = await scheduler.run_once()
    return SyncTriggerResponse(success=result.error is None, data=result.to_dict())


@router.get("/sync/status", response_model=SyncStatusResponse)
async def get_news_sync_status(scheduler: NewsSyncScheduler = Depends(get_sync_scheduler)):
    return SyncStatusResponse(**scheduler.status())
