from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from morning_news.api.dependencies import get_news_service
from morning_news.config import get_settings
from morning_news.exceptions import ArticleNotFoundError, ValidationError
from morning_news.news.services.news_service import NewsService, parse_positive_int
from morning_news.news.schemas.responses import (
    CategoryNewsListResponse,
    NewsCategoriesResponse,
    NewsDetailResponse,
    NewsListResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/news", response_model=NewsListResponse)
async def get_all_news(
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Articles per page"),
    news_service: NewsService = Depends(get_news_service)
):
    """All articles, newest first"""
    settings = get_settings()
    return news_service.list_articles(
        page=parse_positive_int(page, 1),
        limit=parse_positive_int(limit, settings.default_page_size, settings.max_page_size),
    )


@router.get("/news/categories", response_model=NewsCategoriesResponse)
async def get_news_categories(news_service: NewsService = Depends(get_news_service)):
    """Article counts for each of the seven category labels"""
    return news_service.get_categories()


@router.get("/news/category/{category}", response_model=CategoryNewsListResponse)
async def get_news_by_category(
    category: str,
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Articles per page"),
    news_service: NewsService = Depends(get_news_service)
):
    settings = get_settings()
    try:
        return news_service.list_articles_by_category(
            category,
            page=parse_positive_int(page, 1),
            limit=parse_positive_int(limit, settings.default_category_page_size, settings.max_page_size),
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/news/{news_id}", response_model=NewsDetailResponse)
async def get_single_news(
    news_id: str,
    news_service: NewsService = Depends(get_news_service)
):
    try:
        return news_service.get_article(news_id)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="Article not found")
