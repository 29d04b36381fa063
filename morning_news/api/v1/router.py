from fastapi import APIRouter

from .endpoints import admin, news, watermark

api_router = APIRouter()

# Public read API - /api/news, /api/news/category/{category}, /api/news/{id}
api_router.include_router(news.router, tags=["news"])

# Manual curation and sync control - /api/admin/...
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])

api_router.include_router(watermark.router, prefix="/watermark", tags=["watermark"])
