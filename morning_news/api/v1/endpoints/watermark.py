from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException

from morning_news.api.dependencies import get_watermark_service
from morning_news.api.v1.schemas import WatermarkRemoveRequest, WatermarkRemoveResponse
from morning_news.exceptions import ConfigurationError, WatermarkServiceError
from morning_news.services.watermark_service import WatermarkService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/remove", response_model=WatermarkRemoveResponse)
async def remove_watermark(
    request: Optional[WatermarkRemoveRequest] = None,
    service: WatermarkService = Depends(get_watermark_service)
):
    """Return the image at imageUrl with its watermark removed, as a data URL"""
    image_url = request.imageUrl.strip() if request and request.imageUrl else ""
    if not image_url:
        raise HTTPException(status_code=400, detail="imageUrl is required.")

    try:
        data_url = await service.remove_watermark(image_url)
    except (ConfigurationError, WatermarkServiceError) as e:
        raise HTTPException(status_code=500, detail=e.message)

    return WatermarkRemoveResponse(imageUrl=data_url)
