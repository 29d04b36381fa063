from datetime import datetime, timezone
from typing import Dict, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from sqlalchemy import text

from ...dependencies import get_db
from ....config import get_settings

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(
    request: Request,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    settings = get_settings()
    scheduler = getattr(request.app.state, "sync_scheduler", None)

    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        raise HTTPException(status_code=503, detail="Database connectivity failed")

    return {
        "status": "healthy",
        "service": "The Morning News API",
        "version": "0.1.0",
        "environment": "development" if settings.debug else "production",
        "database": "healthy",
        "news_sync": "running" if scheduler and scheduler.is_running else "stopped",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
