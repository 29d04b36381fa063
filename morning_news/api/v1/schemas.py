from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class WatermarkRemoveRequest(BaseModel):
    imageUrl: Optional[str] = Field(default=None, description="Source image to clean")


class WatermarkRemoveResponse(BaseModel):
    success: bool = True
    imageUrl: str = Field(..., description="Cleaned image as a base64 data URL")


class SyncResultResponse(BaseModel):
    inserted: int
    updated: int
    skipped: int
    failed: int
    failed_ids: List[str] = []
    skipped_ids: List[str] = []
    started_at: datetime
    finished_at: Optional[datetime] = None
    error: Optional[str] = None


class SyncTriggerResponse(BaseModel):
    success: bool
    data: SyncResultResponse


class SyncStatusResponse(BaseModel):
    success: bool = True
    running: bool
    interval_seconds: float
    cycles_run: int
    last_result: Optional[SyncResultResponse] = None
