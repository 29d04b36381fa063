"""Owns the recurring sync task: one cycle at start, then every interval."""

import asyncio
from typing import Callable, Optional

import structlog

from .news_sync_service import NewsSyncService, SyncResult

logger = structlog.get_logger(__name__)


class NewsSyncScheduler:
    def __init__(
        self,
        service_factory: Callable[[], NewsSyncService] = NewsSyncService,
        interval_seconds: float = 300,
    ):
        self.service_factory = service_factory
        self.interval_seconds = interval_seconds
        self.last_result: Optional[SyncResult] = None
        self.cycles_run = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run_forever(), name="news-sync")
        logger.info("news_sync_scheduler_started", interval_seconds=self.interval_seconds)

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("news_sync_scheduler_stopped", cycles_run=self.cycles_run)

    async def run_once(self) -> SyncResult:
        service = self.service_factory()
        result = await service.run_sync_cycle()
        self.last_result = result
        self.cycles_run += 1
        return result

    async def _run_forever(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error("news_sync_cycle_crashed", error=str(e), exc_info=e)
            await asyncio.sleep(self.interval_seconds)

    def status(self) -> dict:
        return {
            "running": self.is_running,
            "interval_seconds": self.interval_seconds,
            "cycles_run": self.cycles_run,
            "last_result": self.last_result.to_dict() if self.last_result else None,
        }
