import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from morning_news.news.services.news_sync_service import SyncResult
from morning_news.news.services.sync_scheduler import NewsSyncScheduler


def _service_returning(result):
    service = MagicMock()
    service.run_sync_cycle = AsyncMock(return_value=result)
    return service


class TestNewsSyncScheduler:
    @pytest.mark.asyncio
    async def test_run_once_records_last_result(self):
        result = SyncResult(inserted=4)
        scheduler = NewsSyncScheduler(service_factory=lambda: _service_returning(result), interval_seconds=300)

        returned = await scheduler.run_once()

        assert returned is result
        assert scheduler.last_result is result
        assert scheduler.cycles_run == 1
        assert scheduler.is_running is False

    @pytest.mark.asyncio
    async def test_start_runs_a_cycle_immediately(self):
        service = _service_returning(SyncResult())
        scheduler = NewsSyncScheduler(service_factory=lambda: service, interval_seconds=3600)

        scheduler.start()
        await asyncio.sleep(0.05)

        assert scheduler.is_running is True
        service.run_sync_cycle.assert_awaited_once()

        await scheduler.stop()
        assert scheduler.is_running is False

    @pytest.mark.asyncio
    async def test_repeats_on_interval(self):
        service = _service_returning(SyncResult())
        scheduler = NewsSyncScheduler(service_factory=lambda: service, interval_seconds=0.01)

        scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop()

        assert service.run_sync_cycle.await_count >= 3

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        service = _service_returning(SyncResult())
        scheduler = NewsSyncScheduler(service_factory=lambda: service, interval_seconds=3600)

        scheduler.start()
        first_task = scheduler._task
        scheduler.start()

        assert scheduler._task is first_task
        await scheduler.stop()

    @pytest.mark.asyncio
    async def test_crashing_cycle_does_not_stop_the_loop(self):
        service = MagicMock()
        service.run_sync_cycle = AsyncMock(side_effect=[RuntimeError("boom"), SyncResult(updated=1), SyncResult()])
        scheduler = NewsSyncScheduler(service_factory=lambda: service, interval_seconds=0.01)

        scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop()

        assert service.run_sync_cycle.await_count >= 2
        assert scheduler.last_result is not None

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        scheduler = NewsSyncScheduler(service_factory=MagicMock(), interval_seconds=300)
        await scheduler.stop()
        assert scheduler.is_running is False

    def test_status(self):
        scheduler = NewsSyncScheduler(service_factory=MagicMock(), interval_seconds=300)
        status = scheduler.status()

        assert status == {
            "running": False,
            "interval_seconds": 300,
            "cycles_run": 0,
            "last_result": None,
        }
