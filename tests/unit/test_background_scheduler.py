"""
Unit tests for the background scheduler.
"""

from unittest.mock import AsyncMock

import pytest

from launchpath.services.background_scheduler import BackgroundScheduler


@pytest.mark.asyncio
async def test_scheduler_is_disabled_in_test_environment():
    scheduler = BackgroundScheduler(AsyncMock(), interval_minutes=1)

    await scheduler.start()

    assert scheduler.running is False
    await scheduler.stop()


@pytest.mark.asyncio
async def test_reminder_job_logs_and_survives_failures():
    reminder_service = AsyncMock()
    reminder_service.scan.side_effect = RuntimeError("database is locked")
    scheduler = BackgroundScheduler(reminder_service)

    await scheduler._run_reminder_scan()

    reminder_service.scan.assert_awaited_once()
