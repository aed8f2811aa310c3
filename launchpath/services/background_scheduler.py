"""
Background scheduler service for periodic jobs.

Runs the task reminder scan on an interval.
Uses APScheduler for in-process scheduling without external dependencies.
"""

from __future__ import annotations

from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from launchpath.core.config import get_settings
from launchpath.core.logger import logger
from launchpath.services.reminder_service import ReminderService


class BackgroundScheduler:
    """Background scheduler for periodic jobs."""

    def __init__(self, reminder_service: ReminderService, interval_minutes: Optional[int] = None):
        self._reminder_service = reminder_service
        self._interval_minutes = interval_minutes
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def start(self):
        """Start the scheduler."""
        settings = get_settings()

        # Only run scheduler in non-test environments
        if settings.is_test:
            logger.info("Background scheduler disabled in test environment")
            return

        interval = self._interval_minutes or settings.REMINDER_SCAN_INTERVAL_MINUTES
        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self._run_reminder_scan,
            IntervalTrigger(minutes=interval),
            id="task_reminder_scan",
            name="Task Reminder Scan",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        logger.info(f"Background scheduler started (reminder scan every {interval} min)")

    async def stop(self):
        """Stop the scheduler."""
        if self._scheduler:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Background scheduler stopped")

    async def _run_reminder_scan(self):
        try:
            await self._reminder_service.scan()
        except Exception as e:
            logger.error(f"Task reminder scan failed: {e}")


# Global scheduler instance
_scheduler: Optional[BackgroundScheduler] = None


async def get_background_scheduler() -> BackgroundScheduler:
    """Get the global background scheduler instance."""
    global _scheduler
    if _scheduler is None:
        from launchpath.api.deps import (
            get_notification_repository,
            get_task_repository,
            get_user_repository,
        )

        _scheduler = BackgroundScheduler(
            ReminderService(
                task_repo=get_task_repository(),
                notification_repo=get_notification_repository(),
                user_repo=get_user_repository(),
            )
        )
    return _scheduler


async def start_background_scheduler():
    """Start the global background scheduler."""
    scheduler = await get_background_scheduler()
    await scheduler.start()


async def stop_background_scheduler():
    """Stop the global background scheduler."""
    global _scheduler
    if _scheduler:
        await _scheduler.stop()
        _scheduler = None
