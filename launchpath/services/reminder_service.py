"""
Task reminder scan.

Raises "Task Due Soon" and "Task Stuck" notifications for open tasks, at most
once per task until its status or due date changes again.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from launchpath.core.config import get_settings
from launchpath.core.logger import logger
from launchpath.interfaces.notification_repository import INotificationRepository
from launchpath.interfaces.task_repository import ITaskRepository
from launchpath.interfaces.user_repository import IUserRepository
from launchpath.models.enums import NotificationType, TaskStatus
from launchpath.models.notification import NotificationCreate
from launchpath.models.task import Task
from launchpath.models.user import NotificationPreferences
from launchpath.utils.datetime_utils import ensure_utc, now_utc


@dataclass
class ReminderScanResult:
    scanned: int = 0
    due_soon_sent: int = 0
    stuck_sent: int = 0


def is_due_soon(task: Task, now: datetime, window: timedelta) -> bool:
    if task.status == TaskStatus.COMPLETE or task.due_date is None or task.due_soon_notified:
        return False
    due = ensure_utc(task.due_date)
    return now <= due <= now + window


def is_stuck(task: Task, now: datetime, threshold: timedelta) -> bool:
    if task.status != TaskStatus.IN_PROGRESS or task.stuck_notified:
        return False
    return ensure_utc(task.updated_at) <= now - threshold


class ReminderService:
    """Scans open tasks and notifies their owners."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        notification_repo: INotificationRepository,
        user_repo: IUserRepository,
        due_soon_hours: Optional[int] = None,
        stuck_after_days: Optional[int] = None,
    ):
        settings = get_settings()
        self._task_repo = task_repo
        self._notification_repo = notification_repo
        self._user_repo = user_repo
        self._due_soon_window = timedelta(
            hours=due_soon_hours if due_soon_hours is not None else settings.DUE_SOON_HOURS
        )
        self._stuck_threshold = timedelta(
            days=stuck_after_days if stuck_after_days is not None else settings.STUCK_AFTER_DAYS
        )

    async def scan(self, now: Optional[datetime] = None) -> ReminderScanResult:
        now = ensure_utc(now) if now else now_utc()
        candidates = await self._task_repo.list_reminder_candidates()
        result = ReminderScanResult(scanned=len(candidates))
        if not candidates:
            return result

        stored_prefs = await self._user_repo.get_preferences({owner_id for _, owner_id in candidates})
        default_prefs = NotificationPreferences()

        for task, owner_id in candidates:
            prefs = stored_prefs.get(owner_id, default_prefs)

            if prefs.notify_due_soon and is_due_soon(task, now, self._due_soon_window):
                await self._notification_repo.create(
                    NotificationCreate(
                        user_id=owner_id,
                        type=NotificationType.TASK_DUE_SOON,
                        message=f"'{task.name}' is due {ensure_utc(task.due_date):%Y-%m-%d %H:%M} UTC",
                        project_id=task.project_id,
                        task_id=task.id,
                    )
                )
                await self._task_repo.mark_reminded(task.id, due_soon=True)
                result.due_soon_sent += 1

            if prefs.notify_stuck and is_stuck(task, now, self._stuck_threshold):
                days = (now - ensure_utc(task.updated_at)).days
                await self._notification_repo.create(
                    NotificationCreate(
                        user_id=owner_id,
                        type=NotificationType.TASK_STUCK,
                        message=f"'{task.name}' has been In Progress for {days} days",
                        project_id=task.project_id,
                        task_id=task.id,
                    )
                )
                await self._task_repo.mark_reminded(task.id, stuck=True)
                result.stuck_sent += 1

        if result.due_soon_sent or result.stuck_sent:
            logger.info(
                f"Reminder scan: {result.due_soon_sent} due soon, {result.stuck_sent} stuck "
                f"out of {result.scanned} candidates"
            )
        return result
