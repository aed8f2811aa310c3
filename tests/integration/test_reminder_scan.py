"""
Reminder scan against a real database: notifications are stored once per task.
"""

from datetime import timedelta

import pytest

from launchpath.infrastructure.local.milestone_repository import SqliteMilestoneRepository
from launchpath.infrastructure.local.notification_repository import SqliteNotificationRepository
from launchpath.infrastructure.local.progress_repository import SqliteProgressRepository
from launchpath.infrastructure.local.project_repository import SqliteProjectRepository
from launchpath.infrastructure.local.task_repository import SqliteTaskRepository
from launchpath.infrastructure.local.user_repository import SqliteUserRepository
from launchpath.models.enums import NotificationType, Phase, TaskStatus
from launchpath.services.reminder_service import ReminderService
from launchpath.utils.datetime_utils import now_utc


@pytest.mark.asyncio
async def test_due_soon_reminder_sent_once_and_rearmed_by_due_date_change(
    session_factory, seeded_project, test_user_id
):
    milestones = SqliteMilestoneRepository(session_factory=session_factory)
    progress = SqliteProgressRepository(session_factory=session_factory)
    notifications = SqliteNotificationRepository(session_factory=session_factory)
    service = ReminderService(
        task_repo=SqliteTaskRepository(session_factory=session_factory),
        notification_repo=notifications,
        user_repo=SqliteUserRepository(session_factory=session_factory),
        due_soon_hours=48,
        stuck_after_days=7,
    )
    task = (await milestones.list_with_tasks(seeded_project.id, Phase.PHASE_1))[0].tasks[0]
    now = now_utc()

    before = await progress.apply_task_update(
        test_user_id, task.id, {"due_date": now + timedelta(hours=12)}, actor_id=test_user_id
    )

    first = await service.scan(now=now)
    second = await service.scan(now=now)

    assert first.due_soon_sent == 1
    assert second.due_soon_sent == 0
    stored = await notifications.list(test_user_id)
    assert [n.type for n in stored] == [NotificationType.TASK_DUE_SOON]
    assert stored[0].task_id == task.id

    # Reminder flags do not bump the version clients hold
    after = await progress.apply_task_update(
        test_user_id,
        task.id,
        {"due_date": now + timedelta(hours=30)},
        actor_id=test_user_id,
        expected_version=before.task.version,
    )
    assert after.task.due_soon_notified is False
    assert (await service.scan(now=now)).due_soon_sent == 1


@pytest.mark.asyncio
async def test_completed_tasks_and_archived_projects_are_skipped(
    session_factory, seeded_project, test_user_id
):
    milestones = SqliteMilestoneRepository(session_factory=session_factory)
    progress = SqliteProgressRepository(session_factory=session_factory)
    task_repo = SqliteTaskRepository(session_factory=session_factory)
    tasks = (await milestones.list_with_tasks(seeded_project.id, Phase.PHASE_1))[0].tasks
    due = now_utc() + timedelta(hours=3)

    await progress.apply_task_update(test_user_id, tasks[0].id, {"due_date": due}, actor_id=test_user_id)
    await progress.apply_task_update(
        test_user_id, tasks[1].id, {"due_date": due, "status": TaskStatus.COMPLETE}, actor_id=test_user_id
    )

    candidates = await task_repo.list_reminder_candidates()
    assert [t.id for t, _ in candidates] == [tasks[0].id]
    assert candidates[0][1] == test_user_id

    project_repo = SqliteProjectRepository(session_factory=session_factory)
    await project_repo.set_archived(test_user_id, seeded_project.id)
    assert await task_repo.list_reminder_candidates() == []
