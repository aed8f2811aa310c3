"""
Progress service.

Entry point for every task write. The repository does the transactional
task/milestone/project update; this layer turns the transitions it reports
into notifications for the project owner.
"""

from __future__ import annotations

from uuid import UUID

from launchpath.core.exceptions import InfrastructureError
from launchpath.core.logger import logger
from launchpath.interfaces.auth_provider import User
from launchpath.interfaces.notification_repository import INotificationRepository
from launchpath.interfaces.progress_repository import IProgressRepository
from launchpath.models.enums import NotificationType
from launchpath.models.notification import NotificationCreate
from launchpath.models.progress import TaskChangeResult
from launchpath.models.project import Project
from launchpath.models.task import TaskUpdate


class ProgressService:
    """Applies task updates and reports phase/project milestones to the owner."""

    def __init__(
        self,
        progress_repo: IProgressRepository,
        notification_repo: INotificationRepository,
    ):
        self._progress_repo = progress_repo
        self._notification_repo = notification_repo

    async def update_task(self, user: User, task_id: UUID, update: TaskUpdate) -> TaskChangeResult:
        result = await self._progress_repo.apply_task_update(
            owner_id=user.id,
            task_id=task_id,
            changes=update.changes(),
            actor_id=user.id,
            expected_version=update.expected_version,
        )
        logger.info(
            f"Task {task_id} updated by {user.id}: milestone={result.milestone.completion_pct} "
            f"{result.task.phase.value}={result.project.phase_completion(result.task.phase)} "
            f"overall={result.project.overall_complete}"
        )
        await self._notify_transitions(result)
        return result

    async def recompute_project(self, user: User, project_id: UUID) -> Project:
        return await self._progress_repo.recompute_project(user.id, project_id)

    async def _notify_transitions(self, result: TaskChangeResult) -> None:
        project = result.project
        notifications: list[NotificationCreate] = []

        if result.unlocked_phase is not None:
            phase = result.unlocked_phase
            notifications.append(
                NotificationCreate(
                    user_id=project.owner_id,
                    type=NotificationType.PHASE_UNLOCKED,
                    message=f"{phase.value}: {phase.label} is now unlocked for {project.name}",
                    project_id=project.id,
                    task_id=result.task.id,
                )
            )

        if result.project_completed:
            notifications.append(
                NotificationCreate(
                    user_id=project.owner_id,
                    type=NotificationType.PROJECT_COMPLETED,
                    message=f"{project.name} is 100% complete",
                    project_id=project.id,
                    task_id=result.task.id,
                )
            )

        for notification in notifications:
            try:
                await self._notification_repo.create(notification)
            except InfrastructureError as exc:
                # Progress is already committed
                logger.warning(
                    f"Could not send {notification.type.value} notification for project {project.id}: {exc}"
                )
