"""
SQLite implementation of the progress repository.

A task write and the milestone/project recompute it triggers run inside a
single transaction. Task rows carry a mapper-managed version counter, so a
concurrent writer that flushed first turns our flush into a conflict instead
of a silent overwrite.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import and_, case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from launchpath.core.exceptions import ConflictError, InfrastructureError, NotFoundError
from launchpath.core.logger import logger
from launchpath.infrastructure.local.database import (
    MilestoneORM,
    ProjectORM,
    TaskORM,
    get_session_factory,
)
from launchpath.infrastructure.local.milestone_repository import milestone_from_orm
from launchpath.infrastructure.local.project_repository import project_from_orm
from launchpath.infrastructure.local.task_repository import task_from_orm
from launchpath.interfaces.progress_repository import IProgressRepository
from launchpath.models.enums import Phase, TaskStatus
from launchpath.models.progress import TaskChangeResult
from launchpath.models.project import Project, phase_field
from launchpath.services.progress_calculator import (
    completion_pct,
    ensure_phase_unlocked,
    newly_unlocked_phase,
    overall_completion,
)
from launchpath.utils.datetime_utils import ensure_utc, now_utc

_UPDATABLE_FIELDS = ("status", "notes", "external_link", "due_date")

_completed_count = func.coalesce(
    func.sum(case((TaskORM.status == TaskStatus.COMPLETE.value, 1), else_=0)),
    0,
)


class SqliteProgressRepository(IProgressRepository):
    """SQLite implementation of progress repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def apply_task_update(
        self,
        owner_id: str,
        task_id: UUID,
        changes: dict[str, Any],
        actor_id: str,
        expected_version: Optional[int] = None,
    ) -> TaskChangeResult:
        loaded_version: Optional[int] = None
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    row = (
                        await session.execute(
                            select(TaskORM, ProjectORM)
                            .join(ProjectORM, ProjectORM.id == TaskORM.project_id)
                            .where(and_(TaskORM.id == str(task_id), ProjectORM.owner_id == owner_id))
                        )
                    ).first()
                    if row is None:
                        raise NotFoundError(f"Task {task_id} not found")
                    task_orm, project_orm = row
                    loaded_version = task_orm.version

                    phase = Phase(task_orm.phase)
                    ensure_phase_unlocked(phase, project_from_orm(project_orm))

                    if expected_version is not None and expected_version != task_orm.version:
                        raise ConflictError(
                            f"Task {task_id} was modified by someone else",
                            expected_version=expected_version,
                            actual_version=task_orm.version,
                        )

                    task_changed = self._apply_changes(task_orm, changes, actor_id)

                    milestone_orm = await session.get(MilestoneORM, task_orm.milestone_id)
                    if milestone_orm is None:
                        raise NotFoundError(f"Milestone {task_orm.milestone_id} not found")

                    previous_phase = getattr(project_orm, phase_field(phase)) or 0
                    previous_overall = project_orm.overall_complete or 0

                    # Autoflush writes the task row before the counts are read
                    milestone_orm.completion_pct = await self._milestone_completion(
                        session, milestone_orm.id
                    )
                    setattr(
                        project_orm,
                        phase_field(phase),
                        await self._phase_completion(session, project_orm.id, phase),
                    )
                    self._refresh_overall(project_orm)
                    if task_changed:
                        project_orm.updated_at = now_utc()
                    else:
                        logger.debug(f"Task {task_id} update carried no changes")

                    await self._write_aggregates(session, milestone_orm, project_orm)

                    project = project_from_orm(project_orm)
                    current_phase = project.phase_completion(phase)
                    result = TaskChangeResult(
                        task=task_from_orm(task_orm),
                        milestone=milestone_from_orm(milestone_orm),
                        project=project,
                        previous_phase_completion=previous_phase,
                        previous_overall_complete=previous_overall,
                        unlocked_phase=newly_unlocked_phase(phase, previous_phase, current_phase),
                        project_completed=previous_overall < 100 and project.overall_complete == 100,
                    )
                return result
        except StaleDataError as exc:
            raise ConflictError(
                f"Task {task_id} was modified by someone else",
                expected_version=expected_version or loaded_version or 0,
            ) from exc
        except SQLAlchemyError as exc:
            logger.error(f"Progress update for task {task_id} failed: {exc}")
            raise InfrastructureError("Failed to save task progress") from exc

    async def recompute_project(self, owner_id: str, project_id: UUID) -> Project:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    project_orm = (
                        await session.execute(
                            select(ProjectORM).where(
                                and_(ProjectORM.id == str(project_id), ProjectORM.owner_id == owner_id)
                            )
                        )
                    ).scalar_one_or_none()
                    if project_orm is None:
                        raise NotFoundError(f"Project {project_id} not found")

                    milestone_counts = await self._counts_by(session, project_orm.id, TaskORM.milestone_id)
                    milestones = (
                        await session.execute(
                            select(MilestoneORM).where(MilestoneORM.project_id == project_orm.id)
                        )
                    ).scalars().all()
                    for milestone_orm in milestones:
                        completed, total = milestone_counts.get(milestone_orm.id, (0, 0))
                        milestone_orm.completion_pct = completion_pct(completed, total)

                    phase_counts = await self._counts_by(session, project_orm.id, TaskORM.phase)
                    for phase in Phase:
                        completed, total = phase_counts.get(phase.value, (0, 0))
                        setattr(project_orm, phase_field(phase), completion_pct(completed, total))
                    self._refresh_overall(project_orm)
                    project_orm.updated_at = now_utc()

                    await session.flush()
                    project = project_from_orm(project_orm)
                logger.info(
                    f"Recomputed project {project_id}: "
                    f"{project.phase1_complete}/{project.phase2_complete}/{project.phase3_complete} "
                    f"overall={project.overall_complete}"
                )
                return project
        except SQLAlchemyError as exc:
            logger.error(f"Recompute for project {project_id} failed: {exc}")
            raise InfrastructureError("Failed to recompute project progress") from exc

    # ===========================================
    # Helpers
    # ===========================================

    @staticmethod
    def _apply_changes(task_orm: TaskORM, changes: dict[str, Any], actor_id: str) -> bool:
        """Copy changed fields onto the row. Returns False when nothing differs."""
        changed = False
        for field in _UPDATABLE_FIELDS:
            if field not in changes:
                continue
            value = changes[field]
            if hasattr(value, "value"):
                value = value.value
            elif field == "due_date" and value is not None:
                # Stored as naive UTC
                value = ensure_utc(value).replace(tzinfo=None)
            if getattr(task_orm, field) == value:
                continue
            setattr(task_orm, field, value)
            changed = True
            if field == "status":
                task_orm.due_soon_notified = False
                task_orm.stuck_notified = False
            elif field == "due_date":
                task_orm.due_soon_notified = False

        if changed:
            task_orm.modified_by = actor_id
            task_orm.updated_at = now_utc()
        return changed

    @staticmethod
    def _refresh_overall(project_orm: ProjectORM) -> None:
        project_orm.overall_complete = overall_completion(
            project_orm.phase1_complete or 0,
            project_orm.phase2_complete or 0,
            project_orm.phase3_complete or 0,
        )

    @staticmethod
    async def _milestone_completion(session: AsyncSession, milestone_id: str) -> int:
        completed, total = (
            await session.execute(
                select(_completed_count, func.count(TaskORM.id)).where(
                    TaskORM.milestone_id == milestone_id
                )
            )
        ).one()
        return completion_pct(int(completed), int(total))

    @staticmethod
    async def _phase_completion(session: AsyncSession, project_id: str, phase: Phase) -> int:
        completed, total = (
            await session.execute(
                select(_completed_count, func.count(TaskORM.id)).where(
                    TaskORM.project_id == project_id,
                    TaskORM.phase == phase.value,
                )
            )
        ).one()
        return completion_pct(int(completed), int(total))

    @staticmethod
    async def _counts_by(session: AsyncSession, project_id: str, column) -> dict[str, tuple[int, int]]:
        result = await session.execute(
            select(column, _completed_count, func.count(TaskORM.id))
            .where(TaskORM.project_id == project_id)
            .group_by(column)
        )
        return {key: (int(completed), int(total)) for key, completed, total in result.all()}

    async def _write_aggregates(
        self,
        session: AsyncSession,
        milestone_orm: MilestoneORM,
        project_orm: ProjectORM,
    ) -> None:
        """Flush the milestone and project rows."""
        await session.flush([milestone_orm, project_orm])
