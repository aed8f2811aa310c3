"""
SQLite implementation of Task repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, or_, select, update

from launchpath.infrastructure.local.database import ProjectORM, TaskORM, get_session_factory
from launchpath.interfaces.task_repository import ITaskRepository
from launchpath.models.enums import Phase, TaskStatus
from launchpath.models.task import Task
from launchpath.utils.datetime_utils import ensure_utc


def task_from_orm(orm: TaskORM) -> Task:
    """Convert ORM object to Pydantic model."""
    return Task(
        id=UUID(orm.id),
        project_id=UUID(orm.project_id),
        milestone_id=UUID(orm.milestone_id),
        phase=Phase(orm.phase),
        name=orm.name,
        description=orm.description,
        status=TaskStatus(orm.status),
        notes=orm.notes,
        external_link=orm.external_link,
        external_logo=orm.external_logo,
        due_date=ensure_utc(orm.due_date),
        order_index=orm.order_index,
        due_soon_notified=bool(orm.due_soon_notified),
        stuck_notified=bool(orm.stuck_notified),
        modified_by=orm.modified_by,
        version=orm.version,
        updated_at=ensure_utc(orm.updated_at),
    )


class SqliteTaskRepository(ITaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def get(self, owner_id: str, task_id: UUID) -> Optional[Task]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM)
                .join(ProjectORM, ProjectORM.id == TaskORM.project_id)
                .where(and_(TaskORM.id == str(task_id), ProjectORM.owner_id == owner_id))
            )
            orm = result.scalar_one_or_none()
            return task_from_orm(orm) if orm else None

    async def list_reminder_candidates(self) -> list[tuple[Task, str]]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM, ProjectORM.owner_id)
                .join(ProjectORM, ProjectORM.id == TaskORM.project_id)
                .where(
                    ProjectORM.archived == False,  # noqa: E712
                    TaskORM.status != TaskStatus.COMPLETE.value,
                    or_(
                        and_(TaskORM.due_date.is_not(None), TaskORM.due_soon_notified == False),  # noqa: E712
                        and_(
                            TaskORM.status == TaskStatus.IN_PROGRESS.value,
                            TaskORM.stuck_notified == False,  # noqa: E712
                        ),
                    ),
                )
            )
            return [(task_from_orm(orm), owner_id) for orm, owner_id in result.all()]

    async def mark_reminded(
        self,
        task_id: UUID,
        due_soon: Optional[bool] = None,
        stuck: Optional[bool] = None,
    ) -> None:
        values = {}
        if due_soon is not None:
            values["due_soon_notified"] = due_soon
        if stuck is not None:
            values["stuck_notified"] = stuck
        if not values:
            return
        async with self._session_factory() as session:
            # Core UPDATE bypasses the mapper, so the version counter is left alone
            await session.execute(
                update(TaskORM)
                .where(TaskORM.id == str(task_id))
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            await session.commit()
