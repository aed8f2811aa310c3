"""
SQLite implementation of Milestone repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import case, select

from launchpath.infrastructure.local.database import MilestoneORM, TaskORM, get_session_factory
from launchpath.infrastructure.local.task_repository import task_from_orm
from launchpath.interfaces.milestone_repository import IMilestoneRepository
from launchpath.models.enums import Phase
from launchpath.models.milestone import Milestone, MilestoneWithTasks

_PHASE_ORDER = case(
    {phase.value: phase.number for phase in Phase},
    value=MilestoneORM.phase,
)


def milestone_from_orm(orm: MilestoneORM) -> Milestone:
    """Convert ORM object to Pydantic model."""
    return Milestone(
        id=UUID(orm.id),
        project_id=UUID(orm.project_id),
        phase=Phase(orm.phase),
        name=orm.name,
        order_index=orm.order_index,
        completion_pct=orm.completion_pct or 0,
    )


class SqliteMilestoneRepository(IMilestoneRepository):
    """SQLite implementation of milestone repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    async def get(self, milestone_id: UUID) -> Optional[Milestone]:
        async with self._session_factory() as session:
            orm = await session.get(MilestoneORM, str(milestone_id))
            return milestone_from_orm(orm) if orm else None

    async def list_by_project(self, project_id: UUID, phase: Optional[Phase] = None) -> list[Milestone]:
        async with self._session_factory() as session:
            query = select(MilestoneORM).where(MilestoneORM.project_id == str(project_id))
            if phase is not None:
                query = query.where(MilestoneORM.phase == phase.value)
            query = query.order_by(_PHASE_ORDER, MilestoneORM.order_index)
            result = await session.execute(query)
            return [milestone_from_orm(orm) for orm in result.scalars().all()]

    async def list_with_tasks(self, project_id: UUID, phase: Phase) -> list[MilestoneWithTasks]:
        """List a phase's milestones, each with its tasks, in two queries."""
        async with self._session_factory() as session:
            milestone_result = await session.execute(
                select(MilestoneORM)
                .where(
                    MilestoneORM.project_id == str(project_id),
                    MilestoneORM.phase == phase.value,
                )
                .order_by(MilestoneORM.order_index)
            )
            milestones = milestone_result.scalars().all()
            if not milestones:
                return []

            task_result = await session.execute(
                select(TaskORM)
                .where(TaskORM.milestone_id.in_([m.id for m in milestones]))
                .order_by(TaskORM.order_index)
            )
            tasks_by_milestone: dict[str, list] = {}
            for task in task_result.scalars().all():
                tasks_by_milestone.setdefault(task.milestone_id, []).append(task_from_orm(task))

            return [
                MilestoneWithTasks(
                    **milestone_from_orm(orm).model_dump(),
                    tasks=tasks_by_milestone.get(orm.id, []),
                )
                for orm in milestones
            ]
