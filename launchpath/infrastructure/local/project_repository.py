"""
SQLite implementation of Project repository.
"""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID, uuid4

from sqlalchemy import and_, case, desc, func, select
from sqlalchemy.exc import SQLAlchemyError

from launchpath.core.exceptions import InfrastructureError, NotFoundError
from launchpath.core.logger import logger
from launchpath.infrastructure.local.database import (
    MilestoneORM,
    ProjectORM,
    TaskORM,
    get_session_factory,
)
from launchpath.interfaces.project_repository import IProjectRepository
from launchpath.models.enums import CommunityChoice, ProjectType, TaskStatus
from launchpath.models.progress import DashboardMetrics
from launchpath.models.project import Project, ProjectCreate, ToolSelections
from launchpath.services.progress_calculator import dashboard_metrics
from launchpath.services.project_templates import MilestoneTemplate
from launchpath.utils.datetime_utils import ensure_utc, now_utc


def project_from_orm(orm: ProjectORM) -> Project:
    """Convert ORM object to Pydantic model."""
    return Project(
        id=UUID(orm.id),
        owner_id=orm.owner_id,
        name=orm.name,
        description=orm.description,
        primary_keyword=orm.primary_keyword,
        project_type=ProjectType(orm.project_type),
        use_community=bool(orm.use_community),
        community_choice=CommunityChoice(orm.community_choice or CommunityChoice.NONE.value),
        community_url=orm.community_url,
        tools=ToolSelections.model_validate(orm.tools) if orm.tools else ToolSelections(),
        phase1_complete=orm.phase1_complete or 0,
        phase2_complete=orm.phase2_complete or 0,
        phase3_complete=orm.phase3_complete or 0,
        overall_complete=orm.overall_complete or 0,
        archived=bool(orm.archived),
        created_at=ensure_utc(orm.created_at),
        updated_at=ensure_utc(orm.updated_at),
    )


class SqliteProjectRepository(IProjectRepository):
    """SQLite implementation of project repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def create_from_template(
        self,
        owner_id: str,
        project: ProjectCreate,
        template: Sequence[MilestoneTemplate],
    ) -> Project:
        """Create the project row and seed its milestones and tasks atomically."""
        now = now_utc()
        project_id = str(uuid4())
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    orm = ProjectORM(
                        id=project_id,
                        owner_id=owner_id,
                        name=project.name.strip(),
                        description=project.description,
                        primary_keyword=project.primary_keyword.strip(),
                        project_type=project.project_type.value,
                        use_community=project.use_community,
                        community_choice=project.community_choice.value,
                        community_url=project.community_url,
                        tools=project.tools.model_dump(mode="json"),
                        phase1_complete=0,
                        phase2_complete=0,
                        phase3_complete=0,
                        overall_complete=0,
                        archived=False,
                        created_at=now,
                        updated_at=now,
                    )
                    session.add(orm)

                    for milestone in template:
                        milestone_id = str(uuid4())
                        session.add(
                            MilestoneORM(
                                id=milestone_id,
                                project_id=project_id,
                                phase=milestone.phase.value,
                                name=milestone.name,
                                order_index=milestone.order_index,
                                completion_pct=0,
                            )
                        )
                        for index, task in enumerate(milestone.tasks, start=1):
                            session.add(
                                TaskORM(
                                    id=str(uuid4()),
                                    project_id=project_id,
                                    milestone_id=milestone_id,
                                    phase=milestone.phase.value,
                                    name=task.name,
                                    description=task.description,
                                    status=TaskStatus.NOT_STARTED.value,
                                    external_link=task.external_link,
                                    order_index=index,
                                    due_soon_notified=False,
                                    stuck_notified=False,
                                    updated_at=now,
                                )
                            )
                return project_from_orm(orm)
        except SQLAlchemyError as exc:
            logger.error(f"Failed to create project for {owner_id}: {exc}")
            raise InfrastructureError("Failed to create project") from exc

    async def get(self, owner_id: str, project_id: UUID) -> Optional[Project]:
        """Get a project owned by the user."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProjectORM).where(
                    and_(ProjectORM.id == str(project_id), ProjectORM.owner_id == owner_id)
                )
            )
            orm = result.scalar_one_or_none()
            return project_from_orm(orm) if orm else None

    async def list(
        self,
        owner_id: str,
        include_archived: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Project]:
        """List the user's projects, most recently updated first."""
        async with self._session_factory() as session:
            query = select(ProjectORM).where(ProjectORM.owner_id == owner_id)
            if not include_archived:
                query = query.where(ProjectORM.archived == False)  # noqa: E712
            query = query.order_by(desc(ProjectORM.updated_at)).offset(offset).limit(limit)
            result = await session.execute(query)
            return [project_from_orm(orm) for orm in result.scalars().all()]

    async def set_archived(self, owner_id: str, project_id: UUID, archived: bool = True) -> Project:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProjectORM).where(
                    and_(ProjectORM.id == str(project_id), ProjectORM.owner_id == owner_id)
                )
            )
            orm = result.scalar_one_or_none()
            if not orm:
                raise NotFoundError(f"Project {project_id} not found")

            orm.archived = archived
            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return project_from_orm(orm)

    async def dashboard_metrics(self, owner_id: str) -> DashboardMetrics:
        """One aggregate query over the owner's active projects."""

        def _count_where(condition):
            return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

        async with self._session_factory() as session:
            result = await session.execute(
                select(
                    func.count(ProjectORM.id),
                    func.coalesce(func.sum(ProjectORM.overall_complete), 0),
                    _count_where(ProjectORM.phase1_complete < 100),
                    _count_where(
                        and_(ProjectORM.phase1_complete == 100, ProjectORM.phase2_complete < 100)
                    ),
                    _count_where(ProjectORM.phase2_complete == 100),
                ).where(
                    and_(
                        ProjectORM.owner_id == owner_id,
                        ProjectORM.archived == False,  # noqa: E712
                    )
                )
            )
            total, overall_sum, phase1, phase2, phase3 = result.one()
            return dashboard_metrics(
                int(total),
                int(overall_sum),
                int(phase1),
                int(phase2),
                int(phase3),
            )
