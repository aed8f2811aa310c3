"""
Integration tests for project queries that aggregate in SQL.
"""

import pytest
from sqlalchemy import update

from launchpath.infrastructure.local.database import ProjectORM
from launchpath.infrastructure.local.project_repository import SqliteProjectRepository
from launchpath.services.project_templates import ONBOARDING_TEMPLATE


@pytest.fixture
def project_repo(session_factory):
    return SqliteProjectRepository(session_factory=session_factory)


async def _project_at(session_factory, project_repo, owner_id, project_create, p1=0, p2=0, p3=0, archived=False):
    project = await project_repo.create_from_template(owner_id, project_create(), ONBOARDING_TEMPLATE)
    async with session_factory() as session:
        await session.execute(
            update(ProjectORM)
            .where(ProjectORM.id == str(project.id))
            .values(
                phase1_complete=p1,
                phase2_complete=p2,
                phase3_complete=p3,
                overall_complete=(2 * (p1 + p2 + p3) + 3) // 6,
                archived=archived,
            )
        )
        await session.commit()
    return project


class TestDashboardMetrics:
    @pytest.mark.asyncio
    async def test_no_projects(self, project_repo, test_user_id):
        metrics = await project_repo.dashboard_metrics(test_user_id)

        assert metrics.total_active == 0
        assert metrics.avg_completion == 0

    @pytest.mark.asyncio
    async def test_aggregates_active_projects_of_owner(
        self, session_factory, project_repo, project_create, test_user_id
    ):
        await _project_at(session_factory, project_repo, test_user_id, project_create, p1=50)
        await _project_at(session_factory, project_repo, test_user_id, project_create, p1=100, p2=20)
        await _project_at(session_factory, project_repo, test_user_id, project_create, p1=100, p2=100, p3=10)
        await _project_at(session_factory, project_repo, test_user_id, project_create, p1=100, p2=100, p3=100)
        await _project_at(session_factory, project_repo, test_user_id, project_create, p1=100, archived=True)
        await _project_at(session_factory, project_repo, "someone_else", project_create, p1=100, p2=100)

        metrics = await project_repo.dashboard_metrics(test_user_id)

        assert metrics.total_active == 4
        assert metrics.phase1_count == 1
        assert metrics.phase2_count == 1
        assert metrics.phase3_count == 2
        # overall values 17, 40, 70, 100
        assert metrics.avg_completion == 57

    @pytest.mark.asyncio
    async def test_not_capped_by_list_page_size(
        self, session_factory, project_repo, project_create, test_user_id
    ):
        for _ in range(3):
            await _project_at(session_factory, project_repo, test_user_id, project_create, p1=100)

        listed = await project_repo.list(test_user_id, limit=1)
        metrics = await project_repo.dashboard_metrics(test_user_id)

        assert len(listed) == 1
        assert metrics.total_active == 3
        assert metrics.phase2_count == 3
