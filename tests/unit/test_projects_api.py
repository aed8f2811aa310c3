from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import HTTPException

from launchpath.api.projects import (
    create_project,
    get_dashboard_metrics,
    get_phase,
    recompute_project_progress,
)
from launchpath.core.exceptions import InfrastructureError, ValidationError
from launchpath.models.enums import Phase, ProjectType
from launchpath.models.milestone import MilestoneWithTasks
from launchpath.models.progress import DashboardMetrics
from launchpath.models.project import Project, ProjectCreate
from launchpath.models.task import Task

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)
USER = SimpleNamespace(id="owner-user")


def _project(phase1: int = 0) -> Project:
    return Project(
        id=uuid4(),
        owner_id="owner-user",
        name="Invoice Copilot",
        primary_keyword="invoicing",
        project_type=ProjectType.B2B,
        phase1_complete=phase1,
        overall_complete=phase1 // 3,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.mark.asyncio
async def test_locked_phase_returns_423() -> None:
    project_repo = AsyncMock()
    milestone_repo = AsyncMock()
    project_repo.get.return_value = _project(phase1=94)

    with pytest.raises(HTTPException) as exc_info:
        await get_phase(
            project_id=uuid4(),
            user=USER,
            project_repo=project_repo,
            milestone_repo=milestone_repo,
            phase_number=2,
        )

    assert exc_info.value.status_code == 423
    assert exc_info.value.detail["phase"] == 2
    assert exc_info.value.detail["prior_completion"] == 94
    milestone_repo.list_with_tasks.assert_not_called()


@pytest.mark.asyncio
async def test_unlocked_phase_lists_milestones_with_resolved_links() -> None:
    project = _project()
    milestone_id = uuid4()
    project_repo = AsyncMock()
    milestone_repo = AsyncMock()
    project_repo.get.return_value = project
    milestone_repo.list_with_tasks.return_value = [
        MilestoneWithTasks(
            id=milestone_id,
            project_id=project.id,
            phase=Phase.PHASE_1,
            name="Competitor & Market Research",
            order_index=2,
            tasks=[
                Task(
                    id=uuid4(),
                    project_id=project.id,
                    milestone_id=milestone_id,
                    phase=Phase.PHASE_1,
                    name="Explore Google Trends",
                    external_link="https://trends.google.com/trends/explore?q={projects.primary_keyword}",
                    updated_at=NOW,
                )
            ],
        )
    ]

    detail = await get_phase(
        project_id=project.id,
        user=USER,
        project_repo=project_repo,
        milestone_repo=milestone_repo,
        phase_number=1,
    )

    assert detail.unlocked is True
    assert detail.label == "Research & Planning"
    assert detail.milestones[0].tasks[0].external_link.endswith("?q=invoicing")


@pytest.mark.asyncio
async def test_dashboard_metrics_come_from_repository_aggregate() -> None:
    project_repo = AsyncMock()
    project_repo.dashboard_metrics.return_value = DashboardMetrics(
        total_active=2, avg_completion=22, phase1_count=1, phase2_count=1
    )

    metrics = await get_dashboard_metrics(user=USER, project_repo=project_repo)

    assert metrics.total_active == 2
    project_repo.dashboard_metrics.assert_awaited_once_with("owner-user")
    project_repo.list.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_wizard_submission_is_422() -> None:
    wizard = AsyncMock()
    wizard.create_project.side_effect = ValidationError(
        "Project wizard input is invalid", details={"errors": ["Project name is required"]}
    )

    with pytest.raises(HTTPException) as exc_info:
        await create_project(project=ProjectCreate(), user=USER, wizard=wizard)

    assert exc_info.value.status_code == 422
    assert exc_info.value.detail["errors"] == ["Project name is required"]


@pytest.mark.asyncio
async def test_recompute_infrastructure_error_is_503_without_details() -> None:
    progress = AsyncMock()
    progress.recompute_project.side_effect = InfrastructureError("disk I/O error")

    with pytest.raises(HTTPException) as exc_info:
        await recompute_project_progress(project_id=uuid4(), user=USER, progress=progress)

    assert exc_info.value.status_code == 503
    assert "disk" not in exc_info.value.detail
