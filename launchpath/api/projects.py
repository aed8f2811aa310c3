"""
Projects API endpoints.

Wizard submission, project listing, dashboard metrics and per-phase
progress views.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, Query, status
from pydantic import BaseModel

from launchpath.api.deps import (
    CurrentUser,
    MilestoneRepo,
    ProgressSvc,
    ProjectRepo,
    WizardSvc,
)
from launchpath.api.errors import http_error
from launchpath.core.exceptions import LaunchPathError, PhaseLockedError
from launchpath.models.enums import Phase
from launchpath.models.milestone import MilestoneWithTasks
from launchpath.models.progress import DashboardMetrics, ProjectProgress
from launchpath.models.project import (
    Project,
    ProjectCreate,
    WizardStepResult,
    WizardValidationRequest,
)
from launchpath.services.progress_calculator import (
    build_project_progress,
    is_phase_unlocked,
)
from launchpath.services.project_wizard import validate_step

router = APIRouter()


class PhaseDetail(BaseModel):
    """A phase with its milestones and tasks, links resolved for the project."""

    phase: Phase
    label: str
    completion: int
    unlocked: bool
    milestones: list[MilestoneWithTasks]


async def _get_project_or_404(project_repo, user_id: str, project_id: UUID) -> Project:
    project = await project_repo.get(user_id, project_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
    return project


def _with_resolved_links(milestone: MilestoneWithTasks, primary_keyword: str) -> MilestoneWithTasks:
    tasks = [
        task.model_copy(update={"external_link": task.resolved_link(primary_keyword)})
        for task in milestone.tasks
    ]
    return milestone.model_copy(update={"tasks": tasks})


@router.post("/wizard/validate", response_model=WizardStepResult)
async def validate_wizard_step(
    request: WizardValidationRequest,
    user: CurrentUser,
) -> WizardStepResult:
    """Check one wizard step without saving anything."""
    return validate_step(request)


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    user: CurrentUser,
    wizard: WizardSvc,
) -> Project:
    """Create a project from the wizard and seed its onboarding checklist."""
    try:
        return await wizard.create_project(user, project)
    except LaunchPathError as e:
        raise http_error(e)


@router.get("", response_model=list[Project])
async def list_projects(
    user: CurrentUser,
    project_repo: ProjectRepo,
    include_archived: bool = Query(False),
    limit: int = Query(100, ge=1, le=200),
    offset: int = Query(0, ge=0),
) -> list[Project]:
    return await project_repo.list(
        user.id,
        include_archived=include_archived,
        limit=limit,
        offset=offset,
    )


@router.get("/dashboard", response_model=DashboardMetrics)
async def get_dashboard_metrics(
    user: CurrentUser,
    project_repo: ProjectRepo,
) -> DashboardMetrics:
    return await project_repo.dashboard_metrics(user.id)


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: UUID,
    user: CurrentUser,
    project_repo: ProjectRepo,
) -> Project:
    return await _get_project_or_404(project_repo, user.id, project_id)


@router.post("/{project_id}/archive", response_model=Project)
async def archive_project(
    project_id: UUID,
    user: CurrentUser,
    project_repo: ProjectRepo,
    archived: bool = Query(True),
) -> Project:
    try:
        return await project_repo.set_archived(user.id, project_id, archived=archived)
    except LaunchPathError as e:
        raise http_error(e)


@router.get("/{project_id}/progress", response_model=ProjectProgress)
async def get_project_progress(
    project_id: UUID,
    user: CurrentUser,
    project_repo: ProjectRepo,
) -> ProjectProgress:
    project = await _get_project_or_404(project_repo, user.id, project_id)
    return build_project_progress(project)


@router.post("/{project_id}/recompute", response_model=ProjectProgress)
async def recompute_project_progress(
    project_id: UUID,
    user: CurrentUser,
    progress: ProgressSvc,
) -> ProjectProgress:
    """Rebuild all milestone and phase percentages from the task rows."""
    try:
        project = await progress.recompute_project(user, project_id)
    except LaunchPathError as e:
        raise http_error(e)
    return build_project_progress(project)


@router.get("/{project_id}/phases/{phase_number}", response_model=PhaseDetail)
async def get_phase(
    project_id: UUID,
    user: CurrentUser,
    project_repo: ProjectRepo,
    milestone_repo: MilestoneRepo,
    phase_number: int = Path(..., ge=1, le=3),
) -> PhaseDetail:
    project = await _get_project_or_404(project_repo, user.id, project_id)
    phase = Phase.from_number(phase_number)
    if not is_phase_unlocked(phase, project):
        raise http_error(PhaseLockedError(phase.number, project.phase_completion(phase.previous)))

    milestones = await milestone_repo.list_with_tasks(project.id, phase)
    return PhaseDetail(
        phase=phase,
        label=phase.label,
        completion=project.phase_completion(phase),
        unlocked=True,
        milestones=[_with_resolved_links(m, project.primary_keyword) for m in milestones],
    )
