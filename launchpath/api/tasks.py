"""
Tasks API endpoints.

Tasks are created with their project; clients only read and update them.
Every update goes through the progress service so completion figures stay
in step with task status.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from launchpath.api.deps import CurrentUser, ProgressSvc, ProjectRepo, TaskRepo
from launchpath.api.errors import http_error
from launchpath.core.exceptions import InfrastructureError, LaunchPathError
from launchpath.core.logger import logger
from launchpath.models.progress import TaskChangeResult
from launchpath.models.task import Task, TaskUpdate

router = APIRouter()


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: UUID,
    user: CurrentUser,
    task_repo: TaskRepo,
    project_repo: ProjectRepo,
) -> Task:
    task = await task_repo.get(user.id, task_id)
    project = await project_repo.get(user.id, task.project_id) if task else None
    if not task or not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )
    return task.model_copy(update={"external_link": task.resolved_link(project.primary_keyword)})


@router.patch("/{task_id}", response_model=TaskChangeResult)
async def update_task(
    task_id: UUID,
    update: TaskUpdate,
    user: CurrentUser,
    progress: ProgressSvc,
) -> TaskChangeResult:
    """Update status, notes, link or due date and recompute progress."""
    try:
        return await progress.update_task(user, task_id, update)
    except LaunchPathError as e:
        if isinstance(e, InfrastructureError):
            logger.warning(f"Task {task_id} update could not be saved")
        raise http_error(e)
