"""
Progress read models.

These are computed views over projects, milestones and tasks; nothing here
is stored on its own.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from launchpath.models.enums import Phase
from launchpath.models.milestone import Milestone
from launchpath.models.project import Project
from launchpath.models.task import Task


class PhaseProgress(BaseModel):
    """Completion and lock state for one phase of a project."""

    phase: Phase
    label: str
    completion: int = Field(0, ge=0, le=100)
    unlocked: bool


class ProjectProgress(BaseModel):
    """Per-phase view of a project's progress."""

    project_id: UUID
    phases: list[PhaseProgress]
    overall_complete: int = Field(0, ge=0, le=100)
    current_phase: Phase


class TaskChangeResult(BaseModel):
    """Everything a task write touched, plus the transitions it caused."""

    task: Task
    milestone: Milestone
    project: Project
    previous_phase_completion: int
    previous_overall_complete: int
    unlocked_phase: Optional[Phase] = None
    project_completed: bool = False


class DashboardMetrics(BaseModel):
    """Summary numbers for the projects dashboard."""

    total_active: int = 0
    avg_completion: int = 0
    phase1_count: int = 0
    phase2_count: int = 0
    phase3_count: int = 0
