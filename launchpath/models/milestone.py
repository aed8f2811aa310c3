"""
Milestone model definitions.

Milestones belong to one phase of a project and group its tasks.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from launchpath.models.enums import Phase
from launchpath.models.task import Task


class Milestone(BaseModel):
    """Complete milestone model."""

    id: UUID
    project_id: UUID
    phase: Phase
    name: str = Field(..., min_length=1, max_length=200)
    order_index: int = Field(1, ge=1)
    completion_pct: int = Field(0, ge=0, le=100)

    class Config:
        from_attributes = True


class MilestoneWithTasks(Milestone):
    """Milestone with its ordered tasks."""

    tasks: list[Task] = Field(default_factory=list)
