"""
Task model definitions.

Tasks are seeded from the onboarding template and only ever updated.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from launchpath.models.enums import Phase, TaskStatus

PRIMARY_KEYWORD_PLACEHOLDER = "{projects.primary_keyword}"


class Task(BaseModel):
    """Complete task model."""

    id: UUID
    project_id: UUID
    milestone_id: UUID
    phase: Phase
    name: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.NOT_STARTED
    notes: Optional[str] = None
    external_link: Optional[str] = None
    external_logo: Optional[str] = None
    due_date: Optional[datetime] = None
    order_index: int = 1
    due_soon_notified: bool = False
    stuck_notified: bool = False
    modified_by: Optional[str] = None
    version: int = 1
    updated_at: datetime

    class Config:
        from_attributes = True

    def resolved_link(self, primary_keyword: str) -> Optional[str]:
        """External link with the project keyword substituted in."""
        if not self.external_link:
            return self.external_link
        return self.external_link.replace(PRIMARY_KEYWORD_PLACEHOLDER, primary_keyword)


class TaskUpdate(BaseModel):
    """Schema for updating a task."""

    status: Optional[TaskStatus] = None
    notes: Optional[str] = Field(None, max_length=10000)
    external_link: Optional[str] = Field(None, max_length=2000)
    due_date: Optional[datetime] = None
    expected_version: Optional[int] = Field(
        None,
        ge=1,
        description="Version the client last saw; the write is rejected if the row moved on",
    )

    @field_validator("status")
    @classmethod
    def status_not_null(cls, value: Optional[TaskStatus]) -> TaskStatus:
        # Omit the field to leave the status alone; null is not a status.
        if value is None:
            raise ValueError("status cannot be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set by the caller, without the concurrency token."""
        return self.model_dump(exclude_unset=True, exclude={"expected_version"})
