"""
Notification model definitions.

Notifications inform users about phase unlocks, completed projects and
tasks that need attention.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from launchpath.models.enums import NotificationType


class Notification(BaseModel):
    """User notification model."""

    id: UUID
    user_id: str = Field(..., description="Recipient user ID")
    type: NotificationType
    message: str = Field(..., max_length=500)
    project_id: Optional[UUID] = None
    task_id: Optional[UUID] = None
    read: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationCreate(BaseModel):
    """Schema for creating a notification."""

    user_id: str
    type: NotificationType
    message: str = Field(..., max_length=500)
    project_id: Optional[UUID] = None
    task_id: Optional[UUID] = None
