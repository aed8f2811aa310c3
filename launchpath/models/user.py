"""
User account models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from launchpath.models.enums import PlanTier


class UserCreate(BaseModel):
    """Create a user account."""

    email: str = Field(..., min_length=3, max_length=255)
    name: Optional[str] = Field(None, max_length=255)
    password_hash: Optional[str] = Field(None, max_length=255)
    timezone: str = Field(default="UTC", max_length=50, description="IANA timezone")


class NotificationPreferences(BaseModel):
    """Which notification kinds the user wants."""

    notify_due_soon: bool = True
    notify_stuck: bool = True
    notify_collab_update: bool = True
    notify_promotions: bool = False


class NotificationPreferencesUpdate(BaseModel):
    notify_due_soon: Optional[bool] = None
    notify_stuck: Optional[bool] = None
    notify_collab_update: Optional[bool] = None
    notify_promotions: Optional[bool] = None


class UserAccount(NotificationPreferences):
    """User account stored in the database."""

    id: UUID
    email: str
    name: Optional[str] = None
    password_hash: Optional[str] = None
    plan_tier: PlanTier = PlanTier.FREE
    timezone: str = "UTC"
    created_at: datetime
    last_active: datetime

    class Config:
        from_attributes = True

    @property
    def preferences(self) -> NotificationPreferences:
        return NotificationPreferences(
            notify_due_soon=self.notify_due_soon,
            notify_stuck=self.notify_stuck,
            notify_collab_update=self.notify_collab_update,
            notify_promotions=self.notify_promotions,
        )
