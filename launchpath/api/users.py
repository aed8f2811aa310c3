"""
User profile and notification preference endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from launchpath.api.deps import CurrentUser, UserRepo
from launchpath.models.user import NotificationPreferences, NotificationPreferencesUpdate

router = APIRouter()


def _parse_user_id(user_id: str) -> UUID | None:
    try:
        return UUID(user_id)
    except ValueError:
        return None


@router.get("/me/preferences", response_model=NotificationPreferences)
async def get_preferences(
    user: CurrentUser,
    user_repo: UserRepo,
) -> NotificationPreferences:
    """Stored preferences, or the defaults for users without an account row."""
    prefs = await user_repo.get_preferences([user.id])
    return prefs.get(user.id, NotificationPreferences())


@router.patch("/me/preferences", response_model=NotificationPreferences)
async def update_preferences(
    update: NotificationPreferencesUpdate,
    user: CurrentUser,
    user_repo: UserRepo,
) -> NotificationPreferences:
    user_id = _parse_user_id(user.id)
    account = await user_repo.update_preferences(user_id, update) if user_id else None
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User account not found",
        )
    return account.preferences
