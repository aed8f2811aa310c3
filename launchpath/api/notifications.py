"""
Notifications API endpoints.

Endpoints for managing user notifications.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from launchpath.api.deps import CurrentUser, NotificationRepo
from launchpath.models.notification import Notification

router = APIRouter()


# ===========================================
# Response Models
# ===========================================


class NotificationListResponse(BaseModel):
    """Response for listing notifications."""

    notifications: list[Notification]
    unread_count: int
    total: int


class UnreadCountResponse(BaseModel):
    """Response for unread count."""

    count: int


class MarkAllReadResponse(BaseModel):
    updated: int


# ===========================================
# Endpoints
# ===========================================


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    user: CurrentUser,
    notification_repo: NotificationRepo,
    unread_only: bool = Query(False, description="Only return unread notifications"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """
    List notifications for the current user, newest first.
    """
    notifications = await notification_repo.list(
        user_id=user.id,
        unread_only=unread_only,
        limit=limit,
        offset=offset,
    )
    unread_count = await notification_repo.get_unread_count(user.id)

    return NotificationListResponse(
        notifications=notifications,
        unread_count=unread_count,
        total=len(notifications),
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    user: CurrentUser,
    notification_repo: NotificationRepo,
):
    """
    Get the count of unread notifications.
    """
    count = await notification_repo.get_unread_count(user.id)
    return UnreadCountResponse(count=count)


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_as_read(
    user: CurrentUser,
    notification_repo: NotificationRepo,
):
    updated = await notification_repo.mark_all_as_read(user.id)
    return MarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", response_model=Notification)
async def mark_as_read(
    notification_id: UUID,
    user: CurrentUser,
    notification_repo: NotificationRepo,
):
    notification = await notification_repo.mark_as_read(user.id, notification_id)
    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification {notification_id} not found",
        )
    return notification


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: UUID,
    user: CurrentUser,
    notification_repo: NotificationRepo,
):
    deleted = await notification_repo.delete(user.id, notification_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification {notification_id} not found",
        )
