"""
SQLite implementation of notification repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.exc import SQLAlchemyError

from launchpath.core.exceptions import InfrastructureError
from launchpath.core.logger import logger
from launchpath.infrastructure.local.database import NotificationORM, get_session_factory
from launchpath.interfaces.notification_repository import INotificationRepository
from launchpath.models.enums import NotificationType
from launchpath.models.notification import Notification, NotificationCreate
from launchpath.utils.datetime_utils import ensure_utc, now_utc


class SqliteNotificationRepository(INotificationRepository):
    """SQLite implementation of notification repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: NotificationORM) -> Notification:
        return Notification(
            id=UUID(orm.id),
            user_id=orm.user_id,
            type=NotificationType(orm.type),
            message=orm.message,
            project_id=UUID(orm.project_id) if orm.project_id else None,
            task_id=UUID(orm.task_id) if orm.task_id else None,
            read=bool(orm.read),
            created_at=ensure_utc(orm.created_at),
        )

    async def create(self, notification: NotificationCreate) -> Notification:
        try:
            async with self._session_factory() as session:
                orm = NotificationORM(
                    id=str(uuid4()),
                    user_id=notification.user_id,
                    type=notification.type.value,
                    message=notification.message,
                    project_id=str(notification.project_id) if notification.project_id else None,
                    task_id=str(notification.task_id) if notification.task_id else None,
                    read=False,
                    created_at=now_utc(),
                )
                session.add(orm)
                await session.commit()
                return self._orm_to_model(orm)
        except SQLAlchemyError as exc:
            logger.error(f"Failed to store {notification.type.value} notification: {exc}")
            raise InfrastructureError("Failed to store notification") from exc

    async def get(self, user_id: str, notification_id: UUID) -> Optional[Notification]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(NotificationORM).where(
                    NotificationORM.id == str(notification_id),
                    NotificationORM.user_id == user_id,
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        async with self._session_factory() as session:
            query = select(NotificationORM).where(NotificationORM.user_id == user_id)

            if unread_only:
                query = query.where(NotificationORM.read == False)  # noqa: E712

            query = query.order_by(desc(NotificationORM.created_at))
            query = query.offset(offset).limit(limit)

            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def mark_as_read(self, user_id: str, notification_id: UUID) -> Optional[Notification]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(NotificationORM).where(
                    NotificationORM.id == str(notification_id),
                    NotificationORM.user_id == user_id,
                )
            )
            orm = result.scalar_one_or_none()
            if not orm:
                return None

            if not orm.read:
                orm.read = True
                await session.commit()

            return self._orm_to_model(orm)

    async def mark_all_as_read(self, user_id: str) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                update(NotificationORM)
                .where(
                    NotificationORM.user_id == user_id,
                    NotificationORM.read == False,  # noqa: E712
                )
                .values(read=True)
            )
            await session.commit()
            return result.rowcount

    async def get_unread_count(self, user_id: str) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count(NotificationORM.id)).where(
                    NotificationORM.user_id == user_id,
                    NotificationORM.read == False,  # noqa: E712
                )
            )
            return result.scalar() or 0

    async def delete(self, user_id: str, notification_id: UUID) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(NotificationORM).where(
                    NotificationORM.id == str(notification_id),
                    NotificationORM.user_id == user_id,
                )
            )
            await session.commit()
            return result.rowcount > 0
