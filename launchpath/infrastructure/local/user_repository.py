"""
SQLite implementation of user repository.
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from launchpath.core.exceptions import ValidationError
from launchpath.infrastructure.local.database import UserORM, get_session_factory
from launchpath.interfaces.user_repository import IUserRepository
from launchpath.models.enums import PlanTier
from launchpath.models.user import (
    NotificationPreferences,
    NotificationPreferencesUpdate,
    UserAccount,
    UserCreate,
)
from launchpath.utils.datetime_utils import ensure_utc, now_utc


class SqliteUserRepository(IUserRepository):
    """SQLite implementation of user repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: UserORM) -> UserAccount:
        return UserAccount(
            id=UUID(orm.id),
            email=orm.email,
            name=orm.name,
            password_hash=orm.password_hash,
            plan_tier=PlanTier(orm.plan_tier or PlanTier.FREE.value),
            timezone=orm.timezone or "UTC",
            notify_due_soon=bool(orm.notify_due_soon),
            notify_stuck=bool(orm.notify_stuck),
            notify_collab_update=bool(orm.notify_collab_update),
            notify_promotions=bool(orm.notify_promotions),
            created_at=ensure_utc(orm.created_at),
            last_active=ensure_utc(orm.last_active),
        )

    async def create(self, data: UserCreate) -> UserAccount:
        async with self._session_factory() as session:
            now = now_utc()
            orm = UserORM(
                id=str(uuid4()),
                email=data.email.strip().lower(),
                name=data.name,
                password_hash=data.password_hash,
                plan_tier=PlanTier.FREE.value,
                timezone=data.timezone,
                created_at=now,
                last_active=now,
            )
            session.add(orm)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise ValidationError(f"Email {data.email} is already registered") from exc
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, user_id: UUID) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.id == str(user_id))
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.email == email.strip().lower())
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def update_preferences(
        self, user_id: UUID, update: NotificationPreferencesUpdate
    ) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.id == str(user_id))
            )
            orm = result.scalar_one_or_none()
            if not orm:
                return None

            for field, value in update.model_dump(exclude_none=True).items():
                setattr(orm, field, value)
            orm.last_active = now_utc()

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get_preferences(self, user_ids: Iterable[str]) -> dict[str, NotificationPreferences]:
        ids = {user_id for user_id in user_ids}
        if not ids:
            return {}
        async with self._session_factory() as session:
            result = await session.execute(select(UserORM).where(UserORM.id.in_(ids)))
            return {
                orm.id: self._orm_to_model(orm).preferences
                for orm in result.scalars().all()
            }
