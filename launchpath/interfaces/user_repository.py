"""
User repository interface.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from uuid import UUID

from launchpath.models.user import (
    NotificationPreferences,
    NotificationPreferencesUpdate,
    UserAccount,
    UserCreate,
)


class IUserRepository(ABC):
    """Interface for user account operations."""

    @abstractmethod
    async def create(self, user: UserCreate) -> UserAccount:
        pass

    @abstractmethod
    async def get(self, user_id: UUID) -> Optional[UserAccount]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        pass

    @abstractmethod
    async def update_preferences(
        self, user_id: UUID, update: NotificationPreferencesUpdate
    ) -> Optional[UserAccount]:
        """Apply a partial preference update. Returns None if the user does not exist."""
        pass

    @abstractmethod
    async def get_preferences(self, user_ids: Iterable[str]) -> dict[str, NotificationPreferences]:
        """Preferences keyed by user id; unknown ids are omitted."""
        pass
