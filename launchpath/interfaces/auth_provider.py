"""
Authentication provider interface.

The authenticated `User` is the explicit actor context handed to every
operation; nothing in the application reads a process-wide "current user".
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """Authenticated actor."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class IAuthProvider(ABC):
    """Interface for authentication providers."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """Verify a bearer token and return the user it belongs to."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """Whether requests must carry a token."""
        pass
