"""
Local password authentication provider.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from launchpath.core.config import Settings
from launchpath.interfaces.auth_provider import IAuthProvider, User
from launchpath.interfaces.user_repository import IUserRepository
from launchpath.models.user import UserAccount


def _to_user(account: UserAccount) -> User:
    return User(
        id=str(account.id),
        email=account.email,
        display_name=account.name or account.email,
    )


class LocalAuthProvider(IAuthProvider):
    """Local auth provider with HMAC JWT validation."""

    def __init__(self, settings: Settings, user_repo: IUserRepository):
        if not settings.LOCAL_JWT_SECRET:
            raise ValueError("LOCAL_JWT_SECRET must be set for local auth")
        self._settings = settings
        self._user_repo = user_repo

    def _decode_token(self, token: str) -> dict[str, object]:
        options = {"verify_iss": bool(self._settings.LOCAL_JWT_ISSUER)}
        return jwt.decode(
            token,
            self._settings.LOCAL_JWT_SECRET,
            algorithms=["HS256"],
            issuer=self._settings.LOCAL_JWT_ISSUER or None,
            options=options,
        )

    async def verify_token(self, token: str) -> User:
        claims = self._decode_token(token)
        subject = claims.get("sub")
        if not subject:
            raise JWTError("Missing subject")
        try:
            user_id = UUID(str(subject))
        except ValueError as exc:
            raise JWTError("Invalid subject") from exc
        account = await self._user_repo.get(user_id)
        if not account:
            raise JWTError("User not found")
        return _to_user(account)

    async def get_user(self, user_id: str) -> Optional[User]:
        try:
            parsed = UUID(user_id)
        except ValueError:
            return None
        account = await self._user_repo.get(parsed)
        return _to_user(account) if account else None

    def is_enabled(self) -> bool:
        return True
