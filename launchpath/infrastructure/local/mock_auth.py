"""
Development auth provider.

The bearer token is taken as the founder's user id, so a local client can act
as any founder by sending ``Authorization: Bearer <id>``. Projects and
notifications are scoped by that id exactly as they are under real auth.
"""

from typing import Optional

from launchpath.core.exceptions import AuthenticationError
from launchpath.interfaces.auth_provider import IAuthProvider, User

DEMO_FOUNDERS: dict[str, User] = {
    founder.id: founder
    for founder in (
        User(id="dev_user", email="dev@example.com", display_name="Developer"),
        User(id="test_user", email="test@example.com", display_name="Test User"),
    )
}


class MockAuthProvider(IAuthProvider):
    """Token-as-user-id provider for local runs and tests."""

    def __init__(self, enabled: bool = False, founders: Optional[dict[str, User]] = None):
        self._enabled = enabled
        self._founders = dict(DEMO_FOUNDERS if founders is None else founders)

    async def verify_token(self, token: str) -> User:
        founder_id = token.strip()
        if not founder_id:
            raise AuthenticationError("Empty bearer token")
        known = self._founders.get(founder_id)
        if known:
            return known
        # Email-shaped ids double as the contact address
        email = founder_id if "@" in founder_id else f"{founder_id}@example.com"
        return User(id=founder_id, email=email, display_name=founder_id)

    async def get_user(self, user_id: str) -> Optional[User]:
        return self._founders.get(user_id)

    def is_enabled(self) -> bool:
        return self._enabled
