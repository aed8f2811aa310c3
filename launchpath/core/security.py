"""
Security helpers for local authentication.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

from jose import jwt

from launchpath.core.config import Settings

_PBKDF2_ALGO = "pbkdf2_sha256"
_PBKDF2_ITERATIONS = 600_000


def hash_password(password: str, iterations: int = _PBKDF2_ITERATIONS) -> str:
    """Hash a password using PBKDF2-HMAC-SHA256."""
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    salt_b64 = base64.b64encode(salt).decode("ascii")
    digest_b64 = base64.b64encode(digest).decode("ascii")
    return f"{_PBKDF2_ALGO}${iterations}${salt_b64}${digest_b64}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify a password against the stored hash."""
    parts = stored_hash.split("$")
    if len(parts) != 4 or parts[0] != _PBKDF2_ALGO:
        return False
    try:
        iterations = int(parts[1])
        salt = base64.b64decode(parts[2].encode("ascii"))
        digest = base64.b64decode(parts[3].encode("ascii"))
    except ValueError:
        return False
    computed = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(computed, digest)


def create_access_token(user_id: str, settings: Settings, expires_minutes: int | None = None) -> str:
    """Create a signed JWT for a local user."""
    now = datetime.now(timezone.utc)
    expires = now + timedelta(minutes=expires_minutes or settings.LOCAL_JWT_EXPIRE_MINUTES)
    payload = {
        "sub": user_id,
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
    }
    if settings.LOCAL_JWT_ISSUER:
        payload["iss"] = settings.LOCAL_JWT_ISSUER
    return jwt.encode(payload, settings.LOCAL_JWT_SECRET, algorithm="HS256")
