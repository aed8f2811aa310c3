"""
Local authentication endpoints (register/login).
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from launchpath.api.deps import CurrentUser, UserRepo
from launchpath.core.config import Settings, get_settings
from launchpath.core.exceptions import ValidationError
from launchpath.core.security import create_access_token, hash_password, verify_password
from launchpath.models.user import UserAccount, UserCreate

router = APIRouter()


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    name: Optional[str] = Field(None, max_length=255)
    timezone: str = Field(default="UTC", max_length=50, description="IANA timezone")


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, max_length=128)


class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AuthUser


def _normalize_email(value: str) -> str:
    return value.strip().lower()


def _ensure_local_auth(settings: Settings) -> None:
    if settings.AUTH_PROVIDER != "local":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Local auth is not enabled",
        )
    if not settings.LOCAL_JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="LOCAL_JWT_SECRET is not configured",
        )


def _auth_response(account: UserAccount, settings: Settings) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(str(account.id), settings),
        user=AuthUser(
            id=str(account.id),
            email=account.email,
            display_name=account.name or account.email,
        ),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    user_repo: UserRepo,
) -> AuthResponse:
    settings = get_settings()
    _ensure_local_auth(settings)

    email = _normalize_email(data.email)
    if "@" not in email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A valid email is required",
        )

    existing = await user_repo.get_by_email(email)
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already exists",
        )

    try:
        account = await user_repo.create(
            UserCreate(
                email=email,
                name=data.name.strip() if data.name else None,
                password_hash=hash_password(data.password),
                timezone=data.timezone,
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    return _auth_response(account, settings)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    user_repo: UserRepo,
) -> AuthResponse:
    settings = get_settings()
    _ensure_local_auth(settings)

    account = await user_repo.get_by_email(_normalize_email(data.email))
    if not account or not account.password_hash or not verify_password(data.password, account.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return _auth_response(account, settings)


@router.get("/me", response_model=AuthUser)
async def me(user: CurrentUser) -> AuthUser:
    return AuthUser(id=user.id, email=user.email, display_name=user.display_name)
