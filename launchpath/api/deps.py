"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from jose import JWTError

from launchpath.core.config import get_settings
from launchpath.interfaces.auth_provider import IAuthProvider, User
from launchpath.interfaces.milestone_repository import IMilestoneRepository
from launchpath.interfaces.notification_repository import INotificationRepository
from launchpath.interfaces.progress_repository import IProgressRepository
from launchpath.interfaces.project_repository import IProjectRepository
from launchpath.interfaces.task_repository import ITaskRepository
from launchpath.interfaces.user_repository import IUserRepository
from launchpath.services.progress_service import ProgressService
from launchpath.services.project_wizard import ProjectWizardService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_project_repository() -> IProjectRepository:
    """Get project repository instance."""
    from launchpath.infrastructure.local.project_repository import SqliteProjectRepository
    return SqliteProjectRepository()


@lru_cache()
def get_milestone_repository() -> IMilestoneRepository:
    """Get milestone repository instance."""
    from launchpath.infrastructure.local.milestone_repository import SqliteMilestoneRepository
    return SqliteMilestoneRepository()


@lru_cache()
def get_task_repository() -> ITaskRepository:
    """Get task repository instance."""
    from launchpath.infrastructure.local.task_repository import SqliteTaskRepository
    return SqliteTaskRepository()


@lru_cache()
def get_progress_repository() -> IProgressRepository:
    """Get progress repository instance."""
    from launchpath.infrastructure.local.progress_repository import SqliteProgressRepository
    return SqliteProgressRepository()


@lru_cache()
def get_notification_repository() -> INotificationRepository:
    """Get notification repository instance."""
    from launchpath.infrastructure.local.notification_repository import SqliteNotificationRepository
    return SqliteNotificationRepository()


@lru_cache()
def get_user_repository() -> IUserRepository:
    """Get user repository instance."""
    from launchpath.infrastructure.local.user_repository import SqliteUserRepository
    return SqliteUserRepository()


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    if settings.AUTH_PROVIDER == "local":
        from launchpath.infrastructure.auth.local_auth import LocalAuthProvider

        return LocalAuthProvider(settings, get_user_repository())

    from launchpath.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=True)


# ===========================================
# Services
# ===========================================


def get_progress_service(
    progress_repo: IProgressRepository = Depends(get_progress_repository),
    notification_repo: INotificationRepository = Depends(get_notification_repository),
) -> ProgressService:
    return ProgressService(progress_repo, notification_repo)


def get_project_wizard_service(
    project_repo: IProjectRepository = Depends(get_project_repository),
) -> ProjectWizardService:
    return ProjectWizardService(project_repo)


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    With the mock provider the bearer token is the user id.
    With the local provider it must be a JWT issued by /api/auth/login.
    """
    if not auth_provider.is_enabled():
        # Mock user for development
        return User(id="dev_user", email="dev@example.com", display_name="Developer")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return await auth_provider.verify_token(token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

ProjectRepo = Annotated[IProjectRepository, Depends(get_project_repository)]
MilestoneRepo = Annotated[IMilestoneRepository, Depends(get_milestone_repository)]
TaskRepo = Annotated[ITaskRepository, Depends(get_task_repository)]
NotificationRepo = Annotated[INotificationRepository, Depends(get_notification_repository)]
UserRepo = Annotated[IUserRepository, Depends(get_user_repository)]
ProgressSvc = Annotated[ProgressService, Depends(get_progress_service)]
WizardSvc = Annotated[ProjectWizardService, Depends(get_project_wizard_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
