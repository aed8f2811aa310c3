"""Abstract interfaces for infrastructure abstraction."""

from launchpath.interfaces.auth_provider import IAuthProvider, User
from launchpath.interfaces.milestone_repository import IMilestoneRepository
from launchpath.interfaces.notification_repository import INotificationRepository
from launchpath.interfaces.progress_repository import IProgressRepository
from launchpath.interfaces.project_repository import IProjectRepository
from launchpath.interfaces.task_repository import ITaskRepository
from launchpath.interfaces.user_repository import IUserRepository

__all__ = [
    "IAuthProvider",
    "IMilestoneRepository",
    "INotificationRepository",
    "IProgressRepository",
    "IProjectRepository",
    "ITaskRepository",
    "IUserRepository",
    "User",
]
