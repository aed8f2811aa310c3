"""API routers."""

from launchpath.api import (
    auth,
    notifications,
    projects,
    tasks,
    users,
)

__all__ = [
    "auth",
    "notifications",
    "projects",
    "tasks",
    "users",
]
