"""
Progress repository interface.

The aggregate store: task writes and the milestone/project recompute they
trigger happen behind one call so an implementation can make them atomic.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
from uuid import UUID

from launchpath.models.progress import TaskChangeResult
from launchpath.models.project import Project


class IProgressRepository(ABC):
    """Interface for progress-affecting writes."""

    @abstractmethod
    async def apply_task_update(
        self,
        owner_id: str,
        task_id: UUID,
        changes: dict[str, Any],
        actor_id: str,
        expected_version: Optional[int] = None,
    ) -> TaskChangeResult:
        """
        Write task changes and recompute the owning milestone and project.

        Raises:
            NotFoundError: task is not in one of the owner's projects
            PhaseLockedError: the task's phase is not unlocked
            ConflictError: expected_version does not match the stored row
            InfrastructureError: the store failed; nothing was written
        """
        pass

    @abstractmethod
    async def recompute_project(self, owner_id: str, project_id: UUID) -> Project:
        """Rebuild every milestone and phase percentage of a project from its tasks."""
        pass
