"""
Task repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from launchpath.models.task import Task


class ITaskRepository(ABC):
    """Interface for task read operations and reminder bookkeeping.

    Writes that affect progress go through IProgressRepository.
    """

    @abstractmethod
    async def get(self, owner_id: str, task_id: UUID) -> Optional[Task]:
        """Get a task in one of the user's projects."""
        pass

    @abstractmethod
    async def list_reminder_candidates(self) -> list[tuple[Task, str]]:
        """Open tasks in active projects with at least one reminder still unsent.

        Returns (task, project owner id) pairs.
        """
        pass

    @abstractmethod
    async def mark_reminded(
        self,
        task_id: UUID,
        due_soon: Optional[bool] = None,
        stuck: Optional[bool] = None,
    ) -> None:
        """Set reminder flags without touching version or updated_at."""
        pass
