"""
Milestone repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from launchpath.models.enums import Phase
from launchpath.models.milestone import Milestone, MilestoneWithTasks


class IMilestoneRepository(ABC):
    """Interface for milestone repository operations."""

    @abstractmethod
    async def get(self, milestone_id: UUID) -> Optional[Milestone]:
        """Get a milestone by ID."""
        pass

    @abstractmethod
    async def list_by_project(self, project_id: UUID, phase: Optional[Phase] = None) -> list[Milestone]:
        """List milestones for a project, ordered by phase then order_index."""
        pass

    @abstractmethod
    async def list_with_tasks(self, project_id: UUID, phase: Phase) -> list[MilestoneWithTasks]:
        """List a phase's milestones with their ordered tasks."""
        pass
