"""
Project repository interface.

Defines the contract for project data operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from launchpath.models.progress import DashboardMetrics
from launchpath.models.project import Project, ProjectCreate
from launchpath.services.project_templates import MilestoneTemplate


class IProjectRepository(ABC):
    """Interface for project repository operations."""

    @abstractmethod
    async def create_from_template(
        self,
        owner_id: str,
        project: ProjectCreate,
        template: Sequence[MilestoneTemplate],
    ) -> Project:
        """Create a project together with its milestones and tasks in one transaction."""
        pass

    @abstractmethod
    async def get(self, owner_id: str, project_id: UUID) -> Optional[Project]:
        """Get a project owned by the user."""
        pass

    @abstractmethod
    async def list(
        self,
        owner_id: str,
        include_archived: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Project]:
        """List the user's projects, most recently updated first."""
        pass

    @abstractmethod
    async def set_archived(self, owner_id: str, project_id: UUID, archived: bool = True) -> Project:
        """Archive or restore a project. Raises NotFoundError if missing."""
        pass

    @abstractmethod
    async def dashboard_metrics(self, owner_id: str) -> DashboardMetrics:
        """Aggregate counts and average completion over the user's active projects."""
        pass
