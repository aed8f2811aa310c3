"""Pydantic models (schemas) for the application."""

from launchpath.models.enums import (
    CommunityChoice,
    NotificationType,
    Phase,
    PlanTier,
    ProjectType,
    TaskStatus,
)
from launchpath.models.milestone import Milestone, MilestoneWithTasks
from launchpath.models.notification import Notification, NotificationCreate
from launchpath.models.progress import DashboardMetrics, PhaseProgress, ProjectProgress, TaskChangeResult
from launchpath.models.project import (
    Project,
    ProjectBasics,
    ProjectCreate,
    ToolSelections,
    WizardStepResult,
    WizardValidationRequest,
)
from launchpath.models.task import Task, TaskUpdate
from launchpath.models.user import UserAccount, UserCreate

__all__ = [
    # Enums
    "CommunityChoice",
    "NotificationType",
    "Phase",
    "PlanTier",
    "ProjectType",
    "TaskStatus",
    # Project
    "Project",
    "ProjectBasics",
    "ProjectCreate",
    "ToolSelections",
    "WizardStepResult",
    "WizardValidationRequest",
    # Milestone / Task
    "Milestone",
    "MilestoneWithTasks",
    "Task",
    "TaskUpdate",
    # Progress
    "DashboardMetrics",
    "PhaseProgress",
    "ProjectProgress",
    "TaskChangeResult",
    # Notification
    "Notification",
    "NotificationCreate",
    # User
    "UserAccount",
    "UserCreate",
]
