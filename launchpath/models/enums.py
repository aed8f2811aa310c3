"""
Enum definitions for the application.

Values match the strings stored in the database and exchanged with the client.
"""

from enum import Enum


class Phase(str, Enum):
    """One of the three fixed stages a project moves through."""

    PHASE_1 = "Phase 1"
    PHASE_2 = "Phase 2"
    PHASE_3 = "Phase 3"

    @property
    def number(self) -> int:
        return int(self.value.split()[-1])

    @property
    def label(self) -> str:
        return PHASE_LABELS[self]

    @property
    def previous(self) -> "Phase | None":
        if self.number == 1:
            return None
        return Phase.from_number(self.number - 1)

    @property
    def next(self) -> "Phase | None":
        if self.number == len(Phase):
            return None
        return Phase.from_number(self.number + 1)

    @classmethod
    def from_number(cls, number: int) -> "Phase":
        for phase in cls:
            if phase.number == number:
                return phase
        raise ValueError(f"Unknown phase number: {number}")


PHASE_LABELS = {
    Phase.PHASE_1: "Research & Planning",
    Phase.PHASE_2: "Build",
    Phase.PHASE_3: "Marketing & Launch",
}


class TaskStatus(str, Enum):
    """Task status."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"


class ProjectType(str, Enum):
    """Kind of product the project builds."""

    BLANK = "Blank"
    MARKETPLACE = "Marketplace"
    MICRO_SAAS = "Micro-SaaS"
    B2B = "B2B"
    B2C = "B2C"


class CommunityChoice(str, Enum):
    """Community platform attached to the project."""

    NONE = "None"
    SKOOL = "Skool"
    WHOP = "Whop"


class NotificationType(str, Enum):
    """Types of notifications."""

    TASK_DUE_SOON = "Task Due Soon"
    TASK_STUCK = "Task Stuck"
    COLLABORATOR_UPDATE = "Collaborator Update"
    PHASE_UNLOCKED = "Phase Unlocked"
    PROJECT_COMPLETED = "Project Completed"


class PlanTier(str, Enum):
    """Subscription plan."""

    FREE = "Free"
    PRO = "Pro"


class FrontendTool(str, Enum):
    LOVABLE = "lovable"
    BOLT = "bolt"
    CURSOR = "cursor"


class BackendTool(str, Enum):
    SUPABASE = "supabase"
    XANO = "xano"
    BACKENDLESS = "backendless"


class AutomationTool(str, Enum):
    MAKE = "make"
    ZAPIER = "zapier"
    N8N = "n8n"


class PaymentTool(str, Enum):
    STRIPE = "stripe"
    POLAR = "polar"


class DeploymentTool(str, Enum):
    VERCEL = "vercel"
    NETLIFY = "netlify"
