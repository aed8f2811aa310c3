"""
Project model definitions.

A project is the root of the onboarding checklist. Its phase and overall
percentages are derived fields owned by the progress aggregator.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from launchpath.models.enums import (
    AutomationTool,
    BackendTool,
    CommunityChoice,
    DeploymentTool,
    FrontendTool,
    PaymentTool,
    Phase,
    ProjectType,
)


class ToolSelections(BaseModel):
    """Tool stack picked in the second wizard step."""

    frontend: list[FrontendTool] = Field(default_factory=list, description="One or two frontend builders")
    backend: Optional[BackendTool] = BackendTool.SUPABASE
    automation: list[AutomationTool] = Field(default_factory=lambda: [AutomationTool.MAKE])
    payment: Optional[PaymentTool] = PaymentTool.STRIPE
    deployment: Optional[DeploymentTool] = DeploymentTool.VERCEL


class ProjectBasics(BaseModel):
    """Fields collected in the first wizard step."""

    name: str = Field("", max_length=200, description="Project name")
    description: Optional[str] = Field(None, max_length=2000, description="One-line summary")
    primary_keyword: str = Field("", max_length=200, description="Keyword used for market research links")
    project_type: Optional[ProjectType] = ProjectType.BLANK
    use_community: bool = False
    community_choice: CommunityChoice = CommunityChoice.NONE
    community_url: Optional[str] = Field(None, max_length=500)


class ProjectCreate(ProjectBasics):
    """Wizard submission: basics plus tool selections."""

    tools: ToolSelections = Field(default_factory=ToolSelections)


class Project(BaseModel):
    """Complete project model."""

    id: UUID
    owner_id: str = Field(..., description="Owner user ID")
    name: str
    description: Optional[str] = None
    primary_keyword: str
    project_type: ProjectType
    use_community: bool = False
    community_choice: CommunityChoice = CommunityChoice.NONE
    community_url: Optional[str] = None
    tools: ToolSelections = Field(default_factory=ToolSelections)
    phase1_complete: int = Field(0, ge=0, le=100)
    phase2_complete: int = Field(0, ge=0, le=100)
    phase3_complete: int = Field(0, ge=0, le=100)
    overall_complete: int = Field(0, ge=0, le=100)
    archived: bool = False
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    def phase_completion(self, phase: Phase) -> int:
        """Stored completion percentage for one phase."""
        return getattr(self, phase_field(phase))


def phase_field(phase: Phase) -> str:
    """Name of the project column holding a phase's completion."""
    return f"phase{phase.number}_complete"


class WizardStepResult(BaseModel):
    """Outcome of validating one wizard step."""

    step: int = Field(..., ge=1, le=2)
    valid: bool
    errors: list[str] = Field(default_factory=list)


class WizardValidationRequest(BaseModel):
    """Payload for validating a wizard step without saving anything."""

    step: int = Field(..., ge=1, le=2)
    basics: Optional[ProjectBasics] = None
    tools: Optional[ToolSelections] = None
