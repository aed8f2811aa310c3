"""
Project creation wizard.

Step 1 collects the basics, step 2 the tool stack. A step is checked before
anything is written, and a valid submission seeds the project with the
fixed onboarding template.
"""

from __future__ import annotations

from launchpath.core.exceptions import ValidationError
from launchpath.core.logger import logger
from launchpath.interfaces.auth_provider import User
from launchpath.interfaces.project_repository import IProjectRepository
from launchpath.models.project import (
    Project,
    ProjectBasics,
    ProjectCreate,
    ToolSelections,
    WizardStepResult,
    WizardValidationRequest,
)
from launchpath.services.project_templates import ONBOARDING_TEMPLATE

MAX_FRONTEND_TOOLS = 2


def validate_basics(basics: ProjectBasics) -> list[str]:
    errors: list[str] = []
    if not basics.name.strip():
        errors.append("Project name is required")
    if not basics.primary_keyword.strip():
        errors.append("Primary keyword is required")
    if basics.project_type is None:
        errors.append("Project type is required")
    return errors


def validate_tools(tools: ToolSelections) -> list[str]:
    errors: list[str] = []
    if not 1 <= len(tools.frontend) <= MAX_FRONTEND_TOOLS:
        errors.append(f"Choose 1 to {MAX_FRONTEND_TOOLS} frontend tools")
    if tools.backend is None:
        errors.append("Choose a backend")
    if not tools.automation:
        errors.append("Choose at least one automation tool")
    if tools.payment is None:
        errors.append("Choose a payment processor")
    if tools.deployment is None:
        errors.append("Choose a deployment target")
    return errors


def validate_step(request: WizardValidationRequest) -> WizardStepResult:
    """Validate a single wizard step. A missing payload counts as an empty one."""
    if request.step == 1:
        errors = validate_basics(request.basics or ProjectBasics())
    else:
        errors = validate_tools(request.tools or ToolSelections(frontend=[]))
    return WizardStepResult(step=request.step, valid=not errors, errors=errors)


def ensure_valid(project: ProjectCreate) -> None:
    """Raise ValidationError listing every problem across both steps."""
    errors = validate_basics(project) + validate_tools(project.tools)
    if errors:
        raise ValidationError("Project wizard input is invalid", details={"errors": errors})


class ProjectWizardService:
    """Validates wizard submissions and seeds new projects."""

    def __init__(self, project_repo: IProjectRepository):
        self._project_repo = project_repo

    async def create_project(self, user: User, data: ProjectCreate) -> Project:
        ensure_valid(data)
        project = await self._project_repo.create_from_template(user.id, data, ONBOARDING_TEMPLATE)
        logger.info(f"Project {project.id} created for {user.id} from wizard")
        return project
