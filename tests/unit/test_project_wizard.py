"""
Unit tests for wizard validation and project creation.
"""

from unittest.mock import AsyncMock

import pytest

from launchpath.core.exceptions import ValidationError
from launchpath.interfaces.auth_provider import User
from launchpath.models.enums import (
    AutomationTool,
    BackendTool,
    FrontendTool,
    ProjectType,
)
from launchpath.models.project import (
    ProjectBasics,
    ProjectCreate,
    ToolSelections,
    WizardValidationRequest,
)
from launchpath.services.project_templates import ONBOARDING_TEMPLATE
from launchpath.services.project_wizard import (
    ProjectWizardService,
    ensure_valid,
    validate_basics,
    validate_step,
    validate_tools,
)


class TestValidateBasics:
    def test_valid_basics(self):
        basics = ProjectBasics(name="Acme", primary_keyword="crm", project_type=ProjectType.B2B)
        assert validate_basics(basics) == []

    def test_blank_name_and_keyword_are_rejected(self):
        errors = validate_basics(ProjectBasics(name="   ", primary_keyword=""))
        assert "Project name is required" in errors
        assert "Primary keyword is required" in errors

    def test_missing_project_type(self):
        basics = ProjectBasics(name="Acme", primary_keyword="crm", project_type=None)
        assert validate_basics(basics) == ["Project type is required"]


class TestValidateTools:
    def test_defaults_with_one_frontend_are_valid(self):
        assert validate_tools(ToolSelections(frontend=[FrontendTool.BOLT])) == []

    def test_frontend_needs_one_or_two(self):
        assert validate_tools(ToolSelections(frontend=[]))
        too_many = ToolSelections(frontend=[FrontendTool.BOLT, FrontendTool.CURSOR, FrontendTool.LOVABLE])
        assert validate_tools(too_many) == ["Choose 1 to 2 frontend tools"]
        two = ToolSelections(frontend=[FrontendTool.BOLT, FrontendTool.CURSOR])
        assert validate_tools(two) == []

    def test_every_category_required(self):
        tools = ToolSelections(
            frontend=[FrontendTool.CURSOR],
            backend=None,
            automation=[],
            payment=None,
            deployment=None,
        )
        assert len(validate_tools(tools)) == 4

    def test_multiple_automation_tools_allowed(self):
        tools = ToolSelections(
            frontend=[FrontendTool.CURSOR],
            backend=BackendTool.XANO,
            automation=[AutomationTool.ZAPIER, AutomationTool.N8N],
        )
        assert validate_tools(tools) == []


def test_validate_step_reports_per_step():
    ok = validate_step(
        WizardValidationRequest(step=1, basics=ProjectBasics(name="Acme", primary_keyword="crm"))
    )
    assert ok.valid is True
    assert ok.errors == []

    missing = validate_step(WizardValidationRequest(step=2))
    assert missing.valid is False
    assert missing.step == 2


def test_ensure_valid_collects_errors_from_both_steps():
    data = ProjectCreate(name="", primary_keyword="crm", tools=ToolSelections(frontend=[]))
    with pytest.raises(ValidationError) as exc_info:
        ensure_valid(data)
    assert len(exc_info.value.details["errors"]) == 2


@pytest.mark.asyncio
async def test_create_project_rejects_invalid_input_before_writing():
    repo = AsyncMock()
    service = ProjectWizardService(repo)

    with pytest.raises(ValidationError):
        await service.create_project(User(id="u1"), ProjectCreate(name="Acme"))

    repo.create_from_template.assert_not_called()


@pytest.mark.asyncio
async def test_create_project_seeds_template(project_create):
    repo = AsyncMock()
    service = ProjectWizardService(repo)
    data = project_create()

    await service.create_project(User(id="u1"), data)

    repo.create_from_template.assert_awaited_once_with("u1", data, ONBOARDING_TEMPLATE)
