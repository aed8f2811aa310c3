"""
Tests for the shared domain error to HTTP mapping.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from launchpath.api.errors import UNAVAILABLE_DETAIL, error_detail, http_error, status_for_error
from launchpath.core.exceptions import (
    AuthorizationError,
    BusinessLogicError,
    ConflictError,
    InfrastructureError,
    LaunchPathError,
    NotFoundError,
    PhaseLockedError,
    ValidationError,
)
from main import create_app


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (NotFoundError("Project not found"), 404),
        (ValidationError("bad input"), 422),
        (ConflictError("Task was modified", expected_version=1), 409),
        (PhaseLockedError(3, 80), 423),
        (AuthorizationError("not yours"), 403),
        (InfrastructureError("database is locked"), 503),
        (BusinessLogicError("nope"), 400),
        (LaunchPathError("unclassified"), 500),
    ],
)
def test_status_for_error(error, status_code):
    assert status_for_error(error) == status_code


def test_locked_phase_is_423_not_generic_business_error():
    assert http_error(PhaseLockedError(2, 50)).status_code == 423


def test_infrastructure_detail_is_generic():
    assert error_detail(InfrastructureError("sqlite3.OperationalError: disk I/O error")) == UNAVAILABLE_DETAIL


def test_details_dict_is_merged_into_detail():
    detail = error_detail(PhaseLockedError(2, 50))
    assert detail["phase"] == 2
    assert detail["prior_completion"] == 50
    assert detail["message"].startswith("Phase 2 is locked")


def test_plain_error_detail_is_message():
    assert error_detail(NotFoundError("Task abc not found")) == "Task abc not found"


@pytest.mark.asyncio
async def test_app_handler_matches_router_mapping():
    app = create_app()
    error = ConflictError("Task was modified", expected_version=2, actual_version=5)

    @app.get("/raise-conflict")
    async def raise_conflict():
        raise error

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/raise-conflict")

    expected = http_error(error)
    assert response.status_code == expected.status_code
    assert response.json()["detail"] == expected.detail
