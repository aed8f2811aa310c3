"""
Shared pytest fixtures.
"""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from launchpath.infrastructure.local.database import Base, MilestoneORM, TaskORM  # noqa: E402
from launchpath.infrastructure.local.project_repository import SqliteProjectRepository  # noqa: E402
from launchpath.models.enums import FrontendTool, Phase, ProjectType, TaskStatus  # noqa: E402
from launchpath.models.project import ProjectCreate, ToolSelections  # noqa: E402
from launchpath.services.project_templates import ONBOARDING_TEMPLATE  # noqa: E402


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def test_user_id():
    return "test_user"


def make_project_create(**overrides) -> ProjectCreate:
    data = {
        "name": "Invoice Copilot",
        "primary_keyword": "invoicing software",
        "project_type": ProjectType.MICRO_SAAS,
        "tools": ToolSelections(frontend=[FrontendTool.LOVABLE]),
    }
    data.update(overrides)
    return ProjectCreate(**data)


@pytest_asyncio.fixture
async def seeded_project(session_factory, test_user_id):
    """A project seeded with the full onboarding template."""
    repo = SqliteProjectRepository(session_factory=session_factory)
    return await repo.create_from_template(test_user_id, make_project_create(), ONBOARDING_TEMPLATE)


async def add_tasks(session_factory, project_id, phase: Phase, count: int, status: TaskStatus = TaskStatus.NOT_STARTED):
    """Attach `count` tasks to the first milestone of a phase. Returns their ids."""
    from sqlalchemy import select

    async with session_factory() as session:
        async with session.begin():
            milestone = (
                await session.execute(
                    select(MilestoneORM)
                    .where(MilestoneORM.project_id == str(project_id), MilestoneORM.phase == phase.value)
                    .order_by(MilestoneORM.order_index)
                )
            ).scalars().first()
            ids = []
            for index in range(count):
                task_id = str(uuid4())
                session.add(
                    TaskORM(
                        id=task_id,
                        project_id=str(project_id),
                        milestone_id=milestone.id,
                        phase=phase.value,
                        name=f"{phase.value} task {index + 1}",
                        status=status.value,
                        order_index=index + 1,
                    )
                )
                ids.append(task_id)
    return ids


@pytest.fixture
def add_phase_tasks(session_factory):
    async def _add(project_id, phase: Phase, count: int, status: TaskStatus = TaskStatus.NOT_STARTED):
        return await add_tasks(session_factory, project_id, phase, count, status)

    return _add


@pytest.fixture
def project_create():
    return make_project_create
