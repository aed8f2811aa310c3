"""
Unit tests for SQLite notification repository.
"""

from uuid import uuid4

import pytest

from launchpath.infrastructure.local.notification_repository import SqliteNotificationRepository
from launchpath.models.enums import NotificationType
from launchpath.models.notification import NotificationCreate


@pytest.fixture
def repository(session_factory):
    return SqliteNotificationRepository(session_factory=session_factory)


def _make_notification(
    user_id: str = "test_user",
    ntype: NotificationType = NotificationType.PHASE_UNLOCKED,
    message: str = "Phase 2: Build is now unlocked",
) -> NotificationCreate:
    return NotificationCreate(user_id=user_id, type=ntype, message=message, project_id=uuid4())


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_returns_unread_notification(self, repository, test_user_id):
        result = await repository.create(_make_notification(test_user_id))

        assert result.id is not None
        assert result.user_id == test_user_id
        assert result.type == NotificationType.PHASE_UNLOCKED
        assert result.read is False
        assert result.created_at.tzinfo is not None


class TestList:
    @pytest.mark.asyncio
    async def test_list_newest_first_and_scoped_to_user(self, repository, test_user_id):
        first = await repository.create(_make_notification(test_user_id, message="first"))
        second = await repository.create(_make_notification(test_user_id, message="second"))
        await repository.create(_make_notification("other_user"))

        results = await repository.list(test_user_id)

        assert [n.id for n in results] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_unread_only_and_pagination(self, repository, test_user_id):
        created = [await repository.create(_make_notification(test_user_id, message=str(i))) for i in range(3)]
        await repository.mark_as_read(test_user_id, created[0].id)

        unread = await repository.list(test_user_id, unread_only=True)
        page = await repository.list(test_user_id, limit=1, offset=1)

        assert {n.id for n in unread} == {created[1].id, created[2].id}
        assert len(page) == 1


class TestReadState:
    @pytest.mark.asyncio
    async def test_mark_as_read_and_count(self, repository, test_user_id):
        n1 = await repository.create(_make_notification(test_user_id))
        await repository.create(_make_notification(test_user_id))
        assert await repository.get_unread_count(test_user_id) == 2

        marked = await repository.mark_as_read(test_user_id, n1.id)

        assert marked.read is True
        assert await repository.get_unread_count(test_user_id) == 1

    @pytest.mark.asyncio
    async def test_mark_as_read_other_user_returns_none(self, repository, test_user_id):
        n1 = await repository.create(_make_notification(test_user_id))
        assert await repository.mark_as_read("other_user", n1.id) is None

    @pytest.mark.asyncio
    async def test_mark_all_as_read(self, repository, test_user_id):
        for _ in range(3):
            await repository.create(_make_notification(test_user_id))
        await repository.create(_make_notification("other_user"))

        updated = await repository.mark_all_as_read(test_user_id)

        assert updated == 3
        assert await repository.get_unread_count(test_user_id) == 0
        assert await repository.get_unread_count("other_user") == 1


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, repository, test_user_id):
        n1 = await repository.create(_make_notification(test_user_id))

        assert await repository.delete("other_user", n1.id) is False
        assert await repository.delete(test_user_id, n1.id) is True
        assert await repository.get(test_user_id, n1.id) is None
