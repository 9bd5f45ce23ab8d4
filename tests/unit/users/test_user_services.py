"""Unit tests for UserService."""

from unittest.mock import AsyncMock

import pytest

from machine_emu.core.errors import ConflictError, NotFoundError
from machine_emu.modules.users.models import User
from machine_emu.modules.users.schemas import UserUpdate
from machine_emu.modules.users.services import UserService
from tests.factories.user import UserCreateFactory


pytestmark = pytest.mark.unit


class TestCreateUser:
    """Tests for UserService.create_user method."""

    async def test_create_user_hashes_password(self):
        """Verify the repository receives a hash, never the password."""
        mock_repo = AsyncMock()
        mock_repo.create.side_effect = lambda user: user
        service = UserService(repo=mock_repo)
        data = UserCreateFactory.build()

        user = await service.create_user(data)

        assert user.user_name == data.user_name
        assert user.password_hash != data.password
        mock_repo.ensure_name_available.assert_awaited_once_with(data.user_name)
        mock_repo.replace_roles.assert_not_awaited()

    async def test_create_user_links_initial_roles(self):
        """Verify initial role_ids are linked after creation."""
        created = User(id=5, user_name="alice", password_hash="h")
        mock_repo = AsyncMock()
        mock_repo.create.return_value = created
        mock_repo.reload.return_value = created
        service = UserService(repo=mock_repo)

        await service.create_user(UserCreateFactory.build(role_ids=[1, 2]))

        mock_repo.replace_roles.assert_awaited_once_with(5, [1, 2])
        mock_repo.reload.assert_awaited_once_with(5)

    async def test_create_user_duplicate_name_raises_conflict(self):
        """Verify ConflictError propagates and nothing is created."""
        mock_repo = AsyncMock()
        mock_repo.ensure_name_available.side_effect = ConflictError(
            "User name already exists",
            error_code="user_exists",
            field="user_name",
            value="admin",
        )
        service = UserService(repo=mock_repo)

        with pytest.raises(ConflictError) as exc_info:
            await service.create_user(UserCreateFactory.build(user_name="admin"))

        assert exc_info.value.details["field"] == "user_name"
        mock_repo.create.assert_not_awaited()


class TestUpdateUser:
    """Tests for UserService.update_user method."""

    async def test_update_missing_user_raises_not_found(self):
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = None
        service = UserService(repo=mock_repo)

        with pytest.raises(NotFoundError):
            await service.update_user(99, UserUpdate(user_name="x"))

    async def test_omitted_fields_are_untouched(self):
        """Verify a partial update leaves roles and password alone."""
        user = User(id=1, user_name="alice", password_hash="old-hash")
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = user
        mock_repo.update.side_effect = lambda u: u
        service = UserService(repo=mock_repo)

        result = await service.update_user(1, UserUpdate(user_name="alicia"))

        assert result.user_name == "alicia"
        assert result.password_hash == "old-hash"
        mock_repo.ensure_name_available.assert_awaited_once_with("alicia", exclude_id=1)
        mock_repo.replace_roles.assert_not_awaited()

    async def test_same_name_skips_uniqueness_check(self):
        user = User(id=1, user_name="alice", password_hash="h")
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = user
        mock_repo.update.side_effect = lambda u: u
        service = UserService(repo=mock_repo)

        await service.update_user(1, UserUpdate(user_name="alice"))

        mock_repo.ensure_name_available.assert_not_awaited()

    async def test_empty_role_list_clears_roles(self):
        """Verify an empty list is a replace, not an omission."""
        user = User(id=1, user_name="alice", password_hash="h")
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = user
        mock_repo.update.side_effect = lambda u: u
        service = UserService(repo=mock_repo)

        await service.update_user(1, UserUpdate(role_ids=[]))

        mock_repo.replace_roles.assert_awaited_once_with(1, [])


class TestDeleteUser:
    async def test_delete_missing_user_raises_not_found(self):
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = None
        service = UserService(repo=mock_repo)

        with pytest.raises(NotFoundError) as exc_info:
            await service.delete_user(42)

        assert exc_info.value.details["resource_id"] == "42"
        mock_repo.delete.assert_not_awaited()
