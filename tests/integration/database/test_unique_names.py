"""Integration tests for unique-name enforcement at the store level.

The services check names before inserting; these go straight to the
repositories, as a concurrent request that passed the same check would.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from machine_emu.core.errors import ConflictError
from machine_emu.core.permissions.models import Permission, Role
from machine_emu.modules.permissions.repos import PermissionRepository
from machine_emu.modules.roles.repos import RoleRepository
from machine_emu.modules.users.models import User
from machine_emu.modules.users.repos import UserRepository


pytestmark = pytest.mark.integration


class TestDuplicateInsert:
    async def test_permission_name(self, db: AsyncSession, seeded):
        with pytest.raises(ConflictError) as exc_info:
            await PermissionRepository(db).create(Permission(name="ManageUsers"))

        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "permission_exists"
        assert exc_info.value.details == {"field": "name", "value": "ManageUsers"}

    async def test_role_name(self, db: AsyncSession, seeded):
        with pytest.raises(ConflictError) as exc_info:
            await RoleRepository(db).create(Role(name="Admin"))

        assert exc_info.value.error_code == "role_exists"
        assert exc_info.value.details == {"field": "name", "value": "Admin"}

    async def test_user_name(self, db: AsyncSession, seeded):
        with pytest.raises(ConflictError) as exc_info:
            await UserRepository(db).create(User(user_name="admin", password_hash="x"))

        assert exc_info.value.error_code == "user_exists"
        assert exc_info.value.details == {"field": "user_name", "value": "admin"}

    async def test_names_are_case_sensitive(self, db: AsyncSession, seeded):
        permission = await PermissionRepository(db).create(Permission(name="manageusers"))

        assert permission.id is not None
