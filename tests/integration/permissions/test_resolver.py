"""Integration tests for permission resolution against the store."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from machine_emu.core.permissions.models import Permission, Role, RolePermission, UserRole
from machine_emu.core.permissions.resolver import PermissionResolver
from machine_emu.modules.users.models import User
from tests.factories.user import UserFactory


pytestmark = pytest.mark.integration


async def make_role(db: AsyncSession, name: str, permissions: list[Permission]) -> Role:
    role = Role(name=name)
    db.add(role)
    await db.flush()
    db.add_all(RolePermission(role_id=role.id, permission_id=p.id) for p in permissions)
    await db.flush()
    return role


async def make_user(db: AsyncSession, *roles: Role) -> User:
    user = UserFactory.build()
    db.add(user)
    await db.flush()
    db.add_all(UserRole(user_id=user.id, role_id=role.id) for role in roles)
    await db.flush()
    return user


@pytest.fixture
async def permissions(db: AsyncSession) -> dict[str, Permission]:
    items = {name: Permission(name=name) for name in ("StartCar", "StopCar", "GetCarStatus")}
    db.add_all(items.values())
    await db.flush()
    return items


class TestResolve:
    async def test_union_across_roles_is_distinct(self, db: AsyncSession, permissions):
        starter = await make_role(db, "Starter", [permissions["StartCar"], permissions["StopCar"]])
        watcher = await make_role(db, "Watcher", [permissions["StopCar"], permissions["GetCarStatus"]])
        user = await make_user(db, starter, watcher)

        resolved = await PermissionResolver(db).resolve(user.id)

        assert resolved == {"StartCar", "StopCar", "GetCarStatus"}

    async def test_no_roles_is_empty(self, db: AsyncSession, permissions):
        user = await make_user(db)

        assert await PermissionResolver(db).resolve(user.id) == set()

    async def test_role_without_permissions(self, db: AsyncSession, permissions):
        user = await make_user(db, await make_role(db, "Empty", []))

        assert await PermissionResolver(db).resolve(user.id) == set()

    async def test_reads_current_state(self, db: AsyncSession, permissions):
        """Nothing is cached between calls."""
        role = await make_role(db, "Starter", [permissions["StartCar"]])
        user = await make_user(db, role)
        resolver = PermissionResolver(db)
        assert await resolver.resolve(user.id) == {"StartCar"}

        db.add(RolePermission(role_id=role.id, permission_id=permissions["StopCar"].id))
        await db.flush()

        assert await resolver.resolve(user.id) == {"StartCar", "StopCar"}

    async def test_resolve_roles_in_id_order(self, db: AsyncSession, permissions):
        first = await make_role(db, "First", [])
        second = await make_role(db, "Second", [])
        user = await make_user(db, second, first)

        assert await PermissionResolver(db).resolve_roles(user.id) == ["First", "Second"]
