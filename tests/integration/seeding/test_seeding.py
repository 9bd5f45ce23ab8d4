"""Integration tests for startup seeding."""

import pytest
from httpx import AsyncClient
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from machine_emu.core.permissions.models import Permission, Role, RolePermission
from machine_emu.core.permissions.policies import ADMIN_ROLE, SEED_POLICY, PermissionName
from machine_emu.modules.cars.models import Car
from machine_emu.modules.motorcycles.models import Motorcycle
from machine_emu.modules.users.models import User
from machine_emu.seeding import seed_database


pytestmark = pytest.mark.integration


async def role_permission_names(db: AsyncSession, role_name: str) -> set[str]:
    result = await db.execute(
        select(Permission.name)
        .join(RolePermission, RolePermission.permission_id == Permission.id)
        .join(Role, Role.id == RolePermission.role_id)
        .where(Role.name == role_name)
    )
    return set(result.scalars().all())


class TestFirstRun:
    async def test_creates_builtin_state(self, db: AsyncSession):
        report = await seed_database(db)

        assert report.roles_created == 2
        assert report.permissions_created == len(PermissionName)
        assert report.users_created == 2
        for role_name, expected in SEED_POLICY.items():
            assert await role_permission_names(db, role_name) == {p.value for p in expected}
        assert await db.scalar(select(func.count()).select_from(Car)) == 2
        assert await db.scalar(select(func.count()).select_from(Motorcycle)) == 2


class TestRerun:
    async def test_second_run_changes_nothing(self, db: AsyncSession):
        await seed_database(db)

        report = await seed_database(db)

        assert report.changed is False

    async def test_policy_drift_is_reconciled(self, db: AsyncSession):
        """Missing links are restored and surplus links removed."""
        await seed_database(db)
        admin = await db.scalar(select(Role).where(Role.name == ADMIN_ROLE))
        by_name = {
            p.name: p for p in (await db.execute(select(Permission))).scalars().all()
        }
        await db.execute(
            delete(RolePermission).where(
                RolePermission.role_id == admin.id,
                RolePermission.permission_id == by_name["ManageUsers"].id,
            )
        )
        db.add(RolePermission(role_id=admin.id, permission_id=by_name["StartCar"].id))
        await db.flush()

        report = await seed_database(db)

        assert report.links_added == 1
        assert report.links_removed == 1
        assert await role_permission_names(db, ADMIN_ROLE) == {
            p.value for p in SEED_POLICY[ADMIN_ROLE]
        }

    async def test_custom_role_links_are_reset(self, db: AsyncSession):
        """Roles outside the seed policy lose their links; the rows themselves stay."""
        await seed_database(db)
        custom_permission = Permission(name="FlyPlane")
        custom_role = Role(name="Pilots")
        db.add_all([custom_permission, custom_role])
        await db.flush()
        db.add(RolePermission(role_id=custom_role.id, permission_id=custom_permission.id))
        await db.flush()

        report = await seed_database(db)

        assert report.links_removed == 1
        assert await role_permission_names(db, "Pilots") == set()
        assert await db.scalar(select(Role).where(Role.name == "Pilots")) is not None
        assert await db.scalar(select(Permission).where(Permission.name == "FlyPlane")) is not None

    async def test_default_users_only_into_empty_table(self, db: AsyncSession):
        db.add(User(user_name="someone", password_hash="x"))
        await db.flush()

        report = await seed_database(db)

        assert report.users_created == 0
        names = (await db.execute(select(User.user_name))).scalars().all()
        assert names == ["someone"]

    async def test_deleted_role_is_recreated(self, db: AsyncSession):
        await seed_database(db)
        admin = await db.scalar(select(Role).where(Role.name == ADMIN_ROLE))
        await db.execute(delete(RolePermission).where(RolePermission.role_id == admin.id))
        await db.delete(admin)
        await db.flush()

        report = await seed_database(db)

        assert report.roles_created == 1
        assert await role_permission_names(db, ADMIN_ROLE) == {
            p.value for p in SEED_POLICY[ADMIN_ROLE]
        }


class TestAfterAdministration:
    async def test_links_granted_through_api_are_reset(
        self, client: AsyncClient, db: AsyncSession, admin_headers
    ):
        permissions = (await client.get("/api/v1/permissions", headers=admin_headers)).json()
        start_car = next(p["id"] for p in permissions if p["name"] == "StartCar")
        created = await client.post(
            "/api/v1/roles",
            json={"name": "Custom", "permission_ids": [start_car]},
            headers=admin_headers,
        )
        assert created.status_code == 201

        await seed_database(db)

        count = await db.scalar(
            select(func.count())
            .select_from(RolePermission)
            .where(RolePermission.role_id == created.json()["id"])
        )
        assert count == 0
