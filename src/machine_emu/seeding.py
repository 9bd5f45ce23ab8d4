"""Startup seeding.

Brings the store to the built-in desired state:

- built-in roles exist
- every recognized permission name exists (nothing is removed)
- role permission links are reset to ``SEED_POLICY``: built-in roles get
  exactly their policy, every other role gets none (missing links are
  inserted before surplus links are removed, so a built-in role never
  passes through an empty state)
- default accounts exist when there are no users at all
- vehicle states exist, and demo vehicles exist when there are none

Running it any number of times converges on the same state.
"""

from dataclasses import dataclass
from typing import TypedDict

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from machine_emu.core.auth.backend import hash_password
from machine_emu.core.database import async_session_factory
from machine_emu.core.permissions.models import Permission, Role, RolePermission, UserRole
from machine_emu.core.permissions.policies import (
    ADMIN_ROLE,
    SEED_POLICY,
    USER_ROLE,
    PermissionName,
)
from machine_emu.modules.cars.models import Car, CarState, CarStatus
from machine_emu.modules.motorcycles.models import (
    Motorcycle,
    MotorcycleState,
    MotorcycleStatus,
)
from machine_emu.modules.permissions.repos import PermissionRepository
from machine_emu.modules.users.models import User


logger = structlog.get_logger()


# ============================================================
# Type Definitions
# ============================================================


class UserData(TypedDict):
    user_name: str
    password: str
    roles: list[str]


# ============================================================
# Seed Data Definitions
# ============================================================

DEFAULT_USERS: list[UserData] = [
    {"user_name": "admin", "password": "admin123", "roles": [ADMIN_ROLE]},
    {"user_name": "user", "password": "user123", "roles": [USER_ROLE]},
]

DEMO_CARS: list[str] = ["Car A", "Car B"]
DEMO_MOTORCYCLES: list[str] = ["Motorcycle A", "Motorcycle B"]


@dataclass
class SeedReport:
    """Counts of rows changed by one seeding run."""

    roles_created: int = 0
    permissions_created: int = 0
    links_added: int = 0
    links_removed: int = 0
    users_created: int = 0
    statuses_created: int = 0
    vehicles_created: int = 0

    @property
    def changed(self) -> bool:
        return any(vars(self).values())


# ============================================================
# Seeding Steps
# ============================================================


async def ensure_roles(session: AsyncSession, report: SeedReport) -> dict[str, Role]:
    """Create the built-in roles that are missing."""
    result = await session.execute(select(Role).where(Role.name.in_(list(SEED_POLICY))))
    roles = {role.name: role for role in result.scalars().all()}

    for name in SEED_POLICY:
        if name not in roles:
            role = Role(name=name)
            session.add(role)
            roles[name] = role
            report.roles_created += 1

    await session.flush()
    return roles


async def sync_vocabulary(session: AsyncSession, report: SeedReport) -> dict[str, Permission]:
    """Add every recognized permission name that is not stored yet."""
    repo = PermissionRepository(session)
    names = [p.value for p in PermissionName]
    permissions = await repo.get_by_names(names)

    for name in names:
        if name not in permissions:
            permission = Permission(name=name)
            session.add(permission)
            permissions[name] = permission
            report.permissions_created += 1

    await session.flush()
    return permissions


async def reconcile_role_permissions(
    session: AsyncSession,
    permissions: dict[str, Permission],
    report: SeedReport,
) -> None:
    """Reset every role's permission links to ``SEED_POLICY``.

    Roles outside the policy end up with no links. Built-in roles are
    reconciled first so they are never left without permissions.
    """
    result = await session.execute(select(Role).order_by(Role.id))
    roles = sorted(result.scalars().all(), key=lambda role: role.name not in SEED_POLICY)

    for role in roles:
        desired = {permissions[name.value].id for name in SEED_POLICY.get(role.name, ())}

        result = await session.execute(
            select(RolePermission.permission_id).where(RolePermission.role_id == role.id)
        )
        current = set(result.scalars().all())

        missing = desired - current
        surplus = current - desired

        session.add_all(
            RolePermission(role_id=role.id, permission_id=permission_id)
            for permission_id in sorted(missing)
        )
        await session.flush()

        if surplus:
            await session.execute(
                delete(RolePermission).where(
                    RolePermission.role_id == role.id,
                    RolePermission.permission_id.in_(surplus),
                )
            )
            await session.flush()

        report.links_added += len(missing)
        report.links_removed += len(surplus)


async def ensure_default_users(
    session: AsyncSession,
    roles: dict[str, Role],
    report: SeedReport,
) -> None:
    """Create the default accounts, but only into an empty users table."""
    count = await session.scalar(select(func.count()).select_from(User))
    if count:
        return

    for data in DEFAULT_USERS:
        user = User(user_name=data["user_name"], password_hash=hash_password(data["password"]))
        session.add(user)
        await session.flush()
        session.add_all(UserRole(user_id=user.id, role_id=roles[name].id) for name in data["roles"])
        report.users_created += 1

    await session.flush()


async def ensure_vehicles(session: AsyncSession, report: SeedReport) -> None:
    """Create missing vehicle states, and demo vehicles into empty tables."""
    car_statuses = await _ensure_statuses(session, CarStatus, list(CarState), report)
    motorcycle_statuses = await _ensure_statuses(
        session, MotorcycleStatus, list(MotorcycleState), report
    )

    if not await session.scalar(select(func.count()).select_from(Car)):
        stopped = car_statuses[CarState.STOPPED]
        session.add_all(Car(name=name, status_id=stopped.id) for name in DEMO_CARS)
        report.vehicles_created += len(DEMO_CARS)

    if not await session.scalar(select(func.count()).select_from(Motorcycle)):
        stopped = motorcycle_statuses[MotorcycleState.STOPPED]
        session.add_all(
            Motorcycle(name=name, status_id=stopped.id) for name in DEMO_MOTORCYCLES
        )
        report.vehicles_created += len(DEMO_MOTORCYCLES)

    await session.flush()


async def _ensure_statuses(
    session: AsyncSession,
    model: type[CarStatus] | type[MotorcycleStatus],
    states: list[str],
    report: SeedReport,
) -> dict[str, CarStatus | MotorcycleStatus]:
    result = await session.execute(select(model))
    statuses = {s.status: s for s in result.scalars().all()}

    for state in states:
        if state not in statuses:
            status = model(status=str(state))
            session.add(status)
            statuses[str(state)] = status
            report.statuses_created += 1

    await session.flush()
    return statuses


async def seed_database(session: AsyncSession) -> SeedReport:
    """Run every seeding step inside ``session`` without committing."""
    report = SeedReport()

    roles = await ensure_roles(session, report)
    permissions = await sync_vocabulary(session, report)
    await reconcile_role_permissions(session, permissions, report)
    await ensure_default_users(session, roles, report)
    await ensure_vehicles(session, report)

    logger.info("seed_reconciled", changed=report.changed, **vars(report))
    return report


async def run_seed() -> SeedReport:
    """Seed the configured database in its own transaction."""
    async with async_session_factory() as session:
        try:
            report = await seed_database(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    return report
