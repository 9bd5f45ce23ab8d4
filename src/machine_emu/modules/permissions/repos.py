"""Permission repository for database operations."""

from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends
from sqlalchemy import delete, select

from machine_emu.api.dependencies import DBSession
from machine_emu.core.database.helpers import flush_unique
from machine_emu.core.errors import ConflictError
from machine_emu.core.permissions.models import Permission, RolePermission


class PermissionRepository:
    """Repository for Permission database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, permission: Permission) -> Permission:
        """Create a new permission.

        Raises:
            ConflictError: If the permission name is already taken
        """
        self.session.add(permission)
        await flush_unique(
            self.session, resource="permission", field="name", value=permission.name
        )
        return permission

    async def get_by_id(self, permission_id: int) -> Permission | None:
        """Get a permission by ID."""
        return await self.session.get(Permission, permission_id)

    async def get_by_name(self, name: str) -> Permission | None:
        """Get a permission by exact name."""
        result = await self.session.execute(
            select(Permission).where(Permission.name == name)
        )
        return result.scalar_one_or_none()

    async def get_by_names(self, names: Iterable[str]) -> dict[str, Permission]:
        """Get the permissions whose names are in ``names``, keyed by name."""
        result = await self.session.execute(
            select(Permission).where(Permission.name.in_(list(names)))
        )
        return {p.name: p for p in result.scalars().all()}

    async def ensure_name_available(self, name: str, exclude_id: int | None = None) -> None:
        """Check that no other permission holds ``name``.

        Raises:
            ConflictError: If the name is taken by a different permission
        """
        existing = await self.get_by_name(name)
        if existing and existing.id != exclude_id:
            raise ConflictError(
                "Permission already exists",
                error_code="permission_exists",
                field="name",
                value=name,
            )

    async def list_all(self) -> list[Permission]:
        """List all permissions ordered by ID."""
        result = await self.session.execute(select(Permission).order_by(Permission.id))
        return list(result.scalars().all())

    async def update(self, permission: Permission) -> Permission:
        """Flush pending changes to a permission.

        Raises:
            ConflictError: If a renamed permission collides with an existing name
        """
        await flush_unique(
            self.session, resource="permission", field="name", value=permission.name
        )
        return permission

    async def delete(self, permission: Permission) -> None:
        """Delete a permission together with its role links."""
        await self.session.execute(
            delete(RolePermission).where(RolePermission.permission_id == permission.id)
        )
        await self.session.delete(permission)
        await self.session.flush()


# Type alias for dependency injection
PermissionRepo = Annotated[PermissionRepository, Depends(PermissionRepository)]
