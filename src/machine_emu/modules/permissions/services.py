"""Permission service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from machine_emu.core.errors import NotFoundError
from machine_emu.core.permissions.models import Permission
from machine_emu.modules.permissions.repos import PermissionRepo
from machine_emu.modules.permissions.schemas import PermissionCreate, PermissionUpdate


logger = structlog.get_logger()


class PermissionService:
    """Service for permission management operations.

    Any name can be stored. Names outside the recognized vocabulary are
    kept and can be granted, but never satisfy an authorization check.
    """

    def __init__(self, repo: PermissionRepo) -> None:
        self.repo = repo

    async def list_permissions(self) -> list[Permission]:
        """List all permissions."""
        return await self.repo.list_all()

    async def get_permission(self, permission_id: int) -> Permission:
        """Get a permission by ID.

        Raises:
            NotFoundError: If permission not found
        """
        permission = await self.repo.get_by_id(permission_id)
        if not permission:
            raise NotFoundError(
                "Permission not found",
                resource="permission",
                resource_id=str(permission_id),
            )
        return permission

    async def create_permission(self, data: PermissionCreate) -> Permission:
        """Create a permission.

        Raises:
            ConflictError: If the name is taken
        """
        await self.repo.ensure_name_available(data.name)
        permission = await self.repo.create(Permission(name=data.name))

        if not permission.is_recognized:
            logger.warning("unrecognized_permission_created", name=permission.name)
        logger.info("permission_created", permission_id=permission.id, name=permission.name)
        return permission

    async def update_permission(
        self, permission_id: int, data: PermissionUpdate
    ) -> Permission:
        """Rename a permission.

        Raises:
            NotFoundError: If permission not found
            ConflictError: If the new name is taken
        """
        permission = await self.get_permission(permission_id)

        if data.name is not None and data.name != permission.name:
            await self.repo.ensure_name_available(data.name, exclude_id=permission_id)
            permission.name = data.name

        permission = await self.repo.update(permission)
        logger.info("permission_updated", permission_id=permission_id, name=permission.name)
        return permission

    async def delete_permission(self, permission_id: int) -> None:
        """Delete a permission and its role links.

        Raises:
            NotFoundError: If permission not found
        """
        permission = await self.get_permission(permission_id)
        await self.repo.delete(permission)
        logger.info("permission_deleted", permission_id=permission_id)


# Type alias for dependency injection
PermissionSvc = Annotated[PermissionService, Depends(PermissionService)]
