"""Role service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from machine_emu.core.errors import NotFoundError
from machine_emu.core.permissions.models import Role
from machine_emu.modules.roles.repos import RoleRepo
from machine_emu.modules.roles.schemas import RoleCreate, RoleUpdate


logger = structlog.get_logger()


class RoleService:
    """Service for role management operations."""

    def __init__(self, repo: RoleRepo) -> None:
        self.repo = repo

    async def list_roles(self) -> list[Role]:
        """List all roles with their permissions."""
        return await self.repo.list_all()

    async def get_role(self, role_id: int) -> Role:
        """Get a role by ID.

        Raises:
            NotFoundError: If role not found
        """
        role = await self.repo.get_by_id(role_id)
        if not role:
            raise NotFoundError(
                "Role not found",
                resource="role",
                resource_id=str(role_id),
            )
        return role

    async def create_role(self, data: RoleCreate) -> Role:
        """Create a role and link its initial permissions.

        Raises:
            ConflictError: If the role name is taken
            NotFoundError: If an initial permission does not exist
        """
        await self.repo.ensure_name_available(data.name)
        role = await self.repo.create(Role(name=data.name))

        if data.permission_ids:
            await self.repo.replace_permissions(role.id, data.permission_ids)
            role = await self.repo.reload(role.id)

        logger.info("role_created", role_id=role.id, name=role.name)
        return role

    async def update_role(self, role_id: int, data: RoleUpdate) -> Role:
        """Partially update a role.

        A supplied ``permission_ids`` list replaces the role's entire
        permission set. Tokens already issued to members keep their old
        permissions until they expire.

        Raises:
            NotFoundError: If the role or a referenced permission does not exist
            ConflictError: If the new name is taken
        """
        role = await self.get_role(role_id)

        if data.name is not None and data.name != role.name:
            await self.repo.ensure_name_available(data.name, exclude_id=role_id)
            role.name = data.name

        if data.permission_ids is not None:
            await self.repo.replace_permissions(role_id, data.permission_ids)

        role = await self.repo.update(role)
        logger.info(
            "role_updated",
            role_id=role_id,
            permissions=sorted(role.permission_names),
        )
        return role

    async def delete_role(self, role_id: int) -> None:
        """Delete a role, its permission links and its user links.

        Raises:
            NotFoundError: If role not found
        """
        role = await self.get_role(role_id)
        members = await self.repo.count_members(role_id)
        await self.repo.delete(role)
        logger.info("role_deleted", role_id=role_id, members_unlinked=members)


# Type alias for dependency injection
RoleSvc = Annotated[RoleService, Depends(RoleService)]
