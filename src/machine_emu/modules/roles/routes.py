"""Role management API routes.

Every route here requires the ManageRoles permission.
"""

from fastapi import status

from machine_emu.modules.roles import router
from machine_emu.modules.roles.schemas import RoleCreate, RoleResponse, RoleUpdate
from machine_emu.modules.roles.services import RoleSvc


@router.get(
    "",
    response_model=list[RoleResponse],
    summary="List roles",
    description="List all roles with their permission names.",
)
async def list_roles(service: RoleSvc) -> list[RoleResponse]:
    """List roles."""
    roles = await service.list_roles()
    return [RoleResponse.model_validate(r) for r in roles]


@router.get("/{role_id}", response_model=RoleResponse, summary="Get role by ID")
async def get_role(role_id: int, service: RoleSvc) -> RoleResponse:
    """Get role by ID."""
    role = await service.get_role(role_id)
    return RoleResponse.model_validate(role)


@router.post(
    "",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create role",
    description="Create a role. Optional permission_ids are linked in the same request.",
)
async def create_role(data: RoleCreate, service: RoleSvc) -> RoleResponse:
    """Create a role."""
    role = await service.create_role(data)
    return RoleResponse.model_validate(role)


@router.put(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Update role",
    description="Partially update a role. A supplied permission_ids list replaces all permissions.",
)
async def update_role(role_id: int, data: RoleUpdate, service: RoleSvc) -> RoleResponse:
    """Update role by ID."""
    role = await service.update_role(role_id, data)
    return RoleResponse.model_validate(role)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete role",
    description="Delete a role with all of its permission and user links.",
)
async def delete_role(role_id: int, service: RoleSvc) -> None:
    """Delete role by ID."""
    await service.delete_role(role_id)
