"""Permission management API routes.

Permissions are part of role administration, so every route here
requires the ManageRoles permission.
"""

from fastapi import status

from machine_emu.modules.permissions import router
from machine_emu.modules.permissions.schemas import (
    PermissionCreate,
    PermissionResponse,
    PermissionUpdate,
)
from machine_emu.modules.permissions.services import PermissionSvc


@router.get("", response_model=list[PermissionResponse], summary="List permissions")
async def list_permissions(service: PermissionSvc) -> list[PermissionResponse]:
    """List permissions."""
    permissions = await service.list_permissions()
    return [PermissionResponse.model_validate(p) for p in permissions]


@router.get(
    "/{permission_id}",
    response_model=PermissionResponse,
    summary="Get permission by ID",
)
async def get_permission(permission_id: int, service: PermissionSvc) -> PermissionResponse:
    """Get permission by ID."""
    permission = await service.get_permission(permission_id)
    return PermissionResponse.model_validate(permission)


@router.post(
    "",
    response_model=PermissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create permission",
)
async def create_permission(
    data: PermissionCreate, service: PermissionSvc
) -> PermissionResponse:
    """Create a permission."""
    permission = await service.create_permission(data)
    return PermissionResponse.model_validate(permission)


@router.put(
    "/{permission_id}",
    response_model=PermissionResponse,
    summary="Rename permission",
)
async def update_permission(
    permission_id: int, data: PermissionUpdate, service: PermissionSvc
) -> PermissionResponse:
    """Update permission by ID."""
    permission = await service.update_permission(permission_id, data)
    return PermissionResponse.model_validate(permission)


@router.delete(
    "/{permission_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete permission",
    description="Delete a permission and remove it from every role.",
)
async def delete_permission(permission_id: int, service: PermissionSvc) -> None:
    """Delete permission by ID."""
    await service.delete_permission(permission_id)
