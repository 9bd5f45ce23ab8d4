"""Permissions module for permission administration."""

from fastapi import APIRouter, Depends

from machine_emu.core.permissions.guard import permission_required
from machine_emu.core.permissions.policies import PermissionName


router = APIRouter(
    prefix="/permissions",
    tags=["permissions"],
    dependencies=[Depends(permission_required(PermissionName.MANAGE_ROLES))],
)

# Import routes to register them (must be after router is defined)
from machine_emu.modules.permissions import routes  # noqa: F401, E402
