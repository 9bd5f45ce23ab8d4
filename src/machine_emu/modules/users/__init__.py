"""Users module for user administration."""

from fastapi import APIRouter, Depends

from machine_emu.core.permissions.guard import permission_required
from machine_emu.core.permissions.policies import PermissionName


router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(permission_required(PermissionName.MANAGE_USERS))],
)

# Import routes to register them (must be after router is defined)
from machine_emu.modules.users import routes  # noqa: F401, E402
