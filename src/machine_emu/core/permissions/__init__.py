"""Role-based permissions: vocabulary, store models, resolution and the guard."""

from machine_emu.core.permissions.policies import (
    ADMIN_ROLE,
    SEED_POLICY,
    USER_ROLE,
    PermissionName,
)


__all__ = [
    "ADMIN_ROLE",
    "SEED_POLICY",
    "USER_ROLE",
    "PermissionName",
]
