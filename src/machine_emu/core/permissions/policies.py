"""Recognized permission vocabulary.

Permission names are stored as plain strings so the table can carry names
this build does not know about. Only the names listed in ``PermissionName``
are ever matched by the authorization guard; anything else is inert.
"""

from enum import StrEnum


class PermissionName(StrEnum):
    """Closed set of permission names understood by the authorization guard."""

    MANAGE_USERS = "ManageUsers"
    MANAGE_ROLES = "ManageRoles"
    MANAGE_CARS = "ManageCars"
    START_CAR = "StartCar"
    STOP_CAR = "StopCar"
    GET_CAR_STATUS = "GetCarStatus"
    MANAGE_MOTORCYCLES = "ManageMotorcycles"
    START_MOTORCYCLE = "StartMotorcycle"
    STOP_MOTORCYCLE = "StopMotorcycle"
    DRIVE_MOTORCYCLE = "DriveMotorcycle"

    @classmethod
    def is_recognized(cls, name: str) -> bool:
        """Return True if ``name`` is part of the recognized vocabulary."""
        return name in cls._value2member_map_


ADMIN_ROLE = "Admin"
USER_ROLE = "User"

# Desired role -> permission assignments reconciled at every startup
SEED_POLICY: dict[str, frozenset[PermissionName]] = {
    ADMIN_ROLE: frozenset(
        {
            PermissionName.MANAGE_USERS,
            PermissionName.MANAGE_ROLES,
            PermissionName.MANAGE_CARS,
            PermissionName.MANAGE_MOTORCYCLES,
        }
    ),
    USER_ROLE: frozenset(
        {
            PermissionName.START_CAR,
            PermissionName.STOP_CAR,
            PermissionName.GET_CAR_STATUS,
            PermissionName.START_MOTORCYCLE,
            PermissionName.STOP_MOTORCYCLE,
            PermissionName.DRIVE_MOTORCYCLE,
        }
    ),
}
