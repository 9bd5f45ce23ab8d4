"""Permission system database models.

This module defines the RBAC (Role-Based Access Control) models:
- Role: A named bundle of permissions
- Permission: A named capability
- UserRole: Junction table linking users to roles
- RolePermission: Junction table linking roles to permissions

The ``Role.permissions`` collection is read-only. Links are written only
through the repositories, which own the replace and cascade semantics.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from machine_emu.core.constants import MAX_PERMISSION_NAME_LENGTH, MAX_ROLE_NAME_LENGTH
from machine_emu.core.database.base import Base, IdMixin, TimestampMixin
from machine_emu.core.permissions.policies import PermissionName


class Permission(Base, IdMixin, TimestampMixin):
    """Permission model representing a named capability.

    Attributes:
        name: Unique permission name, e.g. "ManageUsers"
    """

    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )

    @property
    def is_recognized(self) -> bool:
        """Whether the authorization guard can ever match this permission."""
        return PermissionName.is_recognized(self.name)

    def __repr__(self) -> str:
        return f"<Permission(id={self.id}, name={self.name})>"


class Role(Base, IdMixin, TimestampMixin):
    """Role model representing a named set of permissions.

    Attributes:
        name: Unique role name, e.g. "Admin"
        permissions: Permissions granted to holders of this role
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )

    permissions: Mapped[list["Permission"]] = relationship(
        "Permission",
        secondary="role_permissions",
        order_by="Permission.id",
        lazy="selectin",
        viewonly=True,
    )

    @property
    def permission_names(self) -> set[str]:
        """Names of all permissions attached to this role."""
        return {permission.name for permission in self.permissions}

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"


class UserRole(Base, TimestampMixin):
    """Junction table linking users to roles.

    A user's effective permissions are the union of all their roles' permissions.
    """

    __tablename__ = "user_roles"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    role_id: Mapped[int] = mapped_column(
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<UserRole(user_id={self.user_id}, role_id={self.role_id})>"


class RolePermission(Base, TimestampMixin):
    """Junction table linking roles to permissions."""

    __tablename__ = "role_permissions"

    role_id: Mapped[int] = mapped_column(
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    permission_id: Mapped[int] = mapped_column(
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<RolePermission(role_id={self.role_id}, "
            f"permission_id={self.permission_id})>"
        )
