"""User database models."""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from machine_emu.core.constants import MAX_USER_NAME_LENGTH
from machine_emu.core.database.base import Base, IdMixin, TimestampMixin


if TYPE_CHECKING:
    from machine_emu.core.permissions.models import Role


class User(Base, IdMixin, TimestampMixin):
    """User model representing an account that can log in.

    Attributes:
        user_name: Unique, case-sensitive login name
        password_hash: Bcrypt hash of the password
        roles: Roles held by the user (read-only; links are written by the repository)
    """

    __tablename__ = "users"

    user_name: Mapped[str] = mapped_column(
        String(MAX_USER_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary="user_roles",
        order_by="Role.id",
        lazy="selectin",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, user_name={self.user_name})>"
