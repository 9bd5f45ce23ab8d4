"""initial_schema

Revision ID: 5e1c0a7d2b91
Revises:
Create Date: 2026-10-18 00:01:00.000000

Creates the identity and authorization store (users, roles, permissions and
their join tables) and the vehicle tables with their status lookups.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "5e1c0a7d2b91"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_user_name", "users", ["user_name"], unique=True)

    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_roles_id", "roles", ["id"])
    op.create_index("ix_roles_name", "roles", ["name"], unique=True)

    op.create_table(
        "permissions",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_permissions_id", "permissions", ["id"])
    op.create_index("ix_permissions_name", "permissions", ["name"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "role_id",
            sa.Integer(),
            sa.ForeignKey("roles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"])
    op.create_index("ix_user_roles_role_id", "user_roles", ["role_id"])

    op.create_table(
        "role_permissions",
        sa.Column(
            "role_id",
            sa.Integer(),
            sa.ForeignKey("roles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "permission_id",
            sa.Integer(),
            sa.ForeignKey("permissions.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_role_permissions_role_id", "role_permissions", ["role_id"])
    op.create_index(
        "ix_role_permissions_permission_id", "role_permissions", ["permission_id"]
    )

    for prefix in ("car", "motorcycle"):
        op.create_table(
            f"{prefix}_statuses",
            sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
            sa.Column("status", sa.String(50), nullable=False, unique=True),
        )
        op.create_index(f"ix_{prefix}_statuses_id", f"{prefix}_statuses", ["id"])

        op.create_table(
            f"{prefix}s",
            sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column(
                "status_id",
                sa.Integer(),
                sa.ForeignKey(f"{prefix}_statuses.id", ondelete="RESTRICT"),
                nullable=False,
            ),
            *_timestamps(),
        )
        op.create_index(f"ix_{prefix}s_id", f"{prefix}s", ["id"])
        op.create_index(f"ix_{prefix}s_status_id", f"{prefix}s", ["status_id"])


def downgrade() -> None:
    """Downgrade database schema."""
    for prefix in ("motorcycle", "car"):
        op.drop_table(f"{prefix}s")
        op.drop_table(f"{prefix}_statuses")

    op.drop_table("role_permissions")
    op.drop_table("user_roles")
    op.drop_table("permissions")
    op.drop_table("roles")
    op.drop_table("users")
