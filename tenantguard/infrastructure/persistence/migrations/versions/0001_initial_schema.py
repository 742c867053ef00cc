"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18

Tenant, permission catalog, roles, role permissions, actor role
assignments, audit records and the client reference entity.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "tenant",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="active"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tenant_code", "tenant", ["code"], unique=True)

    # Global catalog: no tenant_id
    op.create_table(
        "permission",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("feature_area", sa.String(length=64), nullable=False),
        sa.Column("action_type", sa.String(length=16), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "feature_area", "action_type", name="uq_permission_feature_action"
        ),
    )

    op.create_table(
        "role",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("name_key", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("tenant_id", "name_key", name="uq_role_tenant_name"),
    )
    op.create_index("ix_role_tenant_id", "role", ["tenant_id"])

    op.create_table(
        "role_permission",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("role_id", sa.String(), nullable=False),
        sa.Column("permission_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["role_id"], ["role.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["permission_id"], ["permission.id"], ondelete="RESTRICT"),
        sa.UniqueConstraint("role_id", "permission_id", name="uq_role_permission"),
    )
    op.create_index(
        "ix_role_permission_permission", "role_permission", ["permission_id"]
    )

    # role_id has no ON DELETE action: deleting a held role fails.
    op.create_table(
        "actor_role_assignment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("actor_id", sa.String(length=255), nullable=False),
        sa.Column("role_id", sa.String(), nullable=False),
        sa.Column("granted_by", sa.String(length=255), nullable=True),
        sa.Column(
            "granted_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["role.id"]),
        sa.UniqueConstraint(
            "actor_id", "role_id", "tenant_id", name="uq_actor_role_assignment"
        ),
    )
    op.create_index(
        "ix_actor_role_assignment_tenant_id", "actor_role_assignment", ["tenant_id"]
    )
    op.create_index(
        "ix_actor_role_assignment_lookup",
        "actor_role_assignment",
        ["tenant_id", "actor_id"],
    )
    op.create_index(
        "ix_actor_role_assignment_role", "actor_role_assignment", ["role_id"]
    )

    # tenant_id is not a foreign key: records outlive tenants.
    op.create_table(
        "audit_record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("actor_id", sa.String(length=255), nullable=True),
        sa.Column("tenant_id", sa.String(length=64), nullable=True),
        sa.Column("subject", sa.String(length=255), nullable=False),
        sa.Column("feature_area", sa.String(length=64), nullable=True),
        sa.Column("outcome", sa.String(length=32), nullable=False),
        sa.Column(
            "metadata_json",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_audit_record_tenant_timestamp", "audit_record", ["tenant_id", "timestamp"]
    )
    op.create_index(
        "ix_audit_record_tenant_actor", "audit_record", ["tenant_id", "actor_id"]
    )
    op.create_index(
        "ix_audit_record_tenant_feature", "audit_record", ["tenant_id", "feature_area"]
    )

    op.create_table(
        "client",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="active"),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_client_tenant_id", "client", ["tenant_id"])


def downgrade() -> None:
    """Drop all tables (reverse dependency order)."""
    op.drop_table("client")
    op.drop_table("audit_record")
    op.drop_table("actor_role_assignment")
    op.drop_table("role_permission")
    op.drop_table("role")
    op.drop_table("permission")
    op.drop_table("tenant")
