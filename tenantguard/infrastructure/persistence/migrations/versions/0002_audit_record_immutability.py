"""Add triggers to enforce immutability of the audit_record table (Postgres only).

Revision ID: 0002_audit_record_immutability
Revises: 0001_initial_schema
Create Date: 2026-10-18

audit_record is append-only. UPDATE is always rejected. DELETE is rejected
unless the transaction set tenantguard.audit_purge = 'on' (SET LOCAL), which
only the retention purge does. SQLite relies on the ORM listeners.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "0002_audit_record_immutability"
down_revision: Union[str, Sequence[str], None] = "0001_initial_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _trigger_function_audit_record() -> str:
    """Return SQL for trigger function that blocks audit_record UPDATE and unflagged DELETE."""
    return """
    CREATE OR REPLACE FUNCTION prevent_audit_record_mutation()
    RETURNS TRIGGER
    LANGUAGE plpgsql
    AS $$
    BEGIN
        IF TG_OP = 'DELETE'
           AND coalesce(current_setting('tenantguard.audit_purge', true), '') = 'on' THEN
            RETURN OLD;
        END IF;
        RAISE EXCEPTION 'audit_record rows are append-only and cannot be updated or deleted'
            USING ERRCODE = 'integrity_constraint_violation';
    END;
    $$
    """


def upgrade() -> None:
    if op.get_bind().dialect.name != "postgresql":
        return
    op.execute(_trigger_function_audit_record())
    op.execute(
        "CREATE TRIGGER prevent_audit_record_update_delete "
        "BEFORE UPDATE OR DELETE ON audit_record "
        "FOR EACH ROW EXECUTE PROCEDURE prevent_audit_record_mutation()"
    )


def downgrade() -> None:
    if op.get_bind().dialect.name != "postgresql":
        return
    op.execute(
        "DROP TRIGGER IF EXISTS prevent_audit_record_update_delete ON audit_record"
    )
    op.execute("DROP FUNCTION IF EXISTS prevent_audit_record_mutation()")
