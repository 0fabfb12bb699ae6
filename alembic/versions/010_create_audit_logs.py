"""010: create audit_logs table

Revision ID: 010
Revises: 009
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "010"
down_revision: Union[str, None] = "009"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE audit_logs (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id         UUID,
            action          VARCHAR(20)     NOT NULL,
            resource        VARCHAR(30)     NOT NULL,
            resource_id     VARCHAR(64),
            changes         JSONB,
            metadata        JSONB,
            ip_address      VARCHAR(64),
            user_agent      VARCHAR(200),
            timestamp       TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_audit_logs_resource ON audit_logs (resource, resource_id);")
    op.execute("CREATE INDEX idx_audit_logs_user ON audit_logs (user_id);")
    op.execute("CREATE INDEX idx_audit_logs_timestamp ON audit_logs (timestamp DESC);")
    op.execute("COMMENT ON TABLE audit_logs IS 'Append-only audit trail';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS audit_logs CASCADE;")
