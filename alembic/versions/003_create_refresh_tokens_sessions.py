"""003: create refresh_tokens and sessions tables

Revision ID: 003
Revises: 002
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE refresh_tokens (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id         UUID            NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            selector        VARCHAR(32)     NOT NULL,
            verifier_hash   VARCHAR(255)    NOT NULL,
            expires_at      TIMESTAMPTZ     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_refresh_tokens_selector UNIQUE (selector)
        );
    """)
    op.execute("CREATE INDEX idx_refresh_tokens_user ON refresh_tokens (user_id);")
    op.execute("CREATE INDEX idx_refresh_tokens_expires ON refresh_tokens (expires_at);")
    op.execute("""
        CREATE TABLE sessions (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id         UUID            NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            ip_address      VARCHAR(64),
            user_agent      VARCHAR(255),
            expires_at      TIMESTAMPTZ     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_sessions_user ON sessions (user_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS sessions CASCADE;")
    op.execute("DROP TABLE IF EXISTS refresh_tokens CASCADE;")
