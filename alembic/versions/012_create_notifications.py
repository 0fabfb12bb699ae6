"""012: create notifications table

Revision ID: 012
Revises: 011
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "012"
down_revision: Union[str, None] = "011"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE notifications (
            id          UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id     UUID            NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            type        VARCHAR(30)     NOT NULL,
            title       VARCHAR(200)    NOT NULL,
            message     TEXT            NOT NULL,
            link        VARCHAR(1000),
            read        BOOLEAN         NOT NULL DEFAULT FALSE,
            read_at     TIMESTAMPTZ,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_notifications_type CHECK (type IN (
                'COI_EXPIRING', 'REVIEW_ASSIGNED', 'DEFICIENCY_CREATED',
                'APPROVAL_REQUIRED', 'HOLD_HARMLESS', 'GENERAL'
            ))
        );
    """)
    op.execute("CREATE INDEX idx_notifications_user_read ON notifications (user_id, read);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS notifications CASCADE;")
