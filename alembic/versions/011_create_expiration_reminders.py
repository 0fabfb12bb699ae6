"""011: create expiration_reminders table

Revision ID: 011
Revises: 010
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "011"
down_revision: Union[str, None] = "010"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE expiration_reminders (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            coi_id              UUID            NOT NULL
                                    REFERENCES generated_cois(id) ON DELETE CASCADE,
            policy_type         VARCHAR(10)     NOT NULL,
            expiration_date     TIMESTAMPTZ     NOT NULL,
            days_before_expiry  INTEGER         NOT NULL,
            reminder_type       VARCHAR(20)     NOT NULL,
            sent_to             JSONB           NOT NULL DEFAULT '[]'::jsonb,
            email_subject       VARCHAR(300)    NOT NULL,
            email_body          TEXT            NOT NULL,
            sent_at             TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            acknowledged        BOOLEAN         NOT NULL DEFAULT FALSE,
            acknowledged_at     TIMESTAMPTZ,
            acknowledged_by     VARCHAR(255),
            CONSTRAINT ck_expiration_reminders_policy CHECK (
                policy_type IN ('GL', 'UMBRELLA', 'AUTO', 'WC')
            ),
            CONSTRAINT ck_expiration_reminders_type CHECK (reminder_type IN (
                'DAYS_30', 'DAYS_14', 'DAYS_7', 'DAYS_2', 'EXPIRED', 'EVERY_2_DAYS'
            ))
        );
    """)
    op.execute("""
        CREATE INDEX idx_expiration_reminders_lookup
            ON expiration_reminders (coi_id, policy_type, reminder_type, sent_at);
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS expiration_reminders CASCADE;")
