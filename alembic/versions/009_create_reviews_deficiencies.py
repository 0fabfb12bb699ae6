"""009: create coi_reviews, deficiencies and deficiency_reminders tables

Revision ID: 009
Revises: 008
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "009"
down_revision: Union[str, None] = "008"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE coi_reviews (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            contractor_id   UUID            NOT NULL REFERENCES contractors(id) ON DELETE CASCADE,
            document_id     UUID            NOT NULL,
            submitted_by    UUID            NOT NULL REFERENCES users(id),
            assigned_to     UUID            REFERENCES users(id),
            status          VARCHAR(20)     NOT NULL DEFAULT 'PENDING',
            priority        VARCHAR(10)     NOT NULL DEFAULT 'NORMAL',
            due_date        TIMESTAMPTZ     NOT NULL,
            decision        VARCHAR(30),
            notes           TEXT,
            reviewed_at     TIMESTAMPTZ,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_coi_reviews_status CHECK (status IN (
                'PENDING', 'IN_REVIEW', 'APPROVED', 'REJECTED', 'REQUIRES_CHANGES'
            )),
            CONSTRAINT ck_coi_reviews_priority CHECK (
                priority IN ('LOW', 'NORMAL', 'HIGH', 'URGENT')
            ),
            CONSTRAINT ck_coi_reviews_decision CHECK (
                decision IS NULL OR decision IN ('APPROVED', 'REJECTED', 'CONDITIONAL_APPROVAL')
            )
        );
    """)
    op.execute("CREATE INDEX idx_coi_reviews_assigned ON coi_reviews (assigned_to, status);")
    op.execute("""
        CREATE TRIGGER trg_coi_reviews_updated_at
            BEFORE UPDATE ON coi_reviews
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE TABLE deficiencies (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            review_id           UUID            NOT NULL
                                    REFERENCES coi_reviews(id) ON DELETE CASCADE,
            category            VARCHAR(40)     NOT NULL,
            severity            VARCHAR(10)     NOT NULL,
            description         TEXT            NOT NULL,
            required_action     TEXT            NOT NULL,
            due_date            TIMESTAMPTZ,
            status              VARCHAR(20)     NOT NULL DEFAULT 'OPEN',
            resolved_by         UUID            REFERENCES users(id),
            resolved_at         TIMESTAMPTZ,
            resolution_notes    TEXT,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_deficiencies_category CHECK (category IN (
                'COVERAGE_AMOUNT', 'EXPIRED_POLICY', 'MISSING_ENDORSEMENT',
                'INCORRECT_NAMED_INSURED', 'MISSING_ADDITIONAL_INSURED',
                'CERTIFICATE_HOLDER', 'OTHER'
            )),
            CONSTRAINT ck_deficiencies_severity CHECK (
                severity IN ('CRITICAL', 'HIGH', 'MEDIUM', 'LOW')
            ),
            CONSTRAINT ck_deficiencies_status CHECK (
                status IN ('OPEN', 'IN_PROGRESS', 'RESOLVED')
            )
        );
    """)
    op.execute("CREATE INDEX idx_deficiencies_review ON deficiencies (review_id);")
    op.execute("""
        CREATE TRIGGER trg_deficiencies_updated_at
            BEFORE UPDATE ON deficiencies
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE TABLE deficiency_reminders (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            deficiency_id   UUID            NOT NULL
                                REFERENCES deficiencies(id) ON DELETE CASCADE,
            sent_to         UUID            NOT NULL,
            sent_at         TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS deficiency_reminders CASCADE;")
    op.execute("DROP TABLE IF EXISTS deficiencies CASCADE;")
    op.execute("DROP TABLE IF EXISTS coi_reviews CASCADE;")
