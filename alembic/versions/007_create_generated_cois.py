"""007: create generated_cois table

Revision ID: 007
Revises: 006
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE generated_cois (
            id                              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            project_id                      UUID            NOT NULL
                                                REFERENCES projects(id) ON DELETE CASCADE,
            subcontractor_id                UUID            NOT NULL
                                                REFERENCES contractors(id) ON DELETE CASCADE,
            assigned_admin_email            VARCHAR(255),
            status                          VARCHAR(40)     NOT NULL DEFAULT 'AWAITING_BROKER_INFO',
            broker_type                     VARCHAR(20),
            broker_name                     VARCHAR(200),
            broker_email                    VARCHAR(255),
            broker_phone                    VARCHAR(50),
            broker_company                  VARCHAR(200),
            broker_gl_name                  VARCHAR(200),
            broker_gl_email                 VARCHAR(255),
            broker_gl_phone                 VARCHAR(50),
            broker_umbrella_name            VARCHAR(200),
            broker_umbrella_email           VARCHAR(255),
            broker_umbrella_phone           VARCHAR(50),
            broker_auto_name                VARCHAR(200),
            broker_auto_email               VARCHAR(255),
            broker_auto_phone               VARCHAR(50),
            broker_wc_name                  VARCHAR(200),
            broker_wc_email                 VARCHAR(255),
            broker_wc_phone                 VARCHAR(50),
            first_coi_url                   VARCHAR(1000),
            first_coi_uploaded              BOOLEAN         NOT NULL DEFAULT FALSE,
            gl_policy_url                   VARCHAR(1000),
            umbrella_policy_url             VARCHAR(1000),
            auto_policy_url                 VARCHAR(1000),
            wc_policy_url                   VARCHAR(1000),
            gl_broker_signature_url         VARCHAR(1000),
            umbrella_broker_signature_url   VARCHAR(1000),
            auto_broker_signature_url       VARCHAR(1000),
            wc_broker_signature_url         VARCHAR(1000),
            gl_expiration_date              TIMESTAMPTZ,
            umbrella_expiration_date        TIMESTAMPTZ,
            auto_expiration_date            TIMESTAMPTZ,
            wc_expiration_date              TIMESTAMPTZ,
            gc_name                         VARCHAR(200),
            project_name                    VARCHAR(200),
            subcontractor_name              VARCHAR(200),
            deficiency_notes                TEXT,
            hold_harmless_status            VARCHAR(30),
            hold_harmless_document_url      VARCHAR(1000),
            created_at                      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at                      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_generated_cois_status CHECK (status IN (
                'AWAITING_BROKER_INFO', 'AWAITING_BROKER_UPLOAD', 'AWAITING_BROKER_SIGNATURE',
                'AWAITING_ADMIN_REVIEW', 'ACTIVE', 'DEFICIENCY_PENDING', 'EXPIRED'
            )),
            CONSTRAINT ck_generated_cois_broker_type CHECK (
                broker_type IS NULL OR broker_type IN ('GLOBAL', 'PER_POLICY')
            )
        );
    """)
    op.execute("CREATE INDEX idx_generated_cois_project ON generated_cois (project_id);")
    op.execute(
        "CREATE INDEX idx_generated_cois_sub_status ON generated_cois (subcontractor_id, status);"
    )
    op.execute("CREATE INDEX idx_generated_cois_status ON generated_cois (status);")
    op.execute("""
        CREATE TRIGGER trg_generated_cois_updated_at
            BEFORE UPDATE ON generated_cois
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS generated_cois CASCADE;")
