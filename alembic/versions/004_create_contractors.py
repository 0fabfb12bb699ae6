"""004: create contractors table

Revision ID: 004
Revises: 003
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE contractors (
            id                      UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            name                    VARCHAR(200)    NOT NULL,
            email                   VARCHAR(255)    NOT NULL,
            phone                   VARCHAR(50),
            company                 VARCHAR(200),
            address                 VARCHAR(500),
            city                    VARCHAR(100),
            state                   VARCHAR(50),
            zip_code                VARCHAR(20),
            trades                  JSONB           NOT NULL DEFAULT '[]'::jsonb,
            contractor_type         VARCHAR(30)     NOT NULL DEFAULT 'SUBCONTRACTOR',
            status                  VARCHAR(20)     NOT NULL DEFAULT 'PENDING',
            insurance_status        VARCHAR(20)     NOT NULL DEFAULT 'PENDING',
            broker_type             VARCHAR(20),
            broker_name             VARCHAR(200),
            broker_email            VARCHAR(255),
            broker_phone            VARCHAR(50),
            broker_company          VARCHAR(200),
            broker_gl_name          VARCHAR(200),
            broker_gl_email         VARCHAR(255),
            broker_gl_phone         VARCHAR(50),
            broker_umbrella_name    VARCHAR(200),
            broker_umbrella_email   VARCHAR(255),
            broker_umbrella_phone   VARCHAR(50),
            broker_auto_name        VARCHAR(200),
            broker_auto_email       VARCHAR(255),
            broker_auto_phone       VARCHAR(50),
            broker_wc_name          VARCHAR(200),
            broker_wc_email         VARCHAR(255),
            broker_wc_phone         VARCHAR(50),
            created_by_id           UUID,
            created_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_contractors_email UNIQUE (email),
            CONSTRAINT ck_contractors_type CHECK (
                contractor_type IN ('GENERAL_CONTRACTOR', 'SUBCONTRACTOR')
            ),
            CONSTRAINT ck_contractors_status CHECK (
                status IN ('ACTIVE', 'INACTIVE', 'PENDING', 'SUSPENDED')
            ),
            CONSTRAINT ck_contractors_insurance_status CHECK (
                insurance_status IN ('COMPLIANT', 'NON_COMPLIANT', 'PENDING', 'EXPIRED')
            )
        );
    """)
    op.execute("CREATE INDEX idx_contractors_status ON contractors (status);")
    op.execute("CREATE INDEX idx_contractors_name ON contractors (LOWER(name));")
    op.execute("""
        CREATE TRIGGER trg_contractors_updated_at
            BEFORE UPDATE ON contractors
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS contractors CASCADE;")
