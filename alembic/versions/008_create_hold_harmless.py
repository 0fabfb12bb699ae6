"""008: create hold_harmless table

Revision ID: 008
Revises: 007
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "008"
down_revision: Union[str, None] = "007"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE hold_harmless (
            id                          UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            coi_id                      UUID            NOT NULL
                                            REFERENCES generated_cois(id) ON DELETE CASCADE,
            program_id                  UUID,
            template_url                VARCHAR(1000),
            status                      VARCHAR(30)     NOT NULL DEFAULT 'PENDING_SUB_SIGNATURE',
            project_address             VARCHAR(500),
            gc_name                     VARCHAR(200),
            gc_email                    VARCHAR(255),
            owners_entity               VARCHAR(200),
            additional_insureds         JSONB           NOT NULL DEFAULT '[]'::jsonb,
            subcontractor_name          VARCHAR(200),
            subcontractor_email         VARCHAR(255),
            sub_signature_token         VARCHAR(64),
            sub_signature_link_sent_at  TIMESTAMPTZ,
            sub_signature_url           VARCHAR(1000),
            sub_signed_at               TIMESTAMPTZ,
            sub_signed_by               VARCHAR(200),
            gc_signature_token          VARCHAR(64),
            gc_signature_link_sent_at   TIMESTAMPTZ,
            gc_signature_url            VARCHAR(1000),
            gc_signed_at                TIMESTAMPTZ,
            gc_signed_by                VARCHAR(200),
            final_doc_url               VARCHAR(1000),
            completed_at                TIMESTAMPTZ,
            notifications_sent          JSONB           NOT NULL DEFAULT '[]'::jsonb,
            notified_at                 TIMESTAMPTZ,
            generated_at                TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at                  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_hold_harmless_coi UNIQUE (coi_id),
            CONSTRAINT uq_hold_harmless_sub_token UNIQUE (sub_signature_token),
            CONSTRAINT uq_hold_harmless_gc_token UNIQUE (gc_signature_token),
            CONSTRAINT ck_hold_harmless_status CHECK (status IN (
                'PENDING_SUB_SIGNATURE', 'PENDING_GC_SIGNATURE', 'COMPLETED', 'REJECTED'
            ))
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_hold_harmless_updated_at
            BEFORE UPDATE ON hold_harmless
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS hold_harmless CASCADE;")
