"""006: create programs and project_programs tables

Revision ID: 006
Revises: 005
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE programs (
            id                          UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            name                        VARCHAR(200)    NOT NULL,
            description                 TEXT,
            requires_hold_harmless      BOOLEAN         NOT NULL DEFAULT FALSE,
            hold_harmless_template_url  VARCHAR(1000),
            created_by_id               UUID,
            created_at                  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at                  TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_programs_updated_at
            BEFORE UPDATE ON programs
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE TABLE project_programs (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            project_id      UUID            NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            program_id      UUID            NOT NULL REFERENCES programs(id) ON DELETE CASCADE,
            assigned_at     TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_project_programs UNIQUE (project_id, program_id)
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS project_programs CASCADE;")
    op.execute("DROP TABLE IF EXISTS programs CASCADE;")
