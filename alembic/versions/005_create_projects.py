"""005: create projects and project_contractors tables

Revision ID: 005
Revises: 004
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE projects (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            name                VARCHAR(200)    NOT NULL,
            description         TEXT,
            address             VARCHAR(500),
            location            VARCHAR(200),
            start_date          TIMESTAMPTZ,
            end_date            TIMESTAMPTZ,
            status              VARCHAR(20)     NOT NULL DEFAULT 'PLANNING',
            gc_name             VARCHAR(200),
            entity              VARCHAR(200),
            additional_insureds TEXT,
            contact_person      VARCHAR(200),
            contact_email       VARCHAR(255),
            contact_phone       VARCHAR(50),
            created_by_id       UUID,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_projects_status CHECK (
                status IN ('PLANNING', 'ACTIVE', 'ON_HOLD', 'COMPLETED', 'CANCELLED')
            )
        );
    """)
    op.execute("CREATE INDEX idx_projects_contact_email ON projects (LOWER(contact_email));")
    op.execute("CREATE INDEX idx_projects_created_by ON projects (created_by_id);")
    op.execute("""
        CREATE TRIGGER trg_projects_updated_at
            BEFORE UPDATE ON projects
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE TABLE project_contractors (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            project_id      UUID            NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            contractor_id   UUID            NOT NULL REFERENCES contractors(id) ON DELETE CASCADE,
            role            VARCHAR(30)     NOT NULL DEFAULT 'SUBCONTRACTOR',
            assigned_at     TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_project_contractors UNIQUE (project_id, contractor_id)
        );
    """)
    op.execute(
        "CREATE INDEX idx_project_contractors_contractor ON project_contractors (contractor_id);"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS project_contractors CASCADE;")
    op.execute("DROP TABLE IF EXISTS projects CASCADE;")
