"""002: create users table

Revision ID: 002
Revises: 001
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            email           VARCHAR(255)    NOT NULL,
            password_hash   VARCHAR(255)    NOT NULL,
            first_name      VARCHAR(100)    NOT NULL,
            last_name       VARCHAR(100)    NOT NULL,
            role            VARCHAR(20)     NOT NULL DEFAULT 'USER',
            is_active       BOOLEAN         NOT NULL DEFAULT TRUE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_email UNIQUE (email),
            CONSTRAINT ck_users_role CHECK (role IN (
                'SUPER_ADMIN', 'ADMIN', 'MANAGER', 'USER',
                'CONTRACTOR', 'SUBCONTRACTOR', 'BROKER'
            ))
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_users_updated_at
            BEFORE UPDATE ON users
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE TRIGGER trg_users_lowercase_email
            BEFORE INSERT OR UPDATE OF email ON users
            FOR EACH ROW EXECUTE FUNCTION fn_lowercase_email();
    """)
    op.execute("COMMENT ON TABLE users IS 'Platform accounts, one role each';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
