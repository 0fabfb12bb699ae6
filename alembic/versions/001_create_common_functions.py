"""001: extensions and shared trigger functions

Revision ID: 001
Revises: 
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # gen_random_uuid() for every UUID primary key
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto;")
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    # Login looks users up by lower(email); keep stored emails lower-case.
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_lowercase_email()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.email = LOWER(TRIM(NEW.email));
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS fn_lowercase_email();")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")
