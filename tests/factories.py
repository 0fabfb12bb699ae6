"""Detached ORM rows for unit tests. Ids and timestamps are set by hand."""

import uuid
from datetime import datetime, timezone
from typing import Any

from src.cp_gateway.user.db_models import UserModel


def build_user(role: str = "ADMIN", email: str = "admin@example.com", **kwargs: Any) -> UserModel:
    user = UserModel(
        email=email,
        password_hash="$2b$12$fakehash",
        first_name="Test",
        last_name="User",
        role=role,
        is_active=kwargs.pop("is_active", True),
    )
    user.id = kwargs.pop("id", uuid.uuid4())
    user.created_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for key, value in kwargs.items():
        setattr(user, key, value)
    return user


async def assign_id(_db: Any, row: Any) -> Any:
    """``side_effect`` for mocked ``repo.add``: mimics the flush that sets the id."""
    row.id = uuid.uuid4()
    return row
