"""Shared test configuration.

Settings are read at import time, so the environment is prepared here before
any application module is imported.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-unit-tests-only")
os.environ.setdefault("REDIS_URL", "")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

from collections.abc import Callable  # noqa: E402

import pytest  # noqa: E402

from src.cp_gateway.user.db_models import UserModel  # noqa: E402
from src.cp_notifications.infrastructure.mailer import LoggingMailer  # noqa: E402
from tests.factories import build_user  # noqa: E402


@pytest.fixture
def mailer() -> LoggingMailer:
    return LoggingMailer()


@pytest.fixture
def make_user() -> Callable[..., UserModel]:
    """Factory for detached UserModel rows: ``make_user("BROKER", "b@x.com")``."""
    return build_user
