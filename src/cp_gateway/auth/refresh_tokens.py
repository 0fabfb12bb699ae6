"""Opaque refresh tokens in selector:verifier form.

The selector (16 random bytes, 32 hex chars) is stored in clear and indexed
for lookup. The verifier (32 random bytes, 64 hex chars) is only stored as a
bcrypt hash, so a leaked table cannot be replayed.
"""

import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

import bcrypt

from config.settings import settings
from src.cp_common.datetime_utils import utc_now
from src.cp_common.errors import InvalidRefreshTokenError

SELECTOR_BYTES = 16
VERIFIER_BYTES = 32

_SELECTOR_RE = re.compile(r"^[a-f0-9]{32}$", re.IGNORECASE)
_VERIFIER_RE = re.compile(r"^[a-f0-9]{64}$", re.IGNORECASE)


@dataclass(frozen=True)
class IssuedRefreshToken:
    token: str
    selector: str
    verifier_hash: str
    expires_at: datetime


def issue_refresh_token(now: datetime | None = None) -> IssuedRefreshToken:
    selector = secrets.token_hex(SELECTOR_BYTES)
    verifier = secrets.token_hex(VERIFIER_BYTES)
    issued_at = now or utc_now()
    return IssuedRefreshToken(
        token=f"{selector}:{verifier}",
        selector=selector,
        verifier_hash=hash_verifier(verifier),
        expires_at=issued_at + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def parse_refresh_token(token: str) -> tuple[str, str]:
    """Split and validate a token. Raises before any database access."""
    if not token or token.count(":") != 1:
        raise InvalidRefreshTokenError()
    selector, verifier = token.split(":")
    if not _SELECTOR_RE.match(selector) or not _VERIFIER_RE.match(verifier):
        raise InvalidRefreshTokenError()
    return selector, verifier


def hash_verifier(verifier: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.REFRESH_TOKEN_HASH_ROUNDS)
    return bcrypt.hashpw(verifier.encode("utf-8"), salt).decode("utf-8")


def verify_verifier(verifier: str, hashed: str) -> bool:
    return bcrypt.checkpw(verifier.encode("utf-8"), hashed.encode("utf-8"))
