"""JWT access-token creation and verification.

Access tokens are short-lived HS256 JWTs carrying the user's id, email and
role. Refresh tokens are opaque selector:verifier strings handled in
``refresh_tokens.py``; they are never JWTs.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.cp_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def access_token_ttl_seconds() -> int:
    return int(_ACCESS_EXPIRE.total_seconds())


def create_access_token(user_id: str, email: str, role: str) -> str:
    """Issue a short-lived access token."""
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "email": email,
        "role": role,
        "type": "access",
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str, expected_type: str = "access") -> dict[str, str]:
    """Decode and validate a JWT token.

    Raises:
        InvalidCredentialsError: token invalid, expired, or of the wrong type.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if payload.get("type") != expected_type:
        raise InvalidCredentialsError()

    return payload
