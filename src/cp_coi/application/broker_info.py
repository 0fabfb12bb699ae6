"""Broker-info submission rules."""

from src.cp_coi.application.schemas import BrokerInfoRequest
from src.cp_common.enums import BrokerType
from src.cp_common.errors import InvalidBrokerInfoError

# Order in which broker contacts are provisioned.
_PAIR_FIELDS = (
    ("broker_email", "broker_name"),
    ("broker_gl_email", "broker_gl_name"),
    ("broker_auto_email", "broker_auto_name"),
    ("broker_umbrella_email", "broker_umbrella_name"),
    ("broker_wc_email", "broker_wc_name"),
)


def broker_pairs(body: BrokerInfoRequest) -> list[tuple[str, str]]:
    """Complete (email, name) contacts, de-duplicated by email."""
    pairs: list[tuple[str, str]] = []
    seen: set[str] = set()
    for email_attr, name_attr in _PAIR_FIELDS:
        email = getattr(body, email_attr)
        name = getattr(body, name_attr)
        if not email or not name:
            continue
        email = str(email).lower()
        if email in seen:
            continue
        seen.add(email)
        pairs.append((email, name))
    return pairs


def validate_broker_info(body: BrokerInfoRequest) -> list[tuple[str, str]]:
    """Raise InvalidBrokerInfoError unless the submission names a usable broker."""
    if body.broker_type == BrokerType.GLOBAL:
        if not body.broker_name or not body.broker_email:
            raise InvalidBrokerInfoError("GLOBAL broker requires broker_name and broker_email")
    else:
        per_policy = [
            (getattr(body, e), getattr(body, n)) for e, n in _PAIR_FIELDS[1:]
        ]
        if not any(email and name for email, name in per_policy):
            raise InvalidBrokerInfoError(
                "PER_POLICY broker requires at least one policy broker name and email"
            )
    return broker_pairs(body)
