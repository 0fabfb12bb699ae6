"""Per-policy column access on a generated COI."""

from datetime import datetime

from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_common.enums import PolicyType

_PREFIX = {
    PolicyType.GL: "gl",
    PolicyType.UMBRELLA: "umbrella",
    PolicyType.AUTO: "auto",
    PolicyType.WC: "wc",
}

BROKER_INFO_FIELDS = (
    "broker_type",
    "broker_name",
    "broker_email",
    "broker_phone",
    "broker_company",
    *(f"broker_{p}_{f}" for p in _PREFIX.values() for f in ("name", "email", "phone")),
)

POLICY_URL_FIELDS = tuple(f"{p}_policy_url" for p in _PREFIX.values())
SIGNATURE_URL_FIELDS = tuple(f"{p}_broker_signature_url" for p in _PREFIX.values())
EXPIRATION_FIELDS = tuple(f"{p}_expiration_date" for p in _PREFIX.values())


def expiration_date(coi: GeneratedCOIModel, policy: PolicyType) -> datetime | None:
    return getattr(coi, f"{_PREFIX[policy]}_expiration_date")


def policy_broker_email(coi: GeneratedCOIModel, policy: PolicyType) -> str | None:
    return getattr(coi, f"broker_{_PREFIX[policy]}_email")


def expiration_dates(coi: GeneratedCOIModel) -> list[tuple[PolicyType, datetime]]:
    dates = []
    for policy in PolicyType:
        value = expiration_date(coi, policy)
        if value is not None:
            dates.append((policy, value))
    return dates
