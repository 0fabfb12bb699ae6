"""Broker contacts stored on contractor rows, flattened for search."""

from dataclasses import dataclass

from src.cp_contractors.infrastructure.db_models import ContractorModel

# policy type -> (name, email, phone) attribute names
BROKER_FIELDS: dict[str, tuple[str, str, str]] = {
    "GLOBAL": ("broker_name", "broker_email", "broker_phone"),
    "GL": ("broker_gl_name", "broker_gl_email", "broker_gl_phone"),
    "UMBRELLA": ("broker_umbrella_name", "broker_umbrella_email", "broker_umbrella_phone"),
    "AUTO": ("broker_auto_name", "broker_auto_email", "broker_auto_phone"),
    "WC": ("broker_wc_name", "broker_wc_email", "broker_wc_phone"),
}


@dataclass(frozen=True)
class BrokerContact:
    name: str | None
    email: str
    phone: str | None
    policy_type: str


def broker_contacts(
    contractor: ContractorModel, policy_type: str | None = None
) -> list[BrokerContact]:
    contacts = []
    for kind, (name_attr, email_attr, phone_attr) in BROKER_FIELDS.items():
        if policy_type and kind != policy_type:
            continue
        email = getattr(contractor, email_attr)
        if not email:
            continue
        contacts.append(
            BrokerContact(
                name=getattr(contractor, name_attr),
                email=email,
                phone=getattr(contractor, phone_attr),
                policy_type=kind,
            )
        )
    return contacts
