"""Which reminder, if any, a policy gets on a given day.

Reminders go out 30, 14, 7 and 2 days before expiry, on the expiry day,
and every second day after it.
"""

from dataclasses import dataclass

from src.cp_common.enums import POLICY_DISPLAY_NAMES, PolicyType, ReminderType

_FIXED = {
    30: ReminderType.DAYS_30,
    14: ReminderType.DAYS_14,
    7: ReminderType.DAYS_7,
    2: ReminderType.DAYS_2,
    0: ReminderType.EXPIRED,
}

_SUBJECTS = {
    ReminderType.DAYS_30: "[30 Days] {name} Policy Expiring Soon",
    ReminderType.DAYS_14: "[14 Days] {name} Policy Expiring Soon - Action Required",
    ReminderType.DAYS_7: "[7 Days] URGENT: {name} Policy Expiring Soon",
    ReminderType.DAYS_2: "[2 Days] CRITICAL: {name} Policy Expiring Imminently",
    ReminderType.EXPIRED: "[EXPIRED] {name} Policy Expired Today",
    ReminderType.EVERY_2_DAYS: (
        "[OVERDUE {overdue} Days] {name} Policy Expired - Immediate Action Required"
    ),
}


@dataclass(frozen=True)
class ReminderSlot:
    reminder_type: ReminderType
    days_before_expiry: int


def classify(days_until_expiry: int) -> ReminderSlot | None:
    reminder_type = _FIXED.get(days_until_expiry)
    if reminder_type is not None:
        return ReminderSlot(reminder_type, days_until_expiry)
    if days_until_expiry < 0 and days_until_expiry % 2 == 0:
        return ReminderSlot(ReminderType.EVERY_2_DAYS, days_until_expiry)
    return None


def reminder_subject(slot: ReminderSlot, policy: PolicyType) -> str:
    return _SUBJECTS[slot.reminder_type].format(
        name=POLICY_DISPLAY_NAMES[policy],
        overdue=abs(slot.days_before_expiry),
    )


def reminder_recipients(*candidates: str | None) -> list[str]:
    """Distinct non-empty addresses, first occurrence wins."""
    recipients: list[str] = []
    for email in candidates:
        if not email:
            continue
        email = email.strip().lower()
        if email and email not in recipients:
            recipients.append(email)
    return recipients
