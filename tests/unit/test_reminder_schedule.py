"""Tests for reminder classification, subjects and recipients."""

import pytest

from src.cp_common.enums import PolicyType, ReminderType
from src.cp_reminders.domain.schedule import (
    ReminderSlot,
    classify,
    reminder_recipients,
    reminder_subject,
)


class TestClassify:
    @pytest.mark.parametrize(
        ("days", "expected"),
        [
            (30, ReminderType.DAYS_30),
            (14, ReminderType.DAYS_14),
            (7, ReminderType.DAYS_7),
            (2, ReminderType.DAYS_2),
            (0, ReminderType.EXPIRED),
            (-2, ReminderType.EVERY_2_DAYS),
            (-10, ReminderType.EVERY_2_DAYS),
        ],
    )
    def test_reminder_days(self, days: int, expected: ReminderType) -> None:
        slot = classify(days)
        assert slot == ReminderSlot(expected, days)

    @pytest.mark.parametrize("days", [31, 29, 15, 8, 3, 1, -1, -3])
    def test_quiet_days(self, days: int) -> None:
        assert classify(days) is None


class TestSubject:
    def test_thirty_days(self) -> None:
        slot = ReminderSlot(ReminderType.DAYS_30, 30)
        assert reminder_subject(slot, PolicyType.GL) == (
            "[30 Days] General Liability Policy Expiring Soon"
        )

    def test_overdue_counts_days(self) -> None:
        slot = ReminderSlot(ReminderType.EVERY_2_DAYS, -4)
        subject = reminder_subject(slot, PolicyType.WC)
        assert subject.startswith("[OVERDUE 4 Days] Workers Compensation")

    def test_expired_today(self) -> None:
        slot = ReminderSlot(ReminderType.EXPIRED, 0)
        assert "Expired Today" in reminder_subject(slot, PolicyType.AUTO)


class TestRecipients:
    def test_distinct_lowercase_in_order(self) -> None:
        assert reminder_recipients(
            "GL@Broker.com", None, "gl@broker.com", "", "admin@example.com"
        ) == ["gl@broker.com", "admin@example.com"]

    def test_empty(self) -> None:
        assert reminder_recipients(None, "  ") == []
