"""Unit tests for the daily expiration reminder run."""

import uuid
from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest

from config.settings import settings
from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_common.errors import ReminderNotFoundError
from src.cp_notifications.infrastructure.mailer import LoggingMailer
from src.cp_reminders.application.service import ReminderService
from src.cp_reminders.infrastructure.db_models import ExpirationReminderModel
from tests.factories import assign_id, build_user

TODAY = date(2026, 5, 1)


def _coi(**kwargs: object) -> GeneratedCOIModel:
    coi = GeneratedCOIModel(
        project_id=uuid.uuid4(),
        subcontractor_id=uuid.uuid4(),
        status="ACTIVE",
        subcontractor_name="Sparks Electric",
        project_name="Harbor Tower",
        **kwargs,
    )
    coi.id = uuid.uuid4()
    return coi


class _FailingMailer:
    async def send(self, to: str, subject: str, html: str) -> bool:
        return False


class _Deps:
    def __init__(self, mailer: object) -> None:
        self.repo = AsyncMock()
        self.repo.add.side_effect = assign_id
        self.repo.sent_between.return_value = False
        self.cois = AsyncMock()
        self.users = AsyncMock()
        self.users.get_by_email.return_value = None
        self.notifications = AsyncMock()
        self.service = ReminderService(
            repo=self.repo,
            coi_repo=self.cois,
            user_repo=self.users,
            notifications=self.notifications,
            mailer=mailer,
        )


@pytest.fixture
def deps(mailer: LoggingMailer) -> _Deps:
    return _Deps(mailer)


class TestCheckExpiring:
    async def test_thirty_day_reminder(self, deps: _Deps, mailer: LoggingMailer) -> None:
        admin = build_user("ADMIN", "reviewer@example.com")
        deps.users.get_by_email.return_value = admin
        coi = _coi(
            gl_expiration_date=datetime(2026, 5, 31, tzinfo=UTC),
            broker_gl_email="GL@broker.com",
            broker_email="global@broker.com",
            assigned_admin_email="reviewer@example.com",
        )
        deps.cois.list_for_reminders.return_value = [coi]
        db = AsyncMock()

        result = await deps.service.check_expiring_policies(db, TODAY)

        assert result.cois_checked == 1
        assert result.reminders_sent == 1
        assert [m.to for m in mailer.outbox] == [
            "gl@broker.com",
            "global@broker.com",
            "reviewer@example.com",
            settings.ADMIN_EMAIL.lower(),
        ]
        row = deps.repo.add.await_args.args[1]
        assert row.reminder_type == "DAYS_30"
        assert row.policy_type == "GL"
        assert row.days_before_expiry == 30
        deps.notifications.notify_coi_expiring.assert_awaited_once_with(db, admin.id, coi.id, 30)
        db.commit.assert_awaited_once()

    async def test_each_policy_classified_separately(self, deps: _Deps) -> None:
        coi = _coi(
            gl_expiration_date=datetime(2026, 5, 8, tzinfo=UTC),
            wc_expiration_date=datetime(2026, 4, 27, tzinfo=UTC),
            auto_expiration_date=datetime(2026, 5, 20, tzinfo=UTC),
            broker_email="global@broker.com",
        )
        deps.cois.list_for_reminders.return_value = [coi]

        result = await deps.service.check_expiring_policies(AsyncMock(), TODAY)

        assert result.reminders_sent == 2
        types = {call.args[1].reminder_type for call in deps.repo.add.await_args_list}
        assert types == {"DAYS_7", "EVERY_2_DAYS"}
        deps.notifications.notify_coi_expiring.assert_not_awaited()

    async def test_already_sent_today_is_skipped(
        self, deps: _Deps, mailer: LoggingMailer
    ) -> None:
        deps.repo.sent_between.return_value = True
        deps.cois.list_for_reminders.return_value = [
            _coi(gl_expiration_date=datetime(2026, 5, 1, 18, tzinfo=UTC))
        ]

        result = await deps.service.check_expiring_policies(AsyncMock(), TODAY)

        assert result.reminders_sent == 0
        assert len(mailer.outbox) == 0
        deps.repo.add.assert_not_awaited()

    async def test_undelivered_reminder_not_recorded(self) -> None:
        deps = _Deps(_FailingMailer())
        deps.cois.list_for_reminders.return_value = [
            _coi(gl_expiration_date=datetime(2026, 5, 3, tzinfo=UTC))
        ]

        result = await deps.service.check_expiring_policies(AsyncMock(), TODAY)

        assert result.reminders_sent == 0
        deps.repo.add.assert_not_awaited()

    async def test_one_failure_does_not_stop_the_run(self, deps: _Deps) -> None:
        deps.repo.add.side_effect = [RuntimeError("db"), ExpirationReminderModel()]
        deps.cois.list_for_reminders.return_value = [
            _coi(gl_expiration_date=datetime(2026, 5, 15, tzinfo=UTC)),
            _coi(gl_expiration_date=datetime(2026, 5, 15, tzinfo=UTC)),
        ]
        db = AsyncMock()

        result = await deps.service.check_expiring_policies(db, TODAY)

        assert result.reminders_sent == 1
        db.rollback.assert_awaited_once()


class TestAcknowledge:
    async def test_acknowledge(self, deps: _Deps) -> None:
        reminder = ExpirationReminderModel(
            coi_id=uuid.uuid4(),
            policy_type="GL",
            expiration_date=datetime(2026, 5, 31, tzinfo=UTC),
            days_before_expiry=30,
            reminder_type="DAYS_30",
            sent_to=["gl@broker.com"],
            email_subject="s",
            acknowledged=False,
        )
        reminder.id = uuid.uuid4()
        deps.repo.get_by_id.return_value = reminder
        actor = build_user("MANAGER", "m@example.com")

        item = await deps.service.acknowledge(AsyncMock(), actor, reminder.id)

        assert item.acknowledged is True
        assert item.acknowledged_by == "m@example.com"

    async def test_unknown(self, deps: _Deps) -> None:
        deps.repo.get_by_id.return_value = None
        with pytest.raises(ReminderNotFoundError):
            await deps.service.acknowledge(AsyncMock(), build_user(), uuid.uuid4())


async def test_stats(deps: _Deps) -> None:
    deps.repo.count_by_type.return_value = {"DAYS_30": 3, "EXPIRED": 1}
    deps.repo.count_acknowledged.return_value = 2
    stats = await deps.service.stats(AsyncMock())
    assert stats.total == 4
    assert stats.pending == 2
