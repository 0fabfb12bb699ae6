"""Unit tests for NotificationService."""

import uuid
from unittest.mock import AsyncMock

import pytest

from src.cp_common.errors import NotificationNotFoundError
from src.cp_notifications.application.service import NotificationService
from src.cp_notifications.infrastructure.db_models import NotificationModel
from src.cp_notifications.infrastructure.mailer import LoggingMailer
from tests.factories import assign_id, build_user


class _BrokenMailer:
    async def send(self, to: str, subject: str, html: str) -> bool:
        raise ConnectionError("smtp down")


def _service(mailer: object) -> tuple[NotificationService, AsyncMock, AsyncMock]:
    repo = AsyncMock()
    repo.add.side_effect = assign_id
    users = AsyncMock()
    return NotificationService(repo=repo, user_repo=users, mailer=mailer), repo, users


class TestCreate:
    async def test_creates_row_and_emails_copy(self, mailer: LoggingMailer) -> None:
        service, repo, users = _service(mailer)
        user = build_user("MANAGER", "rev@example.com")
        users.get_by_id.return_value = user
        review_id = uuid.uuid4()

        notification = await service.notify_review_assigned(AsyncMock(), user.id, review_id)

        assert notification.type == "REVIEW_ASSIGNED"
        assert notification.read is False
        assert notification.link == f"/coi-review/{review_id}"
        assert mailer.outbox[0].to == "rev@example.com"
        assert f"/coi-review/{review_id}" in mailer.outbox[0].html

    async def test_email_failure_does_not_fail_creation(self) -> None:
        service, repo, users = _service(_BrokenMailer())
        users.get_by_id.return_value = build_user()

        notification = await service.notify_approval_required(
            AsyncMock(), uuid.uuid4(), uuid.uuid4()
        )

        assert notification.type == "APPROVAL_REQUIRED"
        repo.add.assert_awaited_once()

    async def test_expiring_message_mentions_days(self, mailer: LoggingMailer) -> None:
        service, _, users = _service(mailer)
        users.get_by_id.return_value = None
        notification = await service.notify_coi_expiring(
            AsyncMock(), uuid.uuid4(), uuid.uuid4(), 14
        )
        assert "14 days" in notification.message
        assert len(mailer.outbox) == 0


class TestReadState:
    async def test_mark_read(self, mailer: LoggingMailer) -> None:
        service, repo, _ = _service(mailer)
        notification = NotificationModel(
            user_id=uuid.uuid4(), type="GENERAL", title="t", message="m", read=False
        )
        notification.id = uuid.uuid4()
        repo.get_for_user.return_value = notification
        db = AsyncMock()

        item = await service.mark_read(db, notification.user_id, notification.id)

        assert item.read is True
        assert item.read_at is not None
        db.commit.assert_awaited_once()

    async def test_other_users_notification_is_not_found(self, mailer: LoggingMailer) -> None:
        service, repo, _ = _service(mailer)
        repo.get_for_user.return_value = None
        with pytest.raises(NotificationNotFoundError):
            await service.mark_read(AsyncMock(), uuid.uuid4(), uuid.uuid4())
        with pytest.raises(NotificationNotFoundError):
            await service.delete(AsyncMock(), uuid.uuid4(), uuid.uuid4())

    async def test_mark_all_read(self, mailer: LoggingMailer) -> None:
        service, repo, _ = _service(mailer)
        repo.mark_all_read.return_value = 3
        assert await service.mark_all_read(AsyncMock(), uuid.uuid4()) == 3
