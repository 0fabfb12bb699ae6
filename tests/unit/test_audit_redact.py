"""Tests for audit metadata redaction and the isolated audit write."""

from unittest.mock import AsyncMock, MagicMock

from src.cp_audit.application.service import REDACTED, AuditService, redact
from src.cp_audit.domain.models import AuditEntry


class TestRedact:
    def test_sensitive_keys_case_insensitive(self) -> None:
        cleaned = redact({"Password": "x", "TOKEN": "y", "email": "a@example.com"})
        assert cleaned == {"Password": REDACTED, "TOKEN": REDACTED, "email": "a@example.com"}

    def test_nested(self) -> None:
        cleaned = redact({"outer": {"api_key": "k", "ok": 1}})
        assert cleaned == {"outer": {"api_key": REDACTED, "ok": 1}}

    def test_empty(self) -> None:
        assert redact(None) == {}


def _session_factory(session: MagicMock) -> MagicMock:
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=session)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=ctx)


class TestAuditLog:
    async def test_writes_redacted_row(self) -> None:
        session = MagicMock()
        session.commit = AsyncMock()
        repo = MagicMock()
        repo.add = AsyncMock()
        service = AuditService(repo=repo, session_factory=_session_factory(session))

        await service.log(
            AuditEntry(
                action="LOGIN",
                resource="USER",
                metadata={"password": "secret"},
                user_agent="a" * 500,
            )
        )

        row = repo.add.await_args.args[1]
        assert row.extra == {"password": REDACTED}
        assert len(row.user_agent) == 200
        session.commit.assert_awaited_once()

    async def test_failure_never_propagates(self) -> None:
        session = MagicMock()
        repo = MagicMock()
        repo.add = AsyncMock(side_effect=RuntimeError("db down"))
        service = AuditService(repo=repo, session_factory=_session_factory(session))
        await service.log(AuditEntry(action="CREATE", resource="COI"))
