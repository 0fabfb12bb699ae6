"""Tests for the generated-COI state machine."""

import pytest

from src.cp_coi.domain.state_machine import (
    RENEWAL_STATUS,
    TRANSITIONS,
    COIAction,
    can_transition,
    next_status,
)
from src.cp_common.enums import COIStatus
from src.cp_common.errors import InvalidCOITransitionError


class TestHappyPath:
    def test_full_lifecycle(self) -> None:
        status = COIStatus.AWAITING_BROKER_INFO
        for action in (
            COIAction.UPDATE_BROKER_INFO,
            COIAction.UPLOAD_POLICIES,
            COIAction.SIGN_POLICIES,
            COIAction.APPROVE,
            COIAction.EXPIRE,
        ):
            status = next_status(status.value, action)
        assert status == COIStatus.EXPIRED

    def test_reject_then_resubmit(self) -> None:
        status = next_status("AWAITING_ADMIN_REVIEW", COIAction.REJECT)
        assert status == COIStatus.DEFICIENCY_PENDING
        assert next_status(status.value, COIAction.RESUBMIT) == COIStatus.AWAITING_BROKER_UPLOAD

    def test_renew_keeps_expired_row(self) -> None:
        assert next_status("EXPIRED", COIAction.RENEW) == COIStatus.EXPIRED
        assert RENEWAL_STATUS == COIStatus.AWAITING_BROKER_UPLOAD


class TestRejected:
    @pytest.mark.parametrize(
        ("current", "action"),
        [
            ("AWAITING_BROKER_INFO", COIAction.APPROVE),
            ("ACTIVE", COIAction.UPLOAD_POLICIES),
            ("ACTIVE", COIAction.RENEW),
            ("EXPIRED", COIAction.EXPIRE),
            ("AWAITING_BROKER_UPLOAD", COIAction.SIGN_POLICIES),
        ],
    )
    def test_invalid_transition_raises(self, current: str, action: COIAction) -> None:
        with pytest.raises(InvalidCOITransitionError) as exc_info:
            next_status(current, action)
        assert current in exc_info.value.message

    def test_every_action_has_exactly_one_source(self) -> None:
        for action, (source, _) in TRANSITIONS.items():
            assert can_transition(source.value, action)
            others = [s for s in COIStatus if s != source]
            assert not any(can_transition(s.value, action) for s in others)
