"""Generated-COI lifecycle.

Every status change goes through ``next_status``; a transition not in the
table raises InvalidCOITransitionError and the row stays untouched.

    AWAITING_BROKER_INFO -> AWAITING_BROKER_UPLOAD -> AWAITING_BROKER_SIGNATURE
      -> AWAITING_ADMIN_REVIEW -> ACTIVE | DEFICIENCY_PENDING
    DEFICIENCY_PENDING -> AWAITING_BROKER_UPLOAD   (resubmit)
    ACTIVE -> EXPIRED                              (daily sweep)
    EXPIRED -> renewal creates a new COI at AWAITING_BROKER_UPLOAD
"""

from enum import Enum

from src.cp_common.enums import COIStatus
from src.cp_common.errors import InvalidCOITransitionError


class COIAction(str, Enum):
    UPDATE_BROKER_INFO = "UPDATE_BROKER_INFO"
    UPLOAD_POLICIES = "UPLOAD_POLICIES"
    SIGN_POLICIES = "SIGN_POLICIES"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    RESUBMIT = "RESUBMIT"
    EXPIRE = "EXPIRE"
    RENEW = "RENEW"


# action -> (required current status, resulting status of the same row)
TRANSITIONS: dict[COIAction, tuple[COIStatus, COIStatus]] = {
    COIAction.UPDATE_BROKER_INFO: (
        COIStatus.AWAITING_BROKER_INFO,
        COIStatus.AWAITING_BROKER_UPLOAD,
    ),
    COIAction.UPLOAD_POLICIES: (
        COIStatus.AWAITING_BROKER_UPLOAD,
        COIStatus.AWAITING_BROKER_SIGNATURE,
    ),
    COIAction.SIGN_POLICIES: (COIStatus.AWAITING_BROKER_SIGNATURE, COIStatus.AWAITING_ADMIN_REVIEW),
    COIAction.APPROVE: (COIStatus.AWAITING_ADMIN_REVIEW, COIStatus.ACTIVE),
    COIAction.REJECT: (COIStatus.AWAITING_ADMIN_REVIEW, COIStatus.DEFICIENCY_PENDING),
    COIAction.RESUBMIT: (COIStatus.DEFICIENCY_PENDING, COIStatus.AWAITING_BROKER_UPLOAD),
    COIAction.EXPIRE: (COIStatus.ACTIVE, COIStatus.EXPIRED),
    # The expired row keeps its status; the renewal is a new row.
    COIAction.RENEW: (COIStatus.EXPIRED, COIStatus.EXPIRED),
}

RENEWAL_STATUS = COIStatus.AWAITING_BROKER_UPLOAD


def next_status(current: str, action: COIAction) -> COIStatus:
    required, target = TRANSITIONS[action]
    if current != required.value:
        raise InvalidCOITransitionError(action.value.lower().replace("_", " "), current)
    return target


def can_transition(current: str, action: COIAction) -> bool:
    return current == TRANSITIONS[action][0].value
