"""Contractor insurance status derived from its generated COIs."""

from collections.abc import Iterable

from src.cp_common.enums import AWAITING_COI_STATUSES, COIStatus, InsuranceStatus

_AWAITING = {s.value for s in AWAITING_COI_STATUSES}


def derive_insurance_status(coi_statuses: Iterable[str]) -> InsuranceStatus:
    """Worst status wins: expired, then deficient, then anything in flight."""
    statuses = set(coi_statuses)
    if COIStatus.EXPIRED.value in statuses:
        return InsuranceStatus.EXPIRED
    if COIStatus.DEFICIENCY_PENDING.value in statuses:
        return InsuranceStatus.NON_COMPLIANT
    if not statuses or statuses & _AWAITING:
        return InsuranceStatus.PENDING
    return InsuranceStatus.COMPLIANT
