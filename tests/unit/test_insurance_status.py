"""Tests for contractor insurance status derivation."""

from src.cp_common.enums import InsuranceStatus
from src.cp_contractors.domain.insurance import derive_insurance_status


def test_no_cois_is_pending() -> None:
    assert derive_insurance_status([]) == InsuranceStatus.PENDING


def test_all_active_is_compliant() -> None:
    assert derive_insurance_status(["ACTIVE", "ACTIVE"]) == InsuranceStatus.COMPLIANT


def test_in_flight_is_pending() -> None:
    assert derive_insurance_status(["ACTIVE", "AWAITING_BROKER_UPLOAD"]) == InsuranceStatus.PENDING


def test_deficiency_beats_pending() -> None:
    statuses = ["AWAITING_ADMIN_REVIEW", "DEFICIENCY_PENDING"]
    assert derive_insurance_status(statuses) == InsuranceStatus.NON_COMPLIANT


def test_expired_wins() -> None:
    statuses = ["ACTIVE", "DEFICIENCY_PENDING", "EXPIRED"]
    assert derive_insurance_status(statuses) == InsuranceStatus.EXPIRED
