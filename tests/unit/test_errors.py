"""Tests for cp_common.errors and cp_common.response."""

from src.cp_common.errors import (
    AppError,
    COINotFoundError,
    HoldHarmlessGenerationFailedError,
    HoldHarmlessInvalidStateError,
    HoldHarmlessTemplateMissingError,
    InvalidCOITransitionError,
    NotAssignedReviewerError,
    UnsupportedApiVersionError,
)
from src.cp_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_custom_http_status(self) -> None:
        err = AppError(code=1002, message="Email taken", http_status=409)
        assert err.http_status == 409

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1, message="x"), Exception)


class TestSpecificErrors:
    def test_coi_not_found(self) -> None:
        err = COINotFoundError("abc")
        assert err.code == 4001
        assert err.http_status == 404
        assert "abc" in err.message

    def test_invalid_transition_names_status(self) -> None:
        err = InvalidCOITransitionError("approve", "AWAITING_BROKER_INFO")
        assert err.code == 4002
        assert err.http_status == 400
        assert err.message == "Cannot approve COI in status AWAITING_BROKER_INFO"

    def test_generation_failed(self) -> None:
        err = HoldHarmlessGenerationFailedError("no template")
        assert err.code == 4004
        assert err.http_status == 400
        assert "no template" in err.message

    def test_hold_harmless_errors(self) -> None:
        assert HoldHarmlessInvalidStateError("is done").message == "Hold harmless agreement is done"
        err = HoldHarmlessTemplateMissingError("Program A")
        assert err.code == 5003
        assert "Program A" in err.message

    def test_not_assigned_reviewer(self) -> None:
        assert NotAssignedReviewerError().http_status == 403

    def test_unsupported_version_lists_supported(self) -> None:
        err = UnsupportedApiVersionError("7", ["1", "2"])
        assert err.code == 9003
        assert "1, 2" in err.message


class TestResponse:
    def test_success_response(self) -> None:
        resp = success_response({"id": 1})
        assert isinstance(resp, ApiResponse)
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"id": 1}
        assert resp.request_id.startswith("req_")

    def test_error_response(self) -> None:
        resp = error_response(4001, "COI not found")
        assert resp.code == 4001
        assert resp.data is None
