"""Error Hierarchy — verifies codes, HTTP statuses and the response envelope."""

from rigbench.core.errors import (
    ActivationConflictError, DatabaseError, ErrorCategory, ErrorContext,
    InvalidInputError, PreconditionFailedError, ResourceNotFoundError, RigBenchError,
)


def test_not_found_envelope():
    err = ResourceNotFoundError(
        "Actuator calibration", "abc", ErrorContext(config_kind="actuator_calibration"),
    )
    body = err.to_response()["error"]
    assert err.http_status == 404
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Actuator calibration 'abc' not found"
    assert body["context"]["record_id"] == "abc"
    assert body["context"]["config_kind"] == "actuator_calibration"


def test_status_codes():
    assert PreconditionFailedError("x").http_status == 400
    assert InvalidInputError("x", "area").http_status == 422
    assert ActivationConflictError("display_calibration", "seven_segment").http_status == 409
    assert DatabaseError("x", "commit").http_status == 503


def test_invalid_input_carries_field():
    body = InvalidInputError("area must be >= 0", "area").to_response()["error"]
    assert body["context"]["field"] == "area"
    assert body["category"] == ErrorCategory.VALIDATION.value


def test_conflict_carries_scope():
    err = ActivationConflictError("display_calibration", "seven_segment")
    assert err.context.scope == "seven_segment"
    assert err.category == ErrorCategory.CONFLICT


def test_all_errors_share_base():
    for err in (
        ResourceNotFoundError("X", "1"), PreconditionFailedError("x"),
        InvalidInputError("x", "f"), DatabaseError("x", "query"),
    ):
        assert isinstance(err, RigBenchError)
