"""Error Hierarchy — status codes and response envelopes for every error type."""

from events_api.core.errors import (
    AuthError, ErrorCategory, EventsApiError, GENERIC_FAILURE_MESSAGE,
    InvalidTokenError, MissingTokenError, NotFoundError, StoreError,
    ValidationError,
)


def test_all_errors_share_the_base():
    for exc in (
        ValidationError(["x"]), MissingTokenError(), InvalidTokenError(),
        NotFoundError("abc"), StoreError("boom", "add"),
    ):
        assert isinstance(exc, EventsApiError)


def test_validation_error_envelope_lists_all_errors():
    exc = ValidationError(['"title" is required', '"date" is required'])
    assert exc.http_status == 400
    assert exc.to_response() == {
        "success": False,
        "message": "Invalid input",
        "errors": ['"title" is required', '"date" is required'],
    }


def test_missing_token_message():
    exc = MissingTokenError()
    assert isinstance(exc, AuthError)
    assert exc.http_status == 401
    assert exc.to_response() == {
        "success": False, "message": "Unauthorized: No token provided.",
    }


def test_invalid_token_message_hides_reason():
    exc = InvalidTokenError("signature mismatch")
    assert exc.to_response() == {
        "success": False, "message": "Unauthorized: Invalid token.",
    }
    assert exc.reason == "signature mismatch"


def test_not_found_carries_event_id_in_context_only():
    exc = NotFoundError("evt-1")
    assert exc.http_status == 404
    assert exc.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert exc.context.event_id == "evt-1"
    assert exc.to_response() == {"success": False, "message": "Event not found"}


def test_store_error_uses_generic_message():
    exc = StoreError("Database operation failed", "update")
    assert exc.http_status == 500
    body = exc.to_response()
    assert body["success"] is False
    assert body["message"] == GENERIC_FAILURE_MESSAGE
    assert body["error"] == "Store update failed: Database operation failed"
    assert exc.to_log_extra()["operation"] == "update"
