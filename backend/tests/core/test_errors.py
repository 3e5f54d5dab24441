"""Error Hierarchy — codes, HTTP status and response envelope.

Tests cover:
    - Each error kind maps to a stable code and HTTP status
    - to_response() carries success=false and a message list
"""

from friendgraph.core.errors import (
    ConflictError, DatabaseError, ErrorCategory, ErrorContext,
    InvalidRequestError, OperationTimeoutError, ResourceNotFoundError,
)


def test_error_kinds_map_to_codes_and_status():
    cases = [
        (InvalidRequestError("bad", "self-block"), "INVALID_REQUEST", 400),
        (ConflictError("no", "blocked"), "CONFLICT", 409),
        (ResourceNotFoundError("User", "a@x.com"), "RESOURCE_NOT_FOUND", 404),
        (DatabaseError("down", "commit"), "DATABASE_ERROR", 503),
        (OperationTimeoutError("connect", 1.0), "OPERATION_TIMEOUT", 504),
    ]
    for error, code, status in cases:
        assert error.code == code
        assert error.http_status == status


def test_not_found_message_names_email():
    error = ResourceNotFoundError("User", "nobody@x.com")
    assert error.message == "User with email nobody@x.com does not exist"
    assert error.category == ErrorCategory.RESOURCE_NOT_FOUND


def test_response_envelope():
    error = ConflictError(
        "Friend connection is being blocked", "blocked",
        ErrorContext(operation="connect", emails=["a@x.com", "b@x.com"]),
    )
    body = error.to_response()
    assert body["success"] is False
    assert body["errors"] == ["Friend connection is being blocked"]
    assert body["error"]["code"] == "CONFLICT"
    assert body["error"]["category"] == "conflict"
    assert body["error"]["context"]["operation"] == "connect"
    assert body["error"]["context"]["emails"] == ["a@x.com", "b@x.com"]


def test_database_error_message_includes_operation():
    error = DatabaseError("Failed to create new user", "create_user")
    assert error.message == "Database create_user failed: Failed to create new user"
    assert error.operation == "create_user"
