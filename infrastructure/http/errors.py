from http import HTTPStatus
from typing import Any

from application.ports import UpstreamError, UpstreamHTTPError
from infrastructure.github.github_client import (
    OPERATION_CREATE_REPOSITORY,
    OPERATION_LIST_REPOSITORIES,
)


INTERNAL_ERROR = "Internal server error"
AUTHENTICATION_FAILED = "Authentication failed"
PERMISSION_DENIED = "Permission denied"
VALIDATION_FAILED = "Validation failed"
GITHUB_API_ERROR = "GitHub API error"

INVALID_TOKEN_MESSAGE = "Invalid or expired GitHub token"
MISSING_PERMISSIONS_MESSAGE = "Token does not have required permissions"

_TRANSPORT_FAILURE_MESSAGES = {
    OPERATION_LIST_REPOSITORIES: "Failed to fetch repositories",
    OPERATION_CREATE_REPOSITORY: "Failed to create repository",
}

# Statuses with a fixed meaning only for the operation that can produce them.
_OPERATION_SPECIFIC_STATUSES = {
    OPERATION_LIST_REPOSITORIES: {HTTPStatus.FORBIDDEN},
    OPERATION_CREATE_REPOSITORY: {HTTPStatus.UNPROCESSABLE_ENTITY},
}


def error_body(error: str, message: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error}
    if message is not None:
        body["message"] = message
    return body


def internal_error_body() -> dict[str, Any]:
    return error_body(INTERNAL_ERROR)


def translate_upstream_error(error: UpstreamError, operation: str) -> tuple[int, dict[str, Any]]:
    if not isinstance(error, UpstreamHTTPError):
        message = _TRANSPORT_FAILURE_MESSAGES.get(operation, "Upstream request failed")
        return int(HTTPStatus.INTERNAL_SERVER_ERROR), error_body(INTERNAL_ERROR, message)

    status_code = error.status_code
    specific_statuses = _OPERATION_SPECIFIC_STATUSES.get(operation, set())

    if status_code == HTTPStatus.UNAUTHORIZED:
        return status_code, error_body(AUTHENTICATION_FAILED, INVALID_TOKEN_MESSAGE)
    if status_code == HTTPStatus.FORBIDDEN and status_code in specific_statuses:
        return status_code, error_body(PERMISSION_DENIED, MISSING_PERMISSIONS_MESSAGE)
    if status_code == HTTPStatus.UNPROCESSABLE_ENTITY and status_code in specific_statuses:
        return status_code, error_body(VALIDATION_FAILED, error.message)
    return status_code, error_body(GITHUB_API_ERROR, error.message)
