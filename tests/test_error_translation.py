import unittest

from application.ports import UpstreamHTTPError, UpstreamTransportError
from infrastructure.github.github_client import (
    OPERATION_CREATE_REPOSITORY,
    OPERATION_LIST_REPOSITORIES,
)
from infrastructure.http.errors import internal_error_body, translate_upstream_error


class ErrorTranslatorTests(unittest.TestCase):
    def test_unauthorized_maps_to_fixed_message_on_both_operations(self) -> None:
        for operation in (OPERATION_LIST_REPOSITORIES, OPERATION_CREATE_REPOSITORY):
            with self.subTest(operation=operation):
                status_code, body = translate_upstream_error(
                    UpstreamHTTPError(401, "Bad credentials"),
                    operation,
                )

                self.assertEqual(status_code, 401)
                self.assertEqual(
                    body,
                    {"error": "Authentication failed", "message": "Invalid or expired GitHub token"},
                )

    def test_forbidden_on_list_ignores_upstream_message(self) -> None:
        status_code, body = translate_upstream_error(
            UpstreamHTTPError(403, "API rate limit exceeded"),
            OPERATION_LIST_REPOSITORIES,
        )

        self.assertEqual(status_code, 403)
        self.assertEqual(
            body,
            {"error": "Permission denied", "message": "Token does not have required permissions"},
        )

    def test_forbidden_on_create_is_a_generic_upstream_error(self) -> None:
        status_code, body = translate_upstream_error(
            UpstreamHTTPError(403, "Resource not accessible by integration"),
            OPERATION_CREATE_REPOSITORY,
        )

        self.assertEqual(status_code, 403)
        self.assertEqual(
            body,
            {"error": "GitHub API error", "message": "Resource not accessible by integration"},
        )

    def test_unprocessable_on_create_passes_message_through(self) -> None:
        status_code, body = translate_upstream_error(
            UpstreamHTTPError(422, "name already exists"),
            OPERATION_CREATE_REPOSITORY,
        )

        self.assertEqual(status_code, 422)
        self.assertEqual(body, {"error": "Validation failed", "message": "name already exists"})

    def test_unprocessable_on_list_is_a_generic_upstream_error(self) -> None:
        status_code, body = translate_upstream_error(
            UpstreamHTTPError(422, "Validation Failed"),
            OPERATION_LIST_REPOSITORIES,
        )

        self.assertEqual(status_code, 422)
        self.assertEqual(body["error"], "GitHub API error")

    def test_other_statuses_keep_upstream_status(self) -> None:
        status_code, body = translate_upstream_error(
            UpstreamHTTPError(502, "Server Error"),
            OPERATION_LIST_REPOSITORIES,
        )

        self.assertEqual(status_code, 502)
        self.assertEqual(body, {"error": "GitHub API error", "message": "Server Error"})

    def test_missing_upstream_message_is_omitted(self) -> None:
        _, body = translate_upstream_error(UpstreamHTTPError(500), OPERATION_CREATE_REPOSITORY)

        self.assertEqual(body, {"error": "GitHub API error"})

    def test_transport_failures_describe_the_operation(self) -> None:
        expectations = {
            OPERATION_LIST_REPOSITORIES: "Failed to fetch repositories",
            OPERATION_CREATE_REPOSITORY: "Failed to create repository",
        }
        for operation, message in expectations.items():
            with self.subTest(operation=operation):
                status_code, body = translate_upstream_error(
                    UpstreamTransportError(operation, "connection refused"),
                    operation,
                )

                self.assertEqual(status_code, 500)
                self.assertEqual(body, {"error": "Internal server error", "message": message})

    def test_internal_error_body_has_no_detail(self) -> None:
        self.assertEqual(internal_error_body(), {"error": "Internal server error"})


if __name__ == "__main__":
    unittest.main()
