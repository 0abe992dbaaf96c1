import unittest
from typing import Any

from application.credential_check import (
    CREDENTIAL_REJECTED,
    CREDENTIAL_UNVERIFIED,
    CREDENTIAL_VALID,
    verify_credentials,
)
from application.ports import UpstreamHTTPError, UpstreamTransportError


class _UserApi:
    def __init__(self, *, user: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.user = user or {}
        self.error = error
        self.calls = 0

    def get_authenticated_user(self) -> dict[str, Any]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.user

    def list_repositories(self) -> list[dict[str, Any]]:
        return []

    def create_repository(self, payload: dict[str, Any]) -> dict[str, Any]:
        return payload


class VerifyCredentialsTests(unittest.TestCase):
    def test_accepted_token_is_valid(self) -> None:
        api = _UserApi(user={"login": "octocat"})

        result = verify_credentials(api)

        self.assertEqual(result.status, CREDENTIAL_VALID)
        self.assertEqual(result.login, "octocat")
        self.assertFalse(result.is_fatal)
        self.assertEqual(api.calls, 1)

    def test_rejected_token_is_fatal(self) -> None:
        result = verify_credentials(_UserApi(error=UpstreamHTTPError(401, "Bad credentials")))

        self.assertEqual(result.status, CREDENTIAL_REJECTED)
        self.assertEqual(result.status_code, 401)
        self.assertTrue(result.is_fatal)

    def test_other_statuses_are_not_fatal(self) -> None:
        result = verify_credentials(_UserApi(error=UpstreamHTTPError(403, "Forbidden")))

        self.assertEqual(result.status, CREDENTIAL_UNVERIFIED)
        self.assertFalse(result.is_fatal)

    def test_transport_failure_is_not_fatal(self) -> None:
        result = verify_credentials(_UserApi(error=UpstreamTransportError("get_authenticated_user")))

        self.assertEqual(result.status, CREDENTIAL_UNVERIFIED)
        self.assertFalse(result.is_fatal)
        self.assertIsNone(result.status_code)

    def test_unexpected_error_is_not_fatal(self) -> None:
        result = verify_credentials(_UserApi(error=ValueError("Expecting value: line 1 column 1")))

        self.assertEqual(result.status, CREDENTIAL_UNVERIFIED)
        self.assertFalse(result.is_fatal)
        self.assertIn("ValueError", result.error)


if __name__ == "__main__":
    unittest.main()
