import logging
from typing import Any

import requests

from application.ports import UpstreamHTTPError, UpstreamTransportError
from infrastructure.config import DEFAULT_GITHUB_API_BASE_URL, DEFAULT_GITHUB_TIMEOUT_SECONDS
from infrastructure.observability.logging_utils import log_event, safe_message


logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "github-repo-gateway"
REPOSITORIES_PAGE_SIZE = 100

OPERATION_GET_USER = "get_authenticated_user"
OPERATION_LIST_REPOSITORIES = "list_repositories"
OPERATION_CREATE_REPOSITORY = "create_repository"


def _upstream_message(response: requests.Response) -> str | None:
    try:
        error_payload = response.json()
    except ValueError:
        return None
    if isinstance(error_payload, dict):
        return error_payload.get("message")
    return None


class GitHubClient:
    def __init__(
        self,
        *,
        token: str,
        base_url: str = DEFAULT_GITHUB_API_BASE_URL,
        timeout_seconds: float = DEFAULT_GITHUB_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.base = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": USER_AGENT,
            }
        )

    def _request(self, method: str, path: str, *, operation: str, **kwargs: Any) -> Any:
        try:
            response = self.session.request(
                method,
                f"{self.base}{path}",
                timeout=self.timeout_seconds,
                **kwargs,
            )
        except requests.RequestException as error:
            reason = safe_message(str(error))
            log_event(logger, logging.ERROR, "github.request.transport_failed", operation=operation, error=reason)
            raise UpstreamTransportError(operation, reason) from error

        if response.status_code >= 400:
            message = _upstream_message(response)
            log_event(
                logger,
                logging.ERROR,
                "github.request.failed",
                operation=operation,
                status_code=response.status_code,
                details=message,
            )
            raise UpstreamHTTPError(response.status_code, message)

        return response.json()

    def get_authenticated_user(self) -> dict[str, Any]:
        log_event(logger, logging.INFO, "github.user.get")
        return self._request("GET", "/user", operation=OPERATION_GET_USER)

    def list_repositories(self) -> list[dict[str, Any]]:
        log_event(logger, logging.INFO, "github.repositories.list", per_page=REPOSITORIES_PAGE_SIZE)
        params = {
            "sort": "updated",
            "per_page": REPOSITORIES_PAGE_SIZE,
            "page": 1,
            "visibility": "all",
        }
        return self._request("GET", "/user/repos", operation=OPERATION_LIST_REPOSITORIES, params=params)

    def create_repository(self, payload: dict[str, Any]) -> dict[str, Any]:
        log_event(
            logger,
            logging.INFO,
            "github.repository.create",
            name=payload.get("name"),
            private=payload.get("private"),
        )
        return self._request("POST", "/user/repos", operation=OPERATION_CREATE_REPOSITORY, json=payload)

    def close(self) -> None:
        self.session.close()
