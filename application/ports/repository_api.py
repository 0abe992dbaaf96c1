from typing import Any, Protocol


class RepositoryApi(Protocol):
    def get_authenticated_user(self) -> dict[str, Any]:
        """Return the account the configured credential belongs to."""

    def list_repositories(self) -> list[dict[str, Any]]:
        """Return the raw repositories visible to the credential."""

    def create_repository(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a repository from a normalized payload and return it raw."""
