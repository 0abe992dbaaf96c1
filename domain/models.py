from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RepositoryCreateRequest:
    name: str
    description: str | None = None
    private: bool = False
    auto_init: bool = True

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            payload["description"] = self.description
        payload["private"] = self.private
        payload["auto_init"] = self.auto_init
        return payload


@dataclass(frozen=True)
class WebhookPayload:
    repository_name: str
    owner_login: str
    action: str
