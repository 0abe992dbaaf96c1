from typing import Any

from pydantic import BaseModel


class RepositorySummary(BaseModel):
    id: int | None = None
    name: str | None = None
    full_name: str | None = None
    description: str | None = None
    private: bool | None = None
    html_url: str | None = None
    default_branch: str | None = None
    updated_at: str | None = None
    visibility: str | None = None
    language: str | None = None
    stargazers_count: int | None = None


class RepositoryCreated(BaseModel):
    id: int | None = None
    name: str | None = None
    full_name: str | None = None
    description: str | None = None
    private: bool | None = None
    html_url: str | None = None
    default_branch: str | None = None
    created_at: str | None = None
    visibility: str | None = None


class HealthResponse(BaseModel):
    status: str


class WebhookAcknowledgement(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    message: Any = None
