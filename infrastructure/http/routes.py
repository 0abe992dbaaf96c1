from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from application.ports import RepositoryApi
from infrastructure.http import repository_service
from infrastructure.http.repository_service import GatewayResponse
from infrastructure.http.schemas import (
    ErrorResponse,
    HealthResponse,
    RepositoryCreated,
    RepositorySummary,
    WebhookAcknowledgement,
)


router = APIRouter()

_UPSTREAM_ERRORS: dict[int | str, dict[str, Any]] = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_repository_api(request: Request) -> RepositoryApi:
    return request.app.state.repository_api


def _to_json_response(result: GatewayResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get("/health", response_model=HealthResponse, tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/api/github/repos",
    response_model=list[RepositorySummary],
    responses={**_UPSTREAM_ERRORS, status.HTTP_403_FORBIDDEN: {"model": ErrorResponse}},
    tags=["repositories"],
)
def list_repositories(api: RepositoryApi = Depends(get_repository_api)) -> JSONResponse:
    return _to_json_response(repository_service.list_repositories(api))


@router.post(
    "/api/github/repos",
    response_model=RepositoryCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_UPSTREAM_ERRORS,
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    tags=["repositories"],
)
def create_repository(
    payload: Any = Body(default=None),
    api: RepositoryApi = Depends(get_repository_api),
) -> JSONResponse:
    return _to_json_response(repository_service.create_repository(api, payload))


@router.post(
    "/api/github/webhook",
    response_model=WebhookAcknowledgement,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
    tags=["webhooks"],
)
def receive_webhook(payload: Any = Body(default=None)) -> JSONResponse:
    return _to_json_response(repository_service.receive_webhook(payload))
