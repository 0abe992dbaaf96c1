import logging
from dataclasses import dataclass
from typing import Any

from fastapi import status

from application.ports import RepositoryApi, UpstreamError
from domain.schema import SchemaValidationError, parse_create_repository_request, parse_webhook_payload
from infrastructure.github.github_client import (
    OPERATION_CREATE_REPOSITORY,
    OPERATION_LIST_REPOSITORIES,
)
from infrastructure.http.errors import error_body, internal_error_body, translate_upstream_error
from infrastructure.http.mappers import to_repository_created, to_repository_summaries
from infrastructure.observability.logging_utils import log_event


logger = logging.getLogger(__name__)

WEBHOOK_RECEIVED_MESSAGE = "Webhook received"


@dataclass(frozen=True)
class GatewayResponse:
    status_code: int
    body: Any


def _upstream_failure(error: UpstreamError, operation: str) -> GatewayResponse:
    status_code, body = translate_upstream_error(error, operation)
    log_event(
        logger,
        logging.ERROR,
        "gateway.upstream.failed",
        operation=operation,
        status=int(status_code),
        error=body.get("error"),
    )
    return GatewayResponse(status_code=int(status_code), body=body)


def _internal_failure(operation: str) -> GatewayResponse:
    log_event(logger, logging.ERROR, "gateway.internal.failed", exc_info=True, operation=operation)
    return GatewayResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, body=internal_error_body())


def list_repositories(api: RepositoryApi) -> GatewayResponse:
    try:
        raw_repositories = api.list_repositories()
        summaries = to_repository_summaries(raw_repositories)
    except UpstreamError as error:
        return _upstream_failure(error, OPERATION_LIST_REPOSITORIES)
    except Exception:
        return _internal_failure(OPERATION_LIST_REPOSITORIES)

    log_event(logger, logging.INFO, "gateway.repositories.listed", count=len(summaries))
    return GatewayResponse(
        status_code=status.HTTP_200_OK,
        body=[summary.model_dump() for summary in summaries],
    )


def create_repository(api: RepositoryApi, raw_body: Any) -> GatewayResponse:
    try:
        request = parse_create_repository_request(raw_body)
    except SchemaValidationError as error:
        log_event(logger, logging.INFO, "gateway.repository.create_rejected", reason=error.message)
        return GatewayResponse(status_code=status.HTTP_400_BAD_REQUEST, body=error_body(error.message))

    try:
        raw_repository = api.create_repository(request.as_payload())
        created = to_repository_created(raw_repository)
    except UpstreamError as error:
        return _upstream_failure(error, OPERATION_CREATE_REPOSITORY)
    except Exception:
        return _internal_failure(OPERATION_CREATE_REPOSITORY)

    log_event(logger, logging.INFO, "gateway.repository.created", full_name=created.full_name)
    return GatewayResponse(status_code=status.HTTP_201_CREATED, body=created.model_dump())


def receive_webhook(raw_body: Any) -> GatewayResponse:
    try:
        payload = parse_webhook_payload(raw_body)
    except SchemaValidationError as error:
        log_event(logger, logging.INFO, "gateway.webhook.rejected", reason=error.message)
        return GatewayResponse(status_code=status.HTTP_400_BAD_REQUEST, body=error_body(error.message))

    # Payloads are acknowledged only; no event handling happens past validation.
    log_event(
        logger,
        logging.INFO,
        "gateway.webhook.received",
        action=payload.action,
        repository=f"{payload.owner_login}/{payload.repository_name}",
    )
    return GatewayResponse(status_code=status.HTTP_200_OK, body={"message": WEBHOOK_RECEIVED_MESSAGE})
