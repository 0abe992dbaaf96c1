import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from application.credential_check import (
    CREDENTIAL_UNVERIFIED,
    CredentialCheckResult,
    verify_credentials,
)
from application.ports import RepositoryApi
from infrastructure.config import GatewayConfig
from infrastructure.github.github_client import GitHubClient
from infrastructure.http.errors import error_body, internal_error_body
from infrastructure.http.middleware import (
    SECURITY_HEADERS,
    build_rate_limit_middleware,
    request_observability_middleware,
    security_headers_middleware,
)
from infrastructure.http.rate_limiter import FixedWindowRateLimiter
from infrastructure.http.routes import router
from infrastructure.observability.logging_utils import log_event


logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON payload"


class StartupAbortedError(RuntimeError):
    """Raised during startup when the upstream rejects the configured credential."""


def _log_credential_check(result: CredentialCheckResult) -> None:
    if result.is_fatal:
        log_event(
            logger,
            logging.ERROR,
            "startup.credentials.rejected",
            status_code=result.status_code,
            hint="Invalid or expired GitHub token; check GITHUB_TOKEN",
        )
    elif result.status == CREDENTIAL_UNVERIFIED:
        log_event(
            logger,
            logging.ERROR,
            "startup.credentials.unverified",
            status_code=result.status_code,
            error=result.error,
        )
    else:
        log_event(logger, logging.INFO, "startup.credentials.valid", login=result.login)


async def _invalid_body_handler(request: Request, error: RequestValidationError) -> JSONResponse:
    log_event(logger, logging.INFO, "http.request.invalid_body", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(INVALID_JSON_MESSAGE),
    )


async def _http_error_handler(request: Request, error: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(str(error.detail)),
        headers=getattr(error, "headers", None),
    )


async def _unhandled_error_handler(request: Request, error: Exception) -> JSONResponse:
    log_event(
        logger,
        logging.ERROR,
        "http.request.unhandled_error",
        exc_info=True,
        path=request.url.path,
        error_type=type(error).__name__,
    )
    # This handler runs outside the middleware stack, so it adds their headers itself.
    headers = dict(SECURITY_HEADERS)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        headers["X-Request-ID"] = request_id
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=internal_error_body(),
        headers=headers,
    )


def build_repository_api(config: GatewayConfig) -> GitHubClient:
    return GitHubClient(
        token=config.github_token,
        base_url=config.github_api_base_url,
        timeout_seconds=config.github_timeout_seconds,
    )


def create_app(
    config: GatewayConfig,
    repository_api: RepositoryApi | None = None,
    *,
    verify_credentials_on_startup: bool = True,
) -> FastAPI:
    api = repository_api if repository_api is not None else build_repository_api(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if verify_credentials_on_startup:
            result = await run_in_threadpool(verify_credentials, api)
            _log_credential_check(result)
            if result.is_fatal:
                raise StartupAbortedError("GitHub rejected the configured token")

        log_event(logger, logging.INFO, "startup.complete", environment=config.environment)
        yield

        close = getattr(api, "close", None)
        if callable(close):
            close()
        log_event(logger, logging.INFO, "shutdown.complete")

    app = FastAPI(title="GitHub Repository Gateway", lifespan=lifespan)
    app.state.config = config
    app.state.repository_api = api

    limiter = FixedWindowRateLimiter(
        max_requests=config.rate_limit_max_requests,
        window_seconds=config.rate_limit_window_ms / 1000,
    )
    app.state.rate_limiter = limiter

    # Each registration wraps the previous ones: the rate limiter is innermost,
    # request observability outermost.
    app.middleware("http")(build_rate_limit_middleware(limiter))
    app.middleware("http")(security_headers_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.middleware("http")(request_observability_middleware)

    app.add_exception_handler(RequestValidationError, _invalid_body_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(router)
    return app
