import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.responses import Response

from infrastructure.http.rate_limiter import FixedWindowRateLimiter
from infrastructure.observability.context import reset_request_id, set_request_id
from infrastructure.observability.logging_utils import log_event


logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]

TOO_MANY_REQUESTS_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def client_address(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return request.client.host


async def request_observability_middleware(request: Request, call_next: CallNext) -> Response:
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    token = set_request_id(request_id)

    method = request.method
    path = request.url.path
    start_time = time.perf_counter()
    log_event(logger, logging.INFO, "http.request.start", method=method, path=path)

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        log_event(
            logger,
            logging.INFO,
            "http.request.end",
            method=method,
            path=path,
            status=status_code,
            duration_ms=f"{duration_ms:.2f}",
        )
        reset_request_id(token)


async def security_headers_middleware(request: Request, call_next: CallNext) -> Response:
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


def build_rate_limit_middleware(
    limiter: FixedWindowRateLimiter,
) -> Callable[[Request, CallNext], Awaitable[Response]]:
    async def rate_limit_middleware(request: Request, call_next: CallNext) -> Response:
        client = client_address(request)
        decision = limiter.hit(client)
        headers = {
            "X-RateLimit-Limit": str(decision.limit),
            "X-RateLimit-Remaining": str(decision.remaining),
            "X-RateLimit-Reset": str(int(decision.reset_at)),
        }

        if not decision.allowed:
            log_event(logger, logging.WARNING, "http.rate_limit.exceeded", client=client)
            headers["Retry-After"] = str(decision.retry_after_seconds)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": "Too many requests", "message": TOO_MANY_REQUESTS_MESSAGE},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response

    return rate_limit_middleware
