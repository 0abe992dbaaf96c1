import logging
import re
from pathlib import Path
from typing import Any, Iterable

from infrastructure.observability.context import get_request_id


LOG_FORMAT = "%(asctime)s %(levelname)s [request_id=%(request_id)s] %(name)s - %(message)s"
ERROR_LOG_FILENAME = "error.log"
COMBINED_LOG_FILENAME = "combined.log"

_TOKEN_PATTERNS = (
    re.compile(r"(Bearer\s+)[A-Za-z0-9_\-.]+", re.IGNORECASE),
    re.compile(r"(token\s+)[A-Za-z0-9_\-.]{20,}", re.IGNORECASE),
    re.compile(r"\bgh[pousr]_[A-Za-z0-9_]+\b"),
    re.compile(r"\bgithub_pat_[A-Za-z0-9_]+\b"),
)
_REGISTERED_SENSITIVE_VALUES: set[str] = set()


def register_sensitive_values(*values: str | None) -> None:
    for value in values:
        if value:
            _REGISTERED_SENSITIVE_VALUES.add(value)


def _sensitive_values() -> Iterable[str]:
    return _REGISTERED_SENSITIVE_VALUES


def redact_secrets(text: str) -> str:
    redacted = text
    for value in _sensitive_values():
        redacted = redacted.replace(value, "[REDACTED]")
    for pattern in _TOKEN_PATTERNS:
        if pattern.groups > 0:
            redacted = pattern.sub(r"\1[REDACTED]", redacted)
        else:
            redacted = pattern.sub("[REDACTED]", redacted)
    return redacted


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def _build_handlers(log_dir: Path | None, console: bool) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        error_handler = logging.FileHandler(log_dir / ERROR_LOG_FILENAME, encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        handlers.append(error_handler)
        handlers.append(logging.FileHandler(log_dir / COMBINED_LOG_FILENAME, encoding="utf-8"))
    if console or not handlers:
        handlers.append(logging.StreamHandler())
    return handlers


def configure_logging(
    *,
    level: int = logging.INFO,
    log_dir: Path | None = None,
    production: bool = False,
) -> None:
    """Install the gateway's handlers on the root logger.

    With ``log_dir`` set, errors go to ``error.log`` and everything to
    ``combined.log``. Console output is kept unless running in production
    with file logging enabled. Calling it again is a no-op once handlers exist.
    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)
        for handler in _build_handlers(log_dir, console=not production):
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)
        root_logger.setLevel(level)

    for handler in root_logger.handlers:
        has_request_id_filter = any(isinstance(f, RequestIdFilter) for f in handler.filters)
        if not has_request_id_filter:
            handler.addFilter(RequestIdFilter())


def safe_message(message: str) -> str:
    return redact_secrets(message)


def _format_field_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return safe_message(value)
    return safe_message(repr(value))


def structured_message(event: str, **fields: Any) -> str:
    parts = [f"event={safe_message(event)}"]
    for key, value in fields.items():
        if value is None:
            continue
        formatted_value = _format_field_value(value).replace('"', '\\"')
        parts.append(f'{key}="{formatted_value}"')
    return " ".join(parts)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: bool = False,
    **fields: Any,
) -> None:
    logger.log(level, structured_message(event, **fields), exc_info=exc_info)
