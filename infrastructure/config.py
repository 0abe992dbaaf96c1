import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_GITHUB_API_BASE_URL = "https://api.github.com"
DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_GITHUB_TIMEOUT_SECONDS = 10.0
DEFAULT_RATE_LIMIT_WINDOW_MS = 15 * 60 * 1000
DEFAULT_RATE_LIMIT_MAX_REQUESTS = 100


class ConfigurationError(RuntimeError):
    """Raised when the process environment cannot produce a valid configuration."""


@dataclass(frozen=True)
class GatewayConfig:
    github_token: str = field(repr=False)
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    environment: str = DEFAULT_ENVIRONMENT
    github_api_base_url: str = DEFAULT_GITHUB_API_BASE_URL
    github_timeout_seconds: float = DEFAULT_GITHUB_TIMEOUT_SECONDS
    # Accepted for forward compatibility; webhook signatures are not verified.
    github_webhook_secret: str | None = field(default=None, repr=False)
    rate_limit_window_ms: int = DEFAULT_RATE_LIMIT_WINDOW_MS
    rate_limit_max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS
    cors_allow_origins: tuple[str, ...] = ("*",)
    log_dir: Path | None = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _required(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise ConfigurationError(f"Missing required environment variable: {name}")
    return value


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw_value = environ.get(name, "").strip()
    if not raw_value:
        return default
    try:
        value = int(raw_value)
    except ValueError:
        raise ConfigurationError(f"Invalid {name} '{raw_value}': expected an integer") from None
    if value <= 0:
        raise ConfigurationError(f"Invalid {name} '{raw_value}': must be greater than zero")
    return value


def _positive_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw_value = environ.get(name, "").strip()
    if not raw_value:
        return default
    try:
        value = float(raw_value)
    except ValueError:
        raise ConfigurationError(f"Invalid {name} '{raw_value}': expected a number") from None
    if value <= 0:
        raise ConfigurationError(f"Invalid {name} '{raw_value}': must be greater than zero")
    return value


def _resolve_cors_origins(environ: Mapping[str, str]) -> tuple[str, ...]:
    raw_origins = environ.get("CORS_ALLOW_ORIGINS", "*")
    origins = tuple(origin.strip() for origin in raw_origins.split(",") if origin.strip())
    return origins or ("*",)


def load_config_from_env(environ: Mapping[str, str] | None = None) -> GatewayConfig:
    env = os.environ if environ is None else environ
    log_dir = env.get("LOG_DIR", "").strip()
    return GatewayConfig(
        github_token=_required(env, "GITHUB_TOKEN"),
        port=_positive_int(env, "PORT", DEFAULT_PORT),
        host=env.get("HOST", DEFAULT_HOST).strip() or DEFAULT_HOST,
        environment=env.get("APP_ENV", DEFAULT_ENVIRONMENT).strip().lower() or DEFAULT_ENVIRONMENT,
        github_api_base_url=env.get("GITHUB_API_BASE_URL", DEFAULT_GITHUB_API_BASE_URL).rstrip("/")
        or DEFAULT_GITHUB_API_BASE_URL,
        github_timeout_seconds=_positive_float(
            env, "GITHUB_TIMEOUT_SECONDS", DEFAULT_GITHUB_TIMEOUT_SECONDS
        ),
        github_webhook_secret=env.get("GITHUB_WEBHOOK_SECRET") or None,
        rate_limit_window_ms=_positive_int(env, "RATE_LIMIT_WINDOW_MS", DEFAULT_RATE_LIMIT_WINDOW_MS),
        rate_limit_max_requests=_positive_int(
            env, "RATE_LIMIT_MAX_REQUESTS", DEFAULT_RATE_LIMIT_MAX_REQUESTS
        ),
        cors_allow_origins=_resolve_cors_origins(env),
        log_dir=Path(log_dir) if log_dir else None,
    )
