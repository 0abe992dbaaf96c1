from application.ports.errors import UpstreamError, UpstreamHTTPError, UpstreamTransportError
from application.ports.repository_api import RepositoryApi

__all__ = [
    "RepositoryApi",
    "UpstreamError",
    "UpstreamHTTPError",
    "UpstreamTransportError",
]
