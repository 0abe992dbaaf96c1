"""HTTP layer package"""

from infrastructure.http.api import StartupAbortedError, create_app
from infrastructure.http.repository_service import GatewayResponse

__all__ = [
    "GatewayResponse",
    "StartupAbortedError",
    "create_app",
]
