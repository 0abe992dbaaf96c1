class UpstreamError(RuntimeError):
    """Base class for failures reported by the upstream repository API."""


class UpstreamHTTPError(UpstreamError):
    """The upstream API answered with an HTTP error status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(f"Upstream API returned {status_code}: {message or 'no message'}")
        self.status_code = status_code
        self.message = message


class UpstreamTransportError(UpstreamError):
    """No response was received from the upstream API."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        super().__init__(f"Upstream request '{operation}' failed without a response: {reason or 'unknown'}")
        self.operation = operation
        self.reason = reason
