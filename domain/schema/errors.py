class SchemaValidationError(ValueError):
    """Raised when an inbound JSON body does not match its declared schema."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
