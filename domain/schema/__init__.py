from domain.schema.errors import SchemaValidationError
from domain.schema.schemas import REPOSITORY_CREATE, WEBHOOK_PAYLOAD
from domain.schema.validators import (
    ValidationOutcome,
    parse_create_repository_request,
    parse_webhook_payload,
    validate_document,
)

__all__ = [
    "REPOSITORY_CREATE",
    "WEBHOOK_PAYLOAD",
    "SchemaValidationError",
    "ValidationOutcome",
    "parse_create_repository_request",
    "parse_webhook_payload",
    "validate_document",
]
