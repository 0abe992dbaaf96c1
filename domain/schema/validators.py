from dataclasses import dataclass
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError, best_match

from domain.models import RepositoryCreateRequest, WebhookPayload
from domain.schema.errors import SchemaValidationError
from domain.schema.schemas import (
    REPOSITORY_CREATE,
    REPOSITORY_CREATE_SCHEMA,
    SCHEMAS,
    WEBHOOK_PAYLOAD,
)


_VALIDATORS = {name: Draft7Validator(schema) for name, schema in SCHEMAS.items()}
_TYPE_PHRASES = {
    "object": "must be of type object",
    "string": "must be a string",
    "boolean": "must be a boolean",
}


@dataclass(frozen=True)
class ValidationOutcome:
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _field_label(path: list[Any]) -> str:
    if not path:
        return "value"
    return ".".join(str(part) for part in path)


def describe_error(error: ValidationError) -> str:
    path = list(error.absolute_path)
    keyword = error.validator

    if keyword == "required":
        # The missing key is not part of the path; recover it from the instance.
        missing = next(
            (key for key in error.validator_value if key not in error.instance),
            None,
        )
        return f'"{_field_label(path + [missing])}" is required'

    label = _field_label(path)
    if keyword == "type":
        phrase = _TYPE_PHRASES.get(error.validator_value, f"must be of type {error.validator_value}")
        return f'"{label}" {phrase}'
    if keyword == "minLength":
        return f'"{label}" is not allowed to be empty'
    if keyword == "maxLength":
        return (
            f'"{label}" length must be less than or equal to '
            f"{error.validator_value} characters long"
        )
    if keyword == "pattern":
        return f'"{label}" must contain at least one non-whitespace character'
    return f'"{label}" {error.message}'


def first_violation(schema_name: str, raw: Any) -> str | None:
    validator = _VALIDATORS.get(schema_name)
    if validator is None:
        raise KeyError(f"Unknown schema '{schema_name}'")

    error = best_match(validator.iter_errors(raw))
    if error is None:
        return None
    return describe_error(error)


def _apply_defaults(schema: dict[str, Any], raw: dict[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for field_name, rule in schema["properties"].items():
        if field_name in raw:
            normalized[field_name] = raw[field_name]
        elif "default" in rule:
            normalized[field_name] = rule["default"]
    return normalized


def parse_create_repository_request(raw: Any) -> RepositoryCreateRequest:
    message = first_violation(REPOSITORY_CREATE, raw)
    if message is not None:
        raise SchemaValidationError(message)

    normalized = _apply_defaults(REPOSITORY_CREATE_SCHEMA, raw)
    return RepositoryCreateRequest(
        name=normalized["name"],
        description=normalized.get("description"),
        private=normalized["private"],
        auto_init=normalized["auto_init"],
    )


def parse_webhook_payload(raw: Any) -> WebhookPayload:
    message = first_violation(WEBHOOK_PAYLOAD, raw)
    if message is not None:
        raise SchemaValidationError(message)

    repository = raw["repository"]
    return WebhookPayload(
        repository_name=repository["name"],
        owner_login=repository["owner"]["login"],
        action=raw["action"],
    )


_PARSERS = {
    REPOSITORY_CREATE: parse_create_repository_request,
    WEBHOOK_PAYLOAD: parse_webhook_payload,
}


def validate_document(schema_name: str, raw: Any) -> ValidationOutcome:
    """Validate ``raw`` against a named schema without raising.

    Returns the normalized domain value, or the message of the first
    violated constraint.
    """
    parser = _PARSERS.get(schema_name)
    if parser is None:
        raise KeyError(f"Unknown schema '{schema_name}'")

    try:
        return ValidationOutcome(value=parser(raw))
    except SchemaValidationError as error:
        return ValidationOutcome(error=error.message)
