from typing import Any


REPOSITORY_CREATE = "repository_create"
WEBHOOK_PAYLOAD = "webhook_payload"

# "\S" rejects names made only of whitespace; the raw value is kept as sent.
REPOSITORY_CREATE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 1, "maxLength": 100, "pattern": r"\S"},
        "description": {"type": "string", "minLength": 1, "maxLength": 1000},
        "private": {"type": "boolean", "default": False},
        "auto_init": {"type": "boolean", "default": True},
    },
}

WEBHOOK_PAYLOAD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["repository", "action"],
    "properties": {
        "repository": {
            "type": "object",
            "required": ["name", "owner"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "owner": {
                    "type": "object",
                    "required": ["login"],
                    "properties": {
                        "login": {"type": "string", "minLength": 1},
                    },
                },
            },
        },
        "action": {"type": "string", "minLength": 1},
    },
}

SCHEMAS: dict[str, dict[str, Any]] = {
    REPOSITORY_CREATE: REPOSITORY_CREATE_SCHEMA,
    WEBHOOK_PAYLOAD: WEBHOOK_PAYLOAD_SCHEMA,
}
