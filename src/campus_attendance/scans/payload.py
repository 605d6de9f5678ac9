from __future__ import annotations

import json
from typing import Any, Union

from ..core.exceptions import ValidationError

ScanPayload = Union[str, dict]


def extract_code(payload: Any) -> str:
    """Return the actor code carried by a scan.

    Accepted shapes: a bare matricule string, a JSON string ``{"id": "..."}``,
    or an already decoded ``{"id": ...}`` mapping.
    """

    if isinstance(payload, dict):
        return _code_from_mapping(payload)

    if not isinstance(payload, str):
        raise ValidationError("Scan payload must be a string or an object")

    raw = payload.strip()
    if not raw:
        raise ValidationError("Scan payload is empty")

    if raw.startswith(("{", "[")):
        try:
            decoded = json.loads(raw)
        except ValueError:
            raise ValidationError("Malformed structured scan payload")
        if not isinstance(decoded, dict):
            raise ValidationError("Malformed structured scan payload")
        return _code_from_mapping(decoded)

    return raw


def _code_from_mapping(data: dict) -> str:
    value = data.get("id")
    if value is None or not str(value).strip():
        raise ValidationError("Structured scan payload has no id")
    return str(value).strip()


def badge_payload(actor_id: str) -> str:
    """Structured payload encoded in an actor's badge."""

    return json.dumps({"id": actor_id}, separators=(",", ":"))
