from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..actors.model import Identity
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def current_identity() -> Identity:
    """Identity established by the platform's auth layer in the session."""

    actor_id = session.get("actor_id")
    role = session.get("role")
    if not actor_id or not role:
        raise AuthorizationError("Authentication required")
    try:
        return Identity(actor_id=str(actor_id), role=Role(str(role).upper()))
    except ValueError:
        raise AuthorizationError("Unknown role")


def error_response(exc: DomainError):
    status = exc.http_status if exc.http_status >= 400 else 400
    if isinstance(exc, AuthorizationError) and "actor_id" not in session:
        status = 401
    return jsonify({"success": False, "kind": exc.kind, "message": str(exc)}), status


def json_endpoint(view):
    """Map domain errors to ``{"success": false, kind, message}``; anything else is a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            logger.info("%s %s -> %s: %s", request.method, request.path, e.kind, e)
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return jsonify({"success": False, "kind": "InternalError", "message": "Internal error"}), 500

    return wrapper


def request_data() -> dict:
    """JSON body or form fields, whichever the client sent."""

    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("JSON body must be an object")
        return data
    return request.form.to_dict()


def date_arg(name: str) -> Optional[str]:
    value = (request.args.get(name) or "").strip()
    return value or None


def parse_date_arg(name: str):
    value = date_arg(name)
    return parse_iso_date(value) if value else None
