# health_dashboard/helpers.py
from datetime import date, datetime

from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from health_dashboard.errors import BadRequestError


def api_response(status_code=200, **payload):
    return jsonify(success=True, **payload), status_code


def isoformat(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _token_identity():
    # A bad or expired token is treated like no token so the header can still identify the caller.
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError):
        return None
    return get_jwt_identity()


def resolve_user_id(required=True, missing_error=BadRequestError, missing_message="User ID required"):
    """Bearer token identity first, then ``x-user-id``, then ``userId`` in query or body."""
    raw = _token_identity()
    if raw is None:
        raw = request.headers.get("x-user-id") or request.args.get("userId")
    if raw is None and request.is_json:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            raw = body.get("userId")

    if raw is None or raw == "":
        if required:
            raise missing_error(missing_message)
        return None

    try:
        return int(raw)
    except (TypeError, ValueError):
        raise BadRequestError("Invalid user ID")


def int_arg(name, default, minimum=1, maximum=None):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BadRequestError(f"'{name}' must be an integer")
    if value < minimum or (maximum is not None and value > maximum):
        bound = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
        raise BadRequestError(f"'{name}' must be {bound}")
    return value


def date_arg(name):
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        raise BadRequestError(f"'{name}' must be an ISO date (YYYY-MM-DD)")
