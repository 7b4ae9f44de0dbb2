"""Helpers shared by the Flask JSON controllers."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, time
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..auth.session import Session
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CapacityExceeded,
    DuplicateKey,
    ForeignKeyMissing,
    HajjGuideError,
    IntegrityViolation,
    InvalidInput,
    NotFound,
    StoreUnavailable,
    UniquenessViolation,
)
from .datetime_utils import format_hhmm

logger = logging.getLogger(__name__)

SESSION_KEY = "auth"

_STATUS_BY_ERROR = (
    (InvalidInput, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFound, 404),
    (DuplicateKey, 409),
    (UniquenessViolation, 409),
    (IntegrityViolation, 409),
    (CapacityExceeded, 409),
    (ForeignKeyMissing, 409),
    (StoreUnavailable, 503),
)


def to_json(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, time):
        return format_hhmm(value)
    return value


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def current_session() -> Optional[Session]:
    data = session.get(SESSION_KEY)
    if not data:
        return None
    try:
        return Session.from_dict(data)
    except (KeyError, ValueError):
        session.pop(SESSION_KEY, None)
        return None


def store_session(value: Session) -> None:
    session[SESSION_KEY] = value.to_dict()


def clear_session() -> None:
    session.pop(SESSION_KEY, None)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_session() is None:
            raise AuthorizationError("Login required")
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HajjGuideError)
    def handle_domain_error(exc: HajjGuideError):
        status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(exc, kind)), 500)
        if status >= 500:
            logger.error("Request failed: %s", exc)
        return jsonify({"success": False, "error": type(exc).__name__, "message": str(exc)}), status
