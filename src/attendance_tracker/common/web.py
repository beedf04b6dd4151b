"""Flask helpers shared by the controllers: session gates and error mapping."""

from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateUser,
    RecordNotFound,
    StorageUnavailable,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = [
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (RecordNotFound, 404),
    (DuplicateUser, 409),
    (AlreadyCheckedIn, 409),
    (AlreadyCheckedOut, 409),
]


def error_body(kind: str, message: str):
    return jsonify({"kind": kind, "message": message})


def status_for(exc: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return status
    return 400


def current_user_id() -> str:
    return str(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_body(AuthenticationError.kind, "Unauthorized"), 401
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_body(AuthenticationError.kind, "Unauthorized"), 401
        if session.get("role") != Role.MANAGER.value:
            return error_body(AuthorizationError.kind, "Forbidden: Manager access required"), 403
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        logger.info("Rejected %s: %s", exc.kind, exc.message)
        return error_body(exc.kind, exc.message), status_for(exc)

    @app.errorhandler(StorageUnavailable)
    def handle_storage_error(exc: StorageUnavailable):
        logger.exception("Storage unavailable")
        return error_body(StorageUnavailable.kind, "Storage is temporarily unavailable"), 503
