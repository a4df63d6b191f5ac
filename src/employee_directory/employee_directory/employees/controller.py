from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Dict, Optional

from flask import Flask, g, jsonify, request, send_from_directory
from werkzeug.exceptions import RequestEntityTooLarge

from ..core.constants import GENERIC_ERROR_MESSAGE
from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    TokenInvalidError,
    TokenMissingError,
    ValidationError,
)
from ..container import Container
from ..security.tokens import bearer_token
from .model import ProfileChanges

logger = logging.getLogger(__name__)

# Canonical JSON key -> legacy key still sent by older clients.
_LEGACY_KEYS = {
    "identifier": "prno",
    "mobileNumber": "mobileNo",
    "dateOfBirth": "dob",
    "photoReference": "photo",
}

_TOO_LARGE_MESSAGE = "Upload exceeds the maximum allowed size!"


def _ok(data: Any, status: int = 200, **extra):
    body: Dict[str, Any] = {"status": "ok", "data": data}
    body.update(extra)
    return jsonify(body), status


def _error(message: str, status: int):
    return jsonify({"status": "error", "data": message}), status


def _status_for(error: DomainError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, TokenMissingError):
        return 401
    if isinstance(error, TokenInvalidError):
        return 403
    # ConflictError, AuthenticationError and ValidationError are all client errors.
    return 400


def _payload() -> Dict[str, Any]:
    """Merge a JSON body and/or form fields into one dict."""
    data: Dict[str, Any] = {}
    if request.form:
        data.update(request.form.to_dict())
    json_body = request.get_json(silent=True)
    if isinstance(json_body, dict):
        data.update(json_body)
    return data


def _field(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None and key in _LEGACY_KEYS:
        value = payload.get(_LEGACY_KEYS[key])
    if value is None:
        return None
    return str(value)


def register(app: Flask, container: Container) -> None:
    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.identifier = container.tokens.verify(bearer_token(request.headers.get("Authorization")))
            except (TokenMissingError, TokenInvalidError) as e:
                return _error(str(e), _status_for(e))
            return view(*args, **kwargs)

        return wrapper

    @app.errorhandler(RequestEntityTooLarge)
    def request_too_large(_):
        return _error(_TOO_LARGE_MESSAGE, 400)

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return _ok("Employee directory is running")

    @app.route("/signin", methods=["POST"], endpoint="register")
    def register_employee():
        try:
            payload = _payload()
            result = container.auth_service.register(
                identifier=_field(payload, "identifier"),
                name=_field(payload, "name"),
                mobile_number=_field(payload, "mobileNumber"),
                date_of_birth=_field(payload, "dateOfBirth"),
                password=_field(payload, "password"),
                department=_field(payload, "department"),
                role=_field(payload, "role"),
                email=_field(payload, "email"),
                address=_field(payload, "address"),
                phone=_field(payload, "phone"),
            )
            return _ok("User created successfully!", 201, token=result.token)
        except RequestEntityTooLarge:
            return _error(_TOO_LARGE_MESSAGE, 400)
        except (ValidationError, ConflictError) as e:
            return _error(str(e), _status_for(e))
        except Exception:
            logger.exception("Error saving user")
            return _error(GENERIC_ERROR_MESSAGE, 500)

    @app.route("/signup", methods=["POST"], endpoint="login")
    def login():
        try:
            payload = _payload()
            result = container.auth_service.login(_field(payload, "identifier"), _field(payload, "password"))
            return _ok("Sign in successful!", token=result.token)
        except RequestEntityTooLarge:
            return _error(_TOO_LARGE_MESSAGE, 400)
        except AuthenticationError as e:
            return _error(str(e), _status_for(e))
        except Exception:
            logger.exception("Error signing in user")
            return _error(GENERIC_ERROR_MESSAGE, 500)

    @app.route("/update-id-card", methods=["PUT"], endpoint="update_id_card")
    @token_required
    def update_id_card():
        try:
            payload = _payload()
            changes = ProfileChanges(
                name=_field(payload, "name"),
                email=_field(payload, "email"),
                mobile_number=_field(payload, "mobileNumber"),
                phone=_field(payload, "phone"),
                department=_field(payload, "department"),
                address=_field(payload, "address"),
                role=_field(payload, "role"),
                date_of_birth=_field(payload, "dateOfBirth"),
                photo_reference=_field(payload, "photoReference"),
            )
            container.profile_service.update_id_card(
                acting_identifier=g.identifier,
                changes=changes,
                photo=request.files.get("photo"),
            )
            return _ok("User updated successfully!")
        except RequestEntityTooLarge:
            return _error(_TOO_LARGE_MESSAGE, 400)
        except (ValidationError, NotFoundError) as e:
            return _error(str(e), _status_for(e))
        except Exception:
            logger.exception("Error updating user")
            return _error(GENERIC_ERROR_MESSAGE, 500)

    @app.route("/profile/<employee_number>", methods=["GET"], endpoint="profile")
    def profile(employee_number: str):
        try:
            return _ok(container.directory_service.get_profile(employee_number))
        except NotFoundError as e:
            return _error(str(e), 404)
        except Exception:
            logger.exception("Error fetching user profile")
            return _error(GENERIC_ERROR_MESSAGE, 500)

    @app.route("/user/<identifier>", methods=["GET"], endpoint="user_detail")
    def user_detail(identifier: str):
        try:
            return _ok(container.directory_service.get_full_record(identifier))
        except NotFoundError as e:
            return _error(str(e), 404)
        except Exception:
            logger.exception("Error fetching user")
            return _error(GENERIC_ERROR_MESSAGE, 500)

    @app.route("/search", methods=["GET"], endpoint="search")
    def search():
        try:
            employees = container.directory_service.search(
                name=request.args.get("name"),
                identifier=request.args.get("prno") or request.args.get("identifier"),
                department=request.args.get("department"),
            )
            return _ok(employees)
        except Exception:
            logger.exception("Error fetching employees")
            return _error(GENERIC_ERROR_MESSAGE, 500)

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    def list_users():
        try:
            return _ok(container.directory_service.list_all())
        except Exception:
            logger.exception("Error listing users")
            return _error("Failed to fetch user details", 500)

    @app.route("/uploads/<path:filename>", methods=["GET"], endpoint="uploaded_photo")
    def uploaded_photo(filename: str):
        return send_from_directory(container.photos.folder.resolve(), filename)
