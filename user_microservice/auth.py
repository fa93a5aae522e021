"""HTTP Basic authentication gate applied before every view."""

import hmac
import logging
import secrets

from flask import current_app, g, jsonify, request

from .dependencies import get_user_service

logger = logging.getLogger(__name__)

# endpoints reachable without credentials
PUBLIC_ENDPOINTS = {
    "users.create_user",
    "health.actuator_health",
    "health.healthz",
}


def init_auth(app):
    if not app.config.get("BASIC_AUTH_PASSWORD"):
        app.config["BASIC_AUTH_PASSWORD"] = secrets.token_urlsafe(24)
        logger.warning(
            "Using generated security password",
            extra={"username": app.config["BASIC_AUTH_USERNAME"], "password": app.config["BASIC_AUTH_PASSWORD"]},
        )

    app.before_request(require_basic_auth)


def require_basic_auth():
    # CORS preflight never carries credentials
    if request.method == "OPTIONS" or request.endpoint in PUBLIC_ENDPOINTS:
        return None

    auth = request.authorization
    if auth is None or auth.type != "basic" or auth.username is None or auth.password is None:
        return _unauthorized()

    if _is_service_account(auth.username, auth.password):
        g.principal = auth.username
        return None

    # registration is public, so stored users are not principals unless opted in
    user = None
    if current_app.config["BASIC_AUTH_ALLOW_USERS"]:
        user = get_user_service().authenticate(auth.username, auth.password)
    if user is None:
        logger.info("Rejected credentials", extra={"username": auth.username, "path": request.path})
        return _unauthorized()

    g.principal = user.email
    return None


def _is_service_account(username: str, password: str) -> bool:
    cfg = current_app.config
    return hmac.compare_digest(username.encode(), cfg["BASIC_AUTH_USERNAME"].encode()) and hmac.compare_digest(
        password.encode(), cfg["BASIC_AUTH_PASSWORD"].encode()
    )


def _unauthorized():
    response = jsonify({"error": "Unauthorized"})
    response.status_code = 401
    response.headers["WWW-Authenticate"] = f'Basic realm="{current_app.config["AUTH_REALM"]}"'
    return response
