"""Health and service information endpoints."""

import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from .. import db
from ..dependencies import get_user_service

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.get("/actuator/health")
def actuator_health():
    return {"status": "UP"}


@health_bp.get("/healthz")
def healthz():
    return {"status": "UP"}


@health_bp.get("/api/health/status")
def service_status():
    status = {
        "service": current_app.config["SERVICE_NAME"],
        "status": "UP",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "version": current_app.config["SERVICE_VERSION"],
    }
    try:
        status["totalUsers"] = get_user_service().count()
        status["databaseStatus"] = "CONNECTED"
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Database check failed", extra={"error": str(e)})
        status["databaseStatus"] = f"ERROR: {str(e)[:200]}"
    return jsonify(status)


@health_bp.get("/api/health/info")
def service_info():
    return jsonify({
        "application": {
            "name": current_app.config["SERVICE_NAME"],
            "description": "A simple microservice for managing users",
            "version": current_app.config["SERVICE_VERSION"],
        },
        "features": {
            "authentication": "Basic Auth",
            "database": db.engine.dialect.name,
            "security": "werkzeug password hashing",
        },
        "endpoints": {
            "users": "/api/users",
            "health": "/actuator/health",
        },
    })
