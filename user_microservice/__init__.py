import logging

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event, text
from werkzeug.exceptions import HTTPException

db = SQLAlchemy()

logger = logging.getLogger(__name__)


def create_app(overrides=None):
    from .config import load_config
    from .logging_config import setup_logging

    app = Flask(__name__)
    app.config.update(load_config())
    if overrides:
        app.config.update(overrides)

    setup_logging(app.config["LOG_LEVEL"])

    db.init_app(app)

    # ---------- MODELS & ROUTES ----------
    from . import models  # noqa: F401
    from .auth import init_auth
    from .routes.health import health_bp
    from .routes.users import users_bp

    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(health_bp)
    init_auth(app)

    @app.after_request
    def add_cors_headers(response):
        response.headers.setdefault("Access-Control-Allow-Origin", app.config["CORS_ORIGINS"])
        return response

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("Unhandled error", extra={"error": str(e)})
        return jsonify({"error": "Internal server error"}), 500

    # ---------- BOOTSTRAP DB ----------
    with app.app_context():
        if db.engine.dialect.name == "sqlite":
            # LIKE is case-insensitive on SQLite by default
            event.listen(db.engine, "connect", _sqlite_case_sensitive_like)
        db.create_all()
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Application started", extra={"database": db.engine.url.render_as_string(hide_password=True)})

    return app


def _sqlite_case_sensitive_like(dbapi_conn, _record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA case_sensitive_like=ON")
    cursor.close()
