# health_dashboard/__init__.py
import time

from flask import Flask, jsonify
from flask_cors import CORS
from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException

from .ai import AIClientError
from .config import Config
from .errors import APIError, DatabaseConnectionError
from .extensions import ai_client, db, jwt, migrate


def connect_database(app):
    """Probe the database, retrying a fixed number of times before giving up."""
    retries = max(1, app.config["DB_CONNECT_RETRIES"])
    delay = app.config["DB_CONNECT_RETRY_DELAY"]
    for attempt in range(1, retries + 1):
        try:
            db.session.execute(text("SELECT 1"))
            db.session.commit()
            app.logger.info("Database connected successfully")
            return
        except OperationalError as e:
            db.session.rollback()
            app.logger.error("Database connection failed (attempt %d/%d): %s", attempt, retries, e)
            if attempt < retries:
                app.logger.info("Retrying in %s seconds...", delay)
                time.sleep(delay)
    raise DatabaseConnectionError(f"Failed to connect to database after {retries} attempts")


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        details = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in e.errors(include_url=False)
        ]
        return jsonify(success=False, error="Validation error", details=details), 400

    @app.errorhandler(AIClientError)
    def handle_ai_error(e):
        return jsonify(success=False, error=str(e)), 500

    @app.errorhandler(Exception)
    def handle_error(e):
        if isinstance(e, HTTPException):
            return jsonify(success=False, error=e.description), e.code
        db.session.rollback()
        app.logger.exception("Unhandled error")
        return jsonify(success=False, error="Internal server error"), 500


def create_app(config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if isinstance(config, dict):
        app.config.update(config)
    elif config is not None:
        app.config.from_object(config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ai_client.init_app(app)

    CORS(app,
         origins=app.config["CORS_ORIGINS"],
         supports_credentials=True,
         methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization", "X-Requested-With", "x-user-id"])

    register_error_handlers(app)

    from .routes.auth_routes import auth_bp
    from .routes.health_routes import health_bp
    from .routes.chat_routes import chat_bp
    from .routes.risk_routes import risk_bp
    from .routes.report_routes import report_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(chat_bp)
    app.register_blueprint(risk_bp)
    app.register_blueprint(report_bp)

    with app.app_context():
        from . import models  # noqa: F401
        connect_database(app)
        if app.config["DB_CREATE_ALL"]:
            db.create_all()

    return app
