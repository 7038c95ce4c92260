from __future__ import annotations

import json

from flask import Flask, jsonify
from flask_cors import CORS
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .config import load_settings
from .routes.lottery import bp as lottery_bp
from .routes.narrative import bp as narrative_bp


def create_app() -> Flask:
    settings = load_settings()
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.flask.secret_key
    app.config["DEBUG"] = settings.flask.debug

    app.register_blueprint(lottery_bp, url_prefix="/api")
    app.register_blueprint(narrative_bp, url_prefix="/api")

    CORS(
        app,
        resources={r"/api/*": {"origins": "*"}},
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "x-api-key"],
        send_wildcard=True,
    )

    @app.errorhandler(405)
    def method_not_allowed(exc):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return jsonify(
            {"success": False, "error": "Invalid request", "details": json.loads(exc.json())}
        ), 400

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"success": False, "error": str(exc)}), 500

    return app
