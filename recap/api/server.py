"""
Flask application for the Recap API.

To run the server standalone:
$ python -m recap.main serve
"""
import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from recap import config
from recap.api.routes import api, too_large_message
from recap.api.services import EXTENSION_KEY, build_services, get_services
from recap.errors import RecapError
from recap.utils.logger import get_logger, get_handlers

logger = get_logger(__name__)

MULTIPART_ALLOWANCE = 1024 * 1024  # boundaries and part headers around the file


def create_app(settings: Optional[Dict[str, Any]] = None, generator=None, renderer=None, dispatcher=None) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Overrides for the values in recap.config
        generator: Summary generator, defaults to GeminiClient
        renderer: Export renderer, defaults to ExportRenderer
        dispatcher: Email dispatcher, defaults to SmtpDispatcher

    Returns:
        Configured Flask app
    """
    app_settings = config.as_dict()
    app_settings.update(settings or {})

    app = Flask(__name__)
    # Whole-request cap; the file itself is checked against MAX_UPLOAD_SIZE in the upload view
    app.config["MAX_CONTENT_LENGTH"] = app_settings["MAX_UPLOAD_SIZE"] + MULTIPART_ALLOWANCE

    # Route Flask's own logging through our handlers
    app.logger.handlers = get_handlers()
    app.logger.setLevel(logging.INFO)

    CORS(app, origins=app_settings["CORS_ORIGINS"])

    app.extensions[EXTENSION_KEY] = build_services(app_settings, generator=generator,
                                                   renderer=renderer, dispatcher=dispatcher)
    app.register_blueprint(api)
    _register_error_handlers(app)

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses."""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        return response

    logger.info("Recap API application created")
    return app


def _register_error_handlers(app: Flask):
    @app.errorhandler(RecapError)
    def handle_recap_error(error):
        if error.status_code >= 500:
            logger.error(f"{error.__class__.__name__}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        message = too_large_message(get_services().settings["MAX_UPLOAD_SIZE"])
        return jsonify({"message": message}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception(f"Unhandled error: {error}")
        return jsonify({"message": "Internal server error"}), 500
