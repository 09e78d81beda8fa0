"""
Exception types and JSON error handlers
"""
from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge, TooManyRequests

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later"


class ValidationError(Exception):
    """Request input rejected before any external call is made"""


class FileValidationError(ValidationError):
    pass


class AuthError(Exception):
    pass


class DurationProbeError(Exception):
    """ffprobe could not report a duration for the file"""


class TranscriptionError(Exception):
    """Object storage or the transcription service failed"""


def _request_context():
    return {
        "requestId": request.headers.get("X-Request-ID") or "unknown",
        "path": request.path,
        "method": request.method,
    }


def register_error_handlers(app):
    """Attach JSON error handlers to the app"""

    @app.errorhandler(ValidationError)
    def handle_validation_error(err):
        app.logger.warning(f"Validation error: {err}", extra={"context": _request_context()})
        return jsonify({"error": str(err)}), 400

    @app.errorhandler(RequestEntityTooLarge)
    def handle_upload_too_large(err):
        app.logger.warning(f"File Upload Error: {err.description}", extra={"context": _request_context()})
        return jsonify({"error": "File upload error", "details": err.description}), 400

    @app.errorhandler(TooManyRequests)
    def handle_rate_limit(err):
        app.logger.warning("Rate limit exceeded", extra={"context": {
            "ip": request.remote_addr,
            "path": request.path,
            "method": request.method,
        }})
        return jsonify({"error": RATE_LIMIT_MESSAGE}), 429

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"error": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unhandled(err):
        context = _request_context()
        context["error"] = str(err)
        app.logger.exception("Unhandled error:", extra={"context": context})
        if current_app.config.get("ENV_NAME") == "production":
            message = "Internal server error"
        else:
            message = str(err)
        return jsonify({"error": message}), 500
