"""Flask application error handlers."""

from flask import Flask, jsonify
from pydantic import ValidationError


def register_error_handlers(app: Flask) -> None:
    """Register Flask error handlers for errors raised outside ``handle_api_errors``."""

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        error_details = []
        for err in error.errors():
            field = ".".join(str(x) for x in err["loc"])
            error_details.append(f"{field}: {err['msg']}")

        return jsonify({
            "error": "Validation failed",
            "details": error_details
        }), 400

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({
            "error": "Resource not found",
            "details": "The requested resource could not be found"
        }), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify({
            "error": "Method not allowed",
            "details": "The HTTP method is not allowed for this endpoint"
        }), 405

    @app.errorhandler(500)
    def handle_internal_server_error(error):
        return jsonify({
            "error": "Internal server error",
            "details": "An unexpected error occurred"
        }), 500
