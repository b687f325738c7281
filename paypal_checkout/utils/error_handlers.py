# paypal_checkout/utils/error_handlers.py
"""
Centralized Flask error handlers.
Keeps routes.py files clean and guarantees consistent JSON responses.
"""
from flask import Flask, jsonify, Response
from paypal_checkout.utils.logging import get_logger
from paypal_checkout.utils.exceptions import GatewayError

log = get_logger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(error: Exception) -> tuple[Response, int]:
        return jsonify(error="not_found"), 404

    @app.errorhandler(405)
    def method_not_allowed(error: Exception) -> tuple[Response, int]:
        return jsonify(error="method_not_allowed"), 405

    @app.errorhandler(500)
    def internal_error(error: Exception) -> tuple[Response, int]:
        log.exception("Unhandled exception")
        return jsonify(error="internal_server_error"), 500

    @app.errorhandler(GatewayError)
    def handle_gateway_error(error: GatewayError) -> tuple[Response, int]:
        log.warning("%s: %s | payload=%s", type(error).__name__, error, error.payload)
        response = {"error": error.message, "details": error.payload}
        return jsonify(response), error.status_code

    log.info("Error handlers registered")
