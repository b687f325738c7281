# paypal_checkout/utils/exceptions.py
"""
Central place for all gateway-specific exceptions.
Every public operation fails with exactly one of these.
"""
from __future__ import annotations


class GatewayError(Exception):
    """Base exception for all gateway errors — never raised directly."""
    status_code = 500
    message = "An unexpected gateway error occurred"

    def __init__(self, message: str | None = None, **payload):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.payload = payload


class ConfigurationError(GatewayError):
    status_code = 500
    message = "PayPal client is not configured"


class ValidationError(GatewayError):
    status_code = 400
    message = "Invalid input"


class AuthenticationError(GatewayError):
    status_code = 502
    message = "PayPal authentication failed"


class TransportError(GatewayError):
    status_code = 502
    message = "PayPal request failed"


class GatewayOperationError(GatewayError):
    status_code = 422
    message = "PayPal rejected the request"


class OrderNotCompletedError(GatewayError):
    status_code = 409
    message = "ORDER_NOT_COMPLETED"


class WebhookVerificationError(GatewayError):
    status_code = 400
    message = "Webhook signature verification failed"
