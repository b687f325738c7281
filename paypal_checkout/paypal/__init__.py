from .functions import PaypalClient
from .models import (
    Amount,
    ClientConfig,
    CreatedOrder,
    Credential,
    ExplicitAmount,
    FixedAmount,
    HttpRequest,
    HttpResponse,
)
from .token import TokenManager
from .transport import SessionTransport


# ClientConfig field → Flask config key. Secure values may be stored encrypted.
settings = [
    {"value": "sandbox", "key": "PAYPAL_SANDBOX", "description": "Use the PayPal sandbox host", "secure": False},
    {"value": "client_id", "key": "PAYPAL_CLIENT_ID", "description": "Paypal Client ID for your app", "secure": True},
    {"value": "client_secret", "key": "PAYPAL_CLIENT_SECRET", "description": "Paypal Client Secret for your app", "secure": True},
    {"value": "webhook_id", "key": "PAYPAL_WEBHOOK_ID", "description": "Webhook ID shown in the PayPal app details", "secure": False},
    {"value": "brand_name", "key": "PAYPAL_BRAND_NAME", "description": "Store name shown on the PayPal checkout page", "secure": False},
    {"value": "currency_code", "key": "PAYPAL_CURRENCY_CODE", "description": "Three-letter currency code for all amounts", "secure": False},
    {"value": "locale", "key": "PAYPAL_LOCALE", "description": "Accept-Language sent when authenticating", "secure": False},
    {"value": "timeout", "key": "PAYPAL_TIMEOUT", "description": "Request timeout in seconds", "secure": False},
]

__all__ = [
    "Amount",
    "ClientConfig",
    "CreatedOrder",
    "Credential",
    "ExplicitAmount",
    "FixedAmount",
    "HttpRequest",
    "HttpResponse",
    "PaypalClient",
    "SessionTransport",
    "TokenManager",
    "settings",
]
