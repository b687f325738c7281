from urllib.parse import quote

SANDBOX_BASE = "https://api-m.sandbox.paypal.com"
LIVE_BASE = "https://api-m.paypal.com"

AUTHENTICATION = "/v1/oauth2/token"
CREATE_ORDER = "/v2/checkout/orders"
GET_ORDER = "/v2/checkout/orders/{id}"
CAPTURE_ORDER = "/v2/checkout/orders/{id}/capture"
GET_CAPTURE = "/v2/payments/captures/{id}"
REFUND_CAPTURE = "/v2/payments/captures/{id}/refund"
GET_REFUND = "/v2/payments/refunds/{id}"
WEBHOOK_VERIFY = "/v1/notifications/verify-webhook-signature"


def base_url(sandbox: bool) -> str:
    return SANDBOX_BASE if sandbox else LIVE_BASE


def build_url(base: str, template: str, **params: str) -> str:
    """Interpolate URL-quoted ``params`` into ``template`` under ``base``."""
    quoted = {key: quote(str(value), safe="") for key, value in params.items()}
    return base.rstrip("/") + template.format(**quoted)
