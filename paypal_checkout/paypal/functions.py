import json
import threading
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

from .models import (
    Amount,
    ClientConfig,
    CreatedOrder,
    ExplicitAmount,
    FixedAmount,
    HttpRequest,
    format_money,
)
from .token import TokenManager
from .transport import SessionTransport, Transport
from . import urls
from ..utils.exceptions import GatewayOperationError, OrderNotCompletedError
from ..utils.logging import get_logger

log = get_logger(__name__)

# Inbound webhook header → verification request field
WEBHOOK_HEADERS = {
    "transmission_id": "paypal-transmission-id",
    "transmission_time": "paypal-transmission-time",
    "cert_url": "paypal-cert-url",
    "auth_algo": "paypal-auth-algo",
    "transmission_sig": "paypal-transmission-sig",
}

# Changing any of these makes the cached token belong to someone else
CREDENTIAL_KEYS = ("sandbox", "client_id", "client_secret")


class PaypalClient:
    """
    Thin, stateless translation of PayPal checkout, payments and webhook
    endpoints. The only shared state is the token manager.
    """

    def __init__(
        self,
        config: Optional[Union[ClientConfig, Mapping[str, Any]]] = None,
        transport: Optional[Transport] = None,
        token_manager: Optional[TokenManager] = None,
    ) -> None:
        self._config = ClientConfig()
        self._config_lock = threading.Lock()
        self.transport = transport if transport is not None else SessionTransport()
        self.tokens = token_manager or TokenManager(self.transport, self.get_config)
        if config is not None:
            self.set_config(config)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def get_config(self) -> ClientConfig:
        return self._config

    def set_config(
        self,
        config: Optional[Union[ClientConfig, Mapping[str, Any]]] = None,
        **changes: Any,
    ) -> ClientConfig:
        """Merge ``config`` and keyword ``changes`` into the current config."""
        merged: Dict[str, Any] = {}
        if isinstance(config, ClientConfig):
            merged.update(vars(config))
        elif config is not None:
            merged.update(config)
        merged.update(changes)

        with self._config_lock:
            old = self._config
            self._config = old.merge(merged)
            new = self._config
        if any(getattr(old, key) != getattr(new, key) for key in CREDENTIAL_KEYS):
            self.tokens.invalidate()
        return new

    @property
    def base_url(self) -> str:
        return urls.base_url(self._config.sandbox)

    def get_token(self) -> str:
        return self.tokens.get_token()

    def fixed_amount(self, value: Union[Decimal, int, float, str]) -> FixedAmount:
        return FixedAmount(Decimal(str(value)), self._config.currency_code)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.get_token()}",
            "Content-Type": "application/json",
        }

    def _call(self, method: str, template: str, body: Any = None, **params: str) -> Any:
        headers = self._headers()
        request = HttpRequest(
            url=urls.build_url(self.base_url, template, **params),
            method=method,
            headers=headers,
            json=body,
            timeout=self._config.timeout,
        )
        return self.transport(request).body

    @staticmethod
    def _raise_for_details(body: Any) -> None:
        details = body.get("details") if isinstance(body, dict) else None
        if isinstance(details, list) and details:
            first = details[0] if isinstance(details[0], dict) else {}
            issue = first.get("issue") or body.get("name") or GatewayOperationError.message
            log.warning("PayPal rejected request: %s", issue)
            raise GatewayOperationError(issue, details=details, debug_id=body.get("debug_id"))

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def create_order(
        self,
        order_id: str,
        amount: Union[Decimal, int, float, str],
        description: str,
        return_url: str,
        cancel_url: str,
        attach: Any = None,
    ) -> CreatedOrder:
        config = self._config
        purchase: Dict[str, Any] = {
            "reference_id": order_id,
            "amount": {
                "currency_code": config.currency_code,
                "value": format_money(amount),
            },
            "description": description,
        }
        if attach:
            purchase["custom_id"] = attach if isinstance(attach, str) else json.dumps(attach)

        body = {
            "intent": "CAPTURE",
            "purchase_units": [purchase],
            "application_context": {
                "brand_name": config.brand_name,
                "return_url": return_url,
                "cancel_url": cancel_url,
            },
        }

        result = self._call("POST", urls.CREATE_ORDER, body)
        self._raise_for_details(result)

        links = result.get("links") or []
        payment_url = next(
            (
                link.get("href")
                for link in links
                if isinstance(link, dict) and link.get("rel") == "approve"
            ),
            None,
        )
        if not payment_url:
            raise GatewayOperationError("APPROVE_LINK_MISSING", id=result.get("id"))

        log.info("PayPal order %s created for %s", result.get("id"), order_id)
        return CreatedOrder(id=result.get("id"), payment_url=payment_url)

    def capture_order(self, order_id: str) -> Dict[str, Any]:
        body = self._call("POST", urls.CAPTURE_ORDER, {}, id=order_id)
        self._raise_for_details(body)

        status = body.get("status")
        if status != "COMPLETED":
            log.warning("PayPal order %s not completed (status=%s)", order_id, status)
            raise OrderNotCompletedError(id=order_id, status=status)

        log.info("PayPal order %s captured", order_id)
        return body

    def get_order(self, order_id: str) -> Any:
        """Show order details."""
        return self._call("GET", urls.GET_ORDER, id=order_id)

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------
    def get_capture(self, capture_id: str) -> Any:
        """Show captured payment details."""
        return self._call("GET", urls.GET_CAPTURE, id=capture_id)

    def refund_capture(self, capture_id: str, amount: Amount) -> Any:
        if not isinstance(amount, (FixedAmount, ExplicitAmount)):
            raise TypeError("amount must be a FixedAmount or ExplicitAmount")
        body = self._call(
            "POST", urls.REFUND_CAPTURE, {"amount": amount.to_payload()}, id=capture_id
        )
        log.info("PayPal refund requested for capture %s", capture_id)
        return body

    def get_refunds(self, refund_id: str) -> Any:
        """Show refund details."""
        return self._call("GET", urls.GET_REFUND, id=refund_id)

    # ------------------------------------------------------------------
    # Webhooks
    # ------------------------------------------------------------------
    def webhook_verify(self, headers: Mapping[str, str], event: Any) -> bool:
        """Webhook notification signature verification."""
        lowered = {str(key).lower(): value for key, value in headers.items()}
        body: Dict[str, Any] = {
            field: lowered.get(header) for field, header in WEBHOOK_HEADERS.items()
        }
        body["webhook_id"] = self._config.webhook_id
        body["webhook_event"] = event

        result = self._call("POST", urls.WEBHOOK_VERIFY, body)
        status = result.get("verification_status") if isinstance(result, dict) else None
        if status != "SUCCESS":
            log.warning("PayPal webhook verification returned %r", status)
        return status == "SUCCESS"
