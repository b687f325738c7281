from paypal_checkout.utils.logging import get_logger

from flask import Flask
from typing import Any, Dict, Optional

from paypal_checkout.paypal import PaypalClient, SessionTransport, settings
from paypal_checkout.paypal.limit_session import LimitSession
from paypal_checkout.utils import encryption

logger = get_logger(__name__)


class PaypalExtension:
    def __init__(self) -> None:
        self._client: Optional[PaypalClient] = None

    def init_app(self, app: Flask, transport: Any = None) -> None:
        values: Dict[str, Any] = {}
        encrypted = app.config.get("PAYPAL_SECRETS_ENCRYPTED", False)
        for setting in settings:
            value = app.config.get(setting["key"])
            if value is None:
                continue
            if encrypted and setting["secure"] and value:
                value = encryption.decrypt_data(value, app.config.get("ENCRYPTION_KEY"))
            values[setting["value"]] = value

        if transport is None:
            transport = SessionTransport(
                LimitSession(
                    calls=app.config.get("PAYPAL_RATE_LIMIT_CALLS", 120),
                    period=app.config.get("PAYPAL_RATE_LIMIT_PERIOD", 60.0),
                    timeout=values.get("timeout", 30.0),
                )
            )

        self._client = PaypalClient(config=values, transport=transport)
        app.extensions['paypal'] = self
        logger.info(
            "PayPal client initialized (%s)",
            "sandbox" if self._client.get_config().sandbox else "live",
        )

    @property
    def client(self) -> PaypalClient:
        if self._client is None:
            raise RuntimeError("PayPal client not initialized")
        return self._client


paypal = PaypalExtension()
