"""Pytest configuration and fixtures"""
import os
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import urlsplit

import pytest

os.environ.setdefault("PAYPAL_SANDBOX", "true")

from paypal_checkout import create_app
from paypal_checkout.paypal import HttpRequest, HttpResponse, PaypalClient

TOKEN_PATH = "/v1/oauth2/token"

Reply = Union[Dict[str, Any], HttpResponse, Exception, Callable[[HttpRequest], Any]]


class FakeTransport:
    """Answers requests from a (method, path) table and records every call."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Reply] = {}
        self.requests: List[HttpRequest] = []
        self._lock = threading.Lock()

    def add(self, method: str, path: str, reply: Reply) -> None:
        self.routes[(method, path)] = reply

    def calls(self, path: Optional[str] = None) -> List[HttpRequest]:
        if path is None:
            return list(self.requests)
        return [r for r in self.requests if urlsplit(r.url).path == path]

    def __call__(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        key = (request.method, urlsplit(request.url).path)
        if key not in self.routes:
            raise AssertionError(f"Unexpected request {key}")
        reply = self.routes[key]
        if callable(reply) and not isinstance(reply, (dict, HttpResponse)):
            reply = reply(request)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, HttpResponse):
            return reply
        return HttpResponse(status=200, headers={}, body=reply)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def token_reply(token: str = "token-1", expires_in: Any = 32400) -> Dict[str, Any]:
    return {
        "scope": "https://uri.paypal.com/services/payments/payment",
        "access_token": token,
        "token_type": "Bearer",
        "app_id": "APP-80W284485P519543T",
        "expires_in": expires_in,
        "nonce": "2024-01-01T00:00:00Z",
    }


@pytest.fixture
def transport() -> FakeTransport:
    fake = FakeTransport()
    fake.add("POST", TOKEN_PATH, token_reply())
    return fake


@pytest.fixture
def config() -> Dict[str, Any]:
    return {
        "sandbox": True,
        "client_id": "client-id",
        "client_secret": "client-secret",
        "webhook_id": "WH-123",
        "brand_name": "Test Store",
        "currency_code": "USD",
    }


@pytest.fixture
def client(transport: FakeTransport, config: Dict[str, Any]) -> PaypalClient:
    return PaypalClient(config=config, transport=transport)


@pytest.fixture
def app(transport: FakeTransport):
    return create_app("testing", transport=transport)


@pytest.fixture
def http(app):
    return app.test_client()
