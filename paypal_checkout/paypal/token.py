"""
OAuth2 client-credentials token cache for the PayPal REST API.

One ``TokenManager`` serves every thread of the process. At most one
authentication request is in flight at a time; callers that arrive while it
runs wait on the same ``Future`` and get its token or its exception.
"""
from __future__ import annotations

import base64
import threading
import time
from concurrent.futures import Future
from typing import Callable, Optional, Tuple

from .models import ClientConfig, Credential, EMPTY_CREDENTIAL, HttpRequest
from .transport import Transport
from . import urls
from ..utils.exceptions import AuthenticationError, ConfigurationError
from ..utils.logging import get_logger

log = get_logger(__name__)


class TokenManager:
    def __init__(
        self,
        transport: Transport,
        config: Callable[[], ClientConfig],
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._transport = transport
        self._config = config
        self._clock = clock
        self._lock = threading.Lock()
        self._credential: Credential = EMPTY_CREDENTIAL
        self._pending: Optional[Future] = None
        self._generation = 0

    @property
    def credential(self) -> Credential:
        return self._credential

    @property
    def refreshing(self) -> bool:
        return self._pending is not None

    def get_token(self) -> str:
        # Fast path: the credential is swapped as one object, never half-updated
        credential = self._credential
        if credential.is_valid(self._clock()):
            return credential.token

        with self._lock:
            credential = self._credential
            if credential.is_valid(self._clock()):
                return credential.token
            pending = self._pending
            if pending is not None:
                owner = False
            else:
                pending = self._pending = Future()
                generation = self._generation
                owner = True

        if not owner:
            log.debug("Token refresh in flight, waiting")
            return pending.result()

        return self._refresh(pending, generation)

    def invalidate(self) -> None:
        """
        Forget the cached token and detach any refresh in flight.

        The detached refresh still answers the callers already waiting on it,
        but its token is not stored and later callers start a fresh one.
        """
        with self._lock:
            self._credential = EMPTY_CREDENTIAL
            self._pending = None
            self._generation += 1
        log.info("PayPal token invalidated")

    def _refresh(self, pending: Future, generation: int) -> str:
        try:
            token, expires_in = self._authenticate()
        except BaseException as exc:
            # Waiters must be released even on KeyboardInterrupt
            with self._lock:
                if self._pending is pending:
                    self._pending = None
            log.warning("PayPal token refresh failed: %s", exc)
            pending.set_exception(exc)
            raise

        with self._lock:
            if generation == self._generation:
                self._credential = Credential(token=token, expires_at=self._clock() + expires_in)
            if self._pending is pending:
                self._pending = None
        log.info("PayPal token refreshed, expires in %ss", expires_in)
        pending.set_result(token)
        return token

    @staticmethod
    def auth_header(client_id: str, client_secret: str) -> str:
        """Base64-encoded Basic auth header for client credentials."""
        credentials = f"{client_id}:{client_secret}".encode("utf-8")
        encoded = base64.b64encode(credentials).decode("utf-8")
        return f"Basic {encoded}"

    def _authenticate(self) -> Tuple[str, float]:
        config = self._config()
        if not config.client_id or not config.client_secret:
            raise ConfigurationError("PayPal client_id and client_secret are required")

        request = HttpRequest(
            url=urls.build_url(urls.base_url(config.sandbox), urls.AUTHENTICATION),
            method="POST",
            headers={
                "Accept": "application/json",
                "Accept-Language": config.locale,
                "Authorization": self.auth_header(config.client_id, config.client_secret),
            },
            data="grant_type=client_credentials",
            timeout=config.timeout,
        )
        body = self._transport(request).body
        if not isinstance(body, dict):
            raise AuthenticationError("Unexpected token response")

        if body.get("error"):
            raise AuthenticationError(
                body.get("error_description") or body["error"],
                error=body["error"],
            )

        token = body.get("access_token")
        if not token or not isinstance(token, str):
            raise AuthenticationError("Token response has no access_token")

        expires_in = body.get("expires_in")
        if isinstance(expires_in, bool) or not isinstance(expires_in, (int, float)) or expires_in <= 0:
            raise AuthenticationError("Token response has no valid expires_in", expires_in=expires_in)

        return token, float(expires_in)
