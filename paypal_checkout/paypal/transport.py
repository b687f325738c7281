"""
HTTP transport used by the PayPal client.

A transport is any callable taking an ``HttpRequest`` and returning an
``HttpResponse`` whose body is already decoded. Tests swap in fakes.
"""
from typing import Any, Callable, Optional

import requests

from .limit_session import LimitSession
from .models import HttpRequest, HttpResponse
from ..utils.exceptions import TransportError
from ..utils.logging import get_logger

log = get_logger(__name__)

Transport = Callable[[HttpRequest], HttpResponse]


class SessionTransport:
    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self.session = session if session is not None else LimitSession()

    def __call__(self, request: HttpRequest) -> HttpResponse:
        kwargs: dict[str, Any] = {"headers": dict(request.headers)}
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout
        if request.json is not None:
            kwargs["json"] = request.json
        elif request.data is not None:
            kwargs["data"] = request.data
            kwargs["headers"].setdefault("Content-Type", "application/x-www-form-urlencoded")

        try:
            response = self.session.request(request.method, request.url, **kwargs)
        except requests.RequestException as e:
            raise TransportError(str(e) or TransportError.message, method=request.method, url=request.url) from e

        body = self._decode(response, request.response_format)
        log.debug("%s %s → %s", request.method, request.url, response.status_code)
        return HttpResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=body,
        )

    @staticmethod
    def _decode(response: requests.Response, response_format: str) -> Any:
        if response_format == "text":
            return response.text
        if not response.content:
            if response.ok:
                return {}
            raise TransportError(
                f"HTTP {response.status_code} with empty body",
                status=response.status_code,
                url=response.url,
            )
        try:
            return response.json()
        except ValueError as e:
            if response.ok:
                raise TransportError("Response body is not valid JSON", url=response.url) from e
            raise TransportError(
                f"HTTP {response.status_code} with undecodable body",
                status=response.status_code,
                url=response.url,
            ) from e
