"""Value types shared by the PayPal token manager, transport and client."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Optional, Union

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class ClientConfig:
    sandbox: bool = True
    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    webhook_id: str = ""
    brand_name: str = ""
    currency_code: str = "USD"
    locale: str = "en_US"
    timeout: float = 30.0

    def merge(self, changes: Mapping[str, Any]) -> "ClientConfig":
        """Return a copy with ``changes`` applied. Unknown keys are rejected."""
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise TypeError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return replace(self, **changes)


@dataclass(frozen=True)
class Credential:
    """A bearer token and the wall-clock instant it stops being usable."""
    token: str = field(default="", repr=False)
    expires_at: float = 0.0

    def is_valid(self, now: float) -> bool:
        return bool(self.token) and now < self.expires_at


EMPTY_CREDENTIAL = Credential()


@dataclass(frozen=True)
class FixedAmount:
    """A numeric amount, rounded half-up to two decimals on the wire."""
    value: Decimal
    currency: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            # str() first so floats like 10.1 keep their shortest repr
            object.__setattr__(self, "value", Decimal(str(self.value)))

    def to_payload(self) -> Dict[str, str]:
        return {
            "currency_code": self.currency,
            "value": format_money(self.value),
        }


@dataclass(frozen=True)
class ExplicitAmount:
    """An amount already formatted by the caller, sent verbatim."""
    value: str
    currency: str

    def to_payload(self) -> Dict[str, str]:
        return {"currency_code": self.currency, "value": self.value}


Amount = Union[FixedAmount, ExplicitAmount]


@dataclass(frozen=True)
class CreatedOrder:
    id: str
    payment_url: str


@dataclass(frozen=True)
class HttpRequest:
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    json: Optional[Any] = None
    data: Optional[str] = None
    response_format: str = "json"
    timeout: Optional[float] = None


@dataclass(frozen=True)
class HttpResponse:
    status: int
    headers: Dict[str, str]
    body: Any


def format_money(value: Union[Decimal, int, float, str]) -> str:
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return str(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
