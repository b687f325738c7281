from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from flask import (
    current_app,
    request,
    jsonify,
    Response,
)

from . import bp
from paypal_checkout.paypal import Amount, ExplicitAmount, PaypalClient
from paypal_checkout.utils.exceptions import ValidationError, WebhookVerificationError
from paypal_checkout.utils.logging import get_logger

log = get_logger(__name__)


def client() -> PaypalClient:
    return current_app.extensions['paypal'].client


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def require(data: Dict[str, Any], *keys: str) -> None:
    missing = [key for key in keys if data.get(key) in (None, "")]
    if missing:
        raise ValidationError("Missing required fields", missing=missing)


def parse_amount(raw: Any) -> Amount:
    """Resolve a JSON amount into a concrete Amount variant."""
    if isinstance(raw, dict):
        require(raw, "value", "currency_code")
        return ExplicitAmount(value=str(raw["value"]), currency=str(raw["currency_code"]))
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValidationError("amount must be a number or an object", amount=raw)
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        raise ValidationError("amount is not a number", amount=raw) from None
    if not value.is_finite() or value <= 0:
        raise ValidationError("amount must be positive", amount=raw)
    return client().fixed_amount(value)


@bp.route("/orders", methods=["POST"])
def create_order() -> tuple[Response, int]:
    data = json_body()
    require(data, "order_id", "amount", "return_url", "cancel_url")
    amount = parse_amount(data["amount"])
    if isinstance(amount, ExplicitAmount):
        raise ValidationError("amount must be a number when creating an order")

    order = client().create_order(
        order_id=str(data["order_id"]),
        amount=amount.value,
        description=data.get("description", ""),
        return_url=data["return_url"],
        cancel_url=data["cancel_url"],
        attach=data.get("attach"),
    )
    return jsonify(id=order.id, payment_url=order.payment_url), 201


@bp.route("/orders/<order_id>", methods=["GET"])
def get_order(order_id: str) -> Response:
    return jsonify(client().get_order(order_id))


@bp.route("/orders/<order_id>/capture", methods=["POST"])
def capture_order(order_id: str) -> Response:
    return jsonify(client().capture_order(order_id))


@bp.route("/captures/<capture_id>", methods=["GET"])
def get_capture(capture_id: str) -> Response:
    return jsonify(client().get_capture(capture_id))


@bp.route("/captures/<capture_id>/refund", methods=["POST"])
def refund_capture(capture_id: str) -> Response:
    data = json_body()
    require(data, "amount")
    return jsonify(client().refund_capture(capture_id, parse_amount(data["amount"])))


@bp.route("/refunds/<refund_id>", methods=["GET"])
def get_refunds(refund_id: str) -> Response:
    return jsonify(client().get_refunds(refund_id))


@bp.route("/webhook", methods=["POST"])
def webhook() -> Response:
    event = json_body()
    if not client().webhook_verify(request.headers, event):
        raise WebhookVerificationError(event_id=event.get("id"))

    log.info("Verified PayPal webhook %s (%s)", event.get("id"), event.get("event_type"))
    return jsonify(verified=True, event_type=event.get("event_type"))
