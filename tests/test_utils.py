import io
import logging

import pytest
from cryptography.fernet import Fernet

from paypal_checkout.paypal import ClientConfig, Credential
from paypal_checkout.paypal import urls
from paypal_checkout.utils.encryption import decrypt_data, encrypt_data
from paypal_checkout.utils.exceptions import (
    ConfigurationError,
    GatewayOperationError,
    OrderNotCompletedError,
)
from paypal_checkout.utils.logging import RedactCredentialsFilter


def test_build_url_interpolates_and_quotes():
    assert urls.build_url(urls.SANDBOX_BASE, urls.REFUND_CAPTURE, id="CAP 1") == (
        "https://api-m.sandbox.paypal.com/v2/payments/captures/CAP%201/refund"
    )
    assert urls.build_url("https://example.test/", urls.WEBHOOK_VERIFY) == (
        "https://example.test/v1/notifications/verify-webhook-signature"
    )


def test_base_url_switches_on_sandbox():
    assert urls.base_url(True) == "https://api-m.sandbox.paypal.com"
    assert urls.base_url(False) == "https://api-m.paypal.com"


def test_credential_validity_is_strictly_before_expiry():
    credential = Credential(token="t", expires_at=50.0)
    assert credential.is_valid(49.999)
    assert not credential.is_valid(50.0)
    assert not Credential(token="", expires_at=100.0).is_valid(0)


def test_client_config_hides_secret_in_repr():
    assert "s3cret" not in repr(ClientConfig(client_secret="s3cret"))


def test_encryption_round_trip_with_explicit_key():
    key = Fernet.generate_key().decode()
    token = encrypt_data("client-secret", key)
    assert token != "client-secret"
    assert decrypt_data(token, key) == "client-secret"


def test_encryption_key_from_environment(monkeypatch):
    monkeypatch.setenv("ENCRYPTION_KEY", Fernet.generate_key().decode())
    assert decrypt_data(encrypt_data("value")) == "value"


def test_missing_or_invalid_key(monkeypatch):
    monkeypatch.delenv("ENCRYPTION_KEY", raising=False)
    monkeypatch.setattr("paypal_checkout.utils.encryption.load_dotenv", lambda: None)
    with pytest.raises(ConfigurationError):
        encrypt_data("value")
    with pytest.raises(ConfigurationError):
        encrypt_data("value", "not-a-fernet-key")


def test_nothing_to_encrypt():
    with pytest.raises(ValueError):
        encrypt_data("", Fernet.generate_key().decode())
    with pytest.raises(ValueError):
        decrypt_data("", Fernet.generate_key().decode())


def test_error_payload_and_defaults():
    error = GatewayOperationError("INSTRUMENT_DECLINED", details=[{"issue": "INSTRUMENT_DECLINED"}])
    assert error.message == "INSTRUMENT_DECLINED"
    assert error.status_code == 422
    assert error.payload == {"details": [{"issue": "INSTRUMENT_DECLINED"}]}
    assert str(OrderNotCompletedError()) == "ORDER_NOT_COMPLETED"


def _record(msg, *args):
    return logging.LogRecord("paypal_checkout.token", logging.INFO, __file__, 1, msg, args, None)


def test_redact_filter_masks_bearer_and_basic_credentials():
    record = _record(
        "headers=%s retry with %s",
        {"Authorization": "Bearer A21AAFb-x_9.zZ"},
        "Basic Y2xpZW50LWlkOmNsaWVudC1zZWNyZXQ=",
    )

    assert RedactCredentialsFilter().filter(record) is True
    message = record.getMessage()
    assert "A21AAFb" not in message
    assert "Y2xpZW50" not in message
    assert "'Authorization': 'Bearer ***'" in message
    assert message.endswith("retry with Basic ***")


def test_redact_filter_leaves_other_records_untouched():
    record = _record("PayPal order %s captured", "ORDER-1")

    assert RedactCredentialsFilter().filter(record) is True
    assert record.msg == "PayPal order %s captured"
    assert record.args == ("ORDER-1",)


def test_redact_filter_on_handler_masks_emitted_output():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RedactCredentialsFilter())
    logger = logging.getLogger("paypal_checkout.redaction-test")
    logger.addHandler(handler)
    try:
        logger.warning("Authorization: Bearer secret-token-123")
    finally:
        logger.removeHandler(handler)

    assert stream.getvalue().strip() == "Authorization: Bearer ***"
