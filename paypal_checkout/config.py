import os
from dotenv import load_dotenv
from pathlib import Path

from typing import Type

from flask import Flask

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s | %(name)-20s | %(levelname)-8s | %(message)s"
DEFAULT_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_FILE = None

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


def env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration – never use directly."""
    LOG_LEVEL = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    LOG_FORMAT = os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT)
    LOG_DATEFMT = os.getenv("LOG_DATEFMT", DEFAULT_LOG_DATEFMT)
    LOG_FILE = os.getenv("LOG_FILE", DEFAULT_LOG_FILE)

    PAYPAL_SANDBOX = env_flag("PAYPAL_SANDBOX", True)
    PAYPAL_CLIENT_ID = os.getenv("PAYPAL_CLIENT_ID", "")
    PAYPAL_CLIENT_SECRET = os.getenv("PAYPAL_CLIENT_SECRET", "")
    PAYPAL_WEBHOOK_ID = os.getenv("PAYPAL_WEBHOOK_ID", "")
    PAYPAL_BRAND_NAME = os.getenv("PAYPAL_BRAND_NAME", "")
    PAYPAL_CURRENCY_CODE = os.getenv("PAYPAL_CURRENCY_CODE", "USD")
    PAYPAL_LOCALE = os.getenv("PAYPAL_LOCALE", "en_US")
    PAYPAL_TIMEOUT = float(os.getenv("PAYPAL_TIMEOUT", 30))
    PAYPAL_RATE_LIMIT_CALLS = int(os.getenv("PAYPAL_RATE_LIMIT_CALLS", 120))
    PAYPAL_RATE_LIMIT_PERIOD = float(os.getenv("PAYPAL_RATE_LIMIT_PERIOD", 60))

    # Secrets stored as Fernet tokens, decrypted with ENCRYPTION_KEY
    PAYPAL_SECRETS_ENCRYPTED = env_flag("PAYPAL_SECRETS_ENCRYPTED", False)
    ENCRYPTION_KEY = os.getenv("ENCRYPTION_KEY", "")

    @staticmethod
    def init_app(app: Flask) -> None:
        pass


class DevelopmentConfig(Config):
    DEBUG = True
    HOST = "0.0.0.0"
    PORT = 5000

    @staticmethod
    def init_app(app: Flask) -> None:
        print("→ Development mode active")
        if not app.config.get("PAYPAL_SANDBOX"):
            print(
                "\033[93mWARNING: development mode is talking to the LIVE PayPal host. "
                "Set PAYPAL_SANDBOX=true unless you mean it.\033[0m"
            )


class ProductionConfig(Config):
    HOST = "0.0.0.0"
    PORT = int(os.getenv("PORT", 5000))

    @staticmethod
    def init_app(app: Flask) -> None:
        # Fail fast on a live host without credentials
        if not app.config.get("PAYPAL_SANDBOX") and not (
            app.config.get("PAYPAL_CLIENT_ID") and app.config.get("PAYPAL_CLIENT_SECRET")
        ):
            raise ValueError(
                "PAYPAL_CLIENT_ID and PAYPAL_CLIENT_SECRET must be set in production. "
                "Set them in .env or environment variables."
            )


class TestingConfig(Config):
    TESTING = True
    PAYPAL_SANDBOX = True
    PAYPAL_CLIENT_ID = "test-client-id"
    PAYPAL_CLIENT_SECRET = "test-client-secret"
    PAYPAL_WEBHOOK_ID = "test-webhook-id"
    PAYPAL_BRAND_NAME = "Test Store"
    PAYPAL_CURRENCY_CODE = "USD"
    PAYPAL_SECRETS_ENCRYPTED = False
    SERVER_NAME = "localhost.localdomain"  # allows url_for in tests


config_by_name: dict[str, Type[Config]] = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
