import os
from typing import Any, Optional

from flask import Flask

from dotenv import load_dotenv

from .config import config_by_name
from .utils.logging import setup_logging
from .utils.extensions import paypal

load_dotenv()

def create_app(config_name: Optional[str] = None, transport: Any = None) -> Flask:
    """
    Application factory.
    Keeps startup side-effects isolated and testable.
    """
    config_name = config_name or os.getenv("FLASK_ENV", "default")
    app = Flask(__name__, instance_relative_config=True)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    app.config.from_object(config_by_name[config_name])
    app.config.from_envvar("PAYPAL_SETTINGS", silent=True)
    config_by_name[config_name].init_app(app)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    setup_logging(app)

    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------
    paypal.init_app(app, transport=transport)

    with app.app_context():
        from .blueprints import init_blueprints
        init_blueprints(app)
        from .utils.error_handlers import register_error_handlers
        register_error_handlers(app)

        app.logger.info(
            "PayPal checkout %s server ready (%s)",
            config_name,
            "sandbox" if app.config.get("PAYPAL_SANDBOX") else "live",
        )

    return app
