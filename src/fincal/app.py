"""
Flask Application Factory.

Creates and configures the calendar query API.
"""

from typing import Optional

from flask import Flask

from fincal.api import api_bp
from fincal.config import settings
from fincal.infrastructure.logging import log_request_context, logger


def create_app(config: Optional[dict] = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config: Optional configuration dictionary.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    app.json.sort_keys = False

    if config:
        app.config.update(config)

    log_request_context(app)

    app.register_blueprint(api_bp)

    logger.info(
        "Application initialized",
        extra={"extra_fields": {
            "default_market": settings.calendar.default_market,
        }}
    )

    return app


if __name__ == "__main__":
    create_app().run(
        host="0.0.0.0",
        port=settings.port,
        debug=settings.debug,
    )
