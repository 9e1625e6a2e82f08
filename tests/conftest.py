"""
Test Configuration and Fixtures.

Provides shared fixtures for all tests.
"""

import pytest
from flask import Flask
from flask.testing import FlaskClient

from fincal.app import create_app
from fincal.core import Datetime


@pytest.fixture
def app() -> Flask:
    """Create test Flask application."""
    test_config = {
        "TESTING": True,
    }
    return create_app(test_config)


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create test client."""
    return app.test_client()


@pytest.fixture
def nyse_2017_holidays() -> list:
    """Observed NYSE holidays of 2017."""
    return [
        Datetime(2017, 1, 2),
        Datetime(2017, 1, 16),
        Datetime(2017, 2, 20),
        Datetime(2017, 4, 14),
        Datetime(2017, 5, 29),
        Datetime(2017, 7, 4),
        Datetime(2017, 9, 4),
        Datetime(2017, 11, 23),
        Datetime(2017, 12, 25),
    ]


@pytest.fixture
def uk_2017_holidays() -> list:
    """Observed UK bank holidays of 2017."""
    return [
        Datetime(2017, 1, 2),
        Datetime(2017, 4, 14),
        Datetime(2017, 4, 17),
        Datetime(2017, 5, 1),
        Datetime(2017, 5, 29),
        Datetime(2017, 8, 28),
        Datetime(2017, 12, 25),
        Datetime(2017, 12, 26),
    ]
