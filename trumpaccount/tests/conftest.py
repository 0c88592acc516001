from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from trumpaccount.app import create_app
from trumpaccount.config import DEFAULT_POLICY


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app(DEFAULT_POLICY)
    with app.test_client() as test_client:
        yield test_client
