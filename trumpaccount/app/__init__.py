"""Application factory and app-wide configuration."""

import logging
import os
from typing import Optional

from flask import Flask
from flask_cors import CORS

from trumpaccount.app.api.routes import api_bp
from trumpaccount.config import POLICY_FILE_ENV, PolicyConfig, load_policy

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [
    "http://localhost:4321",
    "http://127.0.0.1:4321",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def create_app(policy: Optional[PolicyConfig] = None) -> Flask:
    """Build the Flask app instance.

    The policy comes from the argument, else from the JSON file named by
    ``TRUMPACCOUNT_POLICY_FILE``, else the built-in defaults.
    """
    app = Flask(__name__)

    if policy is None:
        policy = load_policy(os.environ.get(POLICY_FILE_ENV))
    app.config["POLICY"] = policy

    CORS(
        app,
        resources={r"/api/*": {"origins": ALLOWED_ORIGINS}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.debug("app created with cap %.2f", policy.annualContributionCap)
    return app
