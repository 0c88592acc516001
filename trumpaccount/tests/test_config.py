from __future__ import annotations

import json

from trumpaccount.app import create_app
from trumpaccount.config import DEFAULT_POLICY, POLICY_FILE_ENV, load_policy
from trumpaccount.core.growth import calculate_growth
from trumpaccount.models import GrowthConfiguration


def test_defaults_without_file():
    assert load_policy() is DEFAULT_POLICY
    assert DEFAULT_POLICY.annualContributionCap == 5000.0
    assert DEFAULT_POLICY.penaltyFreeAge == 59.5


def test_partial_override_keeps_other_defaults(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"annualContributionCap": 6000}), encoding="utf-8")

    policy = load_policy(path)

    assert policy.annualContributionCap == 6000.0
    assert policy.employerContributionCap == DEFAULT_POLICY.employerContributionCap


def test_policy_threads_into_calculations(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"annualContributionCap": 6000}), encoding="utf-8")
    config = GrowthConfiguration(birthYear=2025, pilotDeposit=0.0, monthlyContribution=1000.0, annualReturn=0.0)

    default = calculate_growth(config)
    raised = calculate_growth(config, load_policy(path))

    assert default.finalBalance == 18 * 5000.0
    assert raised.finalBalance == 18 * 6000.0


def test_app_reads_policy_file_from_env(tmp_path, monkeypatch):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"pilotDeposit": 1500}), encoding="utf-8")
    monkeypatch.setenv(POLICY_FILE_ENV, str(path))

    app = create_app()
    with app.test_client() as client:
        resp = client.get("/api/policy")

    assert resp.status_code == 200
    assert resp.get_json()["pilotDeposit"] == 1500.0
