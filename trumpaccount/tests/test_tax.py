"""Federal tax, early-withdrawal penalty and the withdrawal timeline.

Dollar figures use the bundled 2025 brackets.
"""

from __future__ import annotations

import math

import pytest

from trumpaccount.core.reference_data import load_tax_brackets
from trumpaccount.core.tax import (
    TIMELINE_AGES,
    calculate_federal_tax,
    calculate_withdrawal,
    generate_withdrawal_timeline,
)
from trumpaccount.models import TaxBracket

SINGLE = load_tax_brackets("single")


def test_no_income_no_tax():
    assert calculate_federal_tax(0, SINGLE) == 0
    assert calculate_federal_tax(-500, SINGLE) == 0


def test_federal_tax_example():
    """$50k of ordinary income for a single filer."""
    assert math.isclose(calculate_federal_tax(50000, SINGLE), 5914.0, abs_tol=0.01)


def test_federal_married_joint():
    """Married filing jointly should use the wider brackets."""
    tax = calculate_federal_tax(50000, load_tax_brackets("marriedFilingJointly"))
    assert math.isclose(tax, 2385.0 + (50000 - 23850) * 0.12, abs_tol=0.01)


def test_tax_is_non_decreasing_in_income():
    previous = 0.0
    for income in range(0, 800_001, 7_500):
        tax = calculate_federal_tax(income, SINGLE)
        assert tax >= previous
        previous = tax


def test_custom_two_bracket_schedule():
    brackets = [
        TaxBracket(min=0, max=10000, rate=0.10),
        TaxBracket(min=10000, max=None, rate=0.20),
    ]
    assert calculate_federal_tax(15000, brackets) == 2000.0
    assert calculate_federal_tax(10000, brackets) == 1000.0


def test_withdrawal_taxed_on_top_of_other_income():
    scenario = calculate_withdrawal(
        age=30,
        balance=50000,
        withdrawal_amount=10000,
        other_income=50000,
        brackets=SINGLE,
    )

    assert scenario.taxableAmount == 10000.0
    assert math.isclose(scenario.federalTax, 8114.0 - 5914.0, abs_tol=0.01)
    assert scenario.earlyWithdrawalPenalty == 1000.0
    assert scenario.netAmount == 6800.0
    assert scenario.effectiveTaxRate == 0.32


@pytest.mark.parametrize("age, penalty", [(59.4, 1000.0), (59.5, 0.0), (65, 0.0), (18, 1000.0)])
def test_penalty_boundary_at_fifty_nine_and_a_half(age, penalty):
    scenario = calculate_withdrawal(
        age=age,
        balance=20000,
        withdrawal_amount=10000,
        other_income=0,
        brackets=SINGLE,
    )
    assert scenario.earlyWithdrawalPenalty == penalty


def test_withdrawal_clipped_to_balance():
    scenario = calculate_withdrawal(age=65, balance=4000, withdrawal_amount=9000, other_income=0, brackets=SINGLE)

    assert scenario.withdrawalAmount == 4000.0
    assert scenario.federalTax == 400.0
    assert scenario.netAmount == 3600.0


def test_zero_withdrawal_has_zero_rate():
    scenario = calculate_withdrawal(age=25, balance=1000, withdrawal_amount=0, other_income=40000, brackets=SINGLE)

    assert scenario.effectiveTaxRate == 0.0
    assert scenario.netAmount == 0.0


def test_filing_status_selects_bundled_brackets():
    single = calculate_withdrawal(age=65, balance=1e6, withdrawal_amount=100000, other_income=0)
    joint = calculate_withdrawal(
        age=65,
        balance=1e6,
        withdrawal_amount=100000,
        other_income=0,
        filing_status="marriedFilingJointly",
    )
    assert joint.federalTax < single.federalTax


def test_timeline_covers_representative_ages():
    scenarios = generate_withdrawal_timeline(
        current_balance=150000,
        annual_return=0.0,
        other_income=50000,
        withdrawal_percentage=1.0,
        brackets=SINGLE,
    )

    assert [s.age for s in scenarios] == list(TIMELINE_AGES)
    assert all(s.balance == 150000.0 for s in scenarios)
    for s in scenarios:
        if s.age < 59.5:
            assert s.earlyWithdrawalPenalty == 15000.0
        else:
            assert s.earlyWithdrawalPenalty == 0.0
    assert scenarios[-1].netAmount > scenarios[0].netAmount


def test_timeline_projects_balance_from_conversion():
    scenarios = generate_withdrawal_timeline(
        current_balance=10000,
        annual_return=0.08,
        other_income=0,
        withdrawal_percentage=0.5,
        brackets=SINGLE,
    )
    by_age = {s.age: s for s in scenarios}

    assert by_age[18].balance == 10000.0
    assert math.isclose(by_age[25].balance, 10000 * 1.08**7, abs_tol=0.01)
    assert math.isclose(by_age[59.5].balance, 10000 * 1.08**41.5, abs_tol=0.01)
    assert math.isclose(by_age[25].withdrawalAmount, by_age[25].balance * 0.5, abs_tol=0.01)


def test_timeline_with_total_loss_handles_ages_before_conversion():
    scenarios = generate_withdrawal_timeline(
        current_balance=10000,
        annual_return=-1.0,
        other_income=0,
        withdrawal_percentage=1.0,
        brackets=SINGLE,
        ages=(16, 18, 30),
    )
    by_age = {s.age: s for s in scenarios}

    assert by_age[16].balance == 0.0
    assert by_age[16].effectiveTaxRate == 0.0
    assert by_age[18].balance == 10000.0
    assert by_age[30].balance == 0.0
