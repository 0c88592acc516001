from __future__ import annotations

from trumpaccount.config import PolicyConfig
from trumpaccount.core.comparison import TRUMP_ACCOUNT, account_types, compare_account_growth
from trumpaccount.core.grants import check_grant_eligibility, normalize_zip
from trumpaccount.core.reference_data import (
    filing_statuses,
    grants_data_source,
    load_grants,
    load_tax_brackets,
    load_zip_incomes,
)


def test_bundled_brackets_are_gapless():
    assert sorted(filing_statuses()) == ["marriedFilingJointly", "single"]
    for status in filing_statuses():
        brackets = load_tax_brackets(status)
        assert brackets[0].min == 0
        assert brackets[-1].max is None
        for lower, upper in zip(brackets, brackets[1:]):
            assert upper.min == lower.max


def test_grant_eligible_zip():
    result = check_grant_eligibility("30314", load_zip_incomes(), load_grants())

    assert result.found
    assert result.medianIncome == 32475.0
    assert all(g.eligible for g in result.grants)
    assert result.totalEligibleAmount == 250.0
    assert "below the $150,000 threshold" in result.grants[0].reason


def test_grant_high_income_zip():
    result = check_grant_eligibility("90210", load_zip_incomes(), load_grants())

    assert result.found
    assert not any(g.eligible for g in result.grants)
    assert result.totalEligibleAmount == 0
    assert "exceeds" in result.grants[0].reason


def test_grant_unknown_zip():
    result = check_grant_eligibility("99999", load_zip_incomes(), load_grants())

    assert not result.found
    assert result.medianIncome is None
    assert result.totalEligibleAmount == 0
    assert "not found" in result.grants[0].reason


def test_zip_is_normalized():
    assert normalize_zip(" 1002 ") == "01002"
    result = check_grant_eligibility(" 1002", load_zip_incomes(), load_grants())
    assert result.zip == "01002"
    assert result.found
    assert grants_data_source().startswith("Median household income")


def test_account_growth_side_by_side():
    rows = compare_account_growth(
        annual_contribution=5000.0,
        annual_return=0.08,
        years=3,
        birth_year=2025,
    )

    assert len(rows) == 4 * 3
    first_year = {row.accountType: row for row in rows if row.age == 1}
    trump = account_types()[TRUMP_ACCOUNT].name
    assert first_year[trump].balance == 6480.0
    assert first_year["529 Education Savings"].balance == 5400.0
    assert all(row.year == 2025 + row.age for row in rows)


def test_account_limits_cap_contributions():
    rows = compare_account_growth(
        annual_contribution=10000.0,
        annual_return=0.0,
        years=1,
        birth_year=2025,
        include_pilot_deposit=False,
    )
    balances = {row.accountType: row.balance for row in rows}

    assert balances["Trump Account (§530A)"] == 5000.0
    assert balances["Roth IRA (Custodial)"] == 7000.0
    assert balances["UTMA/UGMA Custodial"] == 10000.0


def test_trump_account_row_follows_policy():
    table = account_types(PolicyConfig(annualContributionCap=6000.0, pilotDeposit=500.0))

    assert table[TRUMP_ACCOUNT].annualLimit == 6000.0
    assert table[TRUMP_ACCOUNT].federalSeedMoney == 500.0
