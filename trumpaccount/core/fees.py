"""Fund expense ratios and what they cost over time."""

from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel, ConfigDict

from trumpaccount.config import DEFAULT_POLICY, PolicyConfig
from trumpaccount.core.reference_data import Fund
from trumpaccount.core.rounding import round_cents


class LeakagePoint(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    balanceWithFees: float
    balanceWithoutFees: float
    cumulativeLeakage: float


class FundCostComparison(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    fund: Fund
    comparisonExpenseRatio: float
    lowCost: List[LeakagePoint]
    highCost: List[LeakagePoint]
    totalLeakageLowCost: float
    totalLeakageHighCost: float
    savings: float


def calculate_expense_leakage(
    initial_balance: float,
    annual_contribution: float,
    annual_return: float,
    expense_ratio: float,
    years: int,
) -> List[LeakagePoint]:
    """Year-by-year balance with and without the fund's expense ratio.

    Contributions go in at the start of each year and grow with it.
    """
    with_fees = initial_balance
    without_fees = initial_balance

    points: List[LeakagePoint] = []
    for year in range(1, years + 1):
        with_fees = (with_fees + annual_contribution) * (1 + annual_return - expense_ratio)
        without_fees = (without_fees + annual_contribution) * (1 + annual_return)
        points.append(
            LeakagePoint(
                year=year,
                balanceWithFees=round_cents(with_fees),
                balanceWithoutFees=round_cents(without_fees),
                cumulativeLeakage=round_cents(without_fees - with_fees),
            )
        )
    return points


def compare_fund_costs(
    fund: Fund,
    comparison_expense_ratio: float,
    initial_balance: float,
    annual_contribution: float,
    annual_return: float,
    years: int,
) -> FundCostComparison:
    """Leakage of a low-cost fund against a pricier alternative over the same horizon."""
    low = calculate_expense_leakage(
        initial_balance, annual_contribution, annual_return, fund.expenseRatio, years
    )
    high = calculate_expense_leakage(
        initial_balance, annual_contribution, annual_return, comparison_expense_ratio, years
    )
    total_low = low[-1].cumulativeLeakage if low else 0.0
    total_high = high[-1].cumulativeLeakage if high else 0.0

    return FundCostComparison(
        fund=fund,
        comparisonExpenseRatio=comparison_expense_ratio,
        lowCost=low,
        highCost=high,
        totalLeakageLowCost=total_low,
        totalLeakageHighCost=total_high,
        savings=round_cents(total_high - total_low),
    )


def eligible_funds(funds: Sequence[Fund], policy: PolicyConfig = DEFAULT_POLICY) -> List[Fund]:
    """Funds whose expense ratio is within the account's fee ceiling."""
    return [fund for fund in funds if fund.expenseRatio <= policy.maxFundExpenseRatio]
