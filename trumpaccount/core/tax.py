"""Federal tax and penalty on withdrawals after conversion.

At 18 the account becomes a traditional IRA: withdrawals are ordinary income,
and before 59½ they also carry the early-withdrawal penalty.

Example
-------

>>> from trumpaccount.core.reference_data import load_tax_brackets
>>> calculate_federal_tax(50000, load_tax_brackets("single"))
5914.0
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from trumpaccount.config import DEFAULT_POLICY, PolicyConfig
from trumpaccount.core.reference_data import load_tax_brackets
from trumpaccount.core.rounding import round_cents, round_rate
from trumpaccount.models import FilingStatus, TaxBracket, WithdrawalScenario

logger = logging.getLogger(__name__)

TIMELINE_AGES = (18, 21, 25, 30, 35, 40, 50, 59.5, 65)


def calculate_federal_tax(taxable_income: float, brackets: Sequence[TaxBracket]) -> float:
    """Progressive tax: each bracket taxes the slice of income in [min, max)."""
    tax = 0.0
    for bracket in brackets:
        if taxable_income <= bracket.min:
            break
        top = taxable_income if bracket.max is None else min(taxable_income, bracket.max)
        tax += (top - bracket.min) * bracket.rate
    return round_cents(tax)


def calculate_withdrawal(
    age: float,
    balance: float,
    withdrawal_amount: float,
    other_income: float,
    filing_status: FilingStatus = "single",
    brackets: Optional[Sequence[TaxBracket]] = None,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> WithdrawalScenario:
    """Tax and penalty on one withdrawal stacked on top of other income.

    The withdrawal is clipped to the balance. Tax is the increase in federal
    tax caused by adding the withdrawal to ``other_income``. Without explicit
    ``brackets`` the bundled schedule for ``filing_status`` is used.
    """
    schedule = list(brackets) if brackets is not None else load_tax_brackets(filing_status)

    actual = min(withdrawal_amount, balance)
    taxable = actual

    incremental_tax = calculate_federal_tax(other_income + taxable, schedule) - calculate_federal_tax(
        other_income, schedule
    )
    penalty = actual * policy.earlyWithdrawalPenaltyRate if age < policy.penaltyFreeAge else 0.0
    net = actual - incremental_tax - penalty
    effective_rate = (incremental_tax + penalty) / actual if actual else 0.0

    return WithdrawalScenario(
        age=age,
        balance=round_cents(balance),
        withdrawalAmount=round_cents(actual),
        taxableAmount=round_cents(taxable),
        federalTax=round_cents(incremental_tax),
        earlyWithdrawalPenalty=round_cents(penalty),
        netAmount=round_cents(net),
        effectiveTaxRate=round_rate(effective_rate),
    )


def generate_withdrawal_timeline(
    current_balance: float,
    annual_return: float,
    other_income: float,
    withdrawal_percentage: float,
    filing_status: FilingStatus = "single",
    brackets: Optional[Sequence[TaxBracket]] = None,
    ages: Sequence[float] = TIMELINE_AGES,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> List[WithdrawalScenario]:
    """Withdraw the same share of the balance at each age to show the cost of going early.

    ``current_balance`` is the balance at conversion; it grows at
    ``annual_return`` to each age before the withdrawal is taken.
    """
    schedule = list(brackets) if brackets is not None else load_tax_brackets(filing_status)

    # a return below -100% would make fractional powers complex
    growth_factor = max(1 + annual_return, 0.0)

    scenarios: List[WithdrawalScenario] = []
    for age in ages:
        years_of_growth = age - policy.conversionAge
        if growth_factor == 0.0 and years_of_growth < 0:
            # a wiped-out account cannot be discounted back to a finite balance
            projected = 0.0
        else:
            projected = current_balance * growth_factor**years_of_growth
        scenarios.append(
            calculate_withdrawal(
                age=age,
                balance=projected,
                withdrawal_amount=projected * withdrawal_percentage,
                other_income=other_income,
                filing_status=filing_status,
                brackets=schedule,
                policy=policy,
            )
        )

    logger.debug("withdrawal timeline for %d ages, %s filer", len(scenarios), filing_status)
    return scenarios
