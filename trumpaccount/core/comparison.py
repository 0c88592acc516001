"""Trump Account vs. 529 vs. custodial Roth IRA vs. UTMA/UGMA."""

from __future__ import annotations

from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict

from trumpaccount.config import DEFAULT_POLICY, PolicyConfig
from trumpaccount.core.rounding import round_cents

TRUMP_ACCOUNT = "trumpAccount"


class AccountType(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    annualLimit: float
    taxOnContributions: Literal["after-tax", "pre-tax", "varies"]
    taxOnGrowth: Literal["tax-deferred", "tax-free", "taxable"]
    taxOnWithdrawal: str
    investmentOptions: str
    ageRestriction: str
    incomeRestriction: str
    usageRestriction: str
    federalSeedMoney: float
    employerContribution: bool


class ComparisonProjection(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    accountType: str
    year: int
    age: int
    balance: float


def account_types(policy: PolicyConfig = DEFAULT_POLICY) -> Dict[str, AccountType]:
    """Reference table; the Trump Account row follows the policy limits."""
    return {
        TRUMP_ACCOUNT: AccountType(
            name="Trump Account (§530A)",
            annualLimit=policy.annualContributionCap,
            taxOnContributions="after-tax",
            taxOnGrowth="tax-deferred",
            taxOnWithdrawal="Ordinary income tax (traditional IRA rules at 18)",
            investmentOptions="S&P 500 or broad U.S. equity index funds/ETFs only",
            ageRestriction="Under 18 at end of election year; converts to IRA at 18",
            incomeRestriction="None",
            usageRestriction=(
                "No withdrawals before 18 (except rollovers, excess, or death). "
                "Standard IRA rules after 18."
            ),
            federalSeedMoney=policy.pilotDeposit,
            employerContribution=True,
        ),
        "plan529": AccountType(
            name="529 Education Savings",
            annualLimit=18000,
            taxOnContributions="after-tax",
            taxOnGrowth="tax-free",
            taxOnWithdrawal="Tax-free for qualified education expenses; 10% penalty + income tax otherwise",
            investmentOptions="State-specific plan options (mutual funds, age-based portfolios)",
            ageRestriction="None",
            incomeRestriction="None",
            usageRestriction=(
                "Qualified education expenses (tuition, room, board, K-12 up to $10K/yr). "
                "Can roll to Roth IRA (limits apply)."
            ),
            federalSeedMoney=0,
            employerContribution=False,
        ),
        "rothIRA": AccountType(
            name="Roth IRA (Custodial)",
            annualLimit=7000,
            taxOnContributions="after-tax",
            taxOnGrowth="tax-free",
            taxOnWithdrawal="Tax-free on qualified distributions (age 59½ + 5-year rule)",
            investmentOptions="Stocks, bonds, ETFs, mutual funds",
            ageRestriction="Child must have earned income",
            incomeRestriction="MAGI limits apply ($161K single, $240K joint for 2025)",
            usageRestriction="Contributions can be withdrawn anytime. Earnings penalty-free at 59½.",
            federalSeedMoney=0,
            employerContribution=False,
        ),
        "custodialUTMA": AccountType(
            name="UTMA/UGMA Custodial",
            annualLimit=18000,
            taxOnContributions="after-tax",
            taxOnGrowth="taxable",
            taxOnWithdrawal="Kiddie tax on unearned income over $2,500 (2025)",
            investmentOptions="Stocks, bonds, ETFs, mutual funds, real estate",
            ageRestriction="Transfers to child at 18-25 depending on state",
            incomeRestriction="None",
            usageRestriction="Must be used for benefit of minor. Becomes child's asset at majority age.",
            federalSeedMoney=0,
            employerContribution=False,
        ),
    }


def compare_account_growth(
    annual_contribution: float,
    annual_return: float,
    years: int,
    birth_year: int,
    include_pilot_deposit: bool = True,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> List[ComparisonProjection]:
    """Grow the same yearly contribution in each account type, capped at its limit.

    Only the Trump Account starts with the pilot deposit. Rows are grouped by
    account type, then by year.
    """
    rows: List[ComparisonProjection] = []
    for key, account in account_types(policy).items():
        contribution = min(annual_contribution, account.annualLimit)
        balance = account.federalSeedMoney if key == TRUMP_ACCOUNT and include_pilot_deposit else 0.0

        for year in range(years):
            balance = (balance + contribution) * (1 + annual_return)
            rows.append(
                ComparisonProjection(
                    accountType=account.name,
                    year=birth_year + year + 1,
                    age=year + 1,
                    balance=round_cents(balance),
                )
            )
    return rows
