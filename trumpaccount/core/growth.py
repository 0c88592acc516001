"""Year-by-year balance growth for the contribution years (birth to 18).

Order of operations (per simulated age):
  1) Pick the contribution from the first phase covering the age.
  2) Cap it at the year's contribution limit; employer money goes in first.
  3) Earnings on (start balance + contribution) at the nominal return, fund
     expenses on the same base at the expense ratio.
  4) Record a snapshot for the age reached at year end.

Values are rounded to the cent when a snapshot is created. The running balance
itself is never rounded, so rounding error does not compound across years.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from trumpaccount.config import DEFAULT_POLICY, PolicyConfig
from trumpaccount.core.rounding import round_cents, round_to_increment
from trumpaccount.models import (
    ContributionBreakdown,
    ContributionPhase,
    GrowthConfiguration,
    GrowthResult,
    YearlySnapshot,
)

logger = logging.getLogger(__name__)


def active_phase(phases: Sequence[ContributionPhase], age: int) -> Optional[ContributionPhase]:
    """First phase covering ``age``; later overlapping phases are ignored."""
    for phase in phases:
        if phase.covers(age):
            return phase
    return None


def effective_phases(config: GrowthConfiguration) -> List[ContributionPhase]:
    """Phases to simulate, falling back to the flat monthly amount."""
    if config.phases:
        return list(config.phases)
    if config.monthlyContribution is None:
        return []
    return [
        ContributionPhase(
            fromAge=config.startAge,
            toAge=config.endAge,
            monthlyAmount=config.monthlyContribution,
        )
    ]


def effective_cap(year: int, policy: PolicyConfig, indexed: bool = False) -> float:
    """Annual contribution limit for a calendar year.

    Indexed limits grow at the policy inflation rate from the index start year
    and are rounded to the nearest $50. Years before the start use the base cap.
    """
    if not indexed:
        return policy.annualContributionCap
    elapsed = max(0, year - policy.inflationIndexStartYear)
    grown = policy.annualContributionCap * (1 + policy.inflationRate) ** elapsed
    return round_to_increment(grown, policy.capRoundingIncrement)


def split_contribution(
    requested_personal: float,
    employer: float,
    employer_cap: float,
    limit: float,
) -> Tuple[float, float]:
    """Return (personal, employer) with employer money applied first."""
    employer_amount = max(0.0, min(employer, employer_cap, limit))
    personal = min(requested_personal, max(limit - employer_amount, 0.0))
    return personal, employer_amount


@dataclass
class GrowthLedger:
    """Running state of one simulation; produces the snapshot history."""

    birth_year: int
    seed: float
    balance: float
    total_contributions: float = 0.0
    total_personal: float = 0.0
    total_employer: float = 0.0
    total_earnings: float = 0.0
    total_expenses: float = 0.0
    tax_free_basis: float = 0.0
    snapshots: List[YearlySnapshot] = field(default_factory=list)

    def step(
        self,
        age: int,
        personal: float,
        employer: float,
        annual_return: float,
        expense_ratio: float = 0.0,
        cap: Optional[float] = None,
        builds_basis: bool = True,
    ) -> YearlySnapshot:
        start = self.balance
        invested = start + personal + employer
        earnings = invested * annual_return
        expenses = invested * expense_ratio
        self.balance = invested + earnings - expenses

        personal_rounded = round_cents(personal)
        employer_rounded = round_cents(employer)
        if builds_basis:
            self.tax_free_basis += personal_rounded

        snapshot = YearlySnapshot(
            age=age + 1,
            year=self.birth_year + age + 1,
            startBalance=round_cents(start),
            contributions=round_cents(personal + employer),
            personalContribution=personal_rounded,
            employerContribution=employer_rounded,
            earnings=round_cents(earnings),
            expenses=round_cents(expenses),
            effectiveCap=cap,
            taxFreeBasis=round_cents(self.tax_free_basis),
            endBalance=round_cents(self.balance),
        )

        # totals add up the rounded yearly figures
        self.total_contributions += snapshot.contributions
        self.total_personal += personal_rounded
        self.total_employer += employer_rounded
        self.total_earnings += snapshot.earnings
        self.total_expenses += snapshot.expenses
        self.snapshots.append(snapshot)
        return snapshot

    def breakdown(self, balance_at_conversion: Optional[float] = None) -> ContributionBreakdown:
        basis = round_cents(self.tax_free_basis)
        converted = self.balance if balance_at_conversion is None else balance_at_conversion
        return ContributionBreakdown(
            totalPersonalContributions=round_cents(self.total_personal),
            totalEmployerContributions=round_cents(self.total_employer),
            taxFreeBasis=basis,
            taxableAtConversion=round_cents(max(converted - basis, 0.0)),
            totalExpenses=round_cents(self.total_expenses),
        )

    def to_result(self, breakdown: Optional[ContributionBreakdown] = None) -> GrowthResult:
        return GrowthResult(
            seed=round_cents(self.seed),
            totalContributions=round_cents(self.total_contributions),
            totalEarnings=round_cents(self.total_earnings),
            finalBalance=round_cents(self.balance),
            snapshots=list(self.snapshots),
            breakdown=breakdown,
        )


def is_pilot_eligible(birth_year: int, policy: PolicyConfig = DEFAULT_POLICY) -> bool:
    first, last = policy.pilotEligibleBirthYears
    return first <= birth_year <= last


def seed_amount(config: GrowthConfiguration, policy: PolicyConfig = DEFAULT_POLICY) -> float:
    """Starting balance: the pilot deposit plus any supplemental grant.

    Unset amounts come from the policy. The pilot deposit is only credited by
    default when the birth year falls in the eligibility window; an explicit
    ``pilotDeposit`` is used as given.
    """
    if config.pilotDeposit is not None:
        pilot = config.pilotDeposit
    elif is_pilot_eligible(config.birthYear, policy):
        pilot = policy.pilotDeposit
    else:
        pilot = 0.0

    extras = config.enhancements
    if extras is None:
        return pilot
    grant = extras.supplementalGrant if extras.supplementalGrant is not None else policy.supplementalGrant
    return pilot + grant


def expense_ratio_for(config: GrowthConfiguration, policy: PolicyConfig = DEFAULT_POLICY) -> float:
    """Fund expense ratio; only enhanced projections charge one."""
    extras = config.enhancements
    if extras is None:
        return 0.0
    return extras.expenseRatio if extras.expenseRatio is not None else policy.defaultExpenseRatio


def run_contribution_years(
    config: GrowthConfiguration,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> GrowthLedger:
    """Simulate ages [startAge, endAge) and return the filled ledger."""
    stop = config.endAge
    phases = effective_phases(config)
    extras = config.enhancements
    expense_ratio = expense_ratio_for(config, policy)
    indexed = bool(extras and extras.inflationIndexedCap)

    seed = seed_amount(config, policy)
    ledger = GrowthLedger(birth_year=config.birthYear, seed=seed, balance=seed)

    for age in range(config.startAge, stop):
        limit = effective_cap(config.birthYear + age, policy, indexed)
        phase = active_phase(phases, age)
        requested = phase.monthlyAmount * 12 if phase else 0.0

        if extras is not None:
            personal, employer = split_contribution(
                requested,
                extras.employerAnnualContribution,
                policy.employerContributionCap,
                limit,
            )
        else:
            personal, employer = min(requested, limit), 0.0

        ledger.step(
            age,
            personal,
            employer,
            config.annualReturn,
            expense_ratio=expense_ratio,
            cap=limit if indexed else None,
        )

    logger.debug(
        "simulated ages %s-%s: %d snapshots, final balance %.2f",
        config.startAge,
        stop,
        len(ledger.snapshots),
        ledger.balance,
    )
    return ledger


def calculate_phased_growth(
    config: GrowthConfiguration,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> GrowthResult:
    """Project the account over [startAge, endAge) using contribution phases.

    The enhanced variant (``config.enhancements`` set) adds the
    personal/employer breakdown to the result.
    """
    ledger = run_contribution_years(config, policy)
    breakdown = ledger.breakdown() if config.enhancements is not None else None
    return ledger.to_result(breakdown)


def calculate_growth(
    config: GrowthConfiguration,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> GrowthResult:
    """Single flat monthly contribution from startAge to endAge.

    Any phases on ``config`` are replaced by one phase built from
    ``monthlyContribution`` (0 when unset).
    """
    flat = ContributionPhase(
        fromAge=config.startAge,
        toAge=config.endAge,
        monthlyAmount=config.monthlyContribution or 0.0,
    )
    return calculate_phased_growth(config.model_copy(update={"phases": [flat]}), policy)


__all__ = [
    "GrowthLedger",
    "active_phase",
    "effective_phases",
    "effective_cap",
    "split_contribution",
    "is_pilot_eligible",
    "seed_amount",
    "expense_ratio_for",
    "run_contribution_years",
    "calculate_phased_growth",
    "calculate_growth",
]
