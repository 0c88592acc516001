from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from trumpaccount.config import DEFAULT_POLICY, PolicyConfig
from trumpaccount.core.growth import calculate_growth, calculate_phased_growth
from trumpaccount.core.lifetime import calculate_lifetime_growth
from trumpaccount.core.rounding import round_cents
from trumpaccount.models import (
    GrowthConfiguration,
    GrowthEnhancements,
    GrowthResult,
    LifetimeConfiguration,
    MilestoneTarget,
    YearlySnapshot,
)

logger = logging.getLogger(__name__)

MILESTONE_TARGETS: Tuple[Tuple[float, str], ...] = (
    (10_000, "$10K"),
    (25_000, "$25K"),
    (50_000, "$50K"),
    (100_000, "$100K"),
    (250_000, "$250K"),
    (500_000, "$500K"),
    (1_000_000, "$1M"),
)


# -----------------------------
# Cost of waiting
# -----------------------------


class CostOfWaitingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    birthYear: int
    pilotDeposit: Optional[float] = None
    monthlyContribution: float
    annualReturn: float
    startAge1: int = 0
    startAge2: int


class CostOfWaitingResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    scenario1: GrowthResult
    scenario2: GrowthResult
    difference: float
    # percent of scenario1's final balance, e.g. 23.5 for 23.5%
    percentageLost: float


def calculate_cost_of_waiting(
    config: CostOfWaitingConfig,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> CostOfWaitingResult:
    """Compare two otherwise identical accounts that start contributing at different ages."""

    def run(start_age: int) -> GrowthResult:
        return calculate_growth(
            GrowthConfiguration(
                birthYear=config.birthYear,
                pilotDeposit=config.pilotDeposit,
                monthlyContribution=config.monthlyContribution,
                annualReturn=config.annualReturn,
                startAge=start_age,
                endAge=policy.conversionAge,
            ),
            policy,
        )

    scenario1 = run(config.startAge1)
    scenario2 = run(config.startAge2)

    difference = scenario1.finalBalance - scenario2.finalBalance
    if scenario1.finalBalance == 0:
        percentage_lost = 0.0
    else:
        percentage_lost = difference / scenario1.finalBalance * 100

    return CostOfWaitingResult(
        scenario1=scenario1,
        scenario2=scenario2,
        difference=round_cents(difference),
        percentageLost=round_cents(percentage_lost),
    )


# -----------------------------
# Milestones
# -----------------------------


class MilestoneConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    birthYear: int
    pilotDeposit: Optional[float] = None
    monthlyContribution: float
    annualReturn: float
    startAge: int = 0
    showLifetime: bool = True
    retirementAge: int = 65


class MilestoneResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    growthData: GrowthResult
    milestones: List[MilestoneTarget]


def find_milestones(
    snapshots: Sequence[YearlySnapshot],
    targets: Sequence[Tuple[float, str]] = MILESTONE_TARGETS,
) -> List[MilestoneTarget]:
    """First snapshot (in age order) whose end balance reaches each target.

    Balances are not assumed to be monotonic: each target gets its own linear
    scan from the start of the history.
    """
    found: List[MilestoneTarget] = []
    for amount, label in targets:
        hit: Optional[YearlySnapshot] = next(
            (snap for snap in snapshots if snap.endBalance >= amount),
            None,
        )
        found.append(
            MilestoneTarget(
                amount=amount,
                label=label,
                ageReached=hit.age if hit else None,
                yearReached=hit.year if hit else None,
            )
        )
    return found


def calculate_milestones(
    config: MilestoneConfig,
    policy: PolicyConfig = DEFAULT_POLICY,
    targets: Sequence[Tuple[float, str]] = MILESTONE_TARGETS,
) -> MilestoneResult:
    if config.showLifetime:
        growth = calculate_lifetime_growth(
            LifetimeConfiguration(
                birthYear=config.birthYear,
                pilotDeposit=config.pilotDeposit,
                monthlyContribution=config.monthlyContribution,
                annualReturn=config.annualReturn,
                startAge=config.startAge,
                retirementAge=config.retirementAge,
            ),
            policy,
        )
    else:
        growth = calculate_growth(
            GrowthConfiguration(
                birthYear=config.birthYear,
                pilotDeposit=config.pilotDeposit,
                monthlyContribution=config.monthlyContribution,
                annualReturn=config.annualReturn,
                startAge=config.startAge,
                endAge=policy.conversionAge,
            ),
            policy,
        )

    milestones = find_milestones(growth.snapshots, targets)
    logger.debug(
        "milestones reached: %s",
        [m.label for m in milestones if m.reached],
    )
    return MilestoneResult(growthData=growth, milestones=milestones)


# -----------------------------
# Inflation vs. savings account
# -----------------------------


class InflationComparisonConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    initialAmount: float
    years: int
    inflationRate: float
    savingsAPY: float
    investmentReturn: float


class InflationYear(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    savingsBalance: float
    savingsPurchasingPower: float
    investmentBalance: float
    investmentPurchasingPower: float


class InflationComparisonResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    years: List[InflationYear]
    savingsFinalBalance: float
    savingsFinalPurchasingPower: float
    investmentFinalBalance: float
    investmentFinalPurchasingPower: float
    purchasingPowerLostInSavings: float
    investmentAdvantage: float


def _real(nominal: float, deflator: float) -> float:
    return nominal / deflator if deflator else 0.0


def calculate_inflation_comparison(config: InflationComparisonConfig) -> InflationComparisonResult:
    """Same lump sum in a savings account vs. invested, in today's dollars."""
    savings = config.initialAmount
    investment = config.initialAmount
    savings_real = investment_real = config.initialAmount

    rows: List[InflationYear] = []
    for year in range(1, config.years + 1):
        savings *= 1 + config.savingsAPY
        investment *= 1 + config.investmentReturn
        deflator = (1 + config.inflationRate) ** year
        savings_real = _real(savings, deflator)
        investment_real = _real(investment, deflator)

        rows.append(
            InflationYear(
                year=year,
                savingsBalance=round_cents(savings),
                savingsPurchasingPower=round_cents(savings_real),
                investmentBalance=round_cents(investment),
                investmentPurchasingPower=round_cents(investment_real),
            )
        )

    return InflationComparisonResult(
        years=rows,
        savingsFinalBalance=round_cents(savings),
        savingsFinalPurchasingPower=round_cents(savings_real),
        investmentFinalBalance=round_cents(investment),
        investmentFinalPurchasingPower=round_cents(investment_real),
        purchasingPowerLostInSavings=round_cents(config.initialAmount - savings_real),
        investmentAdvantage=round_cents(investment_real - savings_real),
    )


# -----------------------------
# Employer contributions
# -----------------------------


class EmployerComparisonConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    birthYear: int
    pilotDeposit: Optional[float] = None
    monthlyContribution: float
    annualReturn: float
    employerAnnualContribution: float
    startAge: int = 0
    endAge: int = 18
    inflationIndexedCap: bool = False
    expenseRatio: Optional[float] = None


class EmployerComparisonResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    withEmployer: GrowthResult
    withoutEmployer: GrowthResult
    difference: float
    employerTotal: float


def compare_employer_contribution(
    config: EmployerComparisonConfig,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> EmployerComparisonResult:
    """Same family contribution with and without an employer's annual deposit."""

    def run(employer: float) -> GrowthResult:
        return calculate_phased_growth(
            GrowthConfiguration(
                birthYear=config.birthYear,
                pilotDeposit=config.pilotDeposit,
                monthlyContribution=config.monthlyContribution,
                annualReturn=config.annualReturn,
                startAge=config.startAge,
                endAge=config.endAge,
                enhancements=GrowthEnhancements(
                    inflationIndexedCap=config.inflationIndexedCap,
                    employerAnnualContribution=employer,
                    expenseRatio=config.expenseRatio,
                ),
            ),
            policy,
        )

    with_employer = run(config.employerAnnualContribution)
    without_employer = run(0.0)

    return EmployerComparisonResult(
        withEmployer=with_employer,
        withoutEmployer=without_employer,
        difference=round_cents(with_employer.finalBalance - without_employer.finalBalance),
        employerTotal=with_employer.breakdown.totalEmployerContributions,
    )
