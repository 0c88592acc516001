from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

FilingStatus = Literal["single", "marriedFilingJointly"]


class ContributionPhase(BaseModel):
    """Flat monthly contribution for ages in [fromAge, toAge)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    fromAge: int
    toAge: int
    monthlyAmount: float

    def covers(self, age: int) -> bool:
        return self.fromAge <= age < self.toAge


class GrowthEnhancements(BaseModel):
    """Optional rules layered on top of the basic phased simulation.

    Supplying this block switches the result to the enhanced variant, which
    carries a ``ContributionBreakdown``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    inflationIndexedCap: bool = False
    employerAnnualContribution: float = 0.0
    # None -> the policy default
    supplementalGrant: Optional[float] = None
    expenseRatio: Optional[float] = None


class GrowthConfiguration(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    birthYear: int
    # None -> policy pilot deposit when the birth year is eligible
    pilotDeposit: Optional[float] = None
    annualReturn: float
    phases: List[ContributionPhase] = []
    # used only when no phases are given
    monthlyContribution: Optional[float] = None
    startAge: int = 0
    endAge: int = 18
    enhancements: Optional[GrowthEnhancements] = None


class LifetimeConfiguration(GrowthConfiguration):
    retirementAge: int = 65
    # flat annual amount added every year after conversion
    postMajorityContribution: float = 0.0
    # None -> keep annualReturn
    postMajorityReturn: Optional[float] = None


class YearlySnapshot(BaseModel):
    """One simulated year. ``age`` is the age reached at year end."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    age: int
    year: int
    startBalance: float
    contributions: float
    personalContribution: float
    employerContribution: float
    earnings: float
    expenses: float
    effectiveCap: Optional[float] = None
    taxFreeBasis: float
    endBalance: float


class ContributionBreakdown(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    totalPersonalContributions: float
    totalEmployerContributions: float
    taxFreeBasis: float
    taxableAtConversion: float
    totalExpenses: float


class GrowthResult(BaseModel):
    """Totals for one simulation run.

    ``totalContributions`` excludes the seed, so
    ``finalBalance == seed + totalContributions + totalEarnings - totalExpenses``
    up to per-year rounding.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    seed: float
    totalContributions: float
    totalEarnings: float
    finalBalance: float
    snapshots: List[YearlySnapshot]
    breakdown: Optional[ContributionBreakdown] = None

    @property
    def totalExpenses(self) -> float:
        return self.breakdown.totalExpenses if self.breakdown else 0.0


class TaxBracket(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float
    max: Optional[float] = None
    rate: float


class WithdrawalScenario(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    age: float
    balance: float
    withdrawalAmount: float
    taxableAmount: float
    federalTax: float
    earlyWithdrawalPenalty: float
    netAmount: float
    effectiveTaxRate: float


class MilestoneTarget(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: float
    label: str
    ageReached: Optional[int] = None
    yearReached: Optional[int] = None

    @property
    def reached(self) -> bool:
        return self.ageReached is not None
