"""Data contracts for the calculator endpoints.

Request models subclass the engine's configuration models and only tighten
the accepted ranges, so a validated request is passed straight to the
calculator.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from trumpaccount.core.analysis import (
    CostOfWaitingConfig,
    EmployerComparisonConfig,
    InflationComparisonConfig,
    MilestoneConfig,
)
from trumpaccount.models import (
    FilingStatus,
    GrowthConfiguration,
    GrowthResult,
    LifetimeConfiguration,
    TaxBracket,
)

RETURN_BOUNDS = dict(ge=-0.5, le=0.5)


class GrowthRequest(GrowthConfiguration):
    """Inputs for a birth-to-18 projection."""

    birthYear: int = Field(..., ge=1900, le=2100)
    pilotDeposit: Optional[float] = Field(
        None,
        ge=0,
        description="Seed deposit credited at the start age; defaults to the pilot deposit for eligible birth years.",
    )
    annualReturn: float = Field(
        ...,
        **RETURN_BOUNDS,
        description="Nominal annual return as a decimal (e.g. 0.08 for 8%).",
    )
    startAge: int = Field(0, ge=0, le=100)
    endAge: int = Field(18, ge=0, le=100)


class LifetimeRequest(LifetimeConfiguration):
    """Inputs for a projection that continues past conversion."""

    birthYear: int = Field(..., ge=1900, le=2100)
    pilotDeposit: Optional[float] = Field(None, ge=0)
    annualReturn: float = Field(..., **RETURN_BOUNDS)
    startAge: int = Field(0, ge=0, le=100)
    retirementAge: int = Field(65, ge=0, le=100)
    postMajorityContribution: float = Field(0.0, ge=0, description="Flat yearly amount added after 18.")
    postMajorityReturn: Optional[float] = Field(None, **RETURN_BOUNDS)


class GrowthResponse(BaseModel):
    result: GrowthResult
    warnings: List[str] = []


class CostOfWaitingRequest(CostOfWaitingConfig):
    birthYear: int = Field(..., ge=1900, le=2100)
    monthlyContribution: float = Field(..., ge=0)
    annualReturn: float = Field(..., **RETURN_BOUNDS)
    startAge1: int = Field(0, ge=0, le=18)
    startAge2: int = Field(..., ge=0, le=18)


class MilestoneRequest(MilestoneConfig):
    birthYear: int = Field(..., ge=1900, le=2100)
    monthlyContribution: float = Field(..., ge=0)
    annualReturn: float = Field(..., **RETURN_BOUNDS)
    retirementAge: int = Field(65, ge=18, le=100)


class InflationRequest(InflationComparisonConfig):
    initialAmount: float = Field(..., ge=0)
    years: int = Field(..., ge=0, le=100)
    inflationRate: float = Field(..., ge=-0.2, le=0.5)
    savingsAPY: float = Field(..., ge=0, le=0.5)
    investmentReturn: float = Field(..., **RETURN_BOUNDS)


class EmployerRequest(EmployerComparisonConfig):
    birthYear: int = Field(..., ge=1900, le=2100)
    monthlyContribution: float = Field(..., ge=0)
    annualReturn: float = Field(..., **RETURN_BOUNDS)
    employerAnnualContribution: float = Field(..., ge=0)
    expenseRatio: Optional[float] = Field(None, ge=0, le=0.05)


class WithdrawalRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    age: float = Field(..., ge=18, le=120)
    balance: float = Field(..., ge=0)
    withdrawalAmount: float = Field(..., ge=0)
    otherIncome: float = Field(0.0, ge=0)
    filingStatus: FilingStatus = "single"
    brackets: Optional[List[TaxBracket]] = None


class WithdrawalTimelineRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    currentBalance: float = Field(..., ge=0, description="Balance at conversion (age 18).")
    annualReturn: float = Field(..., **RETURN_BOUNDS)
    otherIncome: float = Field(0.0, ge=0)
    withdrawalPercentage: float = Field(1.0, ge=0, le=1)
    filingStatus: FilingStatus = "single"
    brackets: Optional[List[TaxBracket]] = None


class ExpenseLeakageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    initialBalance: float = Field(..., ge=0)
    annualContribution: float = Field(0.0, ge=0)
    annualReturn: float = Field(..., **RETURN_BOUNDS)
    expenseRatio: float = Field(..., ge=0, le=0.05)
    years: int = Field(18, ge=0, le=100)


class FundComparisonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ticker: str
    comparisonExpenseRatio: float = Field(..., ge=0, le=0.05)
    initialBalance: float = Field(..., ge=0)
    annualContribution: float = Field(0.0, ge=0)
    annualReturn: float = Field(..., **RETURN_BOUNDS)
    years: int = Field(18, ge=1, le=100)


class AccountComparisonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    annualContribution: float = Field(..., ge=0)
    annualReturn: float = Field(..., **RETURN_BOUNDS)
    years: int = Field(18, ge=0, le=100)
    birthYear: int = Field(..., ge=1900, le=2100)
    includePilotDeposit: bool = True
