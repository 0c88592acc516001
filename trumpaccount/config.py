"""Policy constants for the projection engine.

Every number that Congress or the IRS can change lives on ``PolicyConfig`` and
is passed into the calculators explicitly. Nothing in ``core`` reads module
state, so swapping a policy file is enough to model a rule change.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

POLICY_FILE_ENV = "TRUMPACCOUNT_POLICY_FILE"


class PolicyConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # contribution limits
    annualContributionCap: float = Field(default=5000.0, ge=0)
    employerContributionCap: float = Field(default=2500.0, ge=0)
    capRoundingIncrement: float = Field(default=50.0, gt=0)

    # cap indexing
    inflationRate: float = 0.025
    inflationIndexStartYear: int = 2027

    # seed money; the pilot deposit goes to children born in the inclusive window
    pilotDeposit: float = Field(default=1000.0, ge=0)
    pilotEligibleBirthYears: Tuple[int, int] = (2025, 2028)
    supplementalGrant: float = Field(default=250.0, ge=0)

    # fund costs
    defaultExpenseRatio: float = Field(default=0.0003, ge=0)
    maxFundExpenseRatio: float = Field(default=0.001, ge=0)

    # conversion and withdrawal rules
    conversionAge: int = Field(default=18, ge=0)
    penaltyFreeAge: float = Field(default=59.5, ge=0)
    earlyWithdrawalPenaltyRate: float = Field(default=0.10, ge=0, le=1)


DEFAULT_POLICY = PolicyConfig()


def load_policy(path: Optional[Union[str, Path]] = None) -> PolicyConfig:
    """Read a JSON policy override.

    Keys missing from the file keep their defaults, so an override only needs
    the values that changed. Without a path the built-in defaults are returned.
    """
    if path is None:
        return DEFAULT_POLICY

    p = Path(path)
    with open(p, "r", encoding="utf-8") as f:
        overrides = json.load(f)

    policy = PolicyConfig.model_validate(overrides)
    logger.info("loaded policy overrides from %s: %s", p, sorted(overrides))
    return policy
