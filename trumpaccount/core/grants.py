"""Private grant eligibility by ZIP code median household income."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from trumpaccount.core.reference_data import Grant

logger = logging.getLogger(__name__)


class GrantResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    grant: Grant
    eligible: bool
    reason: str


class ZipLookupResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    zip: str
    found: bool
    medianIncome: Optional[float] = None
    grants: List[GrantResult]
    totalEligibleAmount: float


def normalize_zip(zip_code: str) -> str:
    return zip_code.strip().zfill(5)


def check_grant_eligibility(
    zip_code: str,
    incomes: Mapping[str, float],
    grants: Sequence[Grant],
) -> ZipLookupResult:
    """Compare the ZIP's median income with each grant's threshold."""
    normalized = normalize_zip(zip_code)
    income = incomes.get(normalized)
    found = income is not None
    if not found:
        logger.warning("ZIP %s not found in income data", normalized)

    results: List[GrantResult] = []
    for grant in grants:
        threshold = grant.eligibility.maxMedianIncome
        if not found:
            results.append(
                GrantResult(
                    grant=grant,
                    eligible=False,
                    reason=(
                        f"ZIP code {normalized} was not found in Census data. "
                        "It may be a PO Box, military, or very new ZIP code."
                    ),
                )
            )
        elif income > threshold:
            results.append(
                GrantResult(
                    grant=grant,
                    eligible=False,
                    reason=f"Median household income (${income:,.0f}) exceeds the ${threshold:,.0f} threshold.",
                )
            )
        else:
            results.append(
                GrantResult(
                    grant=grant,
                    eligible=True,
                    reason=f"Median household income (${income:,.0f}) is below the ${threshold:,.0f} threshold.",
                )
            )

    return ZipLookupResult(
        zip=normalized,
        found=found,
        medianIncome=income,
        grants=results,
        totalEligibleAmount=sum(r.grant.amount for r in results if r.eligible),
    )
