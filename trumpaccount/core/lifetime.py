"""Projection past conversion, when the account follows traditional IRA rules."""

from __future__ import annotations

import logging

from trumpaccount.config import DEFAULT_POLICY, PolicyConfig
from trumpaccount.core.growth import expense_ratio_for, run_contribution_years
from trumpaccount.models import GrowthResult, LifetimeConfiguration

logger = logging.getLogger(__name__)


def calculate_lifetime_growth(
    config: LifetimeConfiguration,
    policy: PolicyConfig = DEFAULT_POLICY,
) -> GrowthResult:
    """
    Contribution years up to the conversion age, then a flat post-majority
    contribution until ``retirementAge``.

    Conventions:
      - Phase one replaces ``config.endAge`` with the conversion age, so a
        flat ``monthlyContribution`` runs all the way to conversion.
      - Phase two starts at the conversion age (or ``startAge`` if later) and
        uses the same yearly step with ``postMajorityContribution``.
      - After conversion contributions no longer add tax-free basis; the basis
        and the taxable amount are reported as of conversion.
    """
    conversion_age = policy.conversionAge
    ledger = run_contribution_years(config.model_copy(update={"endAge": conversion_age}), policy)
    balance_at_conversion = ledger.balance

    extras = config.enhancements
    expense_ratio = expense_ratio_for(config, policy)
    post_return = (
        config.postMajorityReturn
        if config.postMajorityReturn is not None
        else config.annualReturn
    )

    for age in range(max(config.startAge, conversion_age), config.retirementAge):
        ledger.step(
            age,
            config.postMajorityContribution,
            0.0,
            post_return,
            expense_ratio=expense_ratio,
            builds_basis=False,
        )

    logger.debug(
        "lifetime projection to %s: %d snapshots, final balance %.2f",
        config.retirementAge,
        len(ledger.snapshots),
        ledger.balance,
    )

    breakdown = ledger.breakdown(balance_at_conversion) if extras is not None else None
    return ledger.to_result(breakdown)
