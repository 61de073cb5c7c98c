"""
FILE: coinvest_engine/core/bounds.py
Advisory lower/upper bounds for the amount an investor may commit to a bundle.
"""

from decimal import Decimal
from typing import Any, Optional

from coinvest_engine.core.campaigns import usable_campaigns
from coinvest_engine.core.inputs import (
    coerce_bundle,
    coerce_investor,
    is_record_list,
    to_amount,
)
from coinvest_engine.core.models import DEFAULT_LIMITS, InstrumentKind, InvestmentLimits


def minimum_viable(
    campaigns: Any, bundle: Any, limits: Optional[InvestmentLimits] = None
) -> Decimal:
    """
    Smallest total that is structurally investable for the bundle.

    Debt bundles are entered through the first usable campaign's unit price; equity
    bundles need one unit in every usable campaign. The result never drops below the
    platform minimum.
    """
    limits = limits or DEFAULT_LIMITS
    floor = limits.platform_minimum

    parsed_bundle = coerce_bundle(bundle)
    if parsed_bundle is None or not is_record_list(campaigns):
        return floor

    usable = usable_campaigns(campaigns)
    if not usable:
        return floor

    if parsed_bundle.instrument == InstrumentKind.DEBT:
        entry = usable[0].offering_terms.min_amount
    else:
        entry = sum((c.offering_terms.min_amount for c in usable), Decimal("0"))
    return max(entry, floor)


def maximum_investable(
    investor: Any,
    bundle: Any,
    campaigns: Any,
    limits: Optional[InvestmentLimits] = None,
) -> Optional[Decimal]:
    """
    Largest total the investor may commit, or None when nothing bounds it.

    Debt bundles are bounded by their goal. Equity bundles are bounded by the
    per-startup cap for investors who are not accredited, and by the campaigns'
    maximum raises otherwise. For investors who are not accredited, a yearly
    investment limit narrows either bound; accredited investors have no yearly limit.
    """
    limits = limits or DEFAULT_LIMITS

    parsed_investor = coerce_investor(investor)
    parsed_bundle = coerce_bundle(bundle)
    if parsed_investor is None or parsed_bundle is None or not is_record_list(campaigns):
        return None

    usable = usable_campaigns(campaigns)
    if not usable:
        return None

    ceiling: Optional[Decimal]
    if parsed_bundle.instrument == InstrumentKind.DEBT:
        ceiling = parsed_bundle.goal
    elif not parsed_investor.is_accredited:
        ceiling = limits.non_accredited_max_per_startup * len(usable)
    elif all(c.offering_terms.max_amount is not None for c in usable):
        ceiling = sum((c.offering_terms.max_amount for c in usable), Decimal("0"))
    else:
        ceiling = None

    yearly_limit = parsed_investor.yearly_investment_limit
    if not parsed_investor.is_accredited and yearly_limit is not None:
        headroom = max(Decimal("0"), yearly_limit - parsed_investor.invested_this_year)
        ceiling = headroom if ceiling is None else min(ceiling, headroom)

    return ceiling


def clamp_investment_amount(
    amount: Any, minimum: Decimal, maximum: Optional[Decimal] = None
) -> Decimal:
    parsed = to_amount(amount)
    if parsed is None or parsed < minimum:
        return minimum
    if maximum is not None and parsed > maximum:
        return max(maximum, minimum)
    return parsed


def step_investment_amount(
    amount: Any,
    direction: int,
    minimum: Decimal,
    maximum: Optional[Decimal] = None,
    limits: Optional[InvestmentLimits] = None,
) -> Decimal:
    limits = limits or DEFAULT_LIMITS
    current = clamp_investment_amount(amount, minimum, maximum)
    if direction == 0:
        return current

    step = limits.amount_step if direction > 0 else -limits.amount_step
    candidate = current + step
    if candidate < minimum:
        return current
    if maximum is not None and candidate > maximum:
        return current
    return candidate
