"""
FILE: coinvest_engine/core/allocation.py
Proportional split of a validated bundle investment into per-campaign allocations.

Debt bundles split exactly by target proportion (fractional units allowed).
Equity bundles buy whole units in two passes:
  1. one unit in every campaign;
  2. a single top-up sweep that spends the remainder by target proportion,
     flooring to whole units. Whatever flooring leaves behind stays unallocated.
"""

import logging
from decimal import ROUND_FLOOR, Decimal
from functools import reduce
from typing import Any, List, Tuple

from coinvest_engine.core.campaigns import usable_campaigns
from coinvest_engine.core.inputs import (
    coerce_bundle,
    coerce_investor,
    is_record_list,
    to_non_negative_amount,
)
from coinvest_engine.core.models import (
    AllocationPlan,
    Campaign,
    InstrumentKind,
    InvestmentBundle,
    SecurityAllocation,
)

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


def _proportion(campaign: Campaign, bundle: InvestmentBundle) -> Decimal:
    return campaign.target_amount / bundle.goal


def _whole_units(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_FLOOR)


def allocate_debt(
    bundle: InvestmentBundle, campaigns: List[Campaign], amount: Decimal
) -> List[SecurityAllocation]:
    allocations = []
    for campaign in campaigns:
        proportion = _proportion(campaign, bundle)
        allocated = amount * proportion
        security_price = campaign.offering_terms.min_amount
        allocations.append(
            SecurityAllocation(
                campaign_id=campaign.id,
                startup_id=campaign.startup_id,
                proportion=proportion,
                max_price=allocated,
                security_price=security_price,
                max_securities=allocated / security_price,
            )
        )
    return allocations


def _top_up(bundle: InvestmentBundle, budget: Decimal):
    """Top-ups are sized from `budget`, the remainder at the start of pass 2."""

    def step(
        acc: Tuple[Decimal, List[SecurityAllocation]],
        pair: Tuple[Campaign, SecurityAllocation],
    ) -> Tuple[Decimal, List[SecurityAllocation]]:
        remaining, allocations = acc
        campaign, floor_allocation = pair
        price = floor_allocation.security_price

        additional = _ZERO
        if remaining > _ZERO:
            target_amount = budget * _proportion(campaign, bundle)
            additional = min(_whole_units(target_amount / price), _whole_units(remaining / price))
            additional = max(additional, _ZERO)

        spent = additional * price
        topped_up = floor_allocation.model_copy(
            update={
                "max_securities": floor_allocation.max_securities + additional,
                "max_price": floor_allocation.max_price + spent,
            }
        )
        return remaining - spent, allocations + [topped_up]

    return step


def allocate_equity(
    bundle: InvestmentBundle, campaigns: List[Campaign], amount: Decimal
) -> List[SecurityAllocation]:
    floor_allocations = [
        SecurityAllocation(
            campaign_id=campaign.id,
            startup_id=campaign.startup_id,
            proportion=_proportion(campaign, bundle),
            max_price=campaign.offering_terms.min_amount,
            security_price=campaign.offering_terms.min_amount,
            max_securities=Decimal("1"),
        )
        for campaign in campaigns
    ]
    remaining = amount - sum((a.max_price for a in floor_allocations), _ZERO)

    if remaining <= _ZERO:
        return floor_allocations

    leftover, allocations = reduce(
        _top_up(bundle, remaining),
        zip(campaigns, floor_allocations),
        (remaining, []),
    )
    logger.debug("Equity top-up left %s unallocated", leftover)
    return allocations


def allocate(investor: Any, bundle: Any, campaigns: Any, amount: Any) -> List[SecurityAllocation]:
    parsed_bundle = coerce_bundle(bundle)
    parsed_amount = to_non_negative_amount(amount)
    if (
        coerce_investor(investor) is None
        or parsed_bundle is None
        or parsed_amount is None
        or not is_record_list(campaigns)
    ):
        return []

    usable = usable_campaigns(campaigns)
    if not usable:
        return []

    if parsed_bundle.instrument == InstrumentKind.DEBT:
        return allocate_debt(parsed_bundle, usable, parsed_amount)
    return allocate_equity(parsed_bundle, usable, parsed_amount)


def build_allocation_plan(
    investor: Any, bundle: Any, campaigns: Any, amount: Any
) -> AllocationPlan:
    allocations = allocate(investor, bundle, campaigns, amount)
    parsed_bundle = coerce_bundle(bundle)
    requested = to_non_negative_amount(amount) or _ZERO
    allocated = sum((a.max_price for a in allocations), _ZERO)

    plan = AllocationPlan(
        instrument=parsed_bundle.instrument if parsed_bundle is not None else None,
        requested_amount=requested,
        allocations=allocations,
        allocated_amount=allocated,
        unallocated_amount=requested - allocated,
    )
    logger.debug(
        "Allocation plan built: campaigns=%d allocated=%s unallocated=%s",
        len(allocations),
        plan.allocated_amount,
        plan.unallocated_amount,
    )
    return plan
