"""Allocation engine core."""

from coinvest_engine.core.allocation import allocate, build_allocation_plan
from coinvest_engine.core.bounds import (
    clamp_investment_amount,
    maximum_investable,
    minimum_viable,
    step_investment_amount,
)
from coinvest_engine.core.campaigns import (
    CampaignCheck,
    check_campaign,
    is_usable,
    usable_campaigns,
)
from coinvest_engine.core.compliance import validate, validate_total
from coinvest_engine.core.engine import evaluate_investment

__all__ = [
    "allocate",
    "build_allocation_plan",
    "clamp_investment_amount",
    "maximum_investable",
    "minimum_viable",
    "step_investment_amount",
    "CampaignCheck",
    "check_campaign",
    "is_usable",
    "usable_campaigns",
    "validate",
    "validate_total",
    "evaluate_investment",
]
