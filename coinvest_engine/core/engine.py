"""
FILE: coinvest_engine/core/engine.py
Single-call evaluation of a bundle investment: suggested floor, validation, allocation.
"""

import logging
from typing import Any, Optional

from coinvest_engine.core.allocation import build_allocation_plan
from coinvest_engine.core.bounds import maximum_investable, minimum_viable
from coinvest_engine.core.compliance import validate
from coinvest_engine.core.inputs import coerce_bundle
from coinvest_engine.core.models import DEFAULT_LIMITS, InvestmentEvaluation, InvestmentLimits

logger = logging.getLogger(__name__)


def evaluate_investment(
    investor: Any,
    bundle: Any,
    campaigns: Any,
    amount: Any,
    limits: Optional[InvestmentLimits] = None,
) -> InvestmentEvaluation:
    """
    Runs the full flow for one proposed amount.

    The allocation plan is only built when validation passes; a blocked evaluation
    still reports the suggested bounds so the caller can offer a corrected amount.
    """
    limits = limits or DEFAULT_LIMITS

    floor = minimum_viable(campaigns, bundle, limits)
    ceiling = maximum_investable(investor, bundle, campaigns, limits)
    validation = validate(investor, bundle, campaigns, amount, limits)

    parsed_bundle = coerce_bundle(bundle)
    bundle_id = parsed_bundle.id if parsed_bundle is not None else None

    if not validation.is_valid:
        logger.warning(
            "Investment blocked",
            extra={
                "extra_fields": {
                    "bundle_id": bundle_id,
                    "violations": [code.value for code in validation.codes],
                }
            },
        )
        return InvestmentEvaluation(
            status="BLOCKED",
            minimum_viable=floor,
            maximum_investable=ceiling,
            validation=validation,
        )

    plan = build_allocation_plan(investor, bundle, campaigns, amount)
    logger.info(
        "Investment ready",
        extra={
            "extra_fields": {
                "bundle_id": bundle_id,
                "campaigns": len(plan.allocations),
                "allocated_amount": str(plan.allocated_amount),
                "unallocated_amount": str(plan.unallocated_amount),
            }
        },
    )
    return InvestmentEvaluation(
        status="READY",
        minimum_viable=floor,
        maximum_investable=ceiling,
        validation=validation,
        plan=plan,
    )
