"""
FILE: coinvest_engine/core/compliance.py
Total-amount and per-campaign validation of a proposed bundle investment.
Every failure is reported as an AllocationViolation; nothing here raises for bad input.
"""

import logging
from decimal import Decimal
from typing import Any, List, Optional

from coinvest_engine.core.campaigns import usable_campaigns
from coinvest_engine.core.inputs import (
    coerce_bundle,
    coerce_investor,
    format_amount,
    is_record_list,
    to_non_negative_amount,
)
from coinvest_engine.core.models import (
    DEFAULT_LIMITS,
    AllocationValidationResult,
    AllocationViolation,
    Campaign,
    InstrumentKind,
    InvestmentBundle,
    InvestmentLimits,
    InvestorProfile,
    ViolationCode,
)

logger = logging.getLogger(__name__)


def _malformed(message: str = "Invalid parameters") -> AllocationValidationResult:
    return AllocationValidationResult.from_violations(
        [AllocationViolation(code=ViolationCode.MALFORMED_INPUT, message=message)]
    )


def _check_total(
    amount: Decimal, bundle: InvestmentBundle, limits: InvestmentLimits
) -> List[AllocationViolation]:
    violations = []

    floor = limits.platform_minimum
    if amount < floor:
        violations.append(
            AllocationViolation(
                code=ViolationCode.BELOW_PLATFORM_FLOOR,
                message=f"Total investment must be at least {format_amount(floor)}",
                measured=amount,
                threshold={"min": floor},
            )
        )

    if bundle.instrument == InstrumentKind.DEBT and amount > bundle.goal:
        violations.append(
            AllocationViolation(
                code=ViolationCode.EXCEEDS_BUNDLE_GOAL,
                message=(
                    f"Total investment cannot exceed the bundle goal of "
                    f"{format_amount(bundle.goal)}"
                ),
                measured=amount,
                threshold={"max": bundle.goal},
            )
        )

    return violations


def validate_total(
    amount: Any, bundle: Any, limits: Optional[InvestmentLimits] = None
) -> AllocationValidationResult:
    limits = limits or DEFAULT_LIMITS

    parsed_bundle = coerce_bundle(bundle)
    if parsed_bundle is None:
        return _malformed()

    parsed_amount = to_non_negative_amount(amount)
    if parsed_amount is None:
        return AllocationValidationResult.from_violations(
            [AllocationViolation(code=ViolationCode.INVALID_AMOUNT, message="Invalid amount")]
        )

    return AllocationValidationResult.from_violations(
        _check_total(parsed_amount, parsed_bundle, limits)
    )


def _check_equity_units(
    amount: Decimal,
    campaigns: List[Campaign],
    is_accredited: bool,
    limits: InvestmentLimits,
) -> List[AllocationViolation]:
    violations = []
    cap = limits.non_accredited_max_per_startup

    remaining = amount
    for campaign in campaigns:
        unit_price = campaign.offering_terms.min_amount
        remaining -= unit_price

        if not is_accredited and unit_price > cap:
            violations.append(
                AllocationViolation(
                    code=ViolationCode.EXCEEDS_ACCREDITATION_CAP,
                    message=(
                        f"Minimum purchase for startup {campaign.startup_id} exceeds "
                        f"non-accredited investor limit of {format_amount(cap)}"
                    ),
                    campaign_id=campaign.id,
                    measured=unit_price,
                    threshold={"max": cap},
                )
            )

    ceiling = cap * len(campaigns)
    if not is_accredited and amount > ceiling:
        violations.append(
            AllocationViolation(
                code=ViolationCode.EXCEEDS_ACCREDITATION_CAP,
                message=(
                    f"Total investment exceeds non-accredited investor limit of "
                    f"{format_amount(ceiling)} across {len(campaigns)} startups"
                ),
                measured=amount,
                threshold={"max": ceiling},
            )
        )

    if remaining < Decimal("0"):
        required = amount - remaining
        violations.append(
            AllocationViolation(
                code=ViolationCode.INSUFFICIENT_FOR_WHOLE_UNITS,
                message=(
                    f"Investment is {format_amount(-remaining)} short of the "
                    f"{format_amount(required)} needed to purchase at least one security "
                    "in every campaign"
                ),
                measured=amount,
                threshold={"min": required},
            )
        )

    return violations


def _check_annual_limit(amount: Decimal, investor: InvestorProfile) -> List[AllocationViolation]:
    limit = investor.yearly_investment_limit
    if investor.is_accredited or limit is None:
        return []
    committed = investor.invested_this_year + amount
    if committed <= limit:
        return []
    headroom = max(Decimal("0"), limit - investor.invested_this_year)
    return [
        AllocationViolation(
            code=ViolationCode.EXCEEDS_ANNUAL_LIMIT,
            message=(
                f"Investment exceeds the remaining yearly investment limit of "
                f"{format_amount(headroom)}"
            ),
            measured=committed,
            threshold={"max": limit},
        )
    ]


def validate(
    investor: Any,
    bundle: Any,
    campaigns: Any,
    amount: Any,
    limits: Optional[InvestmentLimits] = None,
) -> AllocationValidationResult:
    limits = limits or DEFAULT_LIMITS

    parsed_investor = coerce_investor(investor)
    parsed_bundle = coerce_bundle(bundle)
    if parsed_investor is None or parsed_bundle is None or not is_record_list(campaigns):
        logger.debug("Allocation validation rejected malformed parameters")
        return _malformed()

    usable = usable_campaigns(campaigns)
    if not usable:
        return AllocationValidationResult.from_violations(
            [
                AllocationViolation(
                    code=ViolationCode.NO_USABLE_CAMPAIGNS,
                    message="Bundle has no campaigns that can accept investment",
                )
            ]
        )

    total_result = validate_total(amount, parsed_bundle, limits)
    if not total_result.is_valid:
        return total_result

    parsed_amount = to_non_negative_amount(amount)
    violations: List[AllocationViolation] = []
    if parsed_bundle.instrument == InstrumentKind.EQUITY:
        violations.extend(
            _check_equity_units(parsed_amount, usable, parsed_investor.is_accredited, limits)
        )
    violations.extend(_check_annual_limit(parsed_amount, parsed_investor))

    result = AllocationValidationResult.from_violations(violations)
    logger.debug(
        "Allocation validation complete: bundle=%s instrument=%s valid=%s violations=%d",
        parsed_bundle.id,
        parsed_bundle.instrument.value,
        result.is_valid,
        len(violations),
    )
    return result
