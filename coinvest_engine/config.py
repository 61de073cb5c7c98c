import os
from decimal import Decimal, InvalidOperation

from coinvest_engine.core.models import InvestmentLimits

_DEFAULTS = InvestmentLimits()


def env_decimal(name: str, default: Decimal) -> Decimal:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = Decimal(value.strip())
    except InvalidOperation:
        return default
    if not parsed.is_finite():
        return default
    return parsed if parsed >= 0 else default


def env_positive_decimal(name: str, default: Decimal) -> Decimal:
    parsed = env_decimal(name, default)
    return parsed if parsed > 0 else default


def load_investment_limits() -> InvestmentLimits:
    return InvestmentLimits(
        platform_minimum=env_decimal("ALLOCATION_PLATFORM_MINIMUM", _DEFAULTS.platform_minimum),
        non_accredited_max_per_startup=env_positive_decimal(
            "ALLOCATION_NON_ACCREDITED_MAX_PER_STARTUP",
            _DEFAULTS.non_accredited_max_per_startup,
        ),
        amount_step=env_positive_decimal("ALLOCATION_AMOUNT_STEP", _DEFAULTS.amount_step),
    )
