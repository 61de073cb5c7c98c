"""Co-invest bundle allocation engine."""

from coinvest_engine.config import load_investment_limits
from coinvest_engine.core import (
    CampaignCheck,
    allocate,
    build_allocation_plan,
    check_campaign,
    clamp_investment_amount,
    evaluate_investment,
    is_usable,
    maximum_investable,
    minimum_viable,
    step_investment_amount,
    usable_campaigns,
    validate,
    validate_total,
)
from coinvest_engine.core.models import (
    DEFAULT_LIMITS,
    AllocationPlan,
    AllocationValidationResult,
    AllocationViolation,
    Campaign,
    DebtTerms,
    InstrumentKind,
    InvestmentBundle,
    InvestmentEvaluation,
    InvestmentLimits,
    InvestorProfile,
    OfferingTerms,
    RegulatoryClass,
    SecurityAllocation,
    ViolationCode,
)
from coinvest_engine.observability import JsonFormatter, configure_logging

__all__ = [
    "minimum_viable",
    "validate_total",
    "validate",
    "allocate",
    "build_allocation_plan",
    "maximum_investable",
    "clamp_investment_amount",
    "step_investment_amount",
    "evaluate_investment",
    "CampaignCheck",
    "check_campaign",
    "is_usable",
    "usable_campaigns",
    "load_investment_limits",
    "configure_logging",
    "JsonFormatter",
    "DEFAULT_LIMITS",
    "AllocationPlan",
    "AllocationValidationResult",
    "AllocationViolation",
    "Campaign",
    "DebtTerms",
    "InstrumentKind",
    "InvestmentBundle",
    "InvestmentEvaluation",
    "InvestmentLimits",
    "InvestorProfile",
    "OfferingTerms",
    "RegulatoryClass",
    "SecurityAllocation",
    "ViolationCode",
]
