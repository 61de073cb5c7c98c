"""
FILE: coinvest_engine/core/inputs.py
Coercion of caller-supplied amounts and records into engine types.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from coinvest_engine.core.models import InvestmentBundle, InvestorProfile

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def to_amount(value: Any) -> Optional[Decimal]:
    """
    Returns the value as a finite Decimal, or None when it is not a usable number.
    Negative values are returned as-is; callers decide whether they are acceptable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite():
        return None
    return amount


def to_non_negative_amount(value: Any) -> Optional[Decimal]:
    amount = to_amount(value)
    if amount is None or amount < Decimal("0"):
        return None
    return amount


def coerce_model(model_cls: Type[_ModelT], value: Any) -> Optional[_ModelT]:
    if isinstance(value, model_cls):
        return value
    if not isinstance(value, dict):
        return None
    try:
        return model_cls.model_validate(value)
    except ValidationError:
        return None


def coerce_investor(value: Any) -> Optional[InvestorProfile]:
    return coerce_model(InvestorProfile, value)


def coerce_bundle(value: Any) -> Optional[InvestmentBundle]:
    return coerce_model(InvestmentBundle, value)


def is_record_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def format_amount(amount: Decimal) -> str:
    return f"${amount:,f}"
