from decimal import Decimal

from coinvest_engine.core.models import ViolationCode


def assert_valid(result) -> None:
    assert result.is_valid, result.errors
    assert result.errors == []


def assert_violation(result, code: ViolationCode) -> None:
    assert not result.is_valid
    assert code in result.codes, result.codes


def find_allocation(allocations, campaign_id: str):
    return next((a for a in allocations if a.campaign_id == campaign_id), None)


def total_allocated(allocations) -> Decimal:
    return sum((a.max_price for a in allocations), Decimal("0"))


def units_by_campaign(allocations) -> dict[str, Decimal]:
    return {a.campaign_id: a.max_securities for a in allocations}
