"""
FILE: tests/integration/test_allocation_scenarios.py
Reference co-invest scenarios run through the package's public API with storage-shaped records.
"""

from decimal import Decimal

import coinvest_engine
from coinvest_engine import ViolationCode
from tests.assertions import assert_violation, total_allocated
from tests.factories import campaign_record

ACCREDITED = {"userId": "usr_1", "accreditationStatus": "ACCREDITED"}
RETAIL = {"userId": "usr_2", "accreditationStatus": "NOT_ACCREDITED"}

EQUITY_SELECTION = {
    "id": "sel_equity",
    "title": "Three startups",
    "campaigns": ["cmp_1", "cmp_2", "cmp_3"],
    "goal": 1000000,
    "investmentType": "EQUITY",
}
DEBT_SELECTION = {
    "id": "sel_debt",
    "title": "Working capital note",
    "campaigns": ["cmp_debt"],
    "goal": 100000,
    "investmentType": "DEBT",
    "debtTerms": {"interestRate": 8, "maturityMonths": 24, "paymentSchedule": "monthly"},
}
EQUITY_CAMPAIGNS = [
    campaign_record("cmp_1", 1000, 400000),
    campaign_record("cmp_2", 1000, 350000),
    campaign_record("cmp_3", 1000, 250000),
]
DEBT_CAMPAIGNS = [campaign_record("cmp_debt", 100, 100000)]


def test_three_equity_campaigns_top_up_leaves_reported_remainder():
    assert coinvest_engine.validate(ACCREDITED, EQUITY_SELECTION, EQUITY_CAMPAIGNS, 5000).is_valid

    plan = coinvest_engine.build_allocation_plan(
        ACCREDITED, EQUITY_SELECTION, EQUITY_CAMPAIGNS, 5000
    )

    assert [a.max_securities for a in plan.allocations] == [Decimal("1")] * 3
    assert plan.allocated_amount == Decimal("3000")
    assert plan.unallocated_amount == Decimal("5000") - total_allocated(plan.allocations)
    assert plan.unallocated_amount == Decimal("2000")


def test_single_debt_campaign_takes_the_whole_amount_exactly():
    assert coinvest_engine.validate(ACCREDITED, DEBT_SELECTION, DEBT_CAMPAIGNS, 100000).is_valid

    allocations = coinvest_engine.allocate(ACCREDITED, DEBT_SELECTION, DEBT_CAMPAIGNS, 100000)

    assert len(allocations) == 1
    assert allocations[0].max_price == Decimal("100000")
    assert allocations[0].max_securities == Decimal("1000")
    assert allocations[0].proportion == Decimal("1")


def test_equity_amount_below_unit_sum_is_rejected():
    result = coinvest_engine.validate(ACCREDITED, EQUITY_SELECTION, EQUITY_CAMPAIGNS, 2999)

    assert_violation(result, ViolationCode.INSUFFICIENT_FOR_WHOLE_UNITS)


def test_retail_investor_blocked_by_unit_price_above_cap():
    campaigns = [
        campaign_record("cmp_1", 1000, 400000),
        campaign_record("cmp_big", 3000, 600000, startup_id="st_big"),
    ]

    result = coinvest_engine.validate(RETAIL, EQUITY_SELECTION, campaigns, 5000)

    assert result.codes == [ViolationCode.EXCEEDS_ACCREDITATION_CAP]


def test_negative_amount_is_invalid_and_allocates_nothing():
    result = coinvest_engine.validate_total(-50, EQUITY_SELECTION)

    assert_violation(result, ViolationCode.INVALID_AMOUNT)
    assert "invalid amount" in result.errors[0].lower()
    assert coinvest_engine.allocate(ACCREDITED, EQUITY_SELECTION, EQUITY_CAMPAIGNS, -50) == []


def test_debt_amount_above_goal_is_rejected():
    result = coinvest_engine.validate_total(100001, DEBT_SELECTION)

    assert result.codes == [ViolationCode.EXCEEDS_BUNDLE_GOAL]


def test_valid_equity_allocations_stay_within_amount_with_one_unit_each():
    for amount in (3000, 4999, 10000, 123456, 999999):
        result = coinvest_engine.validate(ACCREDITED, EQUITY_SELECTION, EQUITY_CAMPAIGNS, amount)
        assert result.is_valid

        allocations = coinvest_engine.allocate(
            ACCREDITED, EQUITY_SELECTION, EQUITY_CAMPAIGNS, amount
        )

        assert total_allocated(allocations) <= Decimal(amount)
        assert all(a.max_securities >= 1 for a in allocations)
        assert all(a.max_securities == a.max_securities.to_integral_value() for a in allocations)


def test_minimum_suggestion_is_itself_valid():
    floor = coinvest_engine.minimum_viable(EQUITY_CAMPAIGNS, EQUITY_SELECTION)

    assert floor == Decimal("3000")
    assert coinvest_engine.validate(ACCREDITED, EQUITY_SELECTION, EQUITY_CAMPAIGNS, floor).is_valid
