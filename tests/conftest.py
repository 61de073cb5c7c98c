"""
FILE: tests/conftest.py
Shared fixtures for engine tests.
"""

import logging
from pathlib import Path

import pytest

from coinvest_engine.core.models import InvestmentLimits, RegulatoryClass
from tests.factories import debt_bundle, equity_bundle, investor, three_equity_campaigns


def _has_marker(item: pytest.Item, name: str) -> bool:
    return item.get_closest_marker(name) is not None


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if (
            _has_marker(item, "unit")
            or _has_marker(item, "integration")
            or _has_marker(item, "e2e")
        ):
            continue

        path = Path(str(item.fspath)).as_posix().lower()
        if "/tests/integration/" in path:
            item.add_marker(pytest.mark.integration)
            continue
        if "/tests/e2e/" in path:
            item.add_marker(pytest.mark.e2e)
            continue
        item.add_marker(pytest.mark.unit)


@pytest.fixture
def accredited_investor():
    return investor(RegulatoryClass.ACCREDITED)


@pytest.fixture
def retail_investor():
    return investor(RegulatoryClass.NOT_ACCREDITED)


@pytest.fixture
def equity_campaigns():
    return three_equity_campaigns()


@pytest.fixture
def base_equity_bundle():
    return equity_bundle("1000000", campaign_ids=["cmp_1", "cmp_2", "cmp_3"])


@pytest.fixture
def base_debt_bundle():
    return debt_bundle("100000", campaign_ids=["cmp_debt"])


@pytest.fixture
def default_limits():
    return InvestmentLimits()


@pytest.fixture(autouse=True)
def isolated_allocation_env(monkeypatch: pytest.MonkeyPatch):
    """Keep limit overrides from the developer's shell out of the test run."""

    for name in (
        "ALLOCATION_PLATFORM_MINIMUM",
        "ALLOCATION_NON_ACCREDITED_MAX_PER_STARTUP",
        "ALLOCATION_AMOUNT_STEP",
        "LOG_LEVEL",
        "SERVICE_NAME",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    yield
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
