"""
FILE: coinvest_engine/core/campaigns.py
Shape check applied to every campaign record before any allocation math.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from coinvest_engine.core.models import Campaign

logger = logging.getLogger(__name__)

_REASON_BY_FIELD = {
    "id": "MISSING_ID",
    "startup_id": "MISSING_STARTUP_ID",
    "startupId": "MISSING_STARTUP_ID",
    "target_amount": "INVALID_TARGET_AMOUNT",
    "steerup_amount": "INVALID_TARGET_AMOUNT",
    "offering_terms": "INVALID_OFFERING_TERMS",
    "offeringDetails": "INVALID_OFFERING_TERMS",
}
_MIN_AMOUNT_FIELDS = {"min_amount", "minAmount"}


@dataclass(frozen=True)
class CampaignCheck:
    campaign: Optional[Campaign]
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.campaign is not None


def _reason_from_validation_error(exc: ValidationError) -> str:
    for error in exc.errors():
        loc = error.get("loc") or ()
        if not loc:
            continue
        field = loc[0]
        reason = _REASON_BY_FIELD.get(field)
        if reason == "INVALID_OFFERING_TERMS" and len(loc) > 1 and loc[1] in _MIN_AMOUNT_FIELDS:
            return "INVALID_MIN_AMOUNT"
        if reason is not None:
            return reason
    return "MALFORMED_RECORD"


def _parse(record: Any) -> CampaignCheck:
    if isinstance(record, Campaign):
        return CampaignCheck(campaign=record)
    if not isinstance(record, dict):
        return CampaignCheck(campaign=None, reason="MALFORMED_RECORD")
    try:
        return CampaignCheck(campaign=Campaign.model_validate(record))
    except ValidationError as exc:
        return CampaignCheck(campaign=None, reason=_reason_from_validation_error(exc))


def check_campaign(record: Any) -> CampaignCheck:
    parsed = _parse(record)
    campaign = parsed.campaign
    if campaign is None:
        return parsed

    if not campaign.id.strip():
        return CampaignCheck(campaign=None, reason="MISSING_ID")
    if not campaign.startup_id.strip():
        return CampaignCheck(campaign=None, reason="MISSING_STARTUP_ID")
    if not campaign.target_amount.is_finite():
        return CampaignCheck(campaign=None, reason="INVALID_TARGET_AMOUNT")

    min_amount = campaign.offering_terms.min_amount
    if not min_amount.is_finite() or min_amount <= Decimal("0"):
        return CampaignCheck(campaign=None, reason="INVALID_MIN_AMOUNT")

    return CampaignCheck(campaign=campaign)


def is_usable(record: Any) -> bool:
    return check_campaign(record).ok


def usable_campaigns(records: Iterable[Any]) -> List[Campaign]:
    usable: List[Campaign] = []
    for index, record in enumerate(records):
        result = check_campaign(record)
        if result.campaign is None:
            logger.debug("Excluding campaign at position %d: %s", index, result.reason)
            continue
        usable.append(result.campaign)
    return usable
