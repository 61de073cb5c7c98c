"""
FILE: coinvest_engine/core/models.py
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class RegulatoryClass(str, Enum):
    ACCREDITED = "ACCREDITED"
    NOT_ACCREDITED = "NOT_ACCREDITED"
    PENDING = "PENDING"


class InstrumentKind(str, Enum):
    EQUITY = "EQUITY"
    DEBT = "DEBT"


class ViolationCode(str, Enum):
    MALFORMED_INPUT = "MALFORMED_INPUT"
    NO_USABLE_CAMPAIGNS = "NO_USABLE_CAMPAIGNS"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    BELOW_PLATFORM_FLOOR = "BELOW_PLATFORM_FLOOR"
    EXCEEDS_BUNDLE_GOAL = "EXCEEDS_BUNDLE_GOAL"
    EXCEEDS_ACCREDITATION_CAP = "EXCEEDS_ACCREDITATION_CAP"
    INSUFFICIENT_FOR_WHOLE_UNITS = "INSUFFICIENT_FOR_WHOLE_UNITS"
    EXCEEDS_ANNUAL_LIMIT = "EXCEEDS_ANNUAL_LIMIT"


_RECORD_CONFIG = {"frozen": True, "populate_by_name": True}


class InvestmentLimits(BaseModel):
    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "platform_minimum": "500",
                "non_accredited_max_per_startup": "2500",
                "amount_step": "500",
            }
        },
    }

    platform_minimum: Decimal = Field(
        default=Decimal("500"),
        ge=0,
        description="Absolute minimum total amount accepted for any investment.",
        examples=["500"],
    )
    non_accredited_max_per_startup: Decimal = Field(
        default=Decimal("2500"),
        gt=0,
        description="Per-startup cap applied to investors who are not accredited.",
        examples=["2500"],
    )
    amount_step: Decimal = Field(
        default=Decimal("500"),
        gt=0,
        description="Increment used when stepping an investment amount up or down.",
        examples=["500"],
    )


DEFAULT_LIMITS = InvestmentLimits()


class InvestorProfile(BaseModel):
    model_config = {**_RECORD_CONFIG}

    investor_id: Optional[str] = Field(
        default=None,
        alias="userId",
        description="Optional investor identifier, used for log correlation only.",
        examples=["usr_123"],
    )
    regulatory_class: RegulatoryClass = Field(
        alias="accreditationStatus",
        description="Regulatory classification of the investor.",
        examples=["NOT_ACCREDITED"],
    )
    yearly_investment_limit: Optional[Decimal] = Field(
        default=None,
        ge=0,
        alias="yearlyInvestmentLimit",
        description="Optional cap on the total the investor may commit per calendar year.",
        examples=["100000"],
    )
    invested_this_year: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        alias="investedThisYear",
        description="Amount already committed by the investor in the current year.",
        examples=["0"],
    )

    @field_validator("regulatory_class", mode="before")
    @classmethod
    def normalize_regulatory_class(cls, v):
        if not isinstance(v, str):
            return v
        normalized = v.strip().upper().replace("-", "_").replace(" ", "_")
        if normalized == "NOTACCREDITED":
            return RegulatoryClass.NOT_ACCREDITED.value
        return normalized

    @property
    def is_accredited(self) -> bool:
        return self.regulatory_class == RegulatoryClass.ACCREDITED


class OfferingTerms(BaseModel):
    model_config = {**_RECORD_CONFIG}

    min_amount: Decimal = Field(
        alias="minAmount",
        description="Price of one indivisible unit in the campaign.",
        examples=["1000"],
    )
    max_amount: Optional[Decimal] = Field(
        default=None,
        alias="maxAmount",
        description="Maximum raise accepted by the campaign.",
        examples=["1000000"],
    )
    equity_percentage: Optional[Decimal] = Field(
        default=None,
        alias="equity",
        description="Equity percentage offered by the campaign.",
        examples=["10"],
    )
    valuation: Optional[Decimal] = Field(
        default=None,
        description="Pre-money valuation of the startup.",
        examples=["5000000"],
    )
    offering_document: Optional[str] = Field(
        default=None,
        alias="offeringDocument",
        description="Opaque offering-document reference.",
    )


class Campaign(BaseModel):
    model_config = {**_RECORD_CONFIG}

    id: str = Field(min_length=1, description="Campaign identifier.", examples=["cmp_1"])
    startup_id: str = Field(
        min_length=1,
        alias="startupId",
        description="Identifier of the startup running the campaign.",
        examples=["st_1"],
    )
    lead_id: Optional[str] = Field(
        default=None,
        alias="leadId",
        description="Identifier of the lead investor.",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        alias="createdAt",
        description="Campaign creation timestamp.",
    )
    target_amount: Decimal = Field(
        alias="steerup_amount",
        description="Amount the campaign targets within its bundle.",
        examples=["400000"],
    )
    offering_terms: OfferingTerms = Field(
        alias="offeringDetails",
        description="Offering terms, including the unit price.",
    )


class DebtTerms(BaseModel):
    model_config = {**_RECORD_CONFIG}

    interest_rate: Decimal = Field(
        ge=0,
        alias="interestRate",
        description="Annual interest rate in percent.",
        examples=["9.5"],
    )
    maturity_months: int = Field(
        ge=0,
        alias="maturityMonths",
        description="Loan maturity in months.",
        examples=[36],
    )
    payment_schedule: Literal["monthly", "quarterly", "annually"] = Field(
        default="monthly",
        alias="paymentSchedule",
        description="Repayment cadence.",
        examples=["quarterly"],
    )


class InvestmentBundle(BaseModel):
    model_config = {
        **_RECORD_CONFIG,
        "json_schema_extra": {
            "example": {
                "id": "sel_1",
                "title": "Climate Tech Selection",
                "campaign_ids": ["cmp_1", "cmp_2"],
                "goal": "1000000",
                "instrument": "EQUITY",
            }
        },
    }

    id: str = Field(min_length=1, description="Bundle identifier.", examples=["sel_1"])
    title: str = Field(default="", description="Display name of the bundle.")
    campaign_ids: List[str] = Field(
        default_factory=list,
        alias="campaigns",
        description="Identifiers of the member campaigns.",
    )
    goal: Decimal = Field(
        gt=0,
        description="Aggregate funding goal, nominally the sum of member campaign targets.",
        examples=["1000000"],
    )
    instrument: InstrumentKind = Field(
        default=InstrumentKind.EQUITY,
        alias="investmentType",
        description="Instrument kind offered by the bundle.",
        examples=["EQUITY"],
    )
    debt_terms: Optional[DebtTerms] = Field(
        default=None,
        alias="debtTerms",
        description="Debt terms, present only for DEBT bundles.",
    )

    @field_validator("instrument", mode="before")
    @classmethod
    def normalize_instrument(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @model_validator(mode="after")
    def validate_debt_terms(self) -> "InvestmentBundle":
        if self.instrument == InstrumentKind.DEBT and self.debt_terms is None:
            raise ValueError("debt bundles require debt_terms")
        if self.instrument == InstrumentKind.EQUITY and self.debt_terms is not None:
            raise ValueError("equity bundles cannot carry debt_terms")
        return self


class SecurityAllocation(BaseModel):
    model_config = {"frozen": True}

    campaign_id: str = Field(description="Campaign receiving the allocation.")
    startup_id: str = Field(description="Startup behind the campaign.")
    proportion: Decimal = Field(description="Campaign target as a fraction of the bundle goal.")
    max_price: Decimal = Field(description="Money allocated to the campaign.")
    security_price: Decimal = Field(description="Price of one unit.")
    max_securities: Decimal = Field(
        description="Units purchased; whole for EQUITY, fractional for DEBT."
    )


class AllocationViolation(BaseModel):
    model_config = {"frozen": True}

    code: ViolationCode = Field(description="Structured violation code.")
    message: str = Field(description="Human-readable rendering of the violation.")
    campaign_id: Optional[str] = Field(
        default=None, description="Campaign the violation refers to, when campaign-specific."
    )
    measured: Optional[Decimal] = Field(
        default=None, description="Measured value that breached the threshold."
    )
    threshold: Dict[str, Decimal] = Field(
        default_factory=dict, description="Threshold values applied by the check."
    )


class AllocationValidationResult(BaseModel):
    model_config = {"frozen": True}

    is_valid: bool = Field(description="True when no violation was found.")
    errors: List[str] = Field(
        default_factory=list, description="Ordered human-readable violation messages."
    )
    violations: List[AllocationViolation] = Field(
        default_factory=list, description="Ordered structured violations."
    )

    @model_validator(mode="after")
    def validate_consistency(self) -> "AllocationValidationResult":
        if self.is_valid == bool(self.errors):
            raise ValueError("is_valid must be true exactly when errors is empty")
        return self

    @property
    def codes(self) -> List[ViolationCode]:
        return [violation.code for violation in self.violations]

    @classmethod
    def from_violations(cls, violations: List[AllocationViolation]) -> "AllocationValidationResult":
        return cls(
            is_valid=not violations,
            errors=[violation.message for violation in violations],
            violations=list(violations),
        )


class AllocationPlan(BaseModel):
    model_config = {"frozen": True}

    instrument: Optional[InstrumentKind] = Field(
        default=None, description="Instrument kind of the allocated bundle."
    )
    requested_amount: Decimal = Field(description="Amount the investor asked to allocate.")
    allocations: List[SecurityAllocation] = Field(
        default_factory=list, description="Per-campaign allocations in input order."
    )
    allocated_amount: Decimal = Field(description="Sum of max_price across allocations.")
    unallocated_amount: Decimal = Field(
        description="Requested amount left unspent after whole-unit rounding."
    )


class InvestmentEvaluation(BaseModel):
    model_config = {"frozen": True}

    status: Literal["READY", "BLOCKED"] = Field(description="Evaluation outcome.")
    minimum_viable: Decimal = Field(description="Suggested minimum amount for the bundle.")
    maximum_investable: Optional[Decimal] = Field(
        default=None, description="Largest amount the investor may commit; null when unbounded."
    )
    validation: AllocationValidationResult = Field(description="Validation outcome.")
    plan: Optional[AllocationPlan] = Field(
        default=None, description="Allocation plan, present only when status is READY."
    )
