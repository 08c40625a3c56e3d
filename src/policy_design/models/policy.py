"""Pydantic models for insurance policy design requests.

Field names are snake_case in Python and camelCase on the wire (the shape
used by the tool-calling interface). Most top-level fields are optional at
parse time; presence rules are enforced by the request validator so that
missing data is reported in a fixed order.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _enum_key(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


def _match_enum(enum_cls: type[Enum], value: Any) -> Any:
    """Map case/separator variants ("AUTO", "semi_annual") to the canonical enum value."""
    if value is None or isinstance(value, enum_cls) or not isinstance(value, str):
        return value
    key = _enum_key(value)
    for member in enum_cls:
        if _enum_key(member.value) == key:
            return member
    return value


class PolicyType(str, Enum):
    """Line of business of the policy."""

    AUTO = "Auto"
    HOME = "Home"
    LIFE = "Life"
    HEALTH = "Health"
    COMMERCIAL = "Commercial"
    UMBRELLA = "Umbrella"

    @classmethod
    def parse(cls, value: Any) -> "PolicyType":
        """Return the member matching value, or raise ValueError."""
        return cls(_match_enum(cls, value))


class PremiumFrequency(str, Enum):
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    SEMI_ANNUAL = "Semi-Annual"
    ANNUAL = "Annual"


class CalculationMethod(str, Enum):
    FIXED = "Fixed"
    CALCULATED = "Calculated"
    USAGE_BASED = "Usage-Based"


class TermType(str, Enum):
    ANNUAL = "Annual"
    SEMI_ANNUAL = "Semi-Annual"
    SHORT_TERM = "Short-Term"


class RenewalChannel(str, Enum):
    AUTOMATIC = "Automatic"
    MANUAL = "Manual"


class ParticipantRole(str, Enum):
    PRIMARY_INSURED = "Primary Insured"
    SECONDARY_INSURED = "Secondary Insured"
    BENEFICIARY = "Beneficiary"
    DEPENDENT = "Dependent"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class CoverageOption(_WireModel):
    """One line of coverage requested for the policy."""

    coverage_type: str = Field(..., description="Type of coverage (e.g., Liability)")
    coverage_amount: float = Field(..., description="Maximum coverage amount")
    deductible_amount: Optional[float] = Field(
        default=None, description="Deductible amount (0 when omitted)"
    )
    premium: float = Field(..., description="Premium contributed by this coverage")
    is_optional: bool = Field(default=False, description="Whether the coverage is optional")
    coverage_description: str = Field(default="", description="Coverage description")


class PricingModel(_WireModel):
    """Premium amount and how it is charged."""

    total_premium_amount: Optional[float] = Field(
        default=None, description="Total premium amount for the policy"
    )
    premium_frequency: Optional[PremiumFrequency] = Field(
        default=None, description="Monthly, Quarterly, Semi-Annual or Annual"
    )
    premium_calculation_method: Optional[CalculationMethod] = Field(
        default=None, description="Fixed, Calculated or Usage-Based"
    )

    @field_validator("premium_frequency", mode="before")
    @classmethod
    def _normalize_frequency(cls, value: Any) -> Any:
        return _match_enum(PremiumFrequency, value)

    @field_validator("premium_calculation_method", mode="before")
    @classmethod
    def _normalize_method(cls, value: Any) -> Any:
        return _match_enum(CalculationMethod, value)


class PolicyTerms(_WireModel):
    """Term dates and renewal/cancellation rules."""

    term_start_date: Optional[str] = Field(default=None, description="ISO start date")
    term_end_date: Optional[str] = Field(default=None, description="ISO end date")
    term_type: Optional[TermType] = Field(default=None, description="Annual, Semi-Annual or Short-Term")
    renewal_channel: Optional[RenewalChannel] = Field(
        default=None, description="Automatic or Manual"
    )
    cancellation_process_type: Optional[str] = Field(
        default=None, description="Cancellation process description"
    )
    grace_period_days: Optional[int] = Field(default=None, description="Grace period in days")

    @field_validator("term_type", mode="before")
    @classmethod
    def _normalize_term_type(cls, value: Any) -> Any:
        return _match_enum(TermType, value)

    @field_validator("renewal_channel", mode="before")
    @classmethod
    def _normalize_renewal_channel(cls, value: Any) -> Any:
        return _match_enum(RenewalChannel, value)


class PolicyParticipant(_WireModel):
    """A pre-existing contact with a role on the policy."""

    contact_id: str = Field(..., description="Contact record ID")
    role: ParticipantRole = Field(..., description="Role on the policy")
    relationship_to_insured: Optional[str] = Field(
        default=None, description="Relationship to the primary insured"
    )
    is_active: bool = Field(default=True, description="Whether the participant is active")

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: Any) -> Any:
        return _match_enum(ParticipantRole, value)


class PolicyDesignRequest(_WireModel):
    """Input payload for the design operation."""

    policy_name: Optional[str] = Field(default=None, description="Name of the insurance policy")
    policy_type: Optional[PolicyType] = Field(default=None, description="Type of insurance policy")
    product_id: Optional[str] = Field(
        default=None, description="Existing Product2 ID to reuse instead of creating one"
    )
    account_id: Optional[str] = Field(default=None, description="Policy holder account ID")
    coverage_options: Optional[list[CoverageOption]] = Field(
        default=None, description="Coverage lines, created in order"
    )
    pricing_model: Optional[PricingModel] = Field(default=None)
    policy_terms: Optional[PolicyTerms] = Field(default=None)
    participants: Optional[list[PolicyParticipant]] = Field(default=None)

    @field_validator("policy_type", mode="before")
    @classmethod
    def _normalize_policy_type(cls, value: Any) -> Any:
        return _match_enum(PolicyType, value)
