"""Pydantic models for policy design requests and results."""

from policy_design.models.policy import (
    CalculationMethod,
    CoverageOption,
    ParticipantRole,
    PolicyDesignRequest,
    PolicyParticipant,
    PolicyTerms,
    PolicyType,
    PremiumFrequency,
    PricingModel,
    RenewalChannel,
    TermType,
)
from policy_design.models.results import DesignMetadata, DesignResult, ItemOutcome

__all__ = [
    "CalculationMethod",
    "CoverageOption",
    "DesignMetadata",
    "DesignResult",
    "ItemOutcome",
    "ParticipantRole",
    "PolicyDesignRequest",
    "PolicyParticipant",
    "PolicyTerms",
    "PolicyType",
    "PremiumFrequency",
    "PricingModel",
    "RenewalChannel",
    "TermType",
]
