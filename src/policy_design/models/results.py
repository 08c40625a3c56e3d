"""Pydantic models for design results and per-item step outcomes."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from policy_design.models.policy import PolicyType

DesignStep = Literal["coverage", "participant", "price_entry"]


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItemOutcome(_WireModel):
    """A best-effort create (coverage, participant or price entry) that did not go through."""

    step: DesignStep = Field(..., description="Orchestration step the item belongs to")
    index: int = Field(default=0, description="Position of the item in the request")
    label: str = Field(default="", description="Human-readable item label")
    error: Optional[str] = Field(default=None, description="Failure reason")


class DesignMetadata(_WireModel):
    created_date: str = Field(..., description="ISO timestamp of the design run")
    policy_type: PolicyType
    standard_objects_used: list[str] = Field(default_factory=list)
    failures: list[ItemOutcome] = Field(
        default_factory=list, description="Best-effort items that were not created"
    )


class DesignResult(_WireModel):
    """Output of a design operation."""

    insurance_policy_id: str
    product_id: str
    coverage_count: int = 0
    participant_count: int = 0
    coverage_ids: list[str] = Field(default_factory=list)
    participant_ids: list[str] = Field(default_factory=list)
    price_entry_id: Optional[str] = None
    configuration_summary: dict[str, Any] = Field(default_factory=dict)
    metadata: DesignMetadata

    def to_payload(self) -> dict[str, Any]:
        """Serialize with camelCase keys and JSON-compatible values."""
        return self.model_dump(by_alias=True, mode="json")
