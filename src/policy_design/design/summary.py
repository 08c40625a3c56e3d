"""Configuration summary for a completed design run. Pure: no gateway access."""

from typing import Any, Iterable, Optional

from policy_design.gateway.constants import DATA_MODEL_LABEL, DESIGN_OBJECTS
from policy_design.models.policy import PolicyDesignRequest


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _distinct(values: Iterable[Any]) -> list[Any]:
    """Distinct non-null values in first-seen order."""
    return list(dict.fromkeys(v for v in values if v is not None))


def _total(records: list[dict[str, Any]], field: str) -> float:
    return sum((r.get(field) or 0) for r in records)


def build_configuration_summary(
    request: PolicyDesignRequest,
    policy_record: dict[str, Any],
    product_record: dict[str, Any],
    coverage_records: list[dict[str, Any]],
    participant_records: list[dict[str, Any]],
    price_entry: Optional[dict[str, Any]],
) -> dict[str, Any]:
    """Build the cross-entity report returned with a design result."""
    pricing = request.pricing_model
    terms = request.policy_terms
    return {
        "policyOverview": {
            "id": policy_record.get("Id"),
            "name": request.policy_name,
            "type": _enum_value(request.policy_type),
            "status": policy_record.get("Status"),
            "totalPremium": pricing.total_premium_amount,
            "premiumFrequency": _enum_value(pricing.premium_frequency),
            "termStart": terms.term_start_date,
            "termEnd": terms.term_end_date,
        },
        "productInformation": {
            "id": product_record.get("Id"),
            "name": product_record.get("Name"),
            "productCode": product_record.get("ProductCode"),
            "family": product_record.get("Family"),
            "isActive": product_record.get("IsActive"),
        },
        "coverageConfiguration": {
            "totalCoverageOptions": len(coverage_records),
            "coverageTypes": _distinct(c.get("CoverageType") for c in coverage_records),
            "totalCoverageAmount": _total(coverage_records, "CoverageAmount"),
            "totalPremiumFromCoverages": _total(coverage_records, "Premium"),
            "optionalCoverages": sum(1 for c in coverage_records if c.get("IsOptionalCoverage")),
        },
        "participantConfiguration": {
            "totalParticipants": len(participant_records),
            "activeParticipants": sum(
                1 for p in participant_records if p.get("IsActiveParticipant")
            ),
            "participantRoles": _distinct(p.get("Role") for p in participant_records),
        },
        "pricingConfiguration": {
            "hasPricebookEntry": price_entry is not None,
            "calculationMethod": _enum_value(pricing.premium_calculation_method),
            "frequency": _enum_value(pricing.premium_frequency),
        },
        "compliance": {
            "dataModel": DATA_MODEL_LABEL,
            "objectsUsed": list(DESIGN_OBJECTS),
            "standardCompliant": True,
        },
    }
