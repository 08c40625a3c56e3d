"""Read paths: list policies and fetch one policy with its dependent records."""

import logging
from typing import Any, Optional

from policy_design.config.settings import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT
from policy_design.exceptions import InvalidInputError, NotFoundError, QueryError
from policy_design.gateway.base import QueryResult, RecordGateway
from policy_design.gateway.constants import (
    INSURANCE_POLICY_COVERAGE_OBJECT,
    INSURANCE_POLICY_OBJECT,
    INSURANCE_POLICY_PARTICIPANT_OBJECT,
    LISTED_POLICY_STATUSES,
    STATUS_IN_FORCE,
    STATUS_PENDING,
    STATUS_SUSPENDED,
)
from policy_design.models.policy import PolicyType
from policy_design.utils.sanitization import soql_in_list, soql_literal

logger = logging.getLogger(__name__)

LIST_FIELDS = (
    "Id, Name, PolicyType, Status, TotalPremiumAmount, PremiumFrequency, "
    "TermStartDate, TermEndDate, NameInsuredId, NameInsured.Name, "
    "ProductId, Product.Name, CreatedDate, LastModifiedDate"
)
DETAIL_FIELDS = (
    "Id, Name, PolicyType, Status, TotalPremiumAmount, PremiumFrequency, "
    "PremiumCalculationMethod, TermStartDate, TermEndDate, TermType, RenewalChannel, "
    "NameInsuredId, NameInsured.Name, ProductId, Product.Name, CreatedDate, LastModifiedDate"
)
COVERAGE_FIELDS = (
    "Id, Name, CoverageType, CoverageAmount, DeductibleAmount, Premium, "
    "IsOptionalCoverage, CoverageDescription, EffectiveDate, ExpirationDate"
)
PARTICIPANT_FIELDS = (
    "Id, PrimaryParticipantContactId, PrimaryParticipantContact.Name, "
    "Role, RelationshipToInsured, IsActiveParticipant"
)


def _sum_field(records: list[dict[str, Any]], field: str) -> float:
    return sum((r.get(field) or 0) for r in records)


def _normalize_limit(limit: Any) -> int:
    if limit is None:
        return DEFAULT_LIST_LIMIT
    if isinstance(limit, bool):
        raise InvalidInputError("limit must be a positive integer")
    try:
        value = int(limit)
    except (TypeError, ValueError) as e:
        raise InvalidInputError("limit must be a positive integer") from e
    if value != limit and not isinstance(limit, str):
        raise InvalidInputError("limit must be a positive integer")
    if value < 1:
        raise InvalidInputError("limit must be a positive integer")
    return min(value, MAX_LIST_LIMIT)


def build_list_query(policy_type: Optional[PolicyType] = None, limit: int = DEFAULT_LIST_LIMIT) -> str:
    """SOQL for the policy listing; every caller value is escaped."""
    clauses = [
        f"SELECT {LIST_FIELDS}",
        f"FROM {INSURANCE_POLICY_OBJECT}",
        f"WHERE Status IN {soql_in_list(LISTED_POLICY_STATUSES)}",
    ]
    if policy_type is not None:
        clauses.append(f"AND PolicyType = {soql_literal(policy_type.value)}")
    clauses.append(f"ORDER BY CreatedDate DESC LIMIT {int(limit)}")
    return " ".join(clauses)


class PolicyQueryService:
    """Query facade over the record gateway. Never writes."""

    def __init__(self, gateway: RecordGateway):
        self._gateway = gateway

    def _query(self, soql: str) -> QueryResult:
        logger.debug("Running query: %s", soql)
        return QueryResult.model_validate(self._gateway.query(soql))

    def list_policies(self, policy_type: Any = None, limit: Any = None) -> dict[str, Any]:
        """List in-force, pending and suspended policies, newest first.

        Args:
            policy_type: Optional exact policy type filter (case-insensitive input).
            limit: Maximum rows to return (default 50, capped at MAX_LIST_LIMIT).

        Returns:
            Dict with totalCount, records, policyTypes and summary. The summary's
            averagePremium is None when no records match.
        """
        parsed_type = None
        if policy_type:
            try:
                parsed_type = PolicyType.parse(policy_type)
            except ValueError as e:
                raise InvalidInputError(f"Unknown policy type: {policy_type}") from e
        row_limit = _normalize_limit(limit)

        try:
            result = self._query(build_list_query(parsed_type, row_limit))
        except Exception as e:
            raise QueryError(f"Failed to retrieve existing policies: {e}") from e

        records = result.records
        statuses = [r.get("Status") for r in records]
        average = _sum_field(records, "TotalPremiumAmount") / len(records) if records else None
        return {
            "totalCount": result.total_size,
            "records": records,
            "policyTypes": list(dict.fromkeys(r["PolicyType"] for r in records if r.get("PolicyType"))),
            "summary": {
                "inForcePolicies": statuses.count(STATUS_IN_FORCE),
                "pendingPolicies": statuses.count(STATUS_PENDING),
                "suspendedPolicies": statuses.count(STATUS_SUSPENDED),
                "averagePremium": average,
            },
        }

    def get_policy_details(self, policy_id: Any) -> dict[str, Any]:
        """Fetch one policy with its coverage and participant records."""
        if not policy_id or not isinstance(policy_id, str) or not policy_id.strip():
            raise InvalidInputError("policyId is required for details operation")
        policy_id = policy_id.strip()
        literal = soql_literal(policy_id)

        try:
            policy = self._query(
                f"SELECT {DETAIL_FIELDS} FROM {INSURANCE_POLICY_OBJECT} WHERE Id = {literal}"
            )
            if not policy.records:
                raise NotFoundError("Policy", policy_id, INSURANCE_POLICY_OBJECT)
            coverages = self._query(
                f"SELECT {COVERAGE_FIELDS} FROM {INSURANCE_POLICY_COVERAGE_OBJECT} "
                f"WHERE InsurancePolicyId = {literal}"
            )
            participants = self._query(
                f"SELECT {PARTICIPANT_FIELDS} FROM {INSURANCE_POLICY_PARTICIPANT_OBJECT} "
                f"WHERE InsurancePolicyId = {literal}"
            )
        except NotFoundError:
            raise
        except Exception as e:
            raise QueryError(f"Failed to retrieve policy details: {e}") from e

        return {
            "policy": policy.records[0],
            "coverages": coverages.records,
            "participants": participants.records,
            "summary": {
                "totalCoverages": coverages.total_size,
                "totalParticipants": participants.total_size,
                "totalCoverageAmount": _sum_field(coverages.records, "CoverageAmount"),
                "totalPremiumFromCoverages": _sum_field(coverages.records, "Premium"),
            },
        }
