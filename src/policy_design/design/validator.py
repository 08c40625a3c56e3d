"""Structural and referential checks on a design request before any write."""

import logging
from datetime import date, datetime, timezone
from typing import Any, Mapping

from pydantic import ValidationError

from policy_design.exceptions import InvalidInputError, NotFoundError
from policy_design.gateway.base import RecordGateway
from policy_design.gateway.constants import ACCOUNT_OBJECT, CONTACT_OBJECT
from policy_design.models.policy import PolicyDesignRequest

logger = logging.getLogger(__name__)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "request"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_design_request(payload: PolicyDesignRequest | Mapping[str, Any] | None) -> PolicyDesignRequest:
    """Build a PolicyDesignRequest from a camelCase (or snake_case) mapping."""
    if isinstance(payload, PolicyDesignRequest):
        return payload
    if payload is None:
        raise InvalidInputError("Request parameter is required for design operation")
    if not isinstance(payload, Mapping):
        raise InvalidInputError("Design request must be an object")
    try:
        return PolicyDesignRequest.model_validate(dict(payload))
    except ValidationError as e:
        raise InvalidInputError(f"Invalid design request: {_format_validation_error(e)}") from e


def parse_term_date(value: str) -> datetime:
    """Parse an ISO date or datetime into a naive UTC datetime. Raises ValueError."""
    text = value.strip()
    try:
        return datetime.combine(date.fromisoformat(text), datetime.min.time())
    except ValueError:
        pass
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class RequestValidator:
    """Validates a design request; read-only lookups against the gateway."""

    def __init__(self, gateway: RecordGateway):
        self._gateway = gateway

    def validate(self, request: PolicyDesignRequest) -> None:
        """Raise InvalidInputError or NotFoundError on the first failed check."""
        if not request.policy_name or not request.policy_name.strip():
            raise InvalidInputError("Policy name is required")

        if not request.policy_type:
            raise InvalidInputError("Policy type is required")

        if not request.account_id:
            raise InvalidInputError("Account ID is required for the policy holder")
        account = self._gateway.find_one(ACCOUNT_OBJECT, {"Id": request.account_id})
        if not account:
            raise NotFoundError("Account", request.account_id, ACCOUNT_OBJECT)

        if not request.coverage_options:
            raise InvalidInputError("At least one coverage option is required")

        pricing = request.pricing_model
        if pricing is None or pricing.total_premium_amount is None:
            raise InvalidInputError("Pricing model with total premium amount is required")
        if pricing.total_premium_amount <= 0:
            raise InvalidInputError("Total premium amount must be greater than zero")

        terms = request.policy_terms
        if terms is None or not terms.term_start_date or not terms.term_end_date:
            raise InvalidInputError("Policy terms with start and end dates are required")

        try:
            start = parse_term_date(terms.term_start_date)
            end = parse_term_date(terms.term_end_date)
        except ValueError as e:
            raise InvalidInputError("Invalid date format in policy terms") from e

        if start >= end:
            raise InvalidInputError("Term start date must be before term end date")

        for participant in request.participants or []:
            contact = self._gateway.find_one(CONTACT_OBJECT, {"Id": participant.contact_id})
            if not contact:
                raise NotFoundError("Contact", participant.contact_id, CONTACT_OBJECT)

        logger.debug(
            "Design request validated: %s (%d coverages, %d participants)",
            request.policy_name,
            len(request.coverage_options),
            len(request.participants or []),
        )
