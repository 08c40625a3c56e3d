"""Entity orchestrator: product -> policy -> coverages -> participants -> price entry.

Steps run strictly in order because later records reference ids produced by
earlier ones. Product and policy creation are fatal steps; coverages,
participants and the price entry are best-effort per item, and their failures
are recorded in the result metadata instead of aborting the run. Nothing is
rolled back: a policy whose coverages all failed is a valid, observable outcome.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from policy_design.config.settings import DEFAULT_GRACE_PERIOD_DAYS, PRODUCT_FAMILY
from policy_design.design.summary import build_configuration_summary
from policy_design.design.validator import RequestValidator, parse_design_request
from policy_design.exceptions import (
    GatewayRejectedError,
    InvalidInputError,
    NotFoundError,
    OrchestrationError,
)
from policy_design.gateway.base import CreateResult, QueryResult, RecordGateway
from policy_design.gateway.constants import (
    DESIGN_OBJECTS,
    INSURANCE_POLICY_COVERAGE_OBJECT,
    INSURANCE_POLICY_OBJECT,
    INSURANCE_POLICY_PARTICIPANT_OBJECT,
    PRICEBOOK_ENTRY_OBJECT,
    PRICEBOOK_OBJECT,
    PRODUCT_OBJECT,
    STATUS_IN_FORCE,
)
from policy_design.models.policy import (
    CoverageOption,
    PolicyDesignRequest,
    PolicyParticipant,
)
from policy_design.models.results import DesignMetadata, DesignResult, ItemOutcome
from policy_design.observability import (
    get_logger,
    log_policy_event,
    policy_context,
    update_policy_context,
)

logger = get_logger(__name__)

STANDARD_PRICEBOOK_QUERY = f"SELECT Id FROM {PRICEBOOK_OBJECT} WHERE IsStandard = true LIMIT 1"


def _compact(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop absent (None) values and unwrap enums to their store values."""
    return {
        key: getattr(value, "value", value)
        for key, value in fields.items()
        if value is not None
    }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _design_failed(error: Exception) -> OrchestrationError:
    logger.error("Policy design failed: %s", error, exc_info=True)
    return OrchestrationError(f"Failed to design insurance policy: {error}")


class PolicyDesignOrchestrator:
    """Runs one design operation against a record gateway.

    Each call to design() builds its own aggregation state; the orchestrator
    holds no per-request data between calls.
    """

    def __init__(
        self,
        gateway: RecordGateway,
        validator: Optional[RequestValidator] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._gateway = gateway
        self._validator = validator or RequestValidator(gateway)
        self._clock = clock

    def design(self, request: PolicyDesignRequest | Mapping[str, Any]) -> DesignResult:
        """Validate the request, create all records and return the result bundle.

        Raises:
            InvalidInputError: request failed validation (no writes made).
            NotFoundError: a referenced account, contact or product does not exist.
            OrchestrationError: product/policy creation failed, or anything unexpected.
        """
        try:
            request = parse_design_request(request)
            self._validator.validate(request)
        except (InvalidInputError, NotFoundError):
            raise
        except Exception as e:
            raise _design_failed(e) from e

        with policy_context(
            policy_name=request.policy_name,
            policy_type=request.policy_type.value,
        ):
            try:
                return self._run(request)
            except (InvalidInputError, NotFoundError):
                raise
            except Exception as e:
                raise _design_failed(e) from e

    def _run(self, request: PolicyDesignRequest) -> DesignResult:
        failures: list[ItemOutcome] = []

        product = self._resolve_product(request)
        policy = self._create_policy(request, product["Id"])
        update_policy_context(policy_id=policy["Id"])

        coverages = self._create_coverages(request, policy["Id"], failures)
        participants = self._create_participants(request, policy["Id"], failures)
        price_entry = self._create_price_entry(product["Id"], request, failures)

        summary = build_configuration_summary(
            request, policy, product, coverages, participants, price_entry
        )
        log_policy_event(
            logger,
            "policy_designed",
            policy_id=policy["Id"],
            product_id=product["Id"],
            coverages=len(coverages),
            participants=len(participants),
            failures=len(failures),
        )
        return DesignResult(
            insurance_policy_id=policy["Id"],
            product_id=product["Id"],
            coverage_count=len(coverages),
            participant_count=len(participants),
            coverage_ids=[c["Id"] for c in coverages],
            participant_ids=[p["Id"] for p in participants],
            price_entry_id=price_entry["Id"] if price_entry else None,
            configuration_summary=summary,
            metadata=DesignMetadata(
                created_date=self._clock().isoformat(),
                policy_type=request.policy_type,
                standard_objects_used=list(DESIGN_OBJECTS),
                failures=failures,
            ),
        )

    # ------------------------------------------------------------------
    # Gateway helpers
    # ------------------------------------------------------------------

    def _create(self, object_type: str, fields: dict[str, Any]) -> CreateResult:
        return CreateResult.model_validate(self._gateway.create(object_type, fields))

    def _create_or_raise(self, object_type: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Create a record for a fatal step; rejection raises GatewayRejectedError."""
        result = self._create(object_type, fields)
        if not result.success or not result.id:
            raise GatewayRejectedError(object_type, result.errors)
        return {"Id": result.id, **fields}

    def _try_create(
        self,
        step: str,
        index: int,
        label: str,
        object_type: str,
        fields: dict[str, Any],
        failures: list[ItemOutcome],
    ) -> Optional[dict[str, Any]]:
        """Create a record for a best-effort step; failures are logged and recorded."""
        try:
            result = self._create(object_type, fields)
            if result.success and result.id:
                return {"Id": result.id, **fields}
            error = str(GatewayRejectedError(object_type, result.errors))
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
        logger.warning("Skipping %s %s: %s", step, label, error)
        failures.append(
            ItemOutcome(step=step, index=index, label=label, error=error)
        )
        return None

    # ------------------------------------------------------------------
    # Fatal steps
    # ------------------------------------------------------------------

    def _resolve_product(self, request: PolicyDesignRequest) -> dict[str, Any]:
        if request.product_id:
            existing = self._gateway.find_one(PRODUCT_OBJECT, {"Id": request.product_id})
            if not existing:
                raise NotFoundError("Product", request.product_id, PRODUCT_OBJECT)
            logger.info("Reusing product %s", request.product_id)
            return {"Id": request.product_id, **dict(existing)}

        policy_type = request.policy_type.value
        millis = int(self._clock().timestamp() * 1000)
        fields = {
            "Name": request.policy_name,
            "ProductCode": f"INS_{policy_type.upper()}_{millis}",
            "Description": f"Insurance Product: {request.policy_name} ({policy_type})",
            "Family": PRODUCT_FAMILY,
            "IsActive": True,
        }
        product = self._create_or_raise(PRODUCT_OBJECT, fields)
        log_policy_event(logger, "product_created", product_id=product["Id"])
        return product

    def _create_policy(self, request: PolicyDesignRequest, product_id: str) -> dict[str, Any]:
        pricing = request.pricing_model
        terms = request.policy_terms
        grace_period = terms.grace_period_days
        fields = _compact({
            "Name": request.policy_name,
            "PolicyType": request.policy_type,
            "NameInsuredId": request.account_id,
            "ProductId": product_id,
            "Status": STATUS_IN_FORCE,
            "TotalPremiumAmount": pricing.total_premium_amount,
            "PremiumFrequency": pricing.premium_frequency,
            "PremiumCalculationMethod": pricing.premium_calculation_method,
            "TermStartDate": terms.term_start_date,
            "TermEndDate": terms.term_end_date,
            "TermType": terms.term_type,
            "RenewalChannel": terms.renewal_channel,
            "CancellationProcessType": terms.cancellation_process_type,
            "GracePeriodDays": DEFAULT_GRACE_PERIOD_DAYS if grace_period is None else grace_period,
        })
        policy = self._create_or_raise(INSURANCE_POLICY_OBJECT, fields)
        log_policy_event(logger, "policy_created", policy_id=policy["Id"])
        return policy

    # ------------------------------------------------------------------
    # Best-effort steps
    # ------------------------------------------------------------------

    def _coverage_fields(
        self, coverage: CoverageOption, request: PolicyDesignRequest, policy_id: str
    ) -> dict[str, Any]:
        return _compact({
            "Name": f"{coverage.coverage_type} Coverage",
            "InsurancePolicyId": policy_id,
            "CoverageType": coverage.coverage_type,
            "CoverageAmount": coverage.coverage_amount,
            "DeductibleAmount": coverage.deductible_amount or 0,
            "Premium": coverage.premium,
            "IsOptionalCoverage": coverage.is_optional,
            "CoverageDescription": coverage.coverage_description,
            "EffectiveDate": request.policy_terms.term_start_date,
            "ExpirationDate": request.policy_terms.term_end_date,
        })

    def _create_coverages(
        self, request: PolicyDesignRequest, policy_id: str, failures: list[ItemOutcome]
    ) -> list[dict[str, Any]]:
        records = []
        for index, coverage in enumerate(request.coverage_options):
            record = self._try_create(
                "coverage",
                index,
                coverage.coverage_type,
                INSURANCE_POLICY_COVERAGE_OBJECT,
                self._coverage_fields(coverage, request, policy_id),
                failures,
            )
            if record is not None:
                records.append(record)
        logger.info("Created %d of %d coverages", len(records), len(request.coverage_options))
        return records

    @staticmethod
    def _participant_fields(participant: PolicyParticipant, policy_id: str) -> dict[str, Any]:
        return _compact({
            "InsurancePolicyId": policy_id,
            "PrimaryParticipantContactId": participant.contact_id,
            "Role": participant.role,
            "RelationshipToInsured": participant.relationship_to_insured,
            "IsActiveParticipant": participant.is_active,
        })

    def _create_participants(
        self, request: PolicyDesignRequest, policy_id: str, failures: list[ItemOutcome]
    ) -> list[dict[str, Any]]:
        if not request.participants:
            return []
        records = []
        for index, participant in enumerate(request.participants):
            record = self._try_create(
                "participant",
                index,
                participant.contact_id,
                INSURANCE_POLICY_PARTICIPANT_OBJECT,
                self._participant_fields(participant, policy_id),
                failures,
            )
            if record is not None:
                records.append(record)
        logger.info("Created %d of %d participants", len(records), len(request.participants))
        return records

    def _create_price_entry(
        self, product_id: str, request: PolicyDesignRequest, failures: list[ItemOutcome]
    ) -> Optional[dict[str, Any]]:
        label = "standard price book entry"
        try:
            pricebooks = QueryResult.model_validate(self._gateway.query(STANDARD_PRICEBOOK_QUERY))
        except Exception as e:
            error = f"Standard price book lookup failed: {type(e).__name__}: {e}"
            logger.warning("Skipping price entry: %s", error)
            failures.append(ItemOutcome(step="price_entry", label=label, error=error))
            return None

        pricebook_id = pricebooks.records[0].get("Id") if pricebooks.records else None
        if not pricebook_id:
            logger.warning("Skipping price entry: standard price book not found")
            failures.append(
                ItemOutcome(
                    step="price_entry",
                    label=label,
                    error="Standard price book not found",
                )
            )
            return None

        fields = {
            "Product2Id": product_id,
            "Pricebook2Id": pricebook_id,
            "UnitPrice": request.pricing_model.total_premium_amount,
            "IsActive": True,
            "UseStandardPrice": False,
        }
        return self._try_create("price_entry", 0, label, PRICEBOOK_ENTRY_OBJECT, fields, failures)
