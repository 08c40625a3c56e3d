"""Error hierarchy for policy design, listing and detail lookups."""

from typing import Any

KIND_INVALID_INPUT = "invalid_input"
KIND_NOT_FOUND = "not_found"
KIND_GATEWAY_REJECTED = "gateway_rejected"
KIND_INTERNAL = "internal"


class PolicyDesignError(Exception):
    """Base class for all errors raised by this package."""

    kind = KIND_INTERNAL

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(PolicyDesignError):
    """Missing or malformed request data, or an unknown operation."""

    kind = KIND_INVALID_INPUT


class UnsupportedOperationError(InvalidInputError):
    """Raised for operation names the tool does not implement."""

    def __init__(self, operation: Any):
        self.operation = operation
        super().__init__(f"Unsupported operation: {operation}")


class NotFoundError(PolicyDesignError):
    """A referenced record id does not resolve in the record store."""

    kind = KIND_NOT_FOUND

    def __init__(self, object_label: str, record_id: str, object_type: str | None = None):
        self.object_type = object_type or object_label
        self.record_id = record_id
        super().__init__(f"{object_label} with ID {record_id} not found")


class GatewayRejectedError(PolicyDesignError):
    """The record gateway answered a create call with success=false."""

    kind = KIND_GATEWAY_REJECTED

    def __init__(self, object_type: str, errors: list[str] | None = None):
        self.object_type = object_type
        self.errors = list(errors or [])
        detail = ", ".join(self.errors) if self.errors else "no error details returned"
        super().__init__(f"Failed to create {object_type} record: {detail}")


class OrchestrationError(PolicyDesignError):
    """A fatal design step failed; wraps the underlying cause."""


class QueryError(PolicyDesignError):
    """A read path failed for a reason other than bad input or a missing record."""


class GatewayConfigurationError(PolicyDesignError):
    """No usable record gateway could be resolved from configuration."""
