"""Tool dispatch shared by the MCP server and the CLI.

Routes an operation name to the orchestrator or the query facade and
normalizes every failure into one error shape: an McpError carrying
ErrorData(code, message).
"""

from typing import Any, Mapping

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData

from policy_design.design.orchestrator import PolicyDesignOrchestrator
from policy_design.design.queries import PolicyQueryService
from policy_design.exceptions import (
    KIND_INVALID_INPUT,
    KIND_NOT_FOUND,
    InvalidInputError,
    PolicyDesignError,
    UnsupportedOperationError,
)
from policy_design.gateway.base import RecordGateway
from policy_design.observability import get_logger
from policy_design.utils.sanitization import sanitize_design_payload

logger = get_logger(__name__)

OPERATIONS = ("design", "list", "details")

_CALLER_ERROR_KINDS = (KIND_INVALID_INPUT, KIND_NOT_FOUND)


def to_mcp_error(error: Exception) -> McpError:
    """Map any exception onto the single outward error shape."""
    if isinstance(error, McpError):
        return error
    if isinstance(error, PolicyDesignError):
        code = INVALID_PARAMS if error.kind in _CALLER_ERROR_KINDS else INTERNAL_ERROR
        return McpError(ErrorData(code=code, message=error.message))
    return McpError(
        ErrorData(code=INTERNAL_ERROR, message=f"Insurance policy design tool error: {error}")
    )


def _arg(args: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in args:
        return args[camel]
    return args.get(snake, default)


def design_policy_impl(gateway: RecordGateway, request: Any) -> dict[str, Any]:
    if request is None:
        raise InvalidInputError("Request parameter is required for design operation")
    if isinstance(request, Mapping):
        request = sanitize_design_payload(dict(request))
    result = PolicyDesignOrchestrator(gateway).design(request)
    return {
        "success": True,
        "message": "Insurance policy designed successfully using standard objects",
        "data": result.to_payload(),
    }


def list_policies_impl(gateway: RecordGateway, policy_type: Any = None, limit: Any = None) -> dict[str, Any]:
    return {
        "success": True,
        "data": PolicyQueryService(gateway).list_policies(policy_type, limit),
    }


def policy_details_impl(gateway: RecordGateway, policy_id: Any) -> dict[str, Any]:
    return {
        "success": True,
        "data": PolicyQueryService(gateway).get_policy_details(policy_id),
    }


def handle_policy_design_tool(gateway: RecordGateway, args: Mapping[str, Any] | None) -> dict[str, Any]:
    """Run one tool call. Raises McpError for every failure.

    Args:
        gateway: Record gateway supplied by the host.
        args: Tool arguments: operation plus request / policyType / limit / policyId.
    """
    args = args or {}
    operation = args.get("operation")
    try:
        if operation == "design":
            return design_policy_impl(gateway, args.get("request"))
        if operation == "list":
            return list_policies_impl(
                gateway,
                _arg(args, "policyType", "policy_type"),
                args.get("limit"),
            )
        if operation == "details":
            return policy_details_impl(gateway, _arg(args, "policyId", "policy_id"))
        # "clone" is declared by the calling schema but has no implementation
        raise UnsupportedOperationError(operation)
    except McpError:
        raise
    except PolicyDesignError as e:
        logger.warning("Tool operation %s failed: %s", operation, e.message)
        raise to_mcp_error(e) from e
    except Exception as e:
        logger.error("Tool operation %s failed unexpectedly: %s", operation, e, exc_info=True)
        raise to_mcp_error(e) from e
