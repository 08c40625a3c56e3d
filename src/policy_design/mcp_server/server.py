"""MCP server exposing the insurance policy design tool via stdio transport."""

import json
from typing import Any

from mcp.server.fastmcp import FastMCP

from policy_design.exceptions import PolicyDesignError
from policy_design.gateway.base import RecordGateway
from policy_design.gateway.loader import load_gateway
from policy_design.tools.logic import handle_policy_design_tool, to_mcp_error

mcp = FastMCP("policy-design", json_response=True)

_gateway: RecordGateway | None = None


def set_gateway(gateway: RecordGateway | None) -> None:
    """Install the record gateway used by the tools (None resets to lazy loading)."""
    global _gateway
    _gateway = gateway


def get_gateway() -> RecordGateway:
    """Return the installed gateway, loading it from POLICY_DESIGN_GATEWAY on first use."""
    global _gateway
    if _gateway is None:
        _gateway = load_gateway()
    return _gateway


@mcp.tool()
def insurance_policy_design(
    operation: str,
    request: dict[str, Any] | None = None,
    policy_type: str | None = None,
    limit: int = 50,
    policy_id: str | None = None,
    source_policy_id: str | None = None,
    new_policy_name: str | None = None,
    modifications: dict[str, Any] | None = None,
) -> str:
    """Design and inspect InsurancePolicy entities built from standard CRM objects.

    Args:
        operation: 'design' creates a policy with its product, coverages,
            participants and price book entry; 'list' returns existing policies;
            'details' returns one policy with its coverages and participants.
            'clone' is reserved and currently unsupported.
        request: Policy design request (required for 'design').
        policy_type: Filter for 'list' (Auto, Home, Life, Health, Commercial, Umbrella).
        limit: Maximum records for 'list' (default 50).
        policy_id: Policy ID for 'details'.
        source_policy_id: Reserved for 'clone'.
        new_policy_name: Reserved for 'clone'.
        modifications: Reserved for 'clone'.

    Returns:
        JSON string with success flag and operation data.
    """
    args = {
        "operation": operation,
        "request": request,
        "policyType": policy_type,
        "limit": limit,
        "policyId": policy_id,
        "sourcePolicyId": source_policy_id,
        "newPolicyName": new_policy_name,
        "modifications": modifications,
    }
    try:
        gateway = get_gateway()
    except PolicyDesignError as e:
        raise to_mcp_error(e) from e
    result = handle_policy_design_tool(gateway, args)
    return json.dumps(result, default=str)


def main() -> None:
    """Run the MCP server with stdio transport (default)."""
    from policy_design.observability import get_logger

    get_logger("policy_design")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
