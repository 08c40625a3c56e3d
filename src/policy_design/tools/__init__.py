"""Tool entry points shared by the MCP server and the CLI."""

from policy_design.tools.logic import (
    OPERATIONS,
    design_policy_impl,
    handle_policy_design_tool,
    list_policies_impl,
    policy_details_impl,
    to_mcp_error,
)

__all__ = [
    "OPERATIONS",
    "design_policy_impl",
    "handle_policy_design_tool",
    "list_policies_impl",
    "policy_details_impl",
    "to_mcp_error",
]
