"""CLI entry point for the insurance policy design tool.

The record gateway is resolved from POLICY_DESIGN_GATEWAY ("package.module:attribute").
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from mcp.shared.exceptions import McpError


def _setup_logging() -> None:
    """Configure logging for CLI usage."""
    from policy_design.observability import get_logger

    get_logger("policy_design")
    logging.getLogger("policy_design").setLevel(
        logging.DEBUG if "--debug" in sys.argv else logging.INFO
    )


def _usage() -> str:
    return """Usage:
  policy-design design <request.json>        Design a policy from a JSON request
  policy-design list [policy_type]           List in-force, pending and suspended policies
  policy-design details <policy_id>          Show a policy with coverages and participants

Options:
  --limit=N                                  Maximum records for list (default 50)
  --debug                                    Enable debug logging
  --json                                     Use JSON log format
"""


def _option_value(options: list[str], name: str) -> str | None:
    prefix = f"--{name}="
    for opt in options:
        if opt.startswith(prefix):
            return opt[len(prefix):]
    return None


def _run(args: dict[str, Any]) -> None:
    """Dispatch one tool call and print its JSON result; exit 1 on failure."""
    from policy_design.exceptions import PolicyDesignError
    from policy_design.gateway.loader import load_gateway
    from policy_design.tools.logic import handle_policy_design_tool

    try:
        gateway = load_gateway()
    except PolicyDesignError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    try:
        result = handle_policy_design_tool(gateway, args)
    except McpError as e:
        print(f"Error [{e.error.code}]: {e.error.message}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(result, indent=2, default=str))


def cmd_design(request_path: Path) -> None:
    """Design a policy from a JSON request file."""
    if not request_path.exists():
        print(f"Error: File not found: {request_path}", file=sys.stderr)
        sys.exit(1)
    try:
        with open(request_path, encoding="utf-8") as f:
            request = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {request_path}: {e}", file=sys.stderr)
        sys.exit(1)
    _run({"operation": "design", "request": request})


def cmd_list(policy_type: str | None = None, limit: str | None = None) -> None:
    """List existing policies."""
    _run({"operation": "list", "policyType": policy_type, "limit": limit})


def cmd_details(policy_id: str) -> None:
    """Show one policy with its coverages and participants."""
    _run({"operation": "details", "policyId": policy_id})


def main() -> None:
    """Run the policy design CLI: design, list or details."""
    argv = [arg for arg in sys.argv[1:] if not arg.startswith("--")]
    options = [arg for arg in sys.argv[1:] if arg.startswith("--")]

    if "--json" in options:
        os.environ["POLICY_DESIGN_LOG_FORMAT"] = "json"
    if "--debug" in options:
        os.environ["POLICY_DESIGN_LOG_LEVEL"] = "DEBUG"

    _setup_logging()

    if not argv:
        print(_usage(), file=sys.stderr)
        sys.exit(1)

    command = argv[0].lower()

    if command == "design":
        if len(argv) < 2:
            print("Error: design requires <request.json>", file=sys.stderr)
            print(_usage(), file=sys.stderr)
            sys.exit(1)
        cmd_design(Path(argv[1]))
        return

    if command == "list":
        cmd_list(argv[1] if len(argv) > 1 else None, _option_value(options, "limit"))
        return

    if command == "details":
        if len(argv) < 2:
            print("Error: details requires <policy_id>", file=sys.stderr)
            print(_usage(), file=sys.stderr)
            sys.exit(1)
        cmd_details(argv[1])
        return

    # "clone" is declared by the tool schema but unsupported, same as unknown commands
    from policy_design.exceptions import UnsupportedOperationError
    from policy_design.tools.logic import to_mcp_error

    error = to_mcp_error(UnsupportedOperationError(command)).error
    print(f"Error [{error.code}]: {error.message}", file=sys.stderr)
    print(_usage(), file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    main()
