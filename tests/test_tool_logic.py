"""Tests for the tool dispatcher and error normalization."""

import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS

from policy_design.exceptions import (
    GatewayRejectedError,
    InvalidInputError,
    NotFoundError,
    OrchestrationError,
)
from policy_design.tools.logic import handle_policy_design_tool, to_mcp_error


class TestOperations:
    def test_design(self, gateway, design_payload):
        result = handle_policy_design_tool(gateway, {"operation": "design", "request": design_payload})
        assert result["success"] is True
        data = result["data"]
        assert data["coverageCount"] == 1
        assert data["insurancePolicyId"]
        assert data["configurationSummary"]["coverageConfiguration"]["totalCoverageAmount"] == 50000

    def test_design_sanitizes_text(self, gateway, design_payload):
        design_payload["policyName"] = "  Test\x00 Auto  "
        handle_policy_design_tool(gateway, {"operation": "design", "request": design_payload})
        (policy,) = gateway.created_of("InsurancePolicy")
        assert policy["Name"] == "Test Auto"

    def test_design_requires_request(self, gateway):
        with pytest.raises(McpError) as exc_info:
            handle_policy_design_tool(gateway, {"operation": "design"})
        assert exc_info.value.error.code == INVALID_PARAMS
        assert "Request parameter is required" in exc_info.value.error.message

    def test_list(self, gateway):
        result = handle_policy_design_tool(gateway, {"operation": "list", "policyType": "Auto", "limit": 5})
        assert result["success"] is True
        assert result["data"]["totalCount"] == 0
        assert result["data"]["summary"]["averagePremium"] is None
        assert "AND PolicyType = 'Auto'" in gateway.queries[0]

    def test_details(self, gateway):
        gateway.query_results["InsurancePolicy"] = {
            "records": [{"Id": "0YT1", "Status": "In Force"}],
            "totalSize": 1,
        }
        result = handle_policy_design_tool(gateway, {"operation": "details", "policyId": "0YT1"})
        assert result["data"]["policy"]["Id"] == "0YT1"

    def test_details_not_found_is_invalid_params(self, gateway):
        with pytest.raises(McpError) as exc_info:
            handle_policy_design_tool(gateway, {"operation": "details", "policyId": "missing"})
        assert exc_info.value.error.code == INVALID_PARAMS
        assert exc_info.value.error.message == "Policy with ID missing not found"


class TestUnsupportedOperations:
    def test_clone_matches_unknown_operation_shape(self, gateway):
        with pytest.raises(McpError) as clone_info:
            handle_policy_design_tool(
                gateway,
                {"operation": "clone", "sourcePolicyId": "0YT1", "newPolicyName": "Copy"},
            )
        with pytest.raises(McpError) as unknown_info:
            handle_policy_design_tool(gateway, {"operation": "explode"})

        assert clone_info.value.error.code == unknown_info.value.error.code == INVALID_PARAMS
        assert clone_info.value.error.message == "Unsupported operation: clone"
        assert unknown_info.value.error.message == "Unsupported operation: explode"
        assert gateway.created == []
        assert gateway.queries == []

    def test_missing_operation(self, gateway):
        with pytest.raises(McpError, match="Unsupported operation: None"):
            handle_policy_design_tool(gateway, {})


class TestErrorNormalization:
    def test_orchestration_failure_is_internal(self, gateway, design_payload):
        gateway.rejections["InsurancePolicy"] = lambda fields: ["boom"]
        with pytest.raises(McpError) as exc_info:
            handle_policy_design_tool(gateway, {"operation": "design", "request": design_payload})
        assert exc_info.value.error.code == INTERNAL_ERROR
        assert "Failed to design insurance policy" in exc_info.value.error.message

    def test_validation_failure_is_invalid_params(self, gateway, design_payload):
        design_payload["policyTerms"]["termEndDate"] = "2024-01-01"
        with pytest.raises(McpError) as exc_info:
            handle_policy_design_tool(gateway, {"operation": "design", "request": design_payload})
        assert exc_info.value.error.code == INVALID_PARAMS

    @pytest.mark.parametrize(
        "error,code",
        [
            (InvalidInputError("bad"), INVALID_PARAMS),
            (NotFoundError("Account", "A9"), INVALID_PARAMS),
            (GatewayRejectedError("Product2", ["x"]), INTERNAL_ERROR),
            (OrchestrationError("failed"), INTERNAL_ERROR),
        ],
    )
    def test_to_mcp_error_codes(self, error, code):
        assert to_mcp_error(error).error.code == code
        assert to_mcp_error(error).error.message == error.message

    def test_unexpected_error_prefixed(self):
        mapped = to_mcp_error(RuntimeError("kaboom"))
        assert mapped.error.code == INTERNAL_ERROR
        assert mapped.error.message == "Insurance policy design tool error: kaboom"

    def test_unexpected_dispatch_error_wrapped(self, gateway):
        def broken_query(soql):
            raise KeyError("records")

        gateway.query = broken_query
        with pytest.raises(McpError) as exc_info:
            handle_policy_design_tool(gateway, {"operation": "list"})
        assert exc_info.value.error.code == INTERNAL_ERROR
