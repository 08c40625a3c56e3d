"""Policy design core: request validation, orchestration, summary and queries."""

from policy_design.design.orchestrator import PolicyDesignOrchestrator
from policy_design.design.queries import PolicyQueryService
from policy_design.design.summary import build_configuration_summary
from policy_design.design.validator import RequestValidator, parse_design_request

__all__ = [
    "PolicyDesignOrchestrator",
    "PolicyQueryService",
    "RequestValidator",
    "build_configuration_summary",
    "parse_design_request",
]
