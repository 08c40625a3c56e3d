"""Structured logging with policy design context."""

from policy_design.observability.logger import (
    PolicyLogger,
    get_logger,
    log_policy_event,
    policy_context,
    update_policy_context,
)

__all__ = [
    "PolicyLogger",
    "get_logger",
    "log_policy_event",
    "policy_context",
    "update_policy_context",
]
