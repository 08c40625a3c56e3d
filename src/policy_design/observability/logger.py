"""Structured logging with policy design context.

This module provides:
- PolicyLogger: a logger adapter that attaches policy context to log records
- policy_context: a context manager that tags every log line in a design run
- log_policy_event: helper for structured "[event] key=value" log lines
"""

import json
import logging
import os
import sys
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

# Thread-local storage for the active design context
_context = threading.local()

_CONTEXT_FIELDS = ("correlation_id", "policy_id", "policy_name", "policy_type")


def _get_policy_context() -> dict[str, Any]:
    """Get the current policy context from thread-local storage."""
    return getattr(_context, "policy_data", {})


def _set_policy_context(data: dict[str, Any]) -> None:
    _context.policy_data = data


def update_policy_context(**fields: Any) -> None:
    """Add fields (e.g. policy_id once created) to the active context, if any."""
    current = _get_policy_context()
    if current:
        _set_policy_context({**current, **fields})


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON with policy context."""
        log_data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        ctx = _get_policy_context()
        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None) or ctx.get(key)
            if value:
                log_data[key] = value

        if getattr(record, "extra_data", None):
            log_data["data"] = record.extra_data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter with a policy context prefix."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        ctx = _get_policy_context()
        ctx_parts = []
        policy_id = getattr(record, "policy_id", None) or ctx.get("policy_id")
        if policy_id:
            ctx_parts.append(f"policy={policy_id}")
        policy_type = getattr(record, "policy_type", None) or ctx.get("policy_type")
        if policy_type:
            ctx_parts.append(f"type={policy_type}")
        ctx_str = f" [{', '.join(ctx_parts)}]" if ctx_parts else ""

        message = record.getMessage()
        if getattr(record, "extra_data", None):
            message += f" | {record.extra_data}"

        line = f"{timestamp} {record.levelname:8}{ctx_str} {record.name}: {message}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class PolicyLogger(logging.LoggerAdapter):
    """Logger adapter that adds policy context to all log messages."""

    def __init__(self, logger: logging.Logger, policy_id: str | None = None):
        super().__init__(logger, {})
        self._policy_id = policy_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        if self._policy_id:
            extra["policy_id"] = self._policy_id
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(
    name: str,
    policy_id: str | None = None,
    structured: bool | None = None,
) -> PolicyLogger:
    """Get a PolicyLogger instance.

    Args:
        name: Logger name (typically __name__)
        policy_id: Optional policy ID to attach to all logs
        structured: If True, use JSON format. If False, use human-readable.
                   If None, use POLICY_DESIGN_LOG_FORMAT env var (default: human)
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        if structured is None:
            log_format = os.environ.get("POLICY_DESIGN_LOG_FORMAT", "human").lower()
            structured = log_format == "json"

        # stderr keeps stdout free for the MCP stdio transport and CLI JSON output
        handler = logging.StreamHandler(sys.stderr)
        if structured:
            handler.setFormatter(StructuredFormatter())
        else:
            handler.setFormatter(HumanReadableFormatter())
        logger.addHandler(handler)

        log_level = os.environ.get("POLICY_DESIGN_LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, log_level, logging.INFO))

        logger.propagate = False

    return PolicyLogger(logger, policy_id)


@contextmanager
def policy_context(
    policy_name: str | None = None,
    policy_type: str | None = None,
    **extra: Any,
):
    """Context manager that tags all logs within the block with the design being run.

    Usage:
        with policy_context(policy_name="Test Auto", policy_type="Auto"):
            logger.info("Creating product")
    """
    old_context = _get_policy_context()
    new_context = {
        "correlation_id": str(uuid.uuid4()),
        "policy_name": policy_name,
        "policy_type": policy_type,
        **extra,
    }
    _set_policy_context(new_context)
    try:
        yield new_context
    finally:
        _set_policy_context(old_context)


def log_policy_event(
    logger: logging.Logger | PolicyLogger,
    event: str,
    policy_id: str | None = None,
    level: int = logging.INFO,
    **data: Any,
) -> None:
    """Log a policy design event with structured data.

    Args:
        logger: Logger instance
        event: Event name (e.g., "policy_created", "coverage_skipped")
        policy_id: Policy ID (optional if using policy_context)
        level: Log level
        **data: Additional event data
    """
    message = f"[{event}]"
    if data:
        details = ", ".join(f"{k}={v}" for k, v in data.items())
        message = f"{message} {details}"

    extra: dict[str, Any] = {"extra_data": {"event": event, **data}}
    if policy_id:
        extra["policy_id"] = policy_id
    logger.log(level, message, extra=extra)
