"""Centralized configuration from environment variables with defaults."""

import os

from dotenv import load_dotenv

load_dotenv()


def _int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _str(key: str, default: str) -> str:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# ---------------------------------------------------------------------------
# Policy defaults
# ---------------------------------------------------------------------------

DEFAULT_GRACE_PERIOD_DAYS = _int("POLICY_DESIGN_GRACE_PERIOD_DAYS", 30)
PRODUCT_FAMILY = _str("POLICY_DESIGN_PRODUCT_FAMILY", "Insurance")


# ---------------------------------------------------------------------------
# Query limits
# ---------------------------------------------------------------------------

DEFAULT_LIST_LIMIT = _int("POLICY_DESIGN_LIST_LIMIT", 50)
MAX_LIST_LIMIT = _int("POLICY_DESIGN_MAX_LIST_LIMIT", 2000)


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------

def get_gateway_path() -> str | None:
    """Import path of the host-provided record gateway ("package.module:attribute")."""
    raw = os.environ.get("POLICY_DESIGN_GATEWAY", "").strip()
    return raw or None
