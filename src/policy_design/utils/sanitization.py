"""Input sanitization for design payloads and escaping of query literals."""

import re
from typing import Any, Iterable

# Maximum lengths for text fields (characters)
MAX_NAME = 255
MAX_DESCRIPTION = 4000
MAX_RECORD_ID = 64

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# SOQL string literal escapes
_SOQL_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}

_TOP_LEVEL_LIMITS = {
    "policyName": MAX_NAME,
    "productId": MAX_RECORD_ID,
    "accountId": MAX_RECORD_ID,
}
_COVERAGE_LIMITS = {
    "coverageType": MAX_NAME,
    "coverageDescription": MAX_DESCRIPTION,
}
_TERMS_LIMITS = {
    "cancellationProcessType": MAX_DESCRIPTION,
}
_PARTICIPANT_LIMITS = {
    "contactId": MAX_RECORD_ID,
    "relationshipToInsured": MAX_NAME,
}


def _sanitize_text(text: Any, max_length: int) -> Any:
    """Strip control characters and truncate to max_length. Non-strings pass through."""
    if not isinstance(text, str):
        return text
    cleaned = _CONTROL_CHARS.sub("", text).strip()
    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length]
    return cleaned


def _sanitize_fields(data: Any, limits: dict[str, int]) -> Any:
    if not isinstance(data, dict):
        return data
    return {
        key: _sanitize_text(value, limits[key]) if key in limits else value
        for key, value in data.items()
    }


def _sanitize_items(items: Any, limits: dict[str, int]) -> Any:
    if not isinstance(items, list):
        return items
    return [_sanitize_fields(item, limits) for item in items]


def sanitize_design_payload(payload: dict[str, Any] | None) -> dict[str, Any]:
    """
    Clean the free-text fields of a camelCase design request.

    - Strips control characters and surrounding whitespace
    - Truncates to record store field lengths
    - Leaves numbers, flags and unknown keys untouched (validated elsewhere)

    Returns a new dict; does not mutate the input.
    """
    if not payload or not isinstance(payload, dict):
        return payload or {}

    out = _sanitize_fields(payload, _TOP_LEVEL_LIMITS)
    if "coverageOptions" in out:
        out["coverageOptions"] = _sanitize_items(out["coverageOptions"], _COVERAGE_LIMITS)
    if "policyTerms" in out:
        out["policyTerms"] = _sanitize_fields(out["policyTerms"], _TERMS_LIMITS)
    if "participants" in out:
        out["participants"] = _sanitize_items(out["participants"], _PARTICIPANT_LIMITS)
    return out


def soql_literal(value: Any) -> str:
    """Render value as a quoted SOQL string literal with special characters escaped."""
    text = str(value)
    return "'" + "".join(_SOQL_ESCAPES.get(ch, ch) for ch in text) + "'"


def soql_in_list(values: Iterable[Any]) -> str:
    """Render values as a parenthesized list of SOQL literals for an IN clause."""
    return "(" + ", ".join(soql_literal(v) for v in values) + ")"
