"""Tests for design payload sanitization and SOQL literal escaping."""

from policy_design.utils.sanitization import (
    MAX_DESCRIPTION,
    MAX_NAME,
    sanitize_design_payload,
    soql_in_list,
    soql_literal,
)


def test_sanitize_design_payload_preserves_valid_input(design_payload):
    """Valid payloads come back unchanged."""
    assert sanitize_design_payload(design_payload) == design_payload


def test_sanitize_design_payload_strips_control_characters():
    data = {
        "policyName": " Home\x07 Shield \n",
        "policyTerms": {"cancellationProcessType": "30 days\x0b notice"},
        "participants": [{"contactId": " C1\x00", "role": "Dependent"}],
    }
    out = sanitize_design_payload(data)
    assert out["policyName"] == "Home Shield"
    assert out["policyTerms"]["cancellationProcessType"] == "30 days notice"
    assert out["participants"][0]["contactId"] == "C1"


def test_sanitize_design_payload_truncates_long_fields():
    data = {
        "policyName": "n" * 1000,
        "coverageOptions": [{"coverageType": "Liability", "coverageDescription": "d" * 10000}],
    }
    out = sanitize_design_payload(data)
    assert len(out["policyName"]) == MAX_NAME
    assert len(out["coverageOptions"][0]["coverageDescription"]) == MAX_DESCRIPTION


def test_sanitize_design_payload_leaves_numbers_and_unknown_keys():
    data = {"coverageOptions": [{"coverageAmount": 1000, "premium": 10.5}], "extra": "\x00kept"}
    out = sanitize_design_payload(data)
    assert out["coverageOptions"][0] == {"coverageAmount": 1000, "premium": 10.5}
    assert out["extra"] == "\x00kept"


def test_sanitize_design_payload_does_not_mutate_input():
    data = {"policyName": "  spaced  "}
    sanitize_design_payload(data)
    assert data["policyName"] == "  spaced  "


def test_sanitize_design_payload_empty_input():
    assert sanitize_design_payload({}) == {}
    assert sanitize_design_payload(None) == {}


def test_soql_literal_escapes_quotes_and_backslashes():
    assert soql_literal("Auto") == "'Auto'"
    assert soql_literal("O'Brien") == "'O\\'Brien'"
    assert soql_literal("a\\b") == "'a\\\\b'"
    assert soql_literal("line\nbreak") == "'line\\nbreak'"


def test_soql_in_list():
    assert soql_in_list(["In Force", "Pending"]) == "('In Force', 'Pending')"
