"""Shared pytest fixtures: an in-memory record gateway that records every call."""

import copy
import re
from typing import Any, Callable, Optional

import pytest

_FROM_OBJECT = re.compile(r"\bFROM\s+(\w+)", re.I)

# Id prefixes per object, loosely following the store's key prefixes
_ID_PREFIXES = {
    "Product2": "01t",
    "InsurancePolicy": "0YT",
    "InsurancePolicyCoverage": "0ZC",
    "InsurancePolicyParticipant": "0YP",
    "PricebookEntry": "01u",
}


class FakeGateway:
    """In-memory stand-in for the CRM record gateway.

    - create() stores records and returns {"id", "success", "errors"}
    - rejections[object_type] = fn(fields) -> list of errors (reject) or None (accept)
    - raises[object_type] = fn(fields) -> exception to raise, or None
    - query() returns query_results keyed by the FROM object, else no rows
    """

    def __init__(self, records: Optional[dict[str, dict[str, dict]]] = None):
        self.records: dict[str, dict[str, dict]] = copy.deepcopy(records or {})
        self.created: list[tuple[str, dict[str, Any]]] = []
        self.lookups: list[tuple[str, dict[str, Any]]] = []
        self.queries: list[str] = []
        self.query_results: dict[str, dict[str, Any]] = {}
        self.rejections: dict[str, Callable[[dict], Optional[list[str]]]] = {}
        self.raises: dict[str, Callable[[dict], Optional[Exception]]] = {}
        self._counter = 0

    def create(self, object_type, fields):
        fields = dict(fields)
        self.created.append((object_type, fields))
        raiser = self.raises.get(object_type)
        if raiser is not None:
            exc = raiser(fields)
            if exc is not None:
                raise exc
        rejection = self.rejections.get(object_type)
        errors = rejection(fields) if rejection is not None else None
        if errors:
            return {"id": None, "success": False, "errors": errors}
        self._counter += 1
        new_id = f"{_ID_PREFIXES.get(object_type, 'a00')}{self._counter:06d}"
        self.records.setdefault(object_type, {})[new_id] = {"Id": new_id, **fields}
        return {"id": new_id, "success": True, "errors": []}

    def find_one(self, object_type, criteria):
        self.lookups.append((object_type, dict(criteria)))
        record = self.records.get(object_type, {}).get(criteria.get("Id"))
        return copy.deepcopy(record) if record is not None else None

    def query(self, soql):
        self.queries.append(soql)
        match = _FROM_OBJECT.search(soql)
        if match and match.group(1) in self.query_results:
            return copy.deepcopy(self.query_results[match.group(1)])
        return {"records": [], "totalSize": 0}

    def created_of(self, object_type: str) -> list[dict[str, Any]]:
        return [fields for obj, fields in self.created if obj == object_type]


@pytest.fixture
def gateway():
    """Gateway seeded with one account, two contacts, one product and the standard price book."""
    gw = FakeGateway(
        records={
            "Account": {"A1": {"Id": "A1", "Name": "Acme Holdings"}},
            "Contact": {
                "C1": {"Id": "C1", "Name": "Jane Doe"},
                "C2": {"Id": "C2", "Name": "John Doe"},
            },
            "Product2": {
                "01tEXISTING": {
                    "Id": "01tEXISTING",
                    "Name": "Existing Auto Product",
                    "ProductCode": "INS_AUTO_1",
                    "Family": "Insurance",
                    "IsActive": True,
                }
            },
        }
    )
    gw.query_results["Pricebook2"] = {"records": [{"Id": "01sSTD"}], "totalSize": 1}
    return gw


@pytest.fixture
def design_payload() -> dict[str, Any]:
    """Minimal valid design request in the calling interface's camelCase shape."""
    return {
        "policyName": "Test Auto",
        "policyType": "Auto",
        "accountId": "A1",
        "coverageOptions": [
            {
                "coverageType": "Liability",
                "coverageAmount": 50000,
                "premium": 500,
                "isOptional": False,
                "coverageDescription": "x",
            }
        ],
        "pricingModel": {
            "totalPremiumAmount": 500,
            "premiumFrequency": "Monthly",
            "premiumCalculationMethod": "Fixed",
        },
        "policyTerms": {
            "termStartDate": "2025-01-01",
            "termEndDate": "2026-01-01",
            "termType": "Annual",
            "renewalChannel": "Automatic",
            "cancellationProcessType": "standard",
        },
    }


@pytest.fixture
def three_coverages() -> list[dict[str, Any]]:
    return [
        {"coverageType": "Liability", "coverageAmount": 50000, "premium": 300,
         "isOptional": False, "coverageDescription": "Bodily injury"},
        {"coverageType": "Collision", "coverageAmount": 20000, "deductibleAmount": 500,
         "premium": 150, "isOptional": True, "coverageDescription": "Collision damage"},
        {"coverageType": "Comprehensive", "coverageAmount": 15000, "deductibleAmount": 250,
         "premium": 100, "isOptional": True, "coverageDescription": "Theft and weather"},
    ]
