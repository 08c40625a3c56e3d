"""Record gateway protocol and the normalized shapes of its responses.

The gateway is supplied by the host environment (an authenticated CRM client,
or a fake in tests). Orchestration code depends only on this protocol.
"""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


@runtime_checkable
class RecordGateway(Protocol):
    """Generic create/find/query access to the remote record store."""

    def create(self, object_type: str, fields: Mapping[str, Any]) -> Mapping[str, Any]:
        """Create one record. Returns {"id", "success", "errors"}."""
        ...

    def find_one(
        self, object_type: str, criteria: Mapping[str, Any]
    ) -> Optional[Mapping[str, Any]]:
        """Return the first record matching criteria, or None."""
        ...

    def query(self, soql: str) -> Mapping[str, Any]:
        """Run a query. Returns {"records": [...], "totalSize": int}."""
        ...


class CreateResult(BaseModel):
    """Outcome of a gateway create call."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(default=None, description="Id of the new record")
    success: bool = Field(default=False, description="Whether the store accepted the record")
    errors: list[str] = Field(default_factory=list, description="Store error messages")

    @field_validator("errors", mode="before")
    @classmethod
    def _coerce_errors(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, (str, bytes)):
            return [str(value)]
        out = []
        for item in value:
            if isinstance(item, Mapping):
                out.append(str(item.get("message") or item))
            else:
                out.append(str(item))
        return out


class QueryResult(BaseModel):
    """Rows returned by a gateway query."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    records: list[dict[str, Any]] = Field(default_factory=list)
    total_size: Optional[int] = Field(default=None, alias="totalSize")

    @field_validator("records", mode="before")
    @classmethod
    def _coerce_records(cls, value: Any) -> list:
        return [] if value is None else value

    @model_validator(mode="after")
    def _default_total_size(self) -> "QueryResult":
        if self.total_size is None:
            self.total_size = len(self.records)
        return self
