"""Record gateway boundary: protocol, response models, object names and loader."""

from policy_design.gateway.base import CreateResult, QueryResult, RecordGateway
from policy_design.gateway.loader import load_gateway

__all__ = [
    "CreateResult",
    "QueryResult",
    "RecordGateway",
    "load_gateway",
]
