"""Resolve the host-provided record gateway from configuration.

POLICY_DESIGN_GATEWAY names an importable attribute as "package.module:attribute".
The attribute may be a gateway instance, or a class/factory that is called
with no arguments to build one.
"""

import importlib
import logging

from policy_design.config.settings import get_gateway_path
from policy_design.exceptions import GatewayConfigurationError
from policy_design.gateway.base import RecordGateway

logger = logging.getLogger(__name__)


def load_gateway(path: str | None = None) -> RecordGateway:
    """Import and return the gateway named by path (or POLICY_DESIGN_GATEWAY)."""
    path = path or get_gateway_path()
    if not path:
        raise GatewayConfigurationError(
            "No record gateway configured; set POLICY_DESIGN_GATEWAY to 'package.module:attribute'"
        )
    module_name, sep, attr_name = path.partition(":")
    if not sep or not module_name or not attr_name:
        raise GatewayConfigurationError(
            f"Invalid gateway path {path!r}; expected 'package.module:attribute'"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise GatewayConfigurationError(f"Cannot import gateway module {module_name!r}: {e}") from e
    try:
        target = getattr(module, attr_name)
    except AttributeError as e:
        raise GatewayConfigurationError(
            f"Module {module_name!r} has no attribute {attr_name!r}"
        ) from e

    # A class also passes the protocol check, so classes are always instantiated
    if isinstance(target, type) or not isinstance(target, RecordGateway):
        if not callable(target):
            raise GatewayConfigurationError(f"{path!r} is neither a gateway nor a factory")
        gateway = target()
    else:
        gateway = target
    if not isinstance(gateway, RecordGateway):
        raise GatewayConfigurationError(
            f"{path!r} does not provide create/find_one/query"
        )
    logger.debug("Loaded record gateway from %s", path)
    return gateway
