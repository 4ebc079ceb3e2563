"""Infrastructure layer for service resolution."""

from taskdeploy.resolver.infrastructure.lookup_strategies import (
    CompositionLookup,
    DefinitionLookup,
    DeviceLookup,
    TaskModelLookup,
)
from taskdeploy.resolver.infrastructure.service_resolver import LOOKUP_ORDER, ServiceResolver

__all__ = [
    "CompositionLookup",
    "DefinitionLookup",
    "DeviceLookup",
    "TaskModelLookup",
    "LOOKUP_ORDER",
    "ServiceResolver",
]
