"""
Service name resolution.

Resolves a human-readable service name to a model object over a fixed,
ordered set of registries.
"""

from taskdeploy.resolver.domain import LookupStrategyPort, ResolvedService, ServiceKind
from taskdeploy.resolver.infrastructure import (
    LOOKUP_ORDER,
    CompositionLookup,
    DefinitionLookup,
    DeviceLookup,
    ServiceResolver,
    TaskModelLookup,
)

__all__ = [
    # Domain
    "LookupStrategyPort",
    "ResolvedService",
    "ServiceKind",
    # Infrastructure
    "CompositionLookup",
    "DefinitionLookup",
    "DeviceLookup",
    "TaskModelLookup",
    "LOOKUP_ORDER",
    "ServiceResolver",
]
