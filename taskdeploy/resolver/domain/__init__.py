"""Domain layer for service resolution."""

from taskdeploy.resolver.domain.lookup_strategy_port import LookupStrategyPort
from taskdeploy.resolver.domain.resolved_service import ResolvedService, ServiceKind

__all__ = ["LookupStrategyPort", "ResolvedService", "ServiceKind"]
