"""
Service resolver.
Resolves a human-readable service name by trying each registry in turn.
"""

import logging
from collections.abc import Mapping
from typing import Any

from taskdeploy.deployment.domain.exceptions import NotFoundError
from taskdeploy.resolver.domain.lookup_strategy_port import LookupStrategyPort
from taskdeploy.resolver.domain.resolved_service import ResolvedService, ServiceKind
from taskdeploy.resolver.infrastructure.lookup_strategies import (
    CompositionLookup,
    DefinitionLookup,
    DeviceLookup,
    TaskModelLookup,
)

logger = logging.getLogger(__name__)

# Lookup order; the first strategy that knows a name wins
LOOKUP_ORDER = (
    ServiceKind.DEVICE,
    ServiceKind.DEFINITION,
    ServiceKind.COMPOSITION,
    ServiceKind.TASK_MODEL,
)


class ServiceResolver:
    """
    Resolves service names over devices, definitions, compositions and task
    models, in that order.

    Example:
        resolver = ServiceResolver(
            devices={"front_camera": camera_device},
            compositions={"Perception": PerceptionComposition},
        )
        resolver.resolve("Perception").target  # PerceptionComposition
        resolver.resolve("nothing").is_resolved()  # False
    """

    def __init__(
        self,
        devices: Mapping[str, Any] | None = None,
        definitions: Mapping[str, Any] | None = None,
        compositions: Mapping[str, Any] | None = None,
        task_models: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            devices: Device registry.
            definitions: Definition registry.
            compositions: Composition model registry.
            task_models: Task model registry.
        """
        by_kind: dict[ServiceKind, LookupStrategyPort] = {
            ServiceKind.DEVICE: DeviceLookup(devices),
            ServiceKind.DEFINITION: DefinitionLookup(definitions),
            ServiceKind.COMPOSITION: CompositionLookup(compositions),
            ServiceKind.TASK_MODEL: TaskModelLookup(task_models),
        }
        self.strategies: tuple[LookupStrategyPort, ...] = tuple(
            by_kind[kind] for kind in LOOKUP_ORDER
        )

    def resolve(self, name: str) -> ResolvedService:
        """
        Resolve a service name.

        Args:
            name: Service name.

        Returns:
            The first match, or an UNRESOLVED result.
        """
        for strategy in self.strategies:
            resolved = strategy.lookup(name)
            if resolved is not None:
                logger.debug("Resolved '%s' as %s", name, resolved.kind)
                return resolved

        logger.debug("Could not resolve service '%s'", name)
        return ResolvedService.unresolved(name)

    def resolve_or_raise(self, name: str) -> ResolvedService:
        """
        Resolve a service name.

        Raises:
            NotFoundError: If no registry knows the name.
        """
        resolved = self.resolve(name)
        if not resolved.is_resolved():
            raise NotFoundError(
                "service resolver", name, f"no registry knows a service called '{name}'"
            )
        return resolved
