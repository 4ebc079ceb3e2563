"""
Lookup strategy interface.
One strategy per registry a service name can be found in.
"""

from abc import ABC, abstractmethod

from taskdeploy.resolver.domain.resolved_service import ResolvedService, ServiceKind


class LookupStrategyPort(ABC):
    """
    Interface for a single service lookup strategy.
    """

    kind: ServiceKind

    @abstractmethod
    def lookup(self, name: str) -> ResolvedService | None:
        """
        Look a service name up.

        Args:
            name: Service name.

        Returns:
            The resolution if this strategy knows the name, None otherwise.
        """
        ...
