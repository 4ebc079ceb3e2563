"""
Lookup strategies backed by plain mappings.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from taskdeploy.resolver.domain.lookup_strategy_port import LookupStrategyPort
from taskdeploy.resolver.domain.resolved_service import ResolvedService, ServiceKind


class _MappingLookup(LookupStrategyPort):
    """
    Looks names up in a mapping owned by the caller.

    A hit resolves to the registered entry when resolves_to_entry is set,
    otherwise to the name itself.
    """

    resolves_to_entry: ClassVar[bool] = False

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        self.entries: Mapping[str, Any] = entries if entries is not None else {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self.entries)} entries)"

    def lookup(self, name: str) -> ResolvedService | None:
        if name not in self.entries:
            return None
        target = self.entries[name] if self.resolves_to_entry else name
        return ResolvedService(name=name, kind=self.kind, target=target)


class DeviceLookup(_MappingLookup):
    """Devices declared on the robot. A hit resolves to the device name."""

    kind = ServiceKind.DEVICE


class DefinitionLookup(_MappingLookup):
    """Named definitions. A hit resolves to the definition name."""

    kind = ServiceKind.DEFINITION


class CompositionLookup(_MappingLookup):
    """Composition models. A hit resolves to the composition model."""

    kind = ServiceKind.COMPOSITION
    resolves_to_entry = True


class TaskModelLookup(_MappingLookup):
    """Task models. A hit resolves to the task model."""

    kind = ServiceKind.TASK_MODEL
    resolves_to_entry = True
