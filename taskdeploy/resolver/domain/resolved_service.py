"""Result of resolving a service name."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any


class ServiceKind(StrEnum):
    """Which registry a service name was found in.

    Members are declared in lookup order; UNRESOLVED comes last.
    """

    DEVICE = auto()
    DEFINITION = auto()
    COMPOSITION = auto()
    TASK_MODEL = auto()
    UNRESOLVED = auto()


@dataclass(frozen=True)
class ResolvedService:
    """A resolved (or unresolved) service name.

    Attributes:
        name: The name that was looked up
        kind: Registry that matched, UNRESOLVED if none did
        target: What the name resolved to. Devices and definitions resolve
            to the name itself; compositions and task models to their model.
    """

    name: str
    kind: ServiceKind
    target: Any = None

    @classmethod
    def unresolved(cls, name: str) -> ResolvedService:
        return cls(name=name, kind=ServiceKind.UNRESOLVED)

    def is_resolved(self) -> bool:
        return self.kind != ServiceKind.UNRESOLVED
