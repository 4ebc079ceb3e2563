"""Mapping from logical task names to deployed task names."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType


@dataclass(frozen=True)
class NameMapping:
    """Pure, deterministic logical name -> deployed name mapping.

    An explicit override wins. Otherwise the logical name is decorated with
    prefix and suffix.

    Attributes:
        prefix: String prepended to every non-overridden logical name
        suffix: String appended to every non-overridden logical name
        overrides: Explicit logical name -> deployed name table (left out of the hash)
    """

    prefix: str = ""
    suffix: str = ""
    overrides: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        """Freeze the override table."""
        for logical, deployed in self.overrides.items():
            if not logical or not deployed:
                raise ValueError("name overrides cannot contain empty names")
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))

    def map(self, logical_name: str) -> str:
        """Get the deployed name of a task.

        Args:
            logical_name: Task name as declared in the deployment model

        Returns:
            Name used to address the task once deployed
        """
        if logical_name in self.overrides:
            return self.overrides[logical_name]
        return f"{self.prefix}{logical_name}{self.suffix}"

    def map_all(self, logical_names: Iterable[str]) -> dict[str, str]:
        """Map several names, checking that no two collide.

        Args:
            logical_names: Logical names in deployment order

        Returns:
            Ordered mapping logical name -> deployed name

        Raises:
            ValueError: If two logical names map to the same deployed name
        """
        mapped: dict[str, str] = {}
        seen: dict[str, str] = {}
        for logical in logical_names:
            deployed = self.map(logical)
            if deployed in seen:
                raise ValueError(
                    f"tasks '{seen[deployed]}' and '{logical}' both map to '{deployed}'"
                )
            seen[deployed] = logical
            mapped[logical] = deployed
        return mapped

    def reverse(self, deployed_name: str, logical_names: Iterable[str]) -> str | None:
        """Find which logical name maps to deployed_name.

        Returns:
            The logical name, or None if none of logical_names maps to it
        """
        for logical in logical_names:
            if self.map(logical) == deployed_name:
                return logical
        return None

    def with_override(self, logical_name: str, deployed_name: str) -> NameMapping:
        """Return a copy with one extra explicit mapping."""
        return replace(self, overrides={**self.overrides, logical_name: deployed_name})

    def with_decoration(self, prefix: str | None = None, suffix: str | None = None) -> NameMapping:
        """Return a copy with a different prefix and/or suffix."""
        return replace(
            self,
            prefix=self.prefix if prefix is None else prefix,
            suffix=self.suffix if suffix is None else suffix,
            overrides=dict(self.overrides),
        )
