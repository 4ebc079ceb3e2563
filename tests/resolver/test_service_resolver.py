"""Tests for service name resolution."""

import pytest

from taskdeploy.deployment import NotFoundError
from taskdeploy.resolver import (
    LOOKUP_ORDER,
    CompositionLookup,
    DefinitionLookup,
    DeviceLookup,
    ResolvedService,
    ServiceKind,
    ServiceResolver,
    TaskModelLookup,
)


class PerceptionComposition:
    """Stand-in composition model."""


class CameraTask:
    """Stand-in task model."""


@pytest.fixture
def resolver() -> ServiceResolver:
    """Create a resolver with one entry per registry."""
    return ServiceResolver(
        devices={"front_camera": object()},
        definitions={"nav": object()},
        compositions={"Perception": PerceptionComposition},
        task_models={"camera::Task": CameraTask},
    )


class TestServiceResolver:
    """Test ServiceResolver."""

    def test_device_resolves_to_its_name(self, resolver: ServiceResolver) -> None:
        """Test that devices resolve to the name itself."""
        resolved = resolver.resolve("front_camera")

        assert resolved == ResolvedService("front_camera", ServiceKind.DEVICE, "front_camera")
        assert resolved.is_resolved()

    def test_definition_resolves_to_its_name(self, resolver: ServiceResolver) -> None:
        """Test that definitions resolve to the name itself."""
        resolved = resolver.resolve("nav")

        assert resolved.kind == ServiceKind.DEFINITION
        assert resolved.target == "nav"

    def test_composition_resolves_to_model(self, resolver: ServiceResolver) -> None:
        """Test that compositions resolve to their model."""
        resolved = resolver.resolve("Perception")

        assert resolved.kind == ServiceKind.COMPOSITION
        assert resolved.target is PerceptionComposition

    def test_task_model_resolves_to_model(self, resolver: ServiceResolver) -> None:
        """Test that task models resolve to their model."""
        resolved = resolver.resolve("camera::Task")

        assert resolved.kind == ServiceKind.TASK_MODEL
        assert resolved.target is CameraTask

    def test_unknown_name_is_unresolved(self, resolver: ServiceResolver) -> None:
        """Test that unknown names give an explicit unresolved result."""
        resolved = resolver.resolve("nothing")

        assert resolved == ResolvedService.unresolved("nothing")
        assert resolved.kind == ServiceKind.UNRESOLVED
        assert resolved.target is None
        assert not resolved.is_resolved()

    def test_resolve_or_raise(self, resolver: ServiceResolver) -> None:
        """Test the raising variant."""
        assert resolver.resolve_or_raise("Perception").target is PerceptionComposition

        with pytest.raises(NotFoundError, match="no registry knows a service called 'nothing'"):
            resolver.resolve_or_raise("nothing")

    def test_first_registry_wins(self) -> None:
        """Test that lookups follow the declared order."""
        resolver = ServiceResolver(
            devices={"shared": object()},
            compositions={"shared": PerceptionComposition, "comp_and_task": PerceptionComposition},
            task_models={"shared": CameraTask, "comp_and_task": CameraTask},
        )

        assert resolver.resolve("shared").kind == ServiceKind.DEVICE
        assert resolver.resolve("comp_and_task").kind == ServiceKind.COMPOSITION

    def test_strategy_order(self) -> None:
        """Test that the strategies are tried devices first, task models last."""
        resolver = ServiceResolver()

        assert tuple(strategy.kind for strategy in resolver.strategies) == LOOKUP_ORDER
        assert LOOKUP_ORDER[0] == ServiceKind.DEVICE
        assert LOOKUP_ORDER[-1] == ServiceKind.TASK_MODEL

    def test_empty_resolver(self) -> None:
        """Test that a resolver without registries resolves nothing."""
        assert not ServiceResolver().resolve("anything").is_resolved()


class TestLookupStrategies:
    """Test the individual lookup strategies."""

    def test_strategy_miss_returns_none(self) -> None:
        """Test that a strategy returns None for names it does not know."""
        assert DeviceLookup({"a": 1}).lookup("b") is None
        assert CompositionLookup().lookup("b") is None

    def test_strategy_sees_later_registrations(self) -> None:
        """Test that strategies read the caller's mapping live."""
        task_models: dict[str, type] = {}
        lookup = TaskModelLookup(task_models)

        task_models["camera::Task"] = CameraTask

        resolved = lookup.lookup("camera::Task")
        assert resolved is not None
        assert resolved.target is CameraTask

    def test_strategy_targets(self) -> None:
        """Test that name registries resolve to the name, model registries to the entry."""
        entry = object()

        assert DeviceLookup({"cam": entry}).lookup("cam") == ResolvedService(
            "cam", ServiceKind.DEVICE, "cam"
        )
        assert DefinitionLookup({"nav": entry}).lookup("nav") == ResolvedService(
            "nav", ServiceKind.DEFINITION, "nav"
        )
        assert CompositionLookup({"Perception": entry}).lookup("Perception") == ResolvedService(
            "Perception", ServiceKind.COMPOSITION, entry
        )
        assert TaskModelLookup({"camera::Task": entry}).lookup("camera::Task") == ResolvedService(
            "camera::Task", ServiceKind.TASK_MODEL, entry
        )
