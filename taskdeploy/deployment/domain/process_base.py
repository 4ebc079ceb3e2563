"""Lifecycle bookkeeping shared by every deployment process backing."""

from __future__ import annotations

import logging
import uuid
import weakref
from typing import TYPE_CHECKING, Any

from uuid6 import uuid7

from taskdeploy.deployment.domain.exceptions import InvalidStateError, NotFoundError
from taskdeploy.deployment.domain.exit_status import ExitStatus
from taskdeploy.deployment.domain.name_mapping import NameMapping
from taskdeploy.deployment.domain.process_port import ProcessPort
from taskdeploy.deployment.domain.process_state import ProcessState

if TYPE_CHECKING:
    from taskdeploy.deployment.domain.dead_deployment_listener_port import (
        DeadDeploymentListenerPort,
    )
    from taskdeploy.deployment.domain.deployment_model import DeploymentModel

logger = logging.getLogger(__name__)

SPAWN_OPTIONS = frozenset({"prefix", "suffix"})


class ProcessBase(ProcessPort):
    """Common state of a deployment process.

    Holds the name, model, name mapping, the deployed task table and the
    state machine, and implements the death notification towards the owning
    registry. Backings implement spawn(), kill(), join() and friends on top.

    The owning registry is held through a weak reference: the process only
    needs it to report its death and must not keep it alive.
    """

    def __init__(
        self,
        name: str,
        model: DeploymentModel,
        owning_registry: DeadDeploymentListenerPort | None = None,
        name_mapping: NameMapping | None = None,
    ) -> None:
        """Initialize the process.

        Args:
            name: Deployment name, unique within the owning registry
            model: Deployment model (shared, not owned)
            owning_registry: Notified once when the process dies (optional)
            name_mapping: Logical -> deployed task name mapping (default: identity)
        """
        if not name:
            raise ValueError("Deployment name cannot be empty")

        self._name = name
        self._model = model
        self._name_mapping = name_mapping or NameMapping()
        self._state = ProcessState.UNSPAWNED
        self._deployed_tasks: dict[str, Any] = {}
        self._owning_registry: weakref.ref[DeadDeploymentListenerPort] | None = (
            weakref.ref(owning_registry) if owning_registry is not None else None
        )
        self.exit_status: ExitStatus | None = None
        self.uid: uuid.UUID = uuid7()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, state={self._state})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def model(self) -> DeploymentModel:
        return self._model

    @property
    def state(self) -> ProcessState:
        return self._state

    @property
    def name_mapping(self) -> NameMapping:
        return self._name_mapping

    @property
    def owning_registry(self) -> DeadDeploymentListenerPort | None:
        """The owning registry, or None if none was given or it is gone."""
        if self._owning_registry is None:
            return None
        return self._owning_registry()

    @property
    def deployed_tasks(self) -> dict[str, Any]:
        """Copy of the logical name -> task table, in model order."""
        return dict(self._deployed_tasks)

    def get_mapped_name(self, logical_name: str) -> str:
        """Get the deployed name of a task declared in the model."""
        return self._name_mapping.map(logical_name)

    def map_name(self, logical_name: str, deployed_name: str) -> None:
        """Deploy logical_name under an explicit name.

        Raises:
            InvalidStateError: If the tasks were already created
        """
        self._require_state(ProcessState.UNSPAWNED, "map_name")
        self._name_mapping = self._name_mapping.with_override(logical_name, deployed_name)

    def is_alive(self) -> bool:
        return self._state == ProcessState.RUNNING

    def running(self) -> bool:
        """Alias for is_alive()."""
        return self.is_alive()

    def task(self, logical_name: str) -> Any:
        self._require_state(ProcessState.RUNNING, "task")
        try:
            return self._deployed_tasks[logical_name]
        except KeyError:
            raise NotFoundError(self._name, logical_name) from None

    def task_by_deployed_name(self, deployed_name: str) -> Any:
        """Get a deployed task by the name it is addressed with.

        Raises:
            InvalidStateError: If the process is not RUNNING
            NotFoundError: If no task is deployed under that name
        """
        self._require_state(ProcessState.RUNNING, "task_by_deployed_name")
        logical = self._name_mapping.reverse(deployed_name, self._deployed_tasks)
        if logical is None:
            raise NotFoundError(self._name, deployed_name)
        return self._deployed_tasks[logical]

    def host_id(self) -> str:
        return "localhost"

    def is_local(self) -> bool:
        return True

    def dead(self, status: ExitStatus | None = None) -> bool:
        """Mark the process dead and notify the owning registry.

        Must be called after every task was disposed (or disposal was
        attempted). Calling it on a dead process does nothing.

        Args:
            status: How the process ended (default: exit code 0)

        Returns:
            True if this call performed the transition

        Raises:
            InvalidStateError: If the process was never spawned
        """
        if self._state == ProcessState.DEAD:
            return False
        self._transition(ProcessState.DEAD, "dead")

        status = status or ExitStatus()
        self.exit_status = status
        self._deployed_tasks.clear()
        logger.info("Deployment '%s' is dead (%s)", self._name, status)

        registry = self.owning_registry
        if registry is None:
            logger.debug("Deployment '%s' has no owning registry to notify", self._name)
            return True

        try:
            registry.on_deployment_dead(self._name, status)
        except Exception:
            logger.exception("Owning registry failed to handle death of '%s'", self._name)
            raise
        return True

    def _require_state(self, expected: ProcessState, operation: str) -> None:
        if self._state != expected:
            raise InvalidStateError(self._name, self._state, operation)

    def _transition(self, target: ProcessState, operation: str) -> None:
        if not self._state.can_transition_to(target):
            raise InvalidStateError(self._name, self._state, operation)
        self._state = target

    def _spawn_mapping(self, options: dict[str, Any]) -> NameMapping:
        """Build the name mapping a spawn call would deploy with.

        The process keeps its current mapping until the spawn succeeds.

        Raises:
            TypeError: If options holds anything but prefix and suffix
        """
        unknown = sorted(set(options) - SPAWN_OPTIONS)
        if unknown:
            raise TypeError(
                f"spawn() of deployment '{self._name}' got unknown option(s): {', '.join(unknown)}"
            )
        if not options:
            return self._name_mapping
        return self._name_mapping.with_decoration(options.get("prefix"), options.get("suffix"))
