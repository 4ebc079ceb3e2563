"""In-process deployment backing."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

from taskdeploy.deployment.domain.exceptions import (
    DisposalError,
    InvalidStateError,
    UnsupportedOperationError,
)
from taskdeploy.deployment.domain.exit_status import ExitStatus
from taskdeploy.deployment.domain.process_base import ProcessBase
from taskdeploy.deployment.domain.process_state import ProcessState
from taskdeploy.deployment.infrastructure.task_factory import ClassTaskFactory

if TYPE_CHECKING:
    from taskdeploy.deployment.domain.dead_deployment_listener_port import (
        DeadDeploymentListenerPort,
    )
    from taskdeploy.deployment.domain.deployment_model import DeploymentModel
    from taskdeploy.deployment.domain.name_mapping import NameMapping
    from taskdeploy.deployment.domain.task_context_port import TaskContextPort, TaskFactoryPort

logger = logging.getLogger(__name__)


class InProcessDeployment(ProcessBase):
    """Deployment whose tasks are objects inside the supervisor's process.

    Spawning builds every task declared in the model at once; killing
    disposes them all at once. Tasks are ready as soon as they are built,
    so every operation returns without blocking.

    Example:
        ```python
        process = InProcessDeployment("p1", model, owning_registry=registry)
        process.spawn(prefix="robot1_")
        camera = process.task("camera")
        process.kill()
        ```
    """

    def __init__(
        self,
        name: str,
        model: DeploymentModel,
        owning_registry: DeadDeploymentListenerPort | None = None,
        name_mapping: NameMapping | None = None,
        task_factory: TaskFactoryPort | None = None,
    ) -> None:
        """Initialize the deployment.

        Args:
            name: Deployment name
            model: Deployment model declaring the tasks
            owning_registry: Notified once when the deployment dies (optional)
            name_mapping: Logical -> deployed task name mapping (default: identity)
            task_factory: Builds and disposes tasks (default: ClassTaskFactory)
        """
        super().__init__(name, model, owning_registry, name_mapping)
        self.task_factory = task_factory or ClassTaskFactory()

    def process_id(self) -> int:
        return os.getpid()

    def spawn(self, **options: Any) -> None:
        """Build every task declared in the model.

        Args:
            **options: prefix and/or suffix applied to the deployed names

        Raises:
            InvalidStateError: If already spawned or dead
            TypeError: If an option other than prefix or suffix is given
            ValueError: If two tasks would get the same deployed name
        """
        self._require_state(ProcessState.UNSPAWNED, "spawn")
        mapping = self._spawn_mapping(options)
        deployed_names = mapping.map_all(self._model.task_names())

        created: dict[str, TaskContextPort] = {}
        try:
            for activity in self._model.task_activities:
                created[activity.name] = self.task_factory.create(
                    deployed_names[activity.name], activity.task_model
                )
        except Exception:
            logger.error(
                "Failed to spawn '%s', disposing %d task(s) already created",
                self._name,
                len(created),
            )
            self._dispose_all(created, deployed_names)
            raise

        self._name_mapping = mapping
        self._deployed_tasks = created
        self._transition(ProcessState.RUNNING, "spawn")
        logger.info(
            "Spawned deployment '%s' with tasks %s", self._name, list(deployed_names.values())
        )

    def wait_running(self, blocking: bool = False, timeout: float | None = None) -> bool:
        """Check whether every task is ready.

        Tasks are ready once built, so this never waits.

        Returns:
            True while RUNNING, False once DEAD

        Raises:
            InvalidStateError: If the deployment was never spawned
        """
        if self._state == ProcessState.UNSPAWNED:
            raise InvalidStateError(self._name, self._state, "wait_running")
        return self._state == ProcessState.RUNNING

    def kill(self, wait: bool = True, status: ExitStatus | None = None) -> None:
        if self._state != ProcessState.RUNNING:
            logger.debug("Ignoring kill() on deployment '%s' in state %s", self._name, self._state)
            return

        deployed_names = {
            logical: self.get_mapped_name(logical) for logical in self._deployed_tasks
        }
        failures = self._dispose_all(self._deployed_tasks, deployed_names)
        try:
            self.dead(status or ExitStatus())
        except Exception as error:
            if failures:
                raise DisposalError(self._name, failures) from error
            raise
        if failures:
            raise DisposalError(self._name, failures)

    def join(self, timeout: float | None = None) -> None:
        raise UnsupportedOperationError(
            f"join() is not supported by in-process deployment '{self._name}'"
        )

    def _dispose_all(
        self, tasks: dict[str, TaskContextPort], deployed_names: dict[str, str]
    ) -> list[tuple[str, BaseException]]:
        failures: list[tuple[str, BaseException]] = []
        for logical_name, task in tasks.items():
            deployed_name = deployed_names[logical_name]
            try:
                self.task_factory.dispose(task)
                logger.debug("Disposed task '%s'", deployed_name)
            except Exception as error:
                logger.warning("Failed to dispose task '%s'", deployed_name, exc_info=True)
                failures.append((deployed_name, error))
        return failures
