"""Deployment backing running tasks in a separate OS process."""

from __future__ import annotations

import logging
import multiprocessing as mp
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from taskdeploy.config import SupervisorConfig
from taskdeploy.deployment.domain.exceptions import DisposalError, InvalidStateError
from taskdeploy.deployment.domain.exit_status import ExitStatus
from taskdeploy.deployment.domain.process_base import ProcessBase
from taskdeploy.deployment.domain.process_state import ProcessState
from taskdeploy.deployment.infrastructure.deployment_host import (
    EXIT_DISPOSE_FAILED,
    deployment_host,
)
from taskdeploy.deployment.infrastructure.task_factory import ClassTaskFactory

if TYPE_CHECKING:
    from multiprocessing.context import BaseContext
    from multiprocessing.process import BaseProcess
    from multiprocessing.synchronize import Event as MPEvent

    from taskdeploy.deployment.domain.dead_deployment_listener_port import (
        DeadDeploymentListenerPort,
    )
    from taskdeploy.deployment.domain.deployment_model import DeploymentModel
    from taskdeploy.deployment.domain.name_mapping import NameMapping
    from taskdeploy.deployment.domain.task_context_port import TaskFactoryPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteTask:
    """Handle on a task living in another process.

    Attributes:
        name: Deployed name of the task
        logical_name: Name of the task in the deployment model
        deployment: Name of the deployment hosting the task
        pid: PID of the hosting process
    """

    name: str
    logical_name: str
    deployment: str
    pid: int | None


class MultiprocessDeployment(ProcessBase):
    """Deployment whose tasks live in a child process.

    The child builds every task declared in the model, then waits until the
    parent asks it to stop and disposes them. The parent addresses tasks
    through RemoteTask handles.

    Death of the child is noticed the next time is_alive(), wait_running()
    or join() is called; the owning registry is then notified with the
    child's exit status.

    Example:
        ```python
        process = MultiprocessDeployment("p1", model, owning_registry=registry)
        process.spawn()
        process.wait_running(blocking=True, timeout=5.0)
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
        config: SupervisorConfig | None = None,
    ) -> None:
        """Initialize the deployment.

        Args:
            name: Deployment name
            model: Deployment model declaring the tasks
            owning_registry: Notified once when the deployment dies (optional)
            name_mapping: Logical -> deployed task name mapping (default: identity)
            task_factory: Builds and disposes tasks in the child (default: ClassTaskFactory)
            config: Timeouts and start method (default: SupervisorConfig())
        """
        super().__init__(name, model, owning_registry, name_mapping)
        self.task_factory = task_factory or ClassTaskFactory()
        self.config = config or SupervisorConfig()
        self._context: BaseContext = mp.get_context(self.config.start_method)
        self._process: BaseProcess | None = None
        self._ready_event: MPEvent | None = None
        self._stop_event: MPEvent | None = None
        # Status requested by kill(wait=False), reported once the child exits
        self._kill_status: ExitStatus | None = None

    def process_id(self) -> int | None:
        return self._process.pid if self._process is not None else None

    def spawn(self, **options: Any) -> None:
        """Start the child process.

        Tasks are addressable by name as soon as this returns; use
        wait_running() to know when the child has actually built them.

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
        tasks = [
            (deployed_names[activity.name], activity.task_model)
            for activity in self._model.task_activities
        ]

        self._ready_event = self._context.Event()
        self._stop_event = self._context.Event()
        process = self._context.Process(  # type: ignore[attr-defined]
            target=deployment_host,
            args=(tasks, self.task_factory, self._ready_event, self._stop_event),
            name=f"deployment-{self._name}",
            daemon=True,
        )
        process.start()
        self._process = process
        self._name_mapping = mapping

        self._deployed_tasks = {
            logical: RemoteTask(
                name=deployed,
                logical_name=logical,
                deployment=self._name,
                pid=process.pid,
            )
            for logical, deployed in deployed_names.items()
        }
        self._transition(ProcessState.RUNNING, "spawn")
        logger.info("Spawned deployment '%s' as PID %s", self._name, process.pid)

    def is_alive(self) -> bool:
        """Check whether the child is running.

        If the child exited on its own, the deployment becomes DEAD and the
        owning registry is notified with the child's exit status.
        """
        if self._state != ProcessState.RUNNING:
            return False
        assert self._process is not None
        if self._process.is_alive():
            return True

        if self._kill_status is not None:
            self.dead(self._kill_status)
        else:
            status = ExitStatus.from_exitcode(self._process.exitcode)
            logger.warning("Deployment '%s' exited on its own (%s)", self._name, status)
            self.dead(status)
        return False

    def wait_running(self, blocking: bool = False, timeout: float | None = None) -> bool:
        """Check (or wait) until the child has built every task.

        Args:
            blocking: Wait until the tasks are ready
            timeout: Maximum time to wait (default: config.ready_timeout)

        Returns:
            True if every task is ready, False if the child is dead

        Raises:
            InvalidStateError: If the deployment was never spawned
            TimeoutError: If blocking and the tasks are not ready in time
        """
        if self._state == ProcessState.UNSPAWNED:
            raise InvalidStateError(self._name, self._state, "wait_running")
        assert self._ready_event is not None

        deadline = time.monotonic() + (timeout if timeout is not None else self.config.ready_timeout)
        while True:
            if not self.is_alive():
                return False
            if self._ready_event.wait(self.config.poll_interval if blocking else 0):
                return True
            if not blocking:
                return False
            if time.monotonic() >= deadline:
                raise TimeoutError(f"deployment '{self._name}' did not get ready in time")

    def kill(self, wait: bool = True, status: ExitStatus | None = None) -> None:
        """Stop the child process.

        The child is asked to dispose its tasks. With wait=True, a child that
        does not exit within config.kill_timeout is terminated, then killed,
        and the deployment is DEAD on return. With wait=False the call returns
        at once; the deployment becomes DEAD, and the registry is notified
        with status, once a later is_alive() or join() sees the child gone.

        Raises:
            DisposalError: If the child reported that some tasks failed to dispose
        """
        if not self.is_alive():
            logger.debug("Ignoring kill() on deployment '%s' in state %s", self._name, self._state)
            return
        assert self._process is not None and self._stop_event is not None

        self._kill_status = status or ExitStatus()
        self._stop_event.set()
        if not wait:
            return

        self._stop_process(self._process)
        failures: list[tuple[str, BaseException]] = []
        if self._process.exitcode == EXIT_DISPOSE_FAILED:
            failures.append((self._name, ChildProcessError("child failed to dispose some tasks")))
        try:
            self.dead(self._kill_status)
        except Exception as error:
            if failures:
                raise DisposalError(self._name, failures) from error
            raise
        if failures:
            raise DisposalError(self._name, failures)

    def join(self, timeout: float | None = None) -> None:
        """Block until the child exits.

        Raises:
            InvalidStateError: If the deployment was never spawned
            TimeoutError: If the child is still running after timeout
        """
        if self._state == ProcessState.UNSPAWNED:
            raise InvalidStateError(self._name, self._state, "join")
        assert self._process is not None

        self._process.join(timeout)
        if self._process.exitcode is None:
            raise TimeoutError(f"deployment '{self._name}' is still running")
        if self._state == ProcessState.RUNNING:
            self.dead(self._kill_status or ExitStatus.from_exitcode(self._process.exitcode))

    def _stop_process(self, process: BaseProcess) -> None:
        timeout = self.config.kill_timeout
        process.join(timeout)
        if process.exitcode is not None:
            return

        logger.warning("Deployment '%s' did not stop in %.1fs, terminating", self._name, timeout)
        process.terminate()
        process.join(timeout)
        if process.exitcode is None:
            logger.warning("Deployment '%s' ignored SIGTERM, killing", self._name)
            process.kill()
            process.join()
