"""
Deployment registry.
Starts deployments and keeps track of the ones still alive.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

import polars as pl

from taskdeploy.config import SupervisorConfig
from taskdeploy.deployment.domain.dead_deployment_listener_port import DeadDeploymentListenerPort
from taskdeploy.deployment.domain.exceptions import DisposalError
from taskdeploy.deployment.domain.process_base import ProcessBase
from taskdeploy.deployment.infrastructure.in_process_deployment import InProcessDeployment
from taskdeploy.deployment.infrastructure.multiprocess_deployment import MultiprocessDeployment

if TYPE_CHECKING:
    from taskdeploy.deployment.domain.deployment_model import DeploymentModel
    from taskdeploy.deployment.domain.exit_status import ExitStatus
    from taskdeploy.deployment.domain.name_mapping import NameMapping

logger = logging.getLogger(__name__)


class ProcessBacking(StrEnum):
    """Execution model behind a deployment.

    Attributes:
        IN_PROCESS: Tasks are objects inside the supervisor's process
        MULTIPROCESS: Tasks live in a dedicated child process
    """

    IN_PROCESS = auto()
    MULTIPROCESS = auto()


BackingFactory = Callable[..., ProcessBase]


class DeploymentRegistry(DeadDeploymentListenerPort):
    """
    Process server for deployments.

    Builds deployments with an explicitly selected backing, and is notified
    by each of them when it dies.

    Example:
        registry = DeploymentRegistry(SupervisorConfig())
        process = registry.start("p1", model, backing=ProcessBacking.IN_PROCESS)

        process.kill()
        assert "p1" not in registry
        dead = registry.wait_termination()  # [("p1", ExitStatus(0))]
    """

    def __init__(self, config: SupervisorConfig | None = None) -> None:
        """Initialize the registry."""
        self.config = config or SupervisorConfig()
        self._deployments: dict[str, ProcessBase] = {}
        self._backings: dict[str, ProcessBacking] = {}
        self._dead: list[tuple[str, ExitStatus]] = []
        self._factories: dict[ProcessBacking, BackingFactory] = {
            ProcessBacking.IN_PROCESS: self._build_in_process,
            ProcessBacking.MULTIPROCESS: self._build_multiprocess,
        }

    def __contains__(self, name: object) -> bool:
        return name in self._deployments

    def __len__(self) -> int:
        return len(self._deployments)

    def start(
        self,
        name: str,
        model: DeploymentModel,
        backing: ProcessBacking = ProcessBacking.IN_PROCESS,
        name_mapping: NameMapping | None = None,
        **spawn_options: Any,
    ) -> ProcessBase:
        """
        Create and spawn a deployment.

        Args:
            name: Deployment name, unique among live deployments.
            model: Deployment model.
            backing: Execution model to use.
            name_mapping: Logical -> deployed task name mapping.
            **spawn_options: Passed to spawn() (prefix, suffix).

        Returns:
            The running deployment.

        Raises:
            ValueError: If a live deployment already has this name.
        """
        if name in self._deployments:
            raise ValueError(f"Deployment '{name}' is already running")

        process = self._factories[ProcessBacking(backing)](name, model, name_mapping)
        process.spawn(**spawn_options)

        self._deployments[name] = process
        self._backings[name] = ProcessBacking(backing)
        logging.info(f"Started deployment '{name}' ({backing}, model '{model.name}')")
        return process

    def get(self, name: str) -> ProcessBase | None:
        """Get a live deployment by name."""
        return self._deployments.get(name)

    def get_all(self) -> dict[str, ProcessBase]:
        """Get all live deployments."""
        return self._deployments.copy()

    def on_deployment_dead(self, name: str, status: ExitStatus) -> None:
        if self._deployments.pop(name, None) is None:
            logger.warning("Got death notification for unknown deployment '%s'", name)
            return
        self._backings.pop(name, None)
        self._dead.append((name, status))
        logger.info("Deployment '%s' terminated (%s)", name, status)

    def wait_termination(self) -> list[tuple[str, ExitStatus]]:
        """
        Collect the deployments that died since the last call.

        Live deployments are polled first so that external processes that
        exited on their own are picked up.

        Returns:
            (name, status) pairs in order of death.
        """
        for process in list(self._deployments.values()):
            process.is_alive()

        dead, self._dead = self._dead, []
        return dead

    def stop_all(self, wait: bool = True) -> None:
        """
        Kill every live deployment.

        Every deployment is killed even if some fail to dispose their tasks.

        Raises:
            DisposalError: Aggregating the disposal failures of all deployments.
        """
        failures: list[tuple[str, BaseException]] = []
        for name, process in list(self._deployments.items()):
            try:
                process.kill(wait=wait)
            except DisposalError as error:
                failures.extend(error.failures)
            logger.debug("Stopped deployment '%s'", name)

        if failures:
            raise DisposalError("registry", failures)

    def status_frame(self) -> pl.DataFrame:
        """
        Get a table of live deployments.

        Returns:
            DataFrame with columns name, uid, backing, state, pid, tasks.
        """
        rows = [
            {
                "name": name,
                "uid": str(process.uid),
                "backing": str(self._backings[name]),
                "state": str(process.state),
                "pid": process.process_id(),
                "tasks": ", ".join(
                    process.get_mapped_name(task_name) for task_name in process.model.task_names()
                ),
            }
            for name, process in self._deployments.items()
        ]
        schema = {
            "name": pl.Utf8,
            "uid": pl.Utf8,
            "backing": pl.Utf8,
            "state": pl.Utf8,
            "pid": pl.Int64,
            "tasks": pl.Utf8,
        }
        return pl.DataFrame(rows, schema=schema)

    def _build_in_process(
        self, name: str, model: DeploymentModel, name_mapping: NameMapping | None
    ) -> ProcessBase:
        return InProcessDeployment(name, model, owning_registry=self, name_mapping=name_mapping)

    def _build_multiprocess(
        self, name: str, model: DeploymentModel, name_mapping: NameMapping | None
    ) -> ProcessBase:
        return MultiprocessDeployment(
            name, model, owning_registry=self, name_mapping=name_mapping, config=self.config
        )
