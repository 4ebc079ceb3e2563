"""Deployment process port interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from taskdeploy.deployment.domain.deployment_model import DeploymentModel
    from taskdeploy.deployment.domain.exit_status import ExitStatus
    from taskdeploy.deployment.domain.process_state import ProcessState


class ProcessPort(ABC):
    """Abstract port for a deployment process.

    This interface defines the lifecycle contract shared by every backing,
    whether tasks live inside the supervisor or in a separate OS process:

        UNSPAWNED --spawn()--> RUNNING --kill()/death--> DEAD

    A dead process is terminal and must be discarded by its owner.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the deployment, unique within its owning registry."""
        raise NotImplementedError

    @property
    @abstractmethod
    def model(self) -> DeploymentModel:
        """Deployment model this process was built from."""
        raise NotImplementedError

    @property
    @abstractmethod
    def state(self) -> ProcessState:
        """Current lifecycle state."""
        raise NotImplementedError

    @abstractmethod
    def spawn(self, **options: Any) -> None:
        """Create every task declared in the model.

        Raises:
            InvalidStateError: If the process is not UNSPAWNED
        """
        raise NotImplementedError

    @abstractmethod
    def wait_running(self, blocking: bool = False, timeout: float | None = None) -> bool:
        """Check (or wait) until every task is ready to accept requests.

        Args:
            blocking: Wait until ready instead of returning the current answer
            timeout: Maximum time to wait when blocking

        Returns:
            True only if every task is ready
        """
        raise NotImplementedError

    @abstractmethod
    def is_alive(self) -> bool:
        """Check whether the process is running. Valid in any state."""
        raise NotImplementedError

    @abstractmethod
    def kill(self, wait: bool = True, status: ExitStatus | None = None) -> None:
        """Dispose every task and mark the process dead.

        No-op if the process is UNSPAWNED or already DEAD.

        Args:
            wait: Block until disposal is confirmed
            status: Status reported to the owning registry (default: exit code 0)

        Raises:
            DisposalError: If some tasks failed to dispose. The process is
                dead and the registry notified anyway.
        """
        raise NotImplementedError

    @abstractmethod
    def task(self, logical_name: str) -> Any:
        """Get a deployed task by its logical name.

        Raises:
            InvalidStateError: If the process is not RUNNING
            NotFoundError: If the model declares no such task
        """
        raise NotImplementedError

    @abstractmethod
    def join(self, timeout: float | None = None) -> None:
        """Block until the process exits.

        Raises:
            UnsupportedOperationError: If the backing has nothing to wait on
        """
        raise NotImplementedError

    @abstractmethod
    def host_id(self) -> str:
        """Identifier of the host the tasks run on."""
        raise NotImplementedError

    @abstractmethod
    def is_local(self) -> bool:
        """Whether the tasks run on the supervisor's machine."""
        raise NotImplementedError

    @abstractmethod
    def process_id(self) -> int | None:
        """PID of the OS process the tasks run in."""
        raise NotImplementedError
