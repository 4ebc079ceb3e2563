"""Task instance and task factory interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable


class TaskContextPort(ABC):
    """Abstract port for one running task instance.

    Task instances are built by a TaskFactoryPort from a deployed name and
    released with dispose() when their deployment stops.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Deployed name of the task."""
        raise NotImplementedError

    @abstractmethod
    def dispose(self) -> None:
        """Release every resource held by the task."""
        raise NotImplementedError


class TaskFactoryPort(ABC):
    """Abstract port for creating and disposing task instances."""

    @abstractmethod
    def create(
        self, deployed_name: str, task_model: Callable[[str], TaskContextPort]
    ) -> TaskContextPort:
        """Create a task instance.

        Args:
            deployed_name: Name under which the task is addressed
            task_model: Class or factory declared in the deployment model

        Returns:
            The new task instance
        """
        raise NotImplementedError

    @abstractmethod
    def dispose(self, task: TaskContextPort) -> None:
        """Dispose a task instance created by this factory.

        Args:
            task: Task instance to release
        """
        raise NotImplementedError
