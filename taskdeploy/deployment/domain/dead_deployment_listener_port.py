"""Port notified when a deployment dies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taskdeploy.deployment.domain.exit_status import ExitStatus


class DeadDeploymentListenerPort(ABC):
    """Abstract port for whatever owns deployment processes.

    A process calls on_deployment_dead() exactly once, after it is dead and
    after all of its tasks were disposed (or disposal was attempted).
    """

    @abstractmethod
    def on_deployment_dead(self, name: str, status: ExitStatus) -> None:
        """Handle the death of a deployment.

        Args:
            name: Name of the dead deployment
            status: How the deployment ended
        """
        raise NotImplementedError
