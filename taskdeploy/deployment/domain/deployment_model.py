"""
Deployment model.
Declares which named task activities a deployment contains.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from taskdeploy.deployment.domain.task_context_port import TaskContextPort


@dataclass
class TaskActivity:
    """
    One task declared in a deployment.

    Attributes:
        name: Logical task name, independent of any deployment prefix.
        task_model: Class (or factory) building the task from its deployed name.
        description: Human-readable description.
    """

    name: str
    task_model: Callable[[str], TaskContextPort]
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate the activity."""
        if not self.name:
            raise ValueError("Task activity name cannot be empty")

        if not callable(self.task_model):
            raise ValueError(f"Task activity '{self.name}' task_model must be callable")

    @property
    def task_model_name(self) -> str:
        """Qualified name of the task model, for display."""
        return getattr(self.task_model, "__qualname__", repr(self.task_model))


@dataclass
class DeploymentModel:
    """
    Declarative description of a deployment.

    The order of task_activities is the order in which tasks get deployed.

    Example:
        model = DeploymentModel(
            name="camera_pipeline",
            task_activities=[
                TaskActivity(name="camera", task_model=CameraTask),
                TaskActivity(name="detector", task_model=DetectorTask),
            ],
        )
    """

    name: str
    task_activities: list[TaskActivity] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the deployment model."""
        if not self.name:
            raise ValueError("Deployment model name cannot be empty")

        names = self.task_names()
        if len(names) != len(set(names)):
            raise ValueError(f"Deployment model '{self.name}' has duplicate task names")

    def task_names(self) -> list[str]:
        """Get the logical task names in declaration order."""
        return [activity.name for activity in self.task_activities]

    def find_activity(self, name: str) -> TaskActivity | None:
        """
        Get a task activity by logical name.

        Args:
            name: Logical task name.

        Returns:
            The activity if declared, None otherwise.
        """
        for activity in self.task_activities:
            if activity.name == name:
                return activity
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "task_activities": [
                {
                    "name": activity.name,
                    "task_model": activity.task_model_name,
                    "description": activity.description,
                }
                for activity in self.task_activities
            ],
        }
