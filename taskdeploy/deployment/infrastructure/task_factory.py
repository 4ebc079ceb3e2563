"""Task factory building tasks from their model classes."""

import logging
from collections.abc import Callable

from taskdeploy.deployment.domain.task_context_port import TaskContextPort, TaskFactoryPort

logger = logging.getLogger(__name__)


class ClassTaskFactory(TaskFactoryPort):
    """
    Builds a task by calling its model with the deployed name.

    Example:
        factory = ClassTaskFactory()
        camera = factory.create("front_camera", CameraTask)
        factory.dispose(camera)
    """

    def create(
        self, deployed_name: str, task_model: Callable[[str], TaskContextPort]
    ) -> TaskContextPort:
        logger.debug("Creating task '%s' from %s", deployed_name, task_model)
        return task_model(deployed_name)

    def dispose(self, task: TaskContextPort) -> None:
        """
        Dispose a task.

        Raises:
            TypeError: If the task has no dispose() method.
        """
        dispose = getattr(task, "dispose", None)
        if not callable(dispose):
            raise TypeError(f"{task!r} has no dispose() method")
        dispose()
