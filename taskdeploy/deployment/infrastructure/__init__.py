"""Deployment process backings and registry."""

from taskdeploy.deployment.infrastructure.deployment_registry import (
    DeploymentRegistry,
    ProcessBacking,
)
from taskdeploy.deployment.infrastructure.in_process_deployment import InProcessDeployment
from taskdeploy.deployment.infrastructure.multiprocess_deployment import (
    MultiprocessDeployment,
    RemoteTask,
)
from taskdeploy.deployment.infrastructure.task_factory import ClassTaskFactory

__all__ = [
    "ClassTaskFactory",
    "DeploymentRegistry",
    "InProcessDeployment",
    "MultiprocessDeployment",
    "ProcessBacking",
    "RemoteTask",
]
