"""
Deployment processes.

Provides a uniform process abstraction over task deployments, whether their
tasks run inside the supervisor or in a separate OS process.
"""

from taskdeploy.deployment.domain import (
    DeadDeploymentListenerPort,
    DeploymentError,
    DeploymentModel,
    DisposalError,
    ExitStatus,
    InvalidStateError,
    NameMapping,
    NotFoundError,
    ProcessBase,
    ProcessPort,
    ProcessState,
    TaskActivity,
    TaskContextPort,
    TaskFactoryPort,
    UnsupportedOperationError,
)
from taskdeploy.deployment.infrastructure import (
    ClassTaskFactory,
    DeploymentRegistry,
    InProcessDeployment,
    MultiprocessDeployment,
    ProcessBacking,
    RemoteTask,
)

__all__ = [
    # Domain
    "DeploymentModel",
    "TaskActivity",
    "ExitStatus",
    "NameMapping",
    "ProcessState",
    "ProcessPort",
    "ProcessBase",
    "TaskContextPort",
    "TaskFactoryPort",
    "DeadDeploymentListenerPort",
    # Errors
    "DeploymentError",
    "InvalidStateError",
    "NotFoundError",
    "UnsupportedOperationError",
    "DisposalError",
    # Infrastructure
    "ClassTaskFactory",
    "InProcessDeployment",
    "MultiprocessDeployment",
    "RemoteTask",
    "DeploymentRegistry",
    "ProcessBacking",
]
