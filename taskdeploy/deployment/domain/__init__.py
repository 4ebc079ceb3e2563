"""Deployment domain models and ports."""

from taskdeploy.deployment.domain.dead_deployment_listener_port import DeadDeploymentListenerPort
from taskdeploy.deployment.domain.deployment_model import DeploymentModel, TaskActivity
from taskdeploy.deployment.domain.exceptions import (
    DeploymentError,
    DisposalError,
    InvalidStateError,
    NotFoundError,
    UnsupportedOperationError,
)
from taskdeploy.deployment.domain.exit_status import ExitStatus
from taskdeploy.deployment.domain.name_mapping import NameMapping
from taskdeploy.deployment.domain.process_base import ProcessBase
from taskdeploy.deployment.domain.process_port import ProcessPort
from taskdeploy.deployment.domain.process_state import ProcessState
from taskdeploy.deployment.domain.task_context_port import TaskContextPort, TaskFactoryPort

__all__ = [
    "DeadDeploymentListenerPort",
    "DeploymentError",
    "DeploymentModel",
    "DisposalError",
    "ExitStatus",
    "InvalidStateError",
    "NameMapping",
    "NotFoundError",
    "ProcessBase",
    "ProcessPort",
    "ProcessState",
    "TaskActivity",
    "TaskContextPort",
    "TaskFactoryPort",
    "UnsupportedOperationError",
]
