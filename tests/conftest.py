"""Pytest configuration and shared fixtures."""

import contextlib
import logging
import multiprocessing as mp
from collections.abc import Generator

import pytest

from taskdeploy.config import reset_logging_configuration
from taskdeploy.deployment import DeploymentModel, TaskActivity
from tests.deployment.fixtures import AnotherDummyTask, DummyTask, RecordingRegistry

# Set multiprocessing start method to 'fork' for tests
# This allows deployment processes to inherit the test modules' task classes
with contextlib.suppress(RuntimeError):
    mp.set_start_method("fork", force=True)


@pytest.fixture(autouse=True)
def clean_state() -> Generator[None, None, None]:
    """Reset the disposal log and the logging setup before each test."""
    DummyTask.disposed.clear()
    reset_logging_configuration()
    yield
    DummyTask.disposed.clear()
    reset_logging_configuration()


@pytest.fixture
def model() -> DeploymentModel:
    """Deployment model with tasks 'a' and 'b'."""
    return DeploymentModel(
        name="test_deployment",
        task_activities=[
            TaskActivity(name="a", task_model=DummyTask),
            TaskActivity(name="b", task_model=AnotherDummyTask),
        ],
    )


@pytest.fixture
def registry() -> RecordingRegistry:
    """Create a recording owning registry."""
    return RecordingRegistry()


@pytest.fixture
def root_logger() -> Generator[logging.Logger, None, None]:
    """Restore the root logger after tests that configure logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
