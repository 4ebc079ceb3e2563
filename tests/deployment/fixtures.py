"""Test task classes and registries shared by deployment tests."""

from taskdeploy.deployment import DeadDeploymentListenerPort, ExitStatus, TaskContextPort


class DummyTask(TaskContextPort):
    """Test task recording every disposal in a class-level list."""

    disposed: list[str] = []

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def dispose(self) -> None:
        DummyTask.disposed.append(self.name)


class AnotherDummyTask(DummyTask):
    """Second task class, to check that each activity uses its own model."""


class FailingDisposeTask(DummyTask):
    """Test task whose disposal always fails."""

    def dispose(self) -> None:
        raise RuntimeError(f"cannot dispose {self.name}")


class FailingCreateTask(DummyTask):
    """Test task that can not be constructed."""

    def __init__(self, name: str) -> None:
        raise RuntimeError(f"cannot create {name}")


class RecordingRegistry(DeadDeploymentListenerPort):
    """Owning registry recording death notifications."""

    def __init__(self) -> None:
        self.notifications: list[tuple[str, ExitStatus]] = []

    def on_deployment_dead(self, name: str, status: ExitStatus) -> None:
        self.notifications.append((name, status))


class FailingRegistry(RecordingRegistry):
    """Owning registry failing to handle death notifications."""

    def on_deployment_dead(self, name: str, status: ExitStatus) -> None:
        super().on_deployment_dead(name, status)
        raise RuntimeError(f"cannot record death of {name}")
