"""Tests for deployment domain models."""

import signal

import pytest

from taskdeploy.deployment import (
    DeploymentModel,
    DisposalError,
    ExitStatus,
    InvalidStateError,
    NameMapping,
    NotFoundError,
    ProcessState,
    TaskActivity,
)
from tests.deployment.fixtures import DummyTask


class TestTaskActivity:
    """Test TaskActivity model."""

    def test_create_activity(self) -> None:
        """Test creating a task activity."""
        activity = TaskActivity(name="camera", task_model=DummyTask, description="Front camera")

        assert activity.name == "camera"
        assert activity.task_model is DummyTask
        assert activity.task_model_name == "DummyTask"

    def test_activity_validation(self) -> None:
        """Test task activity validation."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            TaskActivity(name="", task_model=DummyTask)

        with pytest.raises(ValueError, match="must be callable"):
            TaskActivity(name="camera", task_model="not_a_class")  # type: ignore[arg-type]


class TestDeploymentModel:
    """Test DeploymentModel."""

    def test_task_names_keep_declaration_order(self) -> None:
        """Test that activities keep their declared order."""
        model = DeploymentModel(
            name="pipeline",
            task_activities=[
                TaskActivity(name="z", task_model=DummyTask),
                TaskActivity(name="a", task_model=DummyTask),
            ],
        )

        assert model.task_names() == ["z", "a"]
        assert model.find_activity("a") is model.task_activities[1]
        assert model.find_activity("missing") is None

    def test_model_validation(self) -> None:
        """Test deployment model validation."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            DeploymentModel(name="")

        with pytest.raises(ValueError, match="duplicate task names"):
            DeploymentModel(
                name="pipeline",
                task_activities=[
                    TaskActivity(name="a", task_model=DummyTask),
                    TaskActivity(name="a", task_model=DummyTask),
                ],
            )

    def test_model_to_dict(self, model: DeploymentModel) -> None:
        """Test converting a model to a dictionary."""
        data = model.to_dict()

        assert data["name"] == "test_deployment"
        assert [task["name"] for task in data["task_activities"]] == ["a", "b"]
        assert data["task_activities"][1]["task_model"] == "AnotherDummyTask"


class TestNameMapping:
    """Test NameMapping."""

    def test_identity_by_default(self) -> None:
        """Test that the default mapping keeps names unchanged."""
        assert NameMapping().map("camera") == "camera"

    def test_prefix_and_suffix(self) -> None:
        """Test name decoration."""
        mapping = NameMapping(prefix="robot1_", suffix="_0")

        assert mapping.map("camera") == "robot1_camera_0"

    def test_mapping_is_deterministic(self) -> None:
        """Test that mapping the same name twice gives the same result."""
        mapping = NameMapping(prefix="p_")

        assert mapping.map("camera") == mapping.map("camera")
        assert NameMapping(prefix="p_").map("camera") == mapping.map("camera")

    def test_override_wins(self) -> None:
        """Test that explicit overrides are not decorated."""
        mapping = NameMapping(prefix="p_").with_override("camera", "front_camera")

        assert mapping.map("camera") == "front_camera"
        assert mapping.map("lidar") == "p_lidar"

    def test_with_methods_return_copies(self) -> None:
        """Test that the mapping is immutable."""
        original = NameMapping(prefix="p_")
        overridden = original.with_override("camera", "cam")
        redecorated = original.with_decoration(suffix="_x")

        assert original.map("camera") == "p_camera"
        assert overridden.map("camera") == "cam"
        assert redecorated.map("camera") == "p_camera_x"
        with pytest.raises(TypeError):
            original.overrides["camera"] = "cam"  # type: ignore[index]

    def test_map_all_detects_collisions(self) -> None:
        """Test that two tasks can not share a deployed name."""
        mapping = NameMapping(overrides={"lidar": "p_camera"}, prefix="p_")

        with pytest.raises(ValueError, match="both map to 'p_camera'"):
            mapping.map_all(["camera", "lidar"])

    def test_map_all_keeps_order(self) -> None:
        """Test the ordered mapping of several names."""
        mapped = NameMapping(suffix="_1").map_all(["b", "a"])

        assert list(mapped.items()) == [("b", "b_1"), ("a", "a_1")]

    def test_reverse(self) -> None:
        """Test finding the logical name of a deployed name."""
        mapping = NameMapping(prefix="p_")

        assert mapping.reverse("p_camera", ["lidar", "camera"]) == "camera"
        assert mapping.reverse("camera", ["lidar", "camera"]) is None

    def test_empty_override_raises(self) -> None:
        """Test that overrides need both names."""
        with pytest.raises(ValueError, match="empty names"):
            NameMapping(overrides={"camera": ""})

    def test_mapping_is_hashable(self) -> None:
        """Test that equal mappings hash alike and can key a dict."""
        first = NameMapping(prefix="r1_", overrides={"camera": "front"})
        second = NameMapping(prefix="r1_").with_override("camera", "front")

        assert first == second
        assert hash(first) == hash(second)
        assert hash(NameMapping()) == hash(NameMapping())
        assert {first: "robot1"}[second] == "robot1"
        assert len({NameMapping(), NameMapping(), first}) == 2


class TestExitStatus:
    """Test ExitStatus."""

    def test_default_is_success(self) -> None:
        """Test that the default status is a clean exit."""
        assert ExitStatus() == ExitStatus(exit_code=0)
        assert ExitStatus().success()
        assert str(ExitStatus()) == "exit code 0"

    def test_failure(self) -> None:
        """Test non-zero exit codes."""
        assert not ExitStatus(exit_code=1).success()

    def test_from_exitcode(self) -> None:
        """Test conversion of multiprocessing exit codes."""
        assert ExitStatus.from_exitcode(0) == ExitStatus(0)
        assert ExitStatus.from_exitcode(3) == ExitStatus(3)
        assert ExitStatus.from_exitcode(-signal.SIGTERM) == ExitStatus.killed(signal.SIGTERM)

    def test_killed(self) -> None:
        """Test signal statuses."""
        status = ExitStatus.killed(9)

        assert status.exit_code is None
        assert status.signal == 9
        assert not status.success()
        assert str(status) == "signal 9"
        assert status.to_dict() == {"exit_code": None, "signal": 9}

    def test_status_is_immutable(self) -> None:
        """Test that statuses can not be modified."""
        status = ExitStatus()

        with pytest.raises(AttributeError):
            status.exit_code = 1  # type: ignore[misc]

    def test_invalid_signal_raises(self) -> None:
        """Test that signals must be positive."""
        with pytest.raises(ValueError, match="positive"):
            ExitStatus(exit_code=None, signal=0)


class TestProcessState:
    """Test ProcessState."""

    def test_allowed_transitions(self) -> None:
        """Test that only forward transitions are allowed."""
        assert ProcessState.UNSPAWNED.can_transition_to(ProcessState.RUNNING)
        assert ProcessState.RUNNING.can_transition_to(ProcessState.DEAD)

    def test_forbidden_transitions(self) -> None:
        """Test that there are no back transitions."""
        assert not ProcessState.DEAD.can_transition_to(ProcessState.RUNNING)
        assert not ProcessState.DEAD.can_transition_to(ProcessState.UNSPAWNED)
        assert not ProcessState.RUNNING.can_transition_to(ProcessState.UNSPAWNED)
        assert not ProcessState.RUNNING.can_transition_to(ProcessState.RUNNING)

    def test_only_dead_is_terminal(self) -> None:
        """Test is_terminal()."""
        assert ProcessState.DEAD.is_terminal()
        assert not ProcessState.RUNNING.is_terminal()
        assert not ProcessState.UNSPAWNED.is_terminal()


class TestExceptions:
    """Test the error types."""

    def test_invalid_state_error(self) -> None:
        """Test that InvalidStateError describes the rejected call."""
        error = InvalidStateError("p1", ProcessState.DEAD, "spawn")

        assert error.process_name == "p1"
        assert error.operation == "spawn"
        assert str(error) == "cannot call spawn() on deployment 'p1' in state dead"

    def test_not_found_error_message(self) -> None:
        """Test that NotFoundError has a readable message."""
        error = NotFoundError("p1", "x")

        assert str(error) == "deployment 'p1' has no task called 'x'"

    def test_disposal_error_lists_failures(self) -> None:
        """Test that DisposalError keeps every failure."""
        failures: list[tuple[str, BaseException]] = [
            ("a", RuntimeError("boom")),
            ("b", OSError("busy")),
        ]
        error = DisposalError("p1", failures)

        assert error.failures == failures
        assert "2 task(s)" in str(error)
        assert "a, b" in str(error)
