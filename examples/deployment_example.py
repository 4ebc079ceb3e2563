"""
Deployment Example

This example demonstrates how to use deployment processes to:
1. Declare a deployment model
2. Start it in-process and in a child process through a registry
3. Look tasks up by their logical names
4. Stop deployments and collect their exit status
"""

import logging

from taskdeploy.config import SupervisorConfig, configure_logging
from taskdeploy.deployment import (
    DeploymentModel,
    DeploymentRegistry,
    ExitStatus,
    NameMapping,
    NotFoundError,
    ProcessBacking,
    TaskActivity,
    TaskContextPort,
)


class Camera(TaskContextPort):
    """Task reading images."""

    def __init__(self, name: str) -> None:
        self._name = name
        print(f"  camera '{name}' opened")

    @property
    def name(self) -> str:
        return self._name

    def dispose(self) -> None:
        print(f"  camera '{self.name}' closed")


class Detector(TaskContextPort):
    """Task detecting objects in images."""

    def __init__(self, name: str) -> None:
        self._name = name
        print(f"  detector '{name}' loaded")

    @property
    def name(self) -> str:
        return self._name

    def dispose(self) -> None:
        print(f"  detector '{self.name}' unloaded")


perception = DeploymentModel(
    name="perception",
    task_activities=[
        TaskActivity(name="camera", task_model=Camera),
        TaskActivity(name="detector", task_model=Detector),
    ],
)


def main() -> None:
    """Main execution function."""
    config = SupervisorConfig(log_level="WARNING", kill_timeout=2.0)
    configure_logging(config)

    print("=" * 60)
    print("Deployment Example")
    print("=" * 60)

    registry = DeploymentRegistry(config)

    # 1. In-process deployment, task names prefixed per robot
    print("\n1. Starting 'robot1' in-process...")
    robot1 = registry.start("robot1", perception, prefix="robot1_")
    print(f"   camera deployed as: {robot1.task('camera').name}")

    try:
        robot1.task("lidar")
    except NotFoundError as error:
        print(f"   {error}")

    # 2. Same model in a child process, with an explicit name for the camera
    print("\n2. Starting 'robot2' in a child process...")
    robot2 = registry.start(
        "robot2",
        perception,
        backing=ProcessBacking.MULTIPROCESS,
        name_mapping=NameMapping(overrides={"camera": "front_camera"}),
    )
    robot2.wait_running(blocking=True)
    print(f"   robot2 runs in PID {robot2.process_id()}: {robot2.task('camera')}")

    print("\n3. Live deployments:")
    print(registry.status_frame())

    # 4. Stop everything
    print("\n4. Stopping...")
    robot1.kill(status=ExitStatus(exit_code=0))
    registry.stop_all()

    for name, status in registry.wait_termination():
        print(f"   {name}: {status}")

    print("\n" + "=" * 60)
    print("Example completed!")
    print("=" * 60)


if __name__ == "__main__":
    logging.getLogger("taskdeploy").setLevel(logging.WARNING)
    main()
