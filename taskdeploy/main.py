import argparse
import importlib
import logging
import sys
import time

from taskdeploy.config import SupervisorConfig, configure_logging
from taskdeploy.deployment import (
    DeploymentError,
    DeploymentModel,
    DeploymentRegistry,
    DisposalError,
    ProcessBacking,
    TaskActivity,
    TaskContextPort,
)
from taskdeploy.resolver import ResolvedService, ServiceKind, ServiceResolver

logger = logging.getLogger(__name__)


class DemoTask(TaskContextPort):
    """Task that only logs its lifecycle."""

    def __init__(self, name: str) -> None:
        self._name = name
        logger.info("Task '%s' created", name)

    @property
    def name(self) -> str:
        return self._name

    def dispose(self) -> None:
        logger.info("Task '%s' disposed", self.name)


DEMO_DEPLOYMENTS = {
    "camera_pipeline": DeploymentModel(
        name="camera_pipeline",
        task_activities=[
            TaskActivity(name="camera", task_model=DemoTask),
            TaskActivity(name="detector", task_model=DemoTask),
        ],
    ),
}

DEMO_TASK_MODELS = {"DemoTask": DemoTask}


def load_deployment(reference: str) -> DeploymentModel:
    """
    Load a deployment model from a "package.module:attribute" reference.
    """
    module_name, _, attribute = reference.partition(":")
    module = importlib.import_module(module_name)
    model = getattr(module, attribute)
    if not isinstance(model, DeploymentModel):
        raise TypeError(f"{reference} is not a DeploymentModel")
    return model


def deployment_from_service(resolved: ResolvedService) -> DeploymentModel:
    """
    Turn a resolved service into a deployment model.

    A task model is wrapped into a deployment holding a single task.
    """
    if resolved.kind == ServiceKind.COMPOSITION:
        return resolved.target
    if resolved.kind == ServiceKind.TASK_MODEL:
        return DeploymentModel(
            name=resolved.name,
            task_activities=[TaskActivity(name="task", task_model=resolved.target)],
        )
    raise TypeError(f"service '{resolved.name}' ({resolved.kind}) cannot be deployed")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="taskdeploy",
        description=(
            "Spawn a deployment, print the registry status and stop it. 'deployment' is "
            "either the name of a known deployment or a package.module:attribute reference."
        ),
    )
    parser.add_argument("deployment")
    parser.add_argument("--debug", action="store_true", help="turn debugging output on")
    parser.add_argument(
        "--backing",
        choices=[backing.value for backing in ProcessBacking],
        default=ProcessBacking.IN_PROCESS.value,
        help="where the tasks run (default: %(default)s)",
    )
    parser.add_argument("--prefix", default="", help="prefix of the deployed task names")
    parser.add_argument("--name", help="deployment name (default: the model name)")
    return parser.parse_args(argv)


def stop_deployments(registry: DeploymentRegistry) -> bool:
    try:
        registry.stop_all()
    except DisposalError:
        logger.exception("Failed to stop deployments cleanly")
        return False
    return True


def run(args: argparse.Namespace) -> int:
    start = time.monotonic()
    config = SupervisorConfig.from_debug_flag(args.debug)
    configure_logging(config)

    if ":" in args.deployment:
        model = load_deployment(args.deployment)
    else:
        resolver = ServiceResolver(compositions=DEMO_DEPLOYMENTS, task_models=DEMO_TASK_MODELS)
        resolved = resolver.resolve(args.deployment)
        if not resolved.is_resolved():
            logger.error("Unknown deployment '%s'", args.deployment)
            return 1
        model = deployment_from_service(resolved)

    registry = DeploymentRegistry(config)
    try:
        process = registry.start(
            args.name or model.name,
            model,
            backing=ProcessBacking(args.backing),
            prefix=args.prefix,
        )
        process.wait_running(blocking=True)
        logger.info("Deployment ready in %.3f seconds", time.monotonic() - start)
        print(registry.status_frame())
    finally:
        stopped = stop_deployments(registry)

    if not stopped:
        return 1
    for name, status in registry.wait_termination():
        print(f"{name}: {status}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        return run(args)
    except (DeploymentError, ValueError, TypeError, ImportError, AttributeError) as error:
        logging.error(f"[Execution Error] {error}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
