"""Main loop of a child process hosting a deployment's tasks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from multiprocessing.synchronize import Event as MPEvent

    from taskdeploy.deployment.domain.task_context_port import TaskFactoryPort

logger = logging.getLogger(__name__)

# Exit codes of the host process
EXIT_OK = 0
EXIT_SPAWN_FAILED = 2
EXIT_DISPOSE_FAILED = 3


def deployment_host(
    tasks: list[tuple[str, Callable[[str], Any]]],
    task_factory: TaskFactoryPort,
    ready_event: MPEvent,
    stop_event: MPEvent,
) -> None:
    """Main loop for a deployment child process.

    Builds every task, signals readiness, then blocks until asked to stop
    and disposes the tasks.

    Args:
        tasks: (deployed name, task model) pairs in deployment order
        task_factory: Factory building and disposing the tasks
        ready_event: Set once every task exists
        stop_event: Set by the parent to request a clean shutdown

    Raises:
        SystemExit: With EXIT_SPAWN_FAILED or EXIT_DISPOSE_FAILED on errors
    """
    created: list[tuple[str, Any]] = []
    try:
        for deployed_name, task_model in tasks:
            created.append((deployed_name, task_factory.create(deployed_name, task_model)))
    except Exception:
        logger.exception("Failed to create tasks, exiting")
        _dispose(created, task_factory)
        raise SystemExit(EXIT_SPAWN_FAILED) from None

    ready_event.set()
    stop_event.wait()

    if not _dispose(created, task_factory):
        raise SystemExit(EXIT_DISPOSE_FAILED)


def _dispose(created: list[tuple[str, Any]], task_factory: TaskFactoryPort) -> bool:
    ok = True
    for deployed_name, task in created:
        try:
            task_factory.dispose(task)
        except Exception:
            logger.exception("Failed to dispose task '%s'", deployed_name)
            ok = False
    return ok
