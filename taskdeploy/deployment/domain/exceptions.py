"""Errors raised by deployment processes."""

from __future__ import annotations


class DeploymentError(Exception):
    """Base class for all deployment process errors."""


class InvalidStateError(DeploymentError):
    """A lifecycle operation was called in a state that forbids it.

    Attributes:
        process_name: Name of the process the operation was called on
        state: State the process was in
        operation: Name of the rejected operation
    """

    def __init__(self, process_name: str, state: str, operation: str) -> None:
        self.process_name = process_name
        self.state = state
        self.operation = operation
        super().__init__(
            f"cannot call {operation}() on deployment '{process_name}' in state {state}"
        )


class NotFoundError(DeploymentError, KeyError):
    """A task (or service) lookup did not match anything.

    Attributes:
        process_name: Name of the process that was searched
        task_name: Name that was requested
    """

    def __init__(self, process_name: str, task_name: str, message: str | None = None) -> None:
        self.process_name = process_name
        self.task_name = task_name
        super().__init__(
            message or f"deployment '{process_name}' has no task called '{task_name}'"
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class UnsupportedOperationError(DeploymentError, NotImplementedError):
    """The operation has no meaning for this process backing."""


class DisposalError(DeploymentError):
    """One or more tasks failed to dispose.

    Attributes:
        failures: List of (deployed task name, exception) pairs
    """

    def __init__(self, process_name: str, failures: list[tuple[str, BaseException]]) -> None:
        self.process_name = process_name
        self.failures = list(failures)
        names = ", ".join(name for name, _ in self.failures)
        super().__init__(
            f"{len(self.failures)} task(s) of '{process_name}' failed to dispose: {names}"
        )
