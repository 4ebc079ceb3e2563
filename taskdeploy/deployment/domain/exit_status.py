"""Exit status of a terminated deployment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ExitStatus:
    """Describes how a deployment ended.

    Attributes:
        exit_code: Exit code of the deployment, None if it was killed by a signal
        signal: Signal number that terminated the deployment, if any
    """

    exit_code: int | None = 0
    signal: int | None = None

    def __post_init__(self) -> None:
        """Validate the status."""
        if self.signal is not None and self.signal <= 0:
            raise ValueError("signal must be a positive number")

    @classmethod
    def from_exitcode(cls, exitcode: int | None) -> ExitStatus:
        """Build a status from a multiprocessing exit code.

        Negative exit codes mean the child was terminated by that signal.

        Args:
            exitcode: Value of multiprocessing.Process.exitcode

        Returns:
            Matching exit status
        """
        if exitcode is not None and exitcode < 0:
            return cls(exit_code=None, signal=-exitcode)
        return cls(exit_code=exitcode)

    @classmethod
    def killed(cls, signal: int) -> ExitStatus:
        """Build the status of a deployment terminated by a signal."""
        return cls(exit_code=None, signal=signal)

    def success(self) -> bool:
        """Check whether the deployment ended cleanly.

        Returns:
            True only for exit code 0 without a signal
        """
        return self.exit_code == 0 and self.signal is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {"exit_code": self.exit_code, "signal": self.signal}

    def __str__(self) -> str:
        if self.signal is not None:
            return f"signal {self.signal}"
        return f"exit code {self.exit_code}"
