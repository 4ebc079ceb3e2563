"""Lifecycle states of a deployment process."""

from enum import StrEnum, auto


class ProcessState(StrEnum):
    """Represents the lifecycle state of a deployment process.

    Attributes:
        UNSPAWNED: Process is created but its tasks do not exist yet
        RUNNING: All tasks were created and can be addressed by name
        DEAD: Process was killed or died; it can not be reused
    """

    UNSPAWNED = auto()
    RUNNING = auto()
    DEAD = auto()

    def is_terminal(self) -> bool:
        """Check if this state is terminal.

        Returns:
            True only for DEAD
        """
        return self == ProcessState.DEAD

    def can_transition_to(self, target: "ProcessState") -> bool:
        """Check whether the state machine allows moving to target.

        Args:
            target: Requested next state

        Returns:
            True for UNSPAWNED -> RUNNING and RUNNING -> DEAD
        """
        return (self, target) in _TRANSITIONS


_TRANSITIONS = frozenset(
    {
        (ProcessState.UNSPAWNED, ProcessState.RUNNING),
        (ProcessState.RUNNING, ProcessState.DEAD),
    }
)
