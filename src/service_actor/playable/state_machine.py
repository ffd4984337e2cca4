from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from service_actor.errors import Failure, Success


class PlayState(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SUCCEEDED_EARLY = "succeeded_early"


ALLOWED_TRANSITIONS: dict[PlayState, set[PlayState]] = {
    PlayState.RUNNING: {PlayState.COMPLETED, PlayState.FAILED, PlayState.SUCCEEDED_EARLY},
    PlayState.COMPLETED: set(),
    PlayState.FAILED: set(),
    PlayState.SUCCEEDED_EARLY: set(),
}


class IllegalTransitionError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class PlayOutcome:
    """Where one run of a play stands, and the signal that ended it, if any."""

    state: PlayState = PlayState.RUNNING
    signal: Failure | Success | None = None

    @property
    def finished(self) -> bool:
        return self.state is not PlayState.RUNNING


def transition(
    *, current: PlayOutcome, to: PlayState, signal: Failure | Success | None = None
) -> PlayOutcome:
    allowed = ALLOWED_TRANSITIONS.get(current.state, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.state.value} -> {to.value}")
    expected = {PlayState.FAILED: Failure, PlayState.SUCCEEDED_EARLY: Success}.get(to)
    if (expected is None and signal is not None) or (
        expected is not None and not isinstance(signal, expected)
    ):
        raise IllegalTransitionError(
            f"Signal {type(signal).__name__} does not end a play as {to.value}"
        )
    return PlayOutcome(state=to, signal=signal)
