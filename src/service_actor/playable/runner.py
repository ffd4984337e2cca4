"""Run the play of a composite actor and roll it back on failure."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from service_actor.errors import Failure, Success

from .state_machine import PlayOutcome, PlayState, transition
from .steps import play_target, step_name

if TYPE_CHECKING:
    from service_actor.actor import Actor

logger = logging.getLogger(__name__)


def _scheduled_targets(actor: Actor) -> Iterator[Any]:
    # Lazy: a guard sees the result as left by the groups before it.
    for group in type(actor).play:
        if group.applies(actor.result):
            yield from group.targets
        else:
            logger.debug(
                "Skipping %s",
                ", ".join(step_name(t) for t in group.targets),
                extra={"actor": type(actor).__name__},
            )


def run_play(actor: Actor) -> Any:
    """Play every scheduled target in order.

    On a Failure, played actors are rolled back most recent first and the
    failure is raised again. A Success stops the play without rollback.
    Returns the value of the last played target.
    """

    name = type(actor).__name__
    outcome = PlayOutcome()
    value: Any = None

    for target in _scheduled_targets(actor):
        current = step_name(target)
        logger.debug("Playing %s", current, extra={"actor": name, "step": current})
        try:
            value = play_target(actor, target)
        except Failure as signal:
            outcome = transition(current=outcome, to=PlayState.FAILED, signal=signal)
            break
        except Success as signal:
            outcome = transition(current=outcome, to=PlayState.SUCCEEDED_EARLY, signal=signal)
            break
    else:
        outcome = transition(current=outcome, to=PlayState.COMPLETED)

    if outcome.state is PlayState.FAILED:
        logger.debug("Rolling back %s", name, extra={"actor": name})
        rollback_played(actor)
    if outcome.signal is not None:
        raise outcome.signal
    return value


def rollback_played(actor: Actor) -> None:
    """Roll back the actors ``actor`` played, most recent first."""

    for played in list(actor.played):
        rollback = getattr(played, "rollback", None)
        if rollback is None:
            continue
        logger.debug(
            "Rollback %s",
            type(played).__name__,
            extra={"actor": type(actor).__name__, "step": type(played).__name__},
        )
        rollback()
