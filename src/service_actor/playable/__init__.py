"""Composition of actors into plays.

A composite actor lists targets under `play`; they run in order against one
shared result. A failure rolls back the actors played so far, in reverse order.
"""

from .runner import rollback_played, run_play
from .state_machine import IllegalTransitionError, PlayOutcome, PlayState, transition
from .steps import AliasInput, Play, alias_input, build_play, play_target

__all__ = [
    "AliasInput",
    "IllegalTransitionError",
    "Play",
    "PlayOutcome",
    "PlayState",
    "alias_input",
    "build_play",
    "run_play",
    "play_target",
    "rollback_played",
    "transition",
]
