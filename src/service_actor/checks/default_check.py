"""Apply `default:` to attributes absent from the result.

Example::

    class MultiplyThing(Actor):
        inputs = {
            "counter": {"default": 1},
            "multiplier": {"default": lambda: random.randint(1, 10)},
            "label": {"default": lambda actor: f"x{actor.counter}"},
            "factor": {"default": {"is": None, "message": "Factor is required"}},
        }
"""

from __future__ import annotations

import copy
import inspect
from typing import TYPE_CHECKING, Any

from service_actor.attributes import Origin, advanced, render_message

from .base import CheckTarget

if TYPE_CHECKING:
    from service_actor.actor import Actor

MISSING_MESSAGE = 'The "{input_key}" {origin} on "{actor}" is missing'

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def reify_default(default: Any, actor: Actor) -> Any:
    """Evaluate a lazy default. One-argument callables receive the actor.

    Literal defaults are copied, so mutable values are never shared between calls.
    """

    if not callable(default) or isinstance(default, type):
        return copy.deepcopy(default)
    try:
        parameters = inspect.signature(default).parameters.values()
    except (TypeError, ValueError):
        return default()
    takes_actor = any(
        p.kind is inspect.Parameter.VAR_POSITIONAL
        or (p.kind in _POSITIONAL and p.default is inspect.Parameter.empty)
        for p in parameters
    )
    return default(actor) if takes_actor else default()


class DefaultCheck:
    def check(self, target: CheckTarget) -> list[str]:
        if target.key in target.result:
            return []

        options = target.options
        if not options.has("default"):
            if target.origin is Origin.OUTPUT or options.nil_allowed() is True:
                return []
            return [MISSING_MESSAGE.format(**target.message_arguments())]

        default, message = advanced(options.default)
        if default is None and message is not None:
            return [render_message(message, **target.message_arguments())]

        target.result[target.key] = reify_default(default, target.actor)
        return []
