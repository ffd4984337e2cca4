"""Run one actor between the checks of its inputs and outputs.

Failure and Success signals raised by the actor pass through untouched, so
outputs are only checked after a complete run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from service_actor.attributes import Origin
from service_actor.checks import CHECKS, CheckTarget
from service_actor.config import get_settings
from service_actor.errors import Failure, Success

if TYPE_CHECKING:
    from service_actor.actor import Actor

logger = logging.getLogger(__name__)


def check_attributes(actor: Actor, origin: Origin) -> list[str]:
    """Run every check on each declared attribute of ``origin``.

    Checks of one attribute stop at the first one reporting errors; errors of
    different attributes are all collected.
    """

    attributes = actor.inputs if origin is Origin.INPUT else actor.outputs
    errors: list[str] = []
    for key, options in attributes.items():
        target = CheckTarget(origin=origin, key=key, actor=actor, options=options)
        for check in CHECKS:
            found = check.check(target)
            if found:
                errors.extend(found)
                break
    return errors


def raise_argument_errors(actor: Actor, errors: list[str]) -> None:
    if not errors:
        return

    message = errors[0] if get_settings().argument_errors == "first" else "; ".join(errors)
    logger.debug(
        "Argument errors on %s", type(actor).__name__, extra={"actor": type(actor).__name__}
    )
    raise type(actor).argument_error_class(message)


def run(actor: Actor) -> Any:
    """Check inputs, execute the actor, check outputs; returns what `execute` returned."""

    actor_class = type(actor)
    logger.debug("Running %s", actor_class.__name__, extra={"actor": actor_class.__name__})
    try:
        raise_argument_errors(actor, check_attributes(actor, Origin.INPUT))
        value = actor.execute()
        raise_argument_errors(actor, check_attributes(actor, Origin.OUTPUT))
    except (Failure, Success):
        raise
    except actor_class.fail_on as e:
        logger.warning(
            "%s failed on %s: %s",
            actor_class.__name__,
            type(e).__name__,
            e,
            extra={"actor": actor_class.__name__},
        )
        actor.fail(error=str(e))

    logger.debug("Finished %s", actor_class.__name__, extra={"actor": actor_class.__name__})
    return value
