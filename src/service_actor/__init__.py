"""Service actors.

Small units of business logic with declared inputs and outputs, validated
around their execution and composable into pipelines with rollback:

- `Actor` with `inputs`, `outputs` and `play` declarations
- a shared, mutable `Result` threaded through every played actor
- `Failure` / `Success` signals for early stops
"""

__version__ = "0.1.0"

from service_actor.actor import Actor
from service_actor.attributes import Attribute, Origin
from service_actor.config import ActorSettings, get_settings
from service_actor.errors import ActorError, ArgumentError, DefinitionError, Failure, Success
from service_actor.logging import configure_logging
from service_actor.playable import Play, alias_input
from service_actor.result import Result

__all__ = [
    "__version__",
    "Actor",
    "ActorError",
    "ActorSettings",
    "ArgumentError",
    "Attribute",
    "DefinitionError",
    "Failure",
    "Origin",
    "Play",
    "Result",
    "Success",
    "alias_input",
    "configure_logging",
    "get_settings",
]
