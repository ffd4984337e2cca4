from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from service_actor.attributes import Attribute, Origin

if TYPE_CHECKING:
    from service_actor.actor import Actor
    from service_actor.result import Result


@dataclass(frozen=True, slots=True)
class CheckTarget:
    """One declared attribute of a running actor, as seen by a check."""

    origin: Origin
    key: str
    actor: Actor
    options: Attribute

    @property
    def actor_name(self) -> str:
        return type(self.actor).__name__

    @property
    def result(self) -> Result:
        return self.actor.result

    @property
    def value(self) -> Any:
        return self.actor.result[self.key]

    def message_arguments(self, **extra: Any) -> dict[str, Any]:
        return {
            "origin": self.origin.value,
            "input_key": self.key,
            "actor": self.actor_name,
            **extra,
        }


class Check(Protocol):
    """A stateless validation step. Returns error messages, never raises them."""

    def check(self, target: CheckTarget) -> list[str]: ...
