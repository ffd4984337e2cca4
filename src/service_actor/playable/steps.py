"""What an actor can play, and how each kind of step is invoked.

A play is an ordered list of targets, each one of:

- an `Actor` subclass, run against the shared result and remembered for rollback
- an external unit: a class exposing `call(data)` and returning a mapping-like
  object, merged into the result
- the name of a method on the playing actor, called without arguments
- any other callable, called with the result
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from service_actor.attributes import Origin, validate_name
from service_actor.errors import DefinitionError
from service_actor.result import Result

if TYPE_CHECKING:
    from service_actor.actor import Actor

Guard = Callable[[Result], Any]


@dataclass(frozen=True, slots=True, init=False)
class Play:
    """Targets played together under one optional guard.

    Guards receive the result and are evaluated once, when the group is reached.
    """

    targets: tuple[Any, ...]
    when: Guard | None = None
    unless: Guard | None = None

    def __init__(self, *targets: Any, when: Guard | None = None, unless: Guard | None = None):
        object.__setattr__(self, "targets", targets)
        object.__setattr__(self, "when", when)
        object.__setattr__(self, "unless", unless)

    def applies(self, result: Result) -> bool:
        if self.when is not None and not self.when(result):
            return False
        if self.unless is not None and self.unless(result):
            return False
        return True


@dataclass(frozen=True, slots=True)
class AliasInput:
    """Move values to new keys: ``aliases`` maps new names to original names."""

    aliases: Mapping[str, str] = field(default_factory=dict)

    def __call__(self, result: Result) -> None:
        for new, original in self.aliases.items():
            result[new] = result.delete(original)


def alias_input(**aliases: str) -> AliasInput:
    """Play step renaming result keys, e.g. ``alias_input(name="original_name")``."""

    return AliasInput(aliases=dict(aliases))


def step_name(target: Any) -> str:
    if isinstance(target, str):
        return target
    return getattr(target, "__qualname__", None) or type(target).__name__


def _validate_target(target: Any, *, owner: type, reserved: Collection[str]) -> None:
    if isinstance(target, str):
        if not callable(getattr(owner, target, None)):
            raise DefinitionError(f'"{owner.__name__}" has no method "{target}" to play')
        return
    if isinstance(target, AliasInput):
        for new in target.aliases:
            validate_name(new, origin=Origin.ALIAS, reserved=reserved)
        return
    if not callable(target):
        raise DefinitionError(f'Cannot play {target!r} on "{owner.__name__}"')


def build_play(
    declared: Iterable[Any] | None, *, owner: type, reserved: Collection[str]
) -> tuple[Play, ...]:
    """Normalize a `play` declaration into guarded groups."""

    if declared is None:
        return ()
    if isinstance(declared, (str, Play)) or not isinstance(declared, Iterable):
        declared = [declared]

    groups: list[Play] = []
    for entry in declared:
        group = entry if isinstance(entry, Play) else Play(entry)
        for target in group.targets:
            _validate_target(target, owner=owner, reserved=reserved)
        groups.append(group)
    return tuple(groups)


def _as_mapping(returned: Any) -> Mapping[str, Any]:
    if returned is None:
        return {}
    if isinstance(returned, (Mapping, Result)):
        return returned.to_dict() if isinstance(returned, Result) else returned
    for converter in ("to_dict", "to_h"):
        if callable(getattr(returned, converter, None)):
            return getattr(returned, converter)()
    raise TypeError(f"Cannot merge {type(returned).__name__} into a result")


def _flag(returned: Any, name: str) -> Any:
    value = getattr(returned, name, None)
    return value() if callable(value) else value


def reports_failure(returned: Any) -> bool:
    if _flag(returned, "failure"):
        return True
    success = _flag(returned, "success")
    return success is not None and not success


def is_actor_class(target: Any) -> bool:
    from service_actor.actor import Actor

    return isinstance(target, type) and issubclass(target, Actor)


def play_target(actor: Actor, target: Any) -> Any:
    """Invoke one target for ``actor``; returns the target's return value."""

    if is_actor_class(target):
        from service_actor.execution import run

        played = target(actor.result)
        value = run(played)
        actor.played.insert(0, played)
        return value

    if isinstance(target, str):
        return getattr(actor, target)()

    if isinstance(target, type) and callable(getattr(target, "call", None)):
        returned = target.call(actor.result.to_dict())
        actor.result.merge(_as_mapping(returned))
        if reports_failure(returned):
            actor.fail()
        return returned

    return target(actor.result)
