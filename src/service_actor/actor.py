"""The `Actor` base class.

Actors start with a verb, subclass `Actor` and implement `execute`::

    class IncrementValue(Actor):
        inputs = {"value": {"type": int, "default": 0}}
        outputs = {"value": {"type": int}}

        def execute(self) -> None:
            self.value += 1

    IncrementValue.call(value=1)["value"]  # 2

Composite actors list other actors under `play` instead::

    class CreateUser(Actor):
        play = [SaveUser, CreateSettings, Play(SendWelcomeEmail, when=wants_email)]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, ClassVar, NoReturn

from service_actor.attributes import Attribute, Origin, build_attributes
from service_actor.errors import ArgumentError, DefinitionError, Failure, Success
from service_actor.execution import run
from service_actor.playable import Play, build_play, rollback_played, run_play
from service_actor.result import Result

logger = logging.getLogger(__name__)


class _AttributeProperty(property):
    """Accessor generated for a declared input or output."""


def _accessor(name: str, *, writable: bool) -> _AttributeProperty:
    def getter(self: Actor) -> Any:
        return self.result[name]

    def setter(self: Actor, value: Any) -> None:
        self.result[name] = value

    return _AttributeProperty(getter, setter if writable else None, doc=f"`{name}` in the result.")


def _exception_classes(value: Any, *, owner: str) -> tuple[type[BaseException], ...]:
    classes = tuple(value) if isinstance(value, (list, tuple, set)) else (value,)
    for cls in classes:
        if not (isinstance(cls, type) and issubclass(cls, Exception)):
            raise DefinitionError(f'fail_on on "{owner}" expects exception classes, got {cls!r}')
    return classes


def _declared_attributes(
    cls: type[Actor], bases: list[type[Actor]], origin: Origin
) -> dict[str, Attribute]:
    """Attributes of the bases, overridden by the ones declared on ``cls`` itself."""

    field = "inputs" if origin is Origin.INPUT else "outputs"
    attributes: dict[str, Attribute] = {}
    for base in reversed(bases):
        attributes.update(getattr(base, field))
    attributes.update(
        build_attributes(
            cls.__dict__.get(field), origin=origin, owner=cls.__name__, reserved=RESERVED_NAMES
        )
    )
    return attributes


def _check_error_classes(cls: type[Actor]) -> None:
    for value, expected in ((cls.argument_error_class, Exception), (cls.failure_class, Failure)):
        if not (isinstance(value, type) and issubclass(value, expected)):
            raise DefinitionError(f"Expected {value!r} to be a subclass of {expected.__name__}")


class Actor:
    """A unit of business logic run against a shared `Result`.

    Class-level declarations, all inherited and extended by subclasses:

    - ``inputs`` / ``outputs``: name -> `Attribute` or dict of its options
    - ``play``: targets run in order by the default `execute`
    - ``fail_on``: exceptions turned into a failure with ``error=str(exc)``
    - ``argument_error_class`` / ``failure_class``: exceptions raised by the actor
    - ``prompt``: any object, passed through untouched
    """

    inputs: ClassVar[Mapping[str, Attribute]] = MappingProxyType({})
    outputs: ClassVar[Mapping[str, Attribute]] = MappingProxyType({})
    play: ClassVar[Sequence[Play]] = ()
    fail_on: ClassVar[tuple[type[BaseException], ...]] = ()
    argument_error_class: ClassVar[type[Exception]] = ArgumentError
    failure_class: ClassVar[type[Failure]] = Failure
    prompt: ClassVar[Any] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        own = cls.__dict__
        bases = [base for base in cls.__bases__ if issubclass(base, Actor)]

        inputs = _declared_attributes(cls, bases, Origin.INPUT)
        outputs = _declared_attributes(cls, bases, Origin.OUTPUT)
        cls.inputs = MappingProxyType(inputs)
        cls.outputs = MappingProxyType(outputs)

        inherited_play = tuple(group for base in bases for group in base.play)
        cls.play = inherited_play + build_play(own.get("play"), owner=cls, reserved=RESERVED_NAMES)

        fail_on = tuple(exc for base in bases for exc in base.fail_on)
        if "fail_on" in own:
            fail_on += _exception_classes(own["fail_on"], owner=cls.__name__)
        cls.fail_on = tuple(dict.fromkeys(fail_on))

        _check_error_classes(cls)

        for name in {**inputs, **outputs}:
            current = own.get(name)
            if current is not None and not isinstance(current, _AttributeProperty):
                # A member defined in the class body wins over the generated accessor.
                continue
            setattr(cls, name, _accessor(name, writable=name in outputs))

    def __init__(self, result: Result | Mapping[str, Any] | None = None) -> None:
        self.result = Result.to_result(result)
        self.played: list[Actor] = []

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.result!r}>"

    # Entrypoints

    @classmethod
    def call(cls, data: Result | Mapping[str, Any] | None = None, /, **arguments: Any) -> Result:
        """Run the actor and return its result.

        Raises `Failure` when the actor fails; an early `succeed()` returns normally.
        """

        result = Result.to_result(data).merge(arguments)
        try:
            run(cls(result))
        except Success:
            logger.debug("%s succeeded early", cls.__name__, extra={"actor": cls.__name__})
        return result

    @classmethod
    def result(cls, data: Result | Mapping[str, Any] | None = None, /, **arguments: Any) -> Result:
        """Like `call`, but a failure is returned as a failed result instead of raised."""

        try:
            return cls.call(data, **arguments)
        except Failure as e:
            logger.info("%s failed: %s", cls.__name__, e, extra={"actor": cls.__name__})
            return e.result

    @classmethod
    def output_of(cls, data: Result | Mapping[str, Any] | None = None, /, **arguments: Any) -> Any:
        """Run the actor and return what its `execute` returned."""

        result = Result.to_result(data).merge(arguments)
        try:
            return run(cls(result))
        except Success:
            return None

    # To implement in actors

    def execute(self) -> Any:
        """The actor's logic. By default, plays the targets declared under `play`."""

        if not type(self).play:
            return None
        return run_play(self)

    def rollback(self) -> None:
        """Undo the actor's work after a later failure.

        By default, rolls back the actors this one played; call
        ``super().rollback()`` when overriding a composite.
        """

        rollback_played(self)

    # Signals

    def fail(self, **data: Any) -> NoReturn:
        """Stop the actor and every actor playing it, marking the result failed."""

        self.result.fail(type(self).failure_class, **data)

    def succeed(self, **data: Any) -> NoReturn:
        """Stop the actor and every actor playing it, without failing."""

        self.result.succeed(**data)


RESERVED_NAMES: frozenset[str] = frozenset(
    name for name in dir(Actor) if not name.startswith("_")
) | {"result", "played"}
