"""Exceptions raised by actors.

`Failure` and `Success` are control-flow signals carrying the shared result;
`ArgumentError` reports a broken input/output contract.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from service_actor.result import Result


class ActorError(Exception):
    """Base class for every error raised by this package at call time."""


class ArgumentError(ActorError):
    """An input or output did not satisfy its declaration."""


class Failure(ActorError):
    """Raised by `fail()` to stop an actor and everything that plays it."""

    def __init__(self, result: Result) -> None:
        self.result = result
        error = result.get("error")
        if error is None:
            super().__init__()
        else:
            super().__init__(str(error))


class Success(ActorError):
    """Raised by `succeed()` to stop a chain early with a positive outcome."""

    def __init__(self, result: Result) -> None:
        self.result = result
        super().__init__()


class DefinitionError(ValueError):
    """An actor class was declared with invalid options."""
