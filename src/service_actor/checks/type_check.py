"""Check `type:` declarations.

Accepts classes, tuples or lists of them, unions, parametrised generics and
names resolved when the check runs, which allows forward references::

    class ReduceOrderAmount(Actor):
        inputs = {
            "order": {"type": "Order"},
            "amount": {"type": (int, float)},
            "bonus_applied": {"type": {"is": bool, "message": "Bonus must be a flag"}},
        }
"""

from __future__ import annotations

import builtins
import importlib
import sys
import types
import typing
from typing import Any

from service_actor.attributes import advanced, render_message
from service_actor.errors import DefinitionError

from .base import CheckTarget

DEFAULT_MESSAGE = (
    'The "{input_key}" {origin} on "{actor}" must be of type '
    '"{expected_type}" but was "{given_type}"'
)


def type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or str(type_)


def _lookup(name: str, module_name: str) -> Any:
    head, *rest = name.split(".")
    for namespace in (sys.modules.get(module_name), builtins):
        if namespace is None or not hasattr(namespace, head):
            continue
        found = getattr(namespace, head)
        for part in rest:
            found = getattr(found, part)
        return found

    module_path, _, attribute = name.rpartition(".")
    if not module_path:
        raise AttributeError(name)
    return getattr(importlib.import_module(module_path), attribute)


def resolve_type(token: Any, module_name: str) -> Any:
    if isinstance(token, str):
        try:
            token = _lookup(token, module_name)
        except (ImportError, AttributeError) as e:
            raise DefinitionError(f'Unknown type "{token}"') from e

    origin = typing.get_origin(token)
    if origin is None or origin is typing.Union or isinstance(token, types.UnionType):
        return token
    return origin


def resolve_types(definition: Any, module_name: str) -> tuple[Any, ...]:
    tokens = definition if isinstance(definition, (list, tuple, set, frozenset)) else (definition,)
    return tuple(resolve_type(token, module_name) for token in tokens)


class TypeCheck:
    def check(self, target: CheckTarget) -> list[str]:
        options = target.options
        definition, message = advanced(options.type)
        if definition is None:
            return []

        value = target.value
        if value is None:
            return []

        types_ = resolve_types(definition, type(target.actor).__module__)
        try:
            if isinstance(value, types_):
                return []
        except TypeError as e:
            raise DefinitionError(
                f'Invalid type for "{target.key}" on "{target.actor_name}": {definition!r}'
            ) from e

        return [
            render_message(
                message or DEFAULT_MESSAGE.format,
                **target.message_arguments(
                    expected_type=", ".join(type_name(t) for t in types_),
                    given_type=type(value).__name__,
                ),
            )
        ]
