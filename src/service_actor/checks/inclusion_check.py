"""Restrict values to a collection given under `inclusion:` (or `in:`).

Example::

    class Pay(Actor):
        inputs = {
            "provider": {"inclusion": ["MANGOPAY", "PayPal", "Stripe"]},
            "currency": {
                "in": {
                    "in": ["EUR", "USD"],
                    "message": lambda value, **_: f'Currency "{value}" is not supported',
                },
            },
        }
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from service_actor.attributes import advanced, render_message

from .base import CheckTarget

DEFAULT_MESSAGE = (
    'The "{input_key}" {origin} must be included in {inclusion_in!r} '
    'on "{actor}" instead of {value!r}'
)


def _included(value: Any, allowed: Collection[Any]) -> bool:
    try:
        return value in allowed
    except TypeError:
        # Unhashable value tested against a set or dict.
        return False


class InclusionCheck:
    def check(self, target: CheckTarget) -> list[str]:
        options = target.options
        allowed, message = advanced(options.inclusion, key="in")
        if allowed is None:
            return []

        value = target.value
        if value is None and options.nil_allowed() is True:
            return []
        if _included(value, allowed):
            return []

        return [
            render_message(
                message or DEFAULT_MESSAGE.format,
                **target.message_arguments(inclusion_in=allowed, value=value),
            )
        ]
