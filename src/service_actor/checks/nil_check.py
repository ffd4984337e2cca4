"""Reject None for attributes that do not allow it.

None is allowed when `allow_nil` is true, or when nothing was said about it
and either `default=None` was given or no `type` is declared.
"""

from __future__ import annotations

from service_actor.attributes import Attribute, advanced, render_message

from .base import CheckTarget

DEFAULT_MESSAGE = 'The "{input_key}" {origin} on "{actor}" does not allow None values'


def allows_none(options: Attribute) -> bool:
    explicit = options.nil_allowed()
    if explicit is not None:
        return explicit
    if options.has("default") and options.default is None:
        return True
    return options.type is None


class NilCheck:
    def check(self, target: CheckTarget) -> list[str]:
        if target.value is not None or allows_none(target.options):
            return []

        _, message = advanced(target.options.allow_nil)
        return [render_message(message or DEFAULT_MESSAGE.format, **target.message_arguments())]
