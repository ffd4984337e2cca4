"""Named predicates under `must:`.

Example::

    class Pay(Actor):
        inputs = {
            "provider": {
                "must": {
                    "exist": lambda provider: provider in PROVIDERS,
                    "be_active": {
                        "is": lambda provider: PROVIDERS[provider].active,
                        "message": lambda value, **_: f'Provider "{value}" is disabled',
                    },
                },
            },
        }
"""

from __future__ import annotations

from service_actor.attributes import advanced, render_message

from .base import CheckTarget

DEFAULT_MESSAGE = 'The "{input_key}" {origin} on "{actor}" must "{check_name}" but was {value!r}'

CODE_ERROR_MESSAGE = (
    'The "{input_key}" {origin} on "{actor}" has an error in the code '
    'inside "{check_name}": [{error_class}] {error}'
)


class MustCheck:
    def check(self, target: CheckTarget) -> list[str]:
        options = target.options
        if not options.must:
            return []

        value = target.value
        if value is None and options.nil_allowed() is True:
            return []

        errors: list[str] = []
        for check_name, condition in options.must.items():
            predicate, message = advanced(condition)
            arguments = target.message_arguments(check_name=check_name, value=value)
            try:
                if predicate(value):
                    continue
            except Exception as e:  # noqa: BLE001 (predicates are user code)
                errors.append(
                    CODE_ERROR_MESSAGE.format(error_class=type(e).__name__, error=e, **arguments)
                )
                continue
            errors.append(render_message(message or DEFAULT_MESSAGE.format, **arguments))
        return errors
