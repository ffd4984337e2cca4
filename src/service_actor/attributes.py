"""Declared inputs and outputs of an actor.

Each declaration is an `Attribute`: a frozen pydantic model of the options
given for one name. Options that were passed explicitly are tracked, so
`default=None` is distinguishable from "no default".
"""

from __future__ import annotations

import keyword
from collections.abc import Callable, Collection, Mapping
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from service_actor.errors import DefinitionError


class Origin(str, Enum):
    INPUT = "input"
    OUTPUT = "output"
    ALIAS = "alias"


class Attribute(BaseModel):
    """Options for one declared input or output.

    Every option also accepts an advanced form carrying a custom message,
    e.g. ``{"is": int, "message": "..."}`` for ``type`` or
    ``{"in": [...], "message": "..."}`` for ``inclusion``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    type: Any = Field(default=None, description="Expected type(s), or names resolved lazily")
    allow_nil: Any = Field(default=None, description="Whether None is an accepted value")
    required: bool | None = Field(default=None, description="Deprecated: inverse of allow_nil")
    default: Any = Field(default=None, description="Literal, or callable taking 0 or 1 argument")
    must: dict[str, Any] | None = Field(default=None, description="Named predicates on the value")
    inclusion: Any = Field(
        default=None,
        validation_alias=AliasChoices("inclusion", "in"),
        description="Collection of allowed values",
    )

    @field_validator("must")
    @classmethod
    def _callable_predicates(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        for name, check in (value or {}).items():
            predicate, _ = advanced(check)
            if not callable(predicate):
                raise ValueError(f'must check "{name}" is not callable')
        return value

    def has(self, option: str) -> bool:
        """True when ``option`` was given explicitly, even as None."""

        return option in self.model_fields_set

    def nil_allowed(self) -> bool | None:
        """The explicit allow_nil decision, or None when nothing was said."""

        if self.has("allow_nil"):
            allow_nil, _ = advanced(self.allow_nil)
            if allow_nil is not None:
                return bool(allow_nil)
        if self.required is not None:
            return not self.required
        return None


def advanced(option: Any, key: str = "is") -> tuple[Any, Any]:
    """Split an option into ``(value, message)``; message is None in the short form."""

    if isinstance(option, Mapping) and key in option and set(option) <= {key, "message"}:
        return option[key], option.get("message")
    return option, None


def render_message(message: str | Callable[..., str], **arguments: Any) -> str:
    if callable(message):
        return str(message(**arguments))
    return str(message)


def validate_name(name: object, *, origin: Origin, reserved: Collection[str]) -> None:
    """Reject names that cannot become actor properties."""

    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        raise DefinitionError(f"{origin.value} `{name}` is not a valid identifier")
    if name.startswith("_"):
        raise DefinitionError(f"{origin.value} `{name}` must not be private")
    if name in reserved:
        raise DefinitionError(f"{origin.value} `{name}` overrides `Actor` member")


def build_attributes(
    declared: Mapping[str, Attribute | Mapping[str, Any]] | None,
    *,
    origin: Origin,
    owner: str,
    reserved: Collection[str],
) -> dict[str, Attribute]:
    """Validate the names and options declared on one actor class."""

    attributes: dict[str, Attribute] = {}
    for name, options in (declared or {}).items():
        validate_name(name, origin=origin, reserved=reserved)
        if isinstance(options, Attribute):
            attributes[name] = options
            continue
        if not isinstance(options, Mapping):
            raise DefinitionError(
                f'Options for {origin.value} "{name}" on "{owner}" must be a mapping'
            )
        try:
            attributes[name] = Attribute.model_validate(dict(options))
        except ValidationError as e:
            raise DefinitionError(
                f'Invalid options for {origin.value} "{name}" on "{owner}": {e}'
            ) from e
    return attributes
