"""Checks applied to declared inputs and outputs, in this fixed order."""

from .base import Check, CheckTarget
from .default_check import DefaultCheck
from .inclusion_check import InclusionCheck
from .must_check import MustCheck
from .nil_check import NilCheck
from .type_check import TypeCheck

CHECKS: tuple[Check, ...] = (
    DefaultCheck(),
    TypeCheck(),
    NilCheck(),
    MustCheck(),
    InclusionCheck(),
)

__all__ = [
    "CHECKS",
    "Check",
    "CheckTarget",
    "DefaultCheck",
    "InclusionCheck",
    "MustCheck",
    "NilCheck",
    "TypeCheck",
]
