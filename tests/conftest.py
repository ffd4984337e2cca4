"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from service_actor.config import get_settings

_SETTINGS_ENV = (
    "SERVICE_ACTOR_LOG_LEVEL",
    "SERVICE_ACTOR_LOG_FORMAT",
    "SERVICE_ACTOR_ARGUMENT_ERRORS",
)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from the environment and from cached settings."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def root_logger() -> Iterator[logging.Logger]:
    """Provide the root logger, restoring its handlers and level afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
