"""Shared pytest fixtures for injectwire tests."""

import dataclasses
from collections.abc import Generator

import pytest

from injectwire.config import configure, get_config
from injectwire.injection_context import set_current_injector
from injectwire.injector import SimpleInjector


@pytest.fixture(autouse=True)
def _restore_config() -> Generator[None, None, None]:
    """Undo process-wide configuration changes made by a test."""
    previous = get_config()
    yield
    configure(**{field.name: getattr(previous, field.name) for field in dataclasses.fields(previous)})


@pytest.fixture(autouse=True)
def _restore_current_injector() -> Generator[None, None, None]:
    """Undo ambient injector bindings leaked by a test."""
    previous = set_current_injector(None)
    yield
    set_current_injector(previous)


@pytest.fixture()
def injector() -> SimpleInjector:
    """Parentless injector."""
    return SimpleInjector(name="test")
