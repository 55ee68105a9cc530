from __future__ import annotations

from enum import Enum


class Scope(str, Enum):
    """Define the lifetime and sharing behavior of a provider."""

    GLOBAL = "global"
    """A single instance for the whole process, owned by the root injector and
    shared by every injector."""

    INJECTOR = "injector"
    """A single instance per injector, shared with child injectors that do not
    register the token themselves."""

    TRANSIENT = "transient"
    """A new instance every time the token is resolved. Never cached."""
