from __future__ import annotations

import dataclasses
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from injectwire.exceptions import InjectWireConfigurationError
from injectwire.scope import Scope

ROOT_INJECTOR_NAME = "RootInjector"
"""Name reserved for the root injector."""


@dataclass(frozen=True, slots=True)
class InjectWireConfig:
    """Process-wide settings consulted by injectors at registration and resolution."""

    default_scope: Scope = Scope.INJECTOR
    """Scope used for classes and custom providers that do not declare one."""

    strict_mode: bool = False
    """Reject global-scoped providers passed to ``create_injector`` instead of
    redirecting them to the root injector."""

    validate_providers: bool = True
    """Validate providers in ``register_provider``."""

    enable_constructor_injection: bool = True
    """Allow resolving declared constructor parameters."""

    def __post_init__(self) -> None:
        if not isinstance(self.default_scope, Scope):
            msg = f"default_scope must be a Scope member, got {self.default_scope!r}."
            raise InjectWireConfigurationError(msg)
        for flag in ("strict_mode", "validate_providers", "enable_constructor_injection"):
            if not isinstance(getattr(self, flag), bool):
                msg = f"{flag} must be a bool, got {getattr(self, flag)!r}."
                raise InjectWireConfigurationError(msg)


_config = InjectWireConfig()


def get_config() -> InjectWireConfig:
    """Return the active process-wide configuration."""
    return _config


def configure(**changes: Any) -> InjectWireConfig:
    """Replace fields of the process-wide configuration.

    Returns the previous configuration so callers can restore it.

    Raises:
        InjectWireConfigurationError: If a key is unknown or a value is invalid.

    """
    global _config  # noqa: PLW0603

    known = {config_field.name for config_field in dataclasses.fields(InjectWireConfig)}
    unknown = sorted(set(changes) - known)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(unknown)}."
        raise InjectWireConfigurationError(msg)

    previous = _config
    _config = dataclasses.replace(previous, **changes)
    return previous


@contextmanager
def override_config(**changes: Any) -> Generator[InjectWireConfig, None, None]:
    """Temporarily apply configuration changes, restoring the previous values on exit."""
    global _config  # noqa: PLW0603

    previous = configure(**changes)
    try:
        yield _config
    finally:
        _config = previous
