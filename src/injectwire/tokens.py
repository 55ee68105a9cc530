from __future__ import annotations

import types
from collections.abc import Callable
from typing import Any, Generic, TypeGuard, TypeVar

from injectwire.exceptions import InjectWireConfigurationError

T = TypeVar("T")

_MISSING: Any = object()


class InjectionToken(Generic[T]):
    """Identify a dependency when no class identity is available.

    Useful for primitive values, interfaces and third-party objects. Tokens
    compare and hash by identity, so two tokens with the same name are still
    different keys.

    Examples:
        .. code-block:: python

            API_URL = InjectionToken[str]("API_URL", default="https://api.example.com")

            injector = create_injector(
                providers=[CustomProvider(token=API_URL, use_value="http://localhost")],
            )
            injector.require(API_URL)

    """

    __slots__ = ("_default", "_default_factory", "name", "required")

    def __init__(
        self,
        name: str,
        *,
        default: T = _MISSING,
        default_factory: Callable[[], T] | None = None,
        required: bool = False,
    ) -> None:
        """Create a token.

        Args:
            name: Descriptive name used in debug output and error messages.
            default: Value returned when no injector provides the token.
            default_factory: Callable producing the default. It runs inside the
                requesting injector's context, so it may call ``inject``.
            required: Make ``get`` raise instead of returning ``None`` when the
                token is neither provided nor defaulted.

        Raises:
            InjectWireConfigurationError: If both ``default`` and
                ``default_factory`` are given, or ``default_factory`` is not
                callable.

        """
        if default is not _MISSING and default_factory is not None:
            msg = f"InjectionToken '{name}' cannot declare both default and default_factory."
            raise InjectWireConfigurationError(msg)
        if default_factory is not None and not callable(default_factory):
            msg = f"InjectionToken '{name}' default_factory must be callable, got {default_factory!r}."
            raise InjectWireConfigurationError(msg)

        self.name = name
        self.required = required
        self._default = default
        self._default_factory = default_factory

    @property
    def has_default(self) -> bool:
        """Return true when the token carries a default value or default factory."""
        return self._default is not _MISSING or self._default_factory is not None

    @property
    def default(self) -> T:
        return self._default

    @property
    def default_factory(self) -> Callable[[], T] | None:
        return self._default_factory

    def __str__(self) -> str:
        return f"InjectionToken[{self.name}]"

    def __repr__(self) -> str:
        return f"InjectionToken({self.name!r}, required={self.required})"


def is_type(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class usable as a type provider."""
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_injection_token(candidate: object) -> TypeGuard[InjectionToken[Any]]:
    return isinstance(candidate, InjectionToken)


def is_valid_token(candidate: object) -> bool:
    """Return true when candidate can be used as a registry key."""
    if candidate is None:
        return False
    try:
        hash(candidate)
    except TypeError:
        return False
    return True


def stringify_token(token: object) -> str:
    """Render a token for debug output and error messages."""
    if is_type(token):
        return token.__qualname__
    return str(token)
