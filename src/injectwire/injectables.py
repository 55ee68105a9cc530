from __future__ import annotations

import logging
import weakref
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from injectwire.config import get_config
from injectwire.exceptions import InjectWireConfigurationError
from injectwire.providers import Token, is_custom_provider
from injectwire.scope import Scope
from injectwire.tokens import is_type, is_valid_token

C = TypeVar("C", bound=type[Any])

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InjectableMetadata:
    """Declaration attached to a class by ``register_scope``."""

    scope: Scope | None = None
    """Declared scope, or ``None`` to use the configured default at lookup time."""
    dependencies: tuple[Token, ...] | None = None
    """Explicit constructor parameter tokens, in positional order."""


class ScopeRegistry:
    """Associate classes with their declared scope and dependency manifest.

    Classes are held weakly so declarations do not keep them alive.
    """

    def __init__(self) -> None:
        self._metadata: weakref.WeakKeyDictionary[type[Any], InjectableMetadata] = (
            weakref.WeakKeyDictionary()
        )

    def register(
        self,
        cls: type[Any],
        scope: Scope | None = None,
        *,
        dependencies: Sequence[Token] | None = None,
    ) -> InjectableMetadata:
        if not is_type(cls):
            msg = f"Only classes can declare a scope, got {cls!r}."
            raise InjectWireConfigurationError(msg)
        if scope is not None and not isinstance(scope, Scope):
            msg = f"Invalid scope {scope!r} for '{cls.__qualname__}'; expected a Scope member."
            raise InjectWireConfigurationError(msg)
        if dependencies is not None:
            if not isinstance(dependencies, list | tuple):
                msg = (
                    f"Dependencies of '{cls.__qualname__}' must be a list or tuple of tokens, "
                    f"got {dependencies!r}."
                )
                raise InjectWireConfigurationError(msg)
            invalid = [dependency for dependency in dependencies if not is_valid_token(dependency)]
            if invalid:
                msg = f"Dependencies of '{cls.__qualname__}' contain invalid tokens: {invalid!r}."
                raise InjectWireConfigurationError(msg)
            dependencies = tuple(dependencies)

        metadata = InjectableMetadata(scope=scope, dependencies=dependencies)
        self._metadata[cls] = metadata
        logger.debug("Declared '%s' with scope=%s", cls.__qualname__, scope)
        return metadata

    def get(self, cls: object) -> InjectableMetadata | None:
        if not is_type(cls):
            return None
        return self._metadata.get(cls)


_scope_registry = ScopeRegistry()


def register_scope(
    cls: type[Any],
    scope: Scope | None = None,
    *,
    dependencies: Sequence[Token] | None = None,
) -> None:
    """Declare the scope and, optionally, the constructor dependency tokens of a class.

    Call once per class, before it is resolved. Calling again replaces the
    previous declaration.

    Args:
        cls: Class being declared.
        scope: Scope of the class, or ``None`` for the configured default.
        dependencies: Explicit tokens for the constructor's positional
            parameters. When omitted, constructor annotations are used.

    Raises:
        InjectWireConfigurationError: If ``cls`` is not a class, ``scope`` is not
            a ``Scope`` member, or ``dependencies`` is malformed.

    """
    _scope_registry.register(cls, scope, dependencies=dependencies)


@overload
def injectable(cls: C, /) -> C: ...


@overload
def injectable(
    cls: None = None,
    /,
    *,
    scope: Scope | None = None,
    dependencies: Sequence[Token] | None = None,
) -> Callable[[C], C]: ...


def injectable(
    cls: C | None = None,
    /,
    *,
    scope: Scope | None = None,
    dependencies: Sequence[Token] | None = None,
) -> C | Callable[[C], C]:
    """Declare a class as injectable, in bare or parameterized decorator form.

    Examples:
        .. code-block:: python

            @injectable
            class Repository: ...


            @injectable(scope=Scope.GLOBAL)
            class Settings: ...


            @injectable(scope=Scope.TRANSIENT, dependencies=[Repository, "API_URL"])
            class Handler:
                def __init__(self, repository, api_url) -> None: ...

    """

    def decorator(decorated: C) -> C:
        register_scope(decorated, scope, dependencies=dependencies)
        return decorated

    if cls is None:
        return decorator
    return decorator(cls)


def get_injectable_metadata(cls: object) -> InjectableMetadata | None:
    """Return the declaration of a class, or ``None`` when it was never declared."""
    return _scope_registry.get(cls)


def is_injectable(cls: object) -> bool:
    return get_injectable_metadata(cls) is not None


def get_scope(provider: object) -> Scope:
    """Return the scope of a class or custom provider, falling back to the configured default."""
    scope: Scope | None = None
    if is_custom_provider(provider):
        scope = provider.scope
    else:
        metadata = get_injectable_metadata(provider)
        if metadata is not None:
            scope = metadata.scope
    return scope if scope is not None else get_config().default_scope


def is_transient(provider: object) -> bool:
    return get_scope(provider) is Scope.TRANSIENT


def is_global(provider: object) -> bool:
    return get_scope(provider) is Scope.GLOBAL
