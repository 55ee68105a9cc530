from __future__ import annotations

from typing import Any, TypeVar, overload

from injectwire.injection_context import require_current_injector

T = TypeVar("T")


@overload
def inject(token: type[T]) -> T: ...


@overload
def inject(token: Any) -> Any: ...


def inject(token: Any) -> Any:
    """Require ``token`` from the current injector.

    Raises:
        InjectWireOutsideInjectionContextError: If no injector is active.
        InjectWireTokenNotFoundError: If the token cannot be resolved.

    """
    return require_current_injector().require(token)


@overload
def inject_optional(token: type[T]) -> T | None: ...


@overload
def inject_optional(token: Any) -> Any | None: ...


def inject_optional(token: Any) -> Any | None:
    """Resolve ``token`` from the current injector, returning ``None`` when not found.

    Raises:
        InjectWireOutsideInjectionContextError: If no injector is active.

    """
    return require_current_injector().get(token)
