from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar, overload, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Injector(Protocol):
    """Protocol for a dependency injector."""

    @overload
    def get(self, token: type[T], *, ignore_parent: bool = False) -> T | None: ...

    @overload
    def get(self, token: Any, *, ignore_parent: bool = False) -> Any | None: ...

    def get(self, token: Any, *, ignore_parent: bool = False) -> Any | None:
        """Resolve the token, returning ``None`` when it cannot be found."""

    @overload
    def require(self, token: type[T]) -> T: ...

    @overload
    def require(self, token: Any) -> Any: ...

    def require(self, token: Any) -> Any:
        """Resolve the token, raising when it cannot be found."""

    def run(self, body: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call ``body`` with this injector as the current injector."""

    async def run_async(self, body: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Await ``body`` with this injector as the current injector."""

    def print_debug(self, sink: Callable[[str], None] | None = None) -> None:
        """Write the registered tokens and their values to a debug sink."""
