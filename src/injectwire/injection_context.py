from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, TypeVar

from injectwire.exceptions import InjectWireOutsideInjectionContextError

if TYPE_CHECKING:
    from injectwire.injector_interface import Injector

T = TypeVar("T")


class InjectionContext:
    """Task/thread-local binding of the injector that ``inject`` resolves against.

    The binding lives in a ``ContextVar``: every asyncio task runs with its own
    copy of the context, so tasks interleaving at ``await`` points never observe
    each other's injector.
    """

    __slots__ = ("_current_injector_var",)

    def __init__(self) -> None:
        self._current_injector_var: ContextVar[Injector | None] = ContextVar(
            "injectwire_current_injector",
            default=None,
        )

    def set_current(self, injector: Injector | None) -> Injector | None:
        """Bind ``injector`` in the current context and return the previous binding."""
        previous = self._current_injector_var.get()
        self._current_injector_var.set(injector)
        return previous

    def get_current(self) -> Injector | None:
        return self._current_injector_var.get()

    def require_current(self) -> Injector:
        """Return the bound injector.

        Raises:
            InjectWireOutsideInjectionContextError: If no injector is bound.

        """
        injector = self._current_injector_var.get()
        if injector is None:
            msg = (
                "No injector is active. Call inject() from code run through injector.run(...), "
                "injector.run_async(...) or from a class constructed by an injector."
            )
            raise InjectWireOutsideInjectionContextError(msg)
        return injector

    def run(self, injector: Injector, body: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call ``body`` with ``injector`` bound, restoring the previous binding afterwards."""
        token = self._current_injector_var.set(injector)
        try:
            return body(*args, **kwargs)
        finally:
            self._current_injector_var.reset(token)

    async def run_async(
        self,
        injector: Injector,
        body: Callable[..., Awaitable[T]] | Awaitable[T],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Await ``body`` with ``injector`` bound to the calling task.

        ``body`` is an async callable invoked with ``args``/``kwargs``, or an
        awaitable that has not started yet.
        """
        token = self._current_injector_var.set(injector)
        try:
            if inspect.isawaitable(body):
                return await body
            return await body(*args, **kwargs)
        finally:
            self._current_injector_var.reset(token)


injection_context = InjectionContext()

set_current_injector = injection_context.set_current
get_current_injector = injection_context.get_current
require_current_injector = injection_context.require_current
run_with_injector = injection_context.run
run_with_injector_async = injection_context.run_async
