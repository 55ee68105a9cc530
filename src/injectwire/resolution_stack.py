from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from injectwire.exceptions import InjectWireCircularDependencyError
from injectwire.tokens import stringify_token


@dataclass(frozen=True, slots=True)
class _ResolutionFrame:
    injector: Any
    token: Any


# Immutable tuples: a task that inherits the stack can never mutate its parent's copy.
_resolution_stack: ContextVar[tuple[_ResolutionFrame, ...]] = ContextVar(
    "injectwire_resolution_stack",
    default=(),
)


def current_resolution_chain() -> tuple[Any, ...]:
    """Return the tokens being resolved in the current context, outermost first."""
    return tuple(frame.token for frame in _resolution_stack.get())


@contextmanager
def resolution_frame(injector: Any, token: Any) -> Generator[None, None, None]:
    """Track the resolution of ``token`` by ``injector`` for the duration of the block.

    Raises:
        InjectWireCircularDependencyError: If the same injector is already
            resolving the same token in this context.

    """
    stack = _resolution_stack.get()
    for index, frame in enumerate(stack):
        if frame.injector is injector and frame.token == token:
            chain = (*(entered.token for entered in stack[index:]), token)
            rendered = " -> ".join(stringify_token(item) for item in chain)
            msg = f"Circular dependency detected in {injector}: {rendered}."
            raise InjectWireCircularDependencyError(token, chain, msg)

    reset_token = _resolution_stack.set((*stack, _ResolutionFrame(injector=injector, token=token)))
    try:
        yield
    finally:
        _resolution_stack.reset(reset_token)
