from __future__ import annotations

from typing import Any


class InjectWireError(Exception):
    """Represent a base class for all injectwire-specific failures.

    Catch this type when you want to handle any injectwire error path without
    matching each concrete exception class individually.
    """


class InjectWireConfigurationError(InjectWireError):
    """Signal an invalid provider, declaration or configuration value.

    Raised synchronously by ``SimpleInjector.register_provider`` when a custom
    provider is malformed (missing or multiple strategies, invalid scope,
    self-alias, non-callable factory, non-class ``use_class``), by
    ``register_scope`` for invalid declarations and by ``configure`` for
    unknown or invalid settings.

    Typical fixes include setting exactly one of ``use_value``, ``use_class``,
    ``factory`` or ``use_existing`` and passing a ``Scope`` member as scope.
    """


class InjectWireDependencyInferenceError(InjectWireConfigurationError):
    """Signal that constructor dependencies cannot be inferred.

    Common triggers are required constructor parameters without annotations,
    annotations that cannot be evaluated, and required keyword-only parameters.

    Typical fixes include adding concrete parameter annotations or declaring
    ``dependencies=[...]`` with ``injectable``/``register_scope``.
    """


class InjectWireDuplicateRegistrationError(InjectWireError):
    """Signal a second registration of one token in the same injector.

    Parent registrations never block a child, so shadowing a token in a child
    injector is allowed. Several ``multi=True`` providers for one token are
    appended instead of conflicting, but mixing multi and non-multi providers
    for the same token raises this error.
    """

    def __init__(self, token: Any, message: str) -> None:
        super().__init__(message)
        self.token = token


class InjectWireTokenNotFoundError(InjectWireError):
    """Signal that a token has no provider and no default.

    Raised by ``require``, by ``inject`` and by ``get`` for ``InjectionToken``
    instances declared with ``required=True``.

    Typical fixes include registering a provider for the token in the injector
    or one of its ancestors, or giving the ``InjectionToken`` a default.
    """

    def __init__(self, token: Any, message: str) -> None:
        super().__init__(message)
        self.token = token


class InjectWireUnresolvedParametersError(InjectWireError):
    """Signal that some declared parameters of a provider could not be resolved.

    Raised while constructing a class whose constructor parameters, or while
    calling a factory whose ``deps``, cannot all be resolved. The error names
    the provider token and the zero-based positions that stayed unresolved.
    """

    def __init__(
        self,
        token: Any,
        unresolved_positions: tuple[int, ...],
        message: str,
    ) -> None:
        super().__init__(message)
        self.token = token
        self.unresolved_positions = unresolved_positions


class InjectWireOutsideInjectionContextError(InjectWireError):
    """Signal use of ``inject`` while no injector is active.

    Raised by ``require_current_injector`` and ``inject``/``inject_optional``.

    Typical fix is running the code through ``injector.run(...)`` or
    ``await injector.run_async(...)``, or resolving it from an injector so that
    construction happens inside the injection context.
    """


class InjectWireReservedNameError(InjectWireError):
    """Signal an attempt to create an injector with the root injector name."""


class InjectWireCircularDependencyError(InjectWireError):
    """Signal a dependency cycle detected during resolution.

    The ``chain`` attribute holds the tokens from the first occurrence of the
    repeated token to the point where it was requested again.
    """

    def __init__(self, token: Any, chain: tuple[Any, ...], message: str) -> None:
        super().__init__(message)
        self.token = token
        self.chain = chain
