from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias, TypeGuard

from injectwire.exceptions import InjectWireConfigurationError
from injectwire.scope import Scope
from injectwire.tokens import _MISSING, is_type, is_valid_token, stringify_token

Token: TypeAlias = Any
"""A registry key: a class, a string, an ``InjectionToken`` or any hashable sentinel."""


class ProviderStrategy(Enum):
    """The producing strategy of a custom provider."""

    VALUE = "use_value"
    CLASS = "use_class"
    FACTORY = "factory"
    EXISTING = "use_existing"


@dataclass(frozen=True, kw_only=True, slots=True, eq=False)
class CustomProvider:
    """Describe how to produce the value of a token.

    Exactly one of ``use_value``, ``use_class``, ``factory`` or
    ``use_existing`` must be set.

    Examples:
        .. code-block:: python

            CustomProvider(token="API_URL", use_value="https://api.example.com")
            CustomProvider(token=Repository, use_class=SqlRepository)
            CustomProvider(token="CLIENT", factory=build_client, deps=[Settings])
            CustomProvider(token="DEFAULT_REPO", use_existing=Repository)
            CustomProvider(token=PLUGINS, use_class=AuditPlugin, multi=True)

    """

    token: Token
    """Key the provider is registered under."""
    use_value: Any = _MISSING
    """Precomputed value. ``None`` is a valid value."""
    use_class: type[Any] | None = None
    """Class to instantiate, with resolved constructor parameters, for ``token``."""
    factory: Callable[..., Any] | None = None
    """Callable invoked with the resolved ``deps`` as positional arguments."""
    deps: Sequence[Token] | None = None
    """Ordered tokens resolved and passed to ``factory``."""
    use_existing: Token = _MISSING
    """Token to re-dispatch the lookup to."""
    scope: Scope | None = None
    """Lifetime of the produced value. ``None`` uses the configured default."""
    multi: bool = False
    """Append to the token's list of producers instead of conflicting."""

    @property
    def strategies(self) -> tuple[ProviderStrategy, ...]:
        """Return every producing strategy set on this provider."""
        present = (
            (ProviderStrategy.VALUE, self.use_value is not _MISSING),
            (ProviderStrategy.CLASS, self.use_class is not None),
            (ProviderStrategy.FACTORY, self.factory is not None),
            (ProviderStrategy.EXISTING, self.use_existing is not _MISSING),
        )
        return tuple(strategy for strategy, is_set in present if is_set)

    @property
    def strategy(self) -> ProviderStrategy:
        """Return the single producing strategy of a valid provider."""
        strategies = self.strategies
        if len(strategies) != 1:
            msg = f"{stringify_provider(self)} must set exactly one producing strategy."
            raise InjectWireConfigurationError(msg)
        return strategies[0]


ProviderType: TypeAlias = "type[Any] | CustomProvider"


def is_custom_provider(candidate: object) -> TypeGuard[CustomProvider]:
    return isinstance(candidate, CustomProvider)


def get_token_from_provider(provider: ProviderType) -> Token:
    """Return the registry key of a provider; a class is its own token."""
    if is_custom_provider(provider):
        return provider.token
    return provider


def stringify_provider(provider: object) -> str:
    """Render a provider for debug output and error messages."""
    if is_custom_provider(provider):
        strategies = ", ".join(strategy.value for strategy in provider.strategies) or "no strategy"
        return f"CustomProvider[{stringify_token(provider.token)}: {strategies}]"
    return stringify_token(provider)


def validate_custom_provider(provider: CustomProvider) -> None:  # noqa: C901
    """Validate a custom provider before it is registered.

    Raises:
        InjectWireConfigurationError: On a missing or unhashable token, a
            missing or repeated strategy, an invalid scope, a non-class
            ``use_class``, a non-callable ``factory``, malformed ``deps``, a
            self-alias, or a non-bool ``multi``.

    """
    name = stringify_provider(provider)

    if not is_valid_token(provider.token):
        msg = f"{name} must declare a hashable token, got {provider.token!r}."
        raise InjectWireConfigurationError(msg)

    strategies = provider.strategies
    if not strategies:
        msg = f"{name} must set one of use_value, use_class, factory or use_existing."
        raise InjectWireConfigurationError(msg)
    if len(strategies) > 1:
        msg = f"{name} sets more than one producing strategy."
        raise InjectWireConfigurationError(msg)

    if provider.scope is not None and not isinstance(provider.scope, Scope):
        msg = f"{name} has invalid scope {provider.scope!r}; expected a Scope member."
        raise InjectWireConfigurationError(msg)

    if provider.use_class is not None and not is_type(provider.use_class):
        msg = f"{name} use_class must be a class, got {provider.use_class!r}."
        raise InjectWireConfigurationError(msg)

    if provider.factory is not None and not callable(provider.factory):
        msg = f"{name} factory must be callable, got {provider.factory!r}."
        raise InjectWireConfigurationError(msg)

    if provider.deps is not None:
        if provider.factory is None:
            msg = f"{name} declares deps without a factory."
            raise InjectWireConfigurationError(msg)
        if not isinstance(provider.deps, list | tuple):
            msg = f"{name} deps must be a list or tuple of tokens, got {provider.deps!r}."
            raise InjectWireConfigurationError(msg)
        invalid = [dep for dep in provider.deps if not is_valid_token(dep)]
        if invalid:
            msg = f"{name} deps contain invalid tokens: {invalid!r}."
            raise InjectWireConfigurationError(msg)

    if provider.use_existing is not _MISSING:
        if not is_valid_token(provider.use_existing):
            msg = f"{name} use_existing must be a hashable token, got {provider.use_existing!r}."
            raise InjectWireConfigurationError(msg)
        if provider.use_existing == provider.token:
            msg = f"{name} cannot alias its own token."
            raise InjectWireConfigurationError(msg)

    if not isinstance(provider.multi, bool):
        msg = f"{name} multi must be a bool, got {provider.multi!r}."
        raise InjectWireConfigurationError(msg)
