from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar, overload

from injectwire.config import get_config
from injectwire.dependencies import ParameterTypeProbe
from injectwire.exceptions import (
    InjectWireConfigurationError,
    InjectWireDuplicateRegistrationError,
    InjectWireError,
    InjectWireTokenNotFoundError,
    InjectWireUnresolvedParametersError,
)
from injectwire.injectables import is_transient
from injectwire.injection_context import injection_context
from injectwire.providers import (
    CustomProvider,
    ProviderStrategy,
    ProviderType,
    Token,
    get_token_from_provider,
    is_custom_provider,
    stringify_provider,
)
from injectwire.resolution_stack import resolution_frame
from injectwire.tokens import InjectionToken, is_injection_token, stringify_token
from injectwire.validators import ProviderRegistrationValidator

if TYPE_CHECKING:
    from injectwire.injector_interface import Injector

T = TypeVar("T")

logger = logging.getLogger(__name__)

_NOT_FOUND: Any = object()
_UNRESOLVED: Any = object()


@dataclass(slots=True)
class InjectorEntry:
    """A token registered in one injector together with its producers."""

    token: Token
    providers: list[ProviderType] = field(default_factory=list)
    """One provider, or the ordered producers of a ``multi`` token."""
    multi: bool = False
    values: list[Any] = field(init=False)
    """Cached value per producer; stays unset for transient producers."""
    resolution: Any = field(init=False, default=_UNRESOLVED)
    """Cached value of the whole entry; stays unset while any producer is transient."""

    def __post_init__(self) -> None:
        self.values = [_UNRESOLVED] * len(self.providers)

    def append(self, provider: ProviderType) -> None:
        self.providers.append(provider)
        self.values.append(_UNRESOLVED)
        self.resolution = _UNRESOLVED

    def truncate(self, count: int) -> None:
        """Drop producers appended after the first ``count``."""
        if len(self.providers) > count:
            del self.providers[count:]
            del self.values[count:]
            self.resolution = _UNRESOLVED

    @property
    def is_resolved(self) -> bool:
        return self.resolution is not _UNRESOLVED

    @property
    def is_cacheable(self) -> bool:
        return not any(is_transient(provider) for provider in self.providers)


class SimpleInjector:
    """Register providers by token and resolve them, delegating misses to a parent.

    Values of ``Scope.INJECTOR`` and ``Scope.GLOBAL`` providers are cached in the
    injector that holds the registration; ``Scope.TRANSIENT`` providers produce a
    new value on every lookup. Child injectors see their ancestors' registrations
    unless they register the same token themselves.

    Register providers before resolving concurrently: registration is not
    synchronized with resolution.

    Examples:
        .. code-block:: python

            injector = SimpleInjector(name="app")
            injector.register_provider(Repository)
            injector.register_provider(CustomProvider(token="API_URL", use_value="http://localhost"))

            repository = injector.require(Repository)

    """

    def __init__(self, parent: Injector | None = None, name: str | None = None) -> None:
        """Initialize an empty injector.

        Args:
            parent: Injector consulted when a token is not registered here.
            name: Optional name used in debug output and error messages.

        """
        self._parent = parent
        self._name = name
        self._entries: dict[Token, InjectorEntry] = {}
        self._provider_validator = ProviderRegistrationValidator()
        self._parameter_probe = ParameterTypeProbe()

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def parent(self) -> Injector | None:
        return self._parent

    # region Registration
    def register_provider(self, provider: ProviderType) -> None:
        """Register a class or a ``CustomProvider`` in this injector.

        Raises:
            InjectWireConfigurationError: If provider validation is enabled and
                the provider is malformed.
            InjectWireDuplicateRegistrationError: If the token is already
                registered here, unless both registrations are ``multi``.

        """
        if get_config().validate_providers:
            self._provider_validator.validate_provider(provider)

        token = get_token_from_provider(provider)
        multi = is_custom_provider(provider) and provider.multi

        entry = self._entries.get(token)
        if entry is not None:
            if not (multi and entry.multi):
                msg = f"Cannot register provider '{stringify_token(token)}' multiple times in {self}."
                raise InjectWireDuplicateRegistrationError(token, msg)
            entry.append(provider)
            logger.debug("Appended %s to multi token in %s", stringify_provider(provider), self)
            return

        self._entries[token] = InjectorEntry(token=token, providers=[provider], multi=multi)
        logger.debug("Registered %s in %s", stringify_provider(provider), self)

    def has_provider(self, token: Token, *, ignore_parent: bool = False) -> bool:
        """Return true when this injector, or an ancestor, has a registration for ``token``."""
        if token in self._entries:
            return True
        if ignore_parent or self._parent is None:
            return False
        if isinstance(self._parent, SimpleInjector):
            return self._parent.has_provider(token)
        return False

    def tokens(self) -> tuple[Token, ...]:
        """Return the tokens registered in this injector, in registration order."""
        return tuple(self._entries)

    # endregion Registration

    # region Resolution
    @overload
    def get(self, token: type[T], *, ignore_parent: bool = False) -> T | None: ...

    @overload
    def get(self, token: InjectionToken[T], *, ignore_parent: bool = False) -> T | None: ...

    @overload
    def get(self, token: Any, *, ignore_parent: bool = False) -> Any | None: ...

    def get(self, token: Any, *, ignore_parent: bool = False) -> Any | None:
        """Resolve ``token``, returning ``None`` when it cannot be found.

        Lookup order is this injector, then the parent chain (unless
        ``ignore_parent``), then the default of an ``InjectionToken``.

        Raises:
            InjectWireTokenNotFoundError: If ``token`` is a required
                ``InjectionToken`` that cannot be found.

        """
        value = self._lookup(token, ignore_parent=ignore_parent)
        if value is _NOT_FOUND:
            if is_injection_token(token) and token.required:
                msg = f"Cannot find required {stringify_token(token)} in {self}."
                raise InjectWireTokenNotFoundError(token, msg)
            return None
        return value

    @overload
    def require(self, token: type[T]) -> T: ...

    @overload
    def require(self, token: InjectionToken[T]) -> T: ...

    @overload
    def require(self, token: Any) -> Any: ...

    def require(self, token: Any) -> Any:
        """Resolve ``token``, raising when it cannot be found.

        Raises:
            InjectWireTokenNotFoundError: If no provider or default exists.

        """
        value = self._lookup(token)
        if value is _NOT_FOUND:
            msg = f"Cannot find {stringify_token(token)} in {self}."
            raise InjectWireTokenNotFoundError(token, msg)
        return value

    def resolve_all(self, allow_unresolved: bool = False) -> list[Token]:  # noqa: FBT001, FBT002
        """Resolve every token registered in this injector.

        Args:
            allow_unresolved: Skip tokens whose resolution fails with an
                injectwire error instead of propagating the error.

        Returns:
            The tokens that were resolved, in registration order.

        """
        resolved: list[Token] = []
        for token in list(self._entries):
            try:
                self.require(token)
            except InjectWireError as error:
                if not allow_unresolved:
                    raise
                logger.debug("Skipped unresolved %s in %s: %s", stringify_token(token), self, error)
                continue
            resolved.append(token)
        return resolved

    def _lookup(self, token: Token, *, ignore_parent: bool = False, use_default: bool = True) -> Any:
        entry = self._entries.get(token)
        if entry is None:
            entry = self._find_missing_entry(token)
        if entry is not None:
            return self._resolve_entry(entry)

        if self._parent is not None and not ignore_parent:
            value = self._lookup_in_parent(token)
            if value is not _NOT_FOUND:
                return value

        if use_default and is_injection_token(token) and token.has_default:
            return self._resolve_default(token)
        return _NOT_FOUND

    def _lookup_in_parent(self, token: Token) -> Any:
        """Look ``token`` up in the parent chain without applying defaults.

        Other ``Injector`` implementations are asked through their public
        ``get``, which cannot tell a registered ``None`` from a miss. For such
        parents a ``None`` value counts as not found, and their own defaults
        still apply.
        """
        parent = self._parent
        if isinstance(parent, SimpleInjector):
            # Defaults are applied by the requesting injector, not its ancestors.
            return parent._lookup(token, use_default=False)  # noqa: SLF001
        value = parent.get(token) if parent is not None else None
        return _NOT_FOUND if value is None else value

    def _find_missing_entry(self, token: Token) -> InjectorEntry | None:
        """Return an entry for a token that is not registered here, if one can be created."""
        return None

    def _resolve_entry(self, entry: InjectorEntry) -> Any:
        if entry.is_resolved:
            return entry.resolution

        with resolution_frame(self, entry.token):
            values = [self._resolve_entry_value(entry, index) for index in range(len(entry.providers))]

        resolution: Any = tuple(values) if entry.multi else values[0]
        if entry.is_cacheable:
            entry.resolution = resolution
        return resolution

    def _resolve_entry_value(self, entry: InjectorEntry, index: int) -> Any:
        value = entry.values[index]
        if value is not _UNRESOLVED:
            return value

        provider = entry.providers[index]
        value = self._resolve_provider(entry.token, provider)
        if not is_transient(provider):
            entry.values[index] = value
        return value

    def _resolve_provider(self, token: Token, provider: ProviderType) -> Any:
        if is_custom_provider(provider):
            return self._resolve_custom_provider(provider)
        return self._resolve_type_provider(provider, token=token)

    def _resolve_custom_provider(self, provider: CustomProvider) -> Any:
        strategy = provider.strategy
        if strategy is ProviderStrategy.VALUE:
            return provider.use_value
        if strategy is ProviderStrategy.CLASS:
            return self._resolve_type_provider(provider.use_class, token=provider.token)
        if strategy is ProviderStrategy.EXISTING:
            return self.require(provider.use_existing)

        arguments = self._resolve_parameters(provider.token, provider.deps or ())
        return self.run(provider.factory, *arguments)

    def _resolve_type_provider(self, cls: type[Any], *, token: Token) -> Any:
        parameter_tokens = self._parameter_probe.get_parameter_tokens(cls)
        if parameter_tokens is None:
            return self.run(cls)

        if not get_config().enable_constructor_injection:
            msg = (
                f"Constructor injection is disabled; cannot construct '{cls.__qualname__}' "
                "with declared parameters."
            )
            raise InjectWireConfigurationError(msg)

        arguments = self._resolve_parameters(token, parameter_tokens)
        return self.run(cls, *arguments)

    def _resolve_parameters(self, token: Token, parameter_tokens: Sequence[Token]) -> list[Any]:
        resolved = [self._lookup(parameter_token) for parameter_token in parameter_tokens]
        unresolved = tuple(index for index, value in enumerate(resolved) if value is _NOT_FOUND)
        if unresolved:
            rendered = ", ".join(
                "?" if value is _NOT_FOUND else stringify_token(parameter_token)
                for parameter_token, value in zip(parameter_tokens, resolved, strict=True)
            )
            msg = (
                f"Cannot resolve parameters of {stringify_token(token)}({rendered}) in {self}; "
                f"unresolved positions: {list(unresolved)}."
            )
            raise InjectWireUnresolvedParametersError(token, unresolved, msg)
        return resolved

    def _resolve_default(self, token: InjectionToken[Any]) -> Any:
        if token.default_factory is not None:
            return self.run(token.default_factory)
        return token.default

    # endregion Resolution

    # region Injection context
    def run(self, body: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call ``body`` with this injector as the current injector, so ``inject`` works inside it."""
        return injection_context.run(self, body, *args, **kwargs)

    async def run_async(
        self,
        body: Callable[..., Awaitable[T]] | Awaitable[T],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Await ``body`` with this injector bound to the calling task."""
        return await injection_context.run_async(self, body, *args, **kwargs)

    # endregion Injection context

    # region Debugging
    def debug_snapshot(self) -> dict[str, str]:
        """Resolve every registered token and render it as ``{token: str(value)}``."""
        return {stringify_token(token): str(self.get(token)) for token in list(self._entries)}

    def print_debug(self, sink: Callable[[str], None] | None = None) -> None:
        """Write the registered tokens and their values to ``sink`` or the module logger."""
        message = (
            f"Injector '{self._name or type(self).__name__}' contains: "
            f"{json.dumps(self.debug_snapshot(), indent=4)}"
        )
        if sink is None:
            logger.info("%s", message)
        else:
            sink(message)

    def __repr__(self) -> str:
        if self._name is None:
            return type(self).__name__
        return f"{type(self).__name__}[{self._name}]"

    # endregion Debugging
