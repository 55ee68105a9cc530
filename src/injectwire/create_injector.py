from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from injectwire.config import ROOT_INJECTOR_NAME, get_config
from injectwire.exceptions import InjectWireConfigurationError, InjectWireReservedNameError
from injectwire.injectables import is_global
from injectwire.injector import SimpleInjector
from injectwire.providers import ProviderType, stringify_provider
from injectwire.root_injector import root_injector

if TYPE_CHECKING:
    from injectwire.injector_interface import Injector

logger = logging.getLogger(__name__)


def create_injector(
    *,
    providers: Iterable[ProviderType] = (),
    name: str | None = None,
    parent: Injector | None = None,
    instantiate_immediately: bool = False,
    allow_unresolved: bool = False,
) -> SimpleInjector:
    """Create an injector, register its providers and optionally resolve them eagerly.

    Global-scoped providers belong to the root injector: in strict mode they
    are rejected, otherwise they are registered on the root injector instead
    of the new one.

    Args:
        providers: Classes and ``CustomProvider`` instances to register.
        name: Optional name used in debug output and error messages.
        parent: Injector consulted for tokens the new injector does not
            register. Defaults to the root injector.
        instantiate_immediately: Resolve every registered provider before
            returning, surfacing resolution errors at creation time.
        allow_unresolved: With ``instantiate_immediately``, skip providers that
            cannot be resolved instead of raising.

    Returns:
        The new injector.

    Raises:
        InjectWireReservedNameError: If ``name`` is the root injector name.
        InjectWireConfigurationError: In strict mode, if a global-scoped
            provider is passed; or if a provider is malformed.
        InjectWireDuplicateRegistrationError: If a token is passed twice.

    Examples:
        .. code-block:: python

            injector = create_injector(
                providers=[Repository, CustomProvider(token="API_URL", use_value="http://localhost")],
                name="app",
            )
            request_injector = create_injector(providers=[RequestContext], parent=injector)

    """
    if name == ROOT_INJECTOR_NAME:
        msg = f"Injector name '{ROOT_INJECTOR_NAME}' is reserved for the root injector."
        raise InjectWireReservedNameError(msg)

    injector = SimpleInjector(parent=root_injector if parent is None else parent, name=name)
    providers = list(providers)

    global_providers = [provider for provider in providers if is_global(provider)]
    if global_providers and get_config().strict_mode:
        msg = f"{injector} can't register global provider {stringify_provider(global_providers[0])}."
        raise InjectWireConfigurationError(msg)

    # The root injector is mutated only after every local registration succeeded.
    for provider in providers:
        if not is_global(provider):
            injector.register_provider(provider)

    for provider in global_providers:
        logger.debug("Redirecting global %s from %s to %s", stringify_provider(provider), injector, root_injector)
    root_injector.register_global_providers(global_providers)

    if instantiate_immediately:
        injector.resolve_all(allow_unresolved=allow_unresolved)

    return injector
