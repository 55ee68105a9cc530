from __future__ import annotations

import logging
from collections.abc import Sequence

from injectwire.config import ROOT_INJECTOR_NAME
from injectwire.exceptions import InjectWireError
from injectwire.injectables import is_global
from injectwire.injector import InjectorEntry, SimpleInjector
from injectwire.providers import ProviderType, Token, get_token_from_provider
from injectwire.tokens import is_type, stringify_token

logger = logging.getLogger(__name__)


class RootInjector(SimpleInjector):
    """The parentless ancestor of every injector created by ``create_injector``.

    Classes declared with ``Scope.GLOBAL`` are registered here on first request,
    so a single instance is shared by the whole process without explicit
    registration.
    """

    def __init__(self) -> None:
        super().__init__(parent=None, name=ROOT_INJECTOR_NAME)

    def register_global_provider(self, provider: ProviderType) -> None:
        """Register a global-scoped provider, ignoring an identical earlier registration.

        Raises:
            InjectWireDuplicateRegistrationError: If a different provider is
                already registered for the same token.

        """
        entry = self._entries.get(get_token_from_provider(provider))
        if entry is not None and not entry.multi and entry.providers[0] is provider:
            return
        self.register_provider(provider)

    def register_global_providers(self, providers: Sequence[ProviderType]) -> None:
        """Register several global-scoped providers, keeping none of them if one fails.

        Raises:
            InjectWireConfigurationError: If a provider is malformed.
            InjectWireDuplicateRegistrationError: If a token is already taken
                by a different provider.

        """
        registered = {token: len(entry.providers) for token, entry in self._entries.items()}
        try:
            for provider in providers:
                self.register_global_provider(provider)
        except InjectWireError:
            self._rollback(registered)
            raise

    def _rollback(self, registered: dict[Token, int]) -> None:
        for token in list(self._entries):
            count = registered.get(token)
            if count is None:
                del self._entries[token]
                continue
            self._entries[token].truncate(count)

    def _find_missing_entry(self, token: Token) -> InjectorEntry | None:
        if not is_type(token) or not is_global(token):
            return None

        logger.debug("Auto-registering global %s in %s", stringify_token(token), self)
        self.register_provider(token)
        return self._entries[token]

    def __repr__(self) -> str:
        return ROOT_INJECTOR_NAME


root_injector = RootInjector()
"""The process-wide root injector."""

