from __future__ import annotations

import inspect

from injectwire.exceptions import InjectWireConfigurationError
from injectwire.providers import is_custom_provider, validate_custom_provider


class ProviderRegistrationValidator:
    """Validates providers before they are added to an injector."""

    def validate_provider(self, provider: object) -> None:
        """Validate a class or custom provider."""
        if is_custom_provider(provider):
            validate_custom_provider(provider)
            if provider.use_class is not None:
                self.validate_concrete_type(provider.use_class)
            return
        self.validate_concrete_type(provider)

    def validate_concrete_type(self, concrete_type: object) -> None:
        """Validate that a type provider is instantiable."""
        if not inspect.isclass(concrete_type):
            msg = f"Provider must be a class or a CustomProvider, got {concrete_type!r}."
            raise InjectWireConfigurationError(msg)

        if inspect.isabstract(concrete_type):
            msg = f"Concrete provider '{concrete_type.__qualname__}' cannot be an abstract class."
            raise InjectWireConfigurationError(msg)
