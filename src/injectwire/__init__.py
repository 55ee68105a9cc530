from injectwire.config import (
    ROOT_INJECTOR_NAME,
    InjectWireConfig,
    configure,
    get_config,
    override_config,
)
from injectwire.create_injector import create_injector
from injectwire.exceptions import (
    InjectWireCircularDependencyError,
    InjectWireConfigurationError,
    InjectWireDependencyInferenceError,
    InjectWireDuplicateRegistrationError,
    InjectWireError,
    InjectWireOutsideInjectionContextError,
    InjectWireReservedNameError,
    InjectWireTokenNotFoundError,
    InjectWireUnresolvedParametersError,
)
from injectwire.injectables import (
    InjectableMetadata,
    get_injectable_metadata,
    get_scope,
    injectable,
    is_global,
    is_injectable,
    is_transient,
    register_scope,
)
from injectwire.injection_context import (
    InjectionContext,
    get_current_injector,
    injection_context,
    require_current_injector,
    run_with_injector,
    run_with_injector_async,
    set_current_injector,
)
from injectwire.injections import inject, inject_optional
from injectwire.injector import SimpleInjector
from injectwire.injector_interface import Injector
from injectwire.markers import Inject
from injectwire.providers import CustomProvider, ProviderStrategy
from injectwire.root_injector import RootInjector, root_injector
from injectwire.scope import Scope
from injectwire.tokens import InjectionToken

__all__ = [
    "ROOT_INJECTOR_NAME",
    "CustomProvider",
    "Inject",
    "InjectWireCircularDependencyError",
    "InjectWireConfig",
    "InjectWireConfigurationError",
    "InjectWireDependencyInferenceError",
    "InjectWireDuplicateRegistrationError",
    "InjectWireError",
    "InjectWireOutsideInjectionContextError",
    "InjectWireReservedNameError",
    "InjectWireTokenNotFoundError",
    "InjectWireUnresolvedParametersError",
    "InjectableMetadata",
    "InjectionContext",
    "InjectionToken",
    "Injector",
    "ProviderStrategy",
    "RootInjector",
    "Scope",
    "SimpleInjector",
    "configure",
    "create_injector",
    "get_config",
    "get_current_injector",
    "get_injectable_metadata",
    "get_scope",
    "inject",
    "inject_optional",
    "injectable",
    "injection_context",
    "is_global",
    "is_injectable",
    "is_transient",
    "override_config",
    "register_scope",
    "require_current_injector",
    "root_injector",
    "run_with_injector",
    "run_with_injector_async",
    "set_current_injector",
]
