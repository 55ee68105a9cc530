"""Tests for registration and resolution in SimpleInjector."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import pytest

from injectwire.config import configure
from injectwire.exceptions import (
    InjectWireConfigurationError,
    InjectWireDuplicateRegistrationError,
    InjectWireTokenNotFoundError,
    InjectWireUnresolvedParametersError,
)
from injectwire.injectables import injectable
from injectwire.injections import inject
from injectwire.injector import SimpleInjector
from injectwire.providers import CustomProvider
from injectwire.scope import Scope
from injectwire.tokens import InjectionToken

T = TypeVar("T")


class ServiceA:
    pass


class ServiceB:
    def __init__(self, a: ServiceA) -> None:
        self.a = a


class DictInjector:
    """Minimal injector backed by a plain mapping."""

    def __init__(self, values: dict[object, object]) -> None:
        self._values = values

    def get(self, token: object, *, ignore_parent: bool = False) -> object | None:
        return self._values.get(token)

    def require(self, token: object) -> object:
        return self._values[token]

    def run(self, body: Callable[..., T], *args: object, **kwargs: object) -> T:
        return body(*args, **kwargs)

    async def run_async(self, body: Callable[..., Awaitable[T]], *args: object, **kwargs: object) -> T:
        return await body(*args, **kwargs)

    def print_debug(self, sink: Callable[[str], None] | None = None) -> None:
        pass


class TestRegistration:
    def test_register_and_require_class(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceA)

        assert isinstance(injector.require(ServiceA), ServiceA)
        assert injector.tokens() == (ServiceA,)
        assert injector.has_provider(ServiceA) is True

    def test_duplicate_registration_fails(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceA)

        with pytest.raises(InjectWireDuplicateRegistrationError, match="multiple times") as exc_info:
            injector.register_provider(CustomProvider(token=ServiceA, use_value=ServiceA()))

        assert exc_info.value.token is ServiceA

    def test_child_may_shadow_parent_registration(self, injector: SimpleInjector) -> None:
        injector.register_provider(CustomProvider(token="NAME", use_value="parent"))
        child = SimpleInjector(parent=injector, name="child")
        grandchild = SimpleInjector(parent=child, name="grandchild")

        child.register_provider(CustomProvider(token="NAME", use_value="child"))

        assert injector.require("NAME") == "parent"
        assert child.require("NAME") == "child"
        assert grandchild.require("NAME") == "child"

    def test_invalid_provider_is_rejected_at_registration(self, injector: SimpleInjector) -> None:
        with pytest.raises(InjectWireConfigurationError):
            injector.register_provider(CustomProvider(token="T", use_existing="T"))

        assert injector.tokens() == ()

    def test_validation_can_be_disabled(self, injector: SimpleInjector) -> None:
        configure(validate_providers=False)

        injector.register_provider(CustomProvider(token="T", use_value=1, scope="odd"))  # type: ignore[arg-type]

        assert injector.tokens() == ("T",)

    def test_has_provider_respects_ignore_parent(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceA)
        child = SimpleInjector(parent=injector)

        assert child.has_provider(ServiceA) is True
        assert child.has_provider(ServiceA, ignore_parent=True) is False


class TestLookup:
    def test_get_returns_none_and_require_raises_when_missing(self, injector: SimpleInjector) -> None:
        assert injector.get("MISSING") is None

        with pytest.raises(InjectWireTokenNotFoundError, match="Cannot find MISSING in SimpleInjector\\[test\\]"):
            injector.require("MISSING")

    def test_registered_none_value_is_found(self, injector: SimpleInjector) -> None:
        injector.register_provider(CustomProvider(token="NOTHING", use_value=None))

        assert injector.get("NOTHING") is None
        assert injector.require("NOTHING") is None

    def test_ignore_parent(self, injector: SimpleInjector) -> None:
        injector.register_provider(CustomProvider(token="NAME", use_value="parent"))
        child = SimpleInjector(parent=injector)

        assert child.get("NAME") == "parent"
        assert child.get("NAME", ignore_parent=True) is None

    def test_foreign_parent_is_asked_through_get(self) -> None:
        token = InjectionToken[str]("MODE", default="fallback")
        parent = DictInjector({"NAME": "foreign", token: None})
        child = SimpleInjector(parent=parent)

        assert child.require("NAME") == "foreign"
        assert child.get("MISSING") is None
        assert child.require(token) == "fallback"

    def test_parent_owned_value_is_shared_with_child(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceA)
        child = SimpleInjector(parent=injector)

        assert child.require(ServiceA) is injector.require(ServiceA)

    def test_constructor_dependencies_share_cached_instances(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceA)
        injector.register_provider(ServiceB)

        b = injector.require(ServiceB)

        assert b.a is injector.require(ServiceA)

    def test_values_are_cached_per_injector(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceA)
        other = SimpleInjector(name="other")
        other.register_provider(ServiceA)

        assert injector.require(ServiceA) is injector.require(ServiceA)
        assert injector.require(ServiceA) is not other.require(ServiceA)

    def test_transient_values_are_not_cached(self, injector: SimpleInjector) -> None:
        calls: list[int] = []

        def factory() -> list[int]:
            calls.append(1)
            return []

        injector.register_provider(CustomProvider(token="LIST", factory=factory, scope=Scope.TRANSIENT))

        first = injector.require("LIST")
        second = injector.require("LIST")

        assert first is not second
        assert len(calls) == 2


class TestDefaults:
    def test_default_value_is_used_when_unregistered(self, injector: SimpleInjector) -> None:
        token = InjectionToken[int]("PORT", default=8080)

        assert injector.get(token) == 8080
        assert injector.require(token) == 8080

    def test_registration_takes_precedence_over_default(self, injector: SimpleInjector) -> None:
        token = InjectionToken[int]("PORT", default=8080)
        injector.register_provider(CustomProvider(token=token, use_value=9000))

        assert injector.require(token) == 9000

    def test_parent_registration_takes_precedence_over_default(self, injector: SimpleInjector) -> None:
        token = InjectionToken[int]("PORT", default=8080)
        injector.register_provider(CustomProvider(token=token, use_value=9000))
        child = SimpleInjector(parent=injector)

        assert child.require(token) == 9000

    def test_default_factory_runs_inside_requesting_injector(self, injector: SimpleInjector) -> None:
        token = InjectionToken[str]("GREETING", default_factory=lambda: f"hello {inject('USER')}")
        injector.register_provider(CustomProvider(token="USER", use_value="parent"))
        child = SimpleInjector(parent=injector, name="child")
        child.register_provider(CustomProvider(token="USER", use_value="child"))

        assert injector.require(token) == "hello parent"
        assert child.require(token) == "hello child"

    def test_default_factory_is_evaluated_on_each_lookup(self, injector: SimpleInjector) -> None:
        token = InjectionToken[list[str]]("TAGS", default_factory=list)

        assert injector.require(token) == []
        assert injector.require(token) is not injector.require(token)

    def test_required_token_raises_from_get(self, injector: SimpleInjector) -> None:
        token = InjectionToken[str]("SECRET", required=True)

        with pytest.raises(InjectWireTokenNotFoundError, match="Cannot find required InjectionToken\\[SECRET\\]"):
            injector.get(token)

    def test_required_token_resolves_from_parent(self, injector: SimpleInjector) -> None:
        token = InjectionToken[str]("SECRET", required=True)
        injector.register_provider(CustomProvider(token=token, use_value="s3cr3t"))
        child = SimpleInjector(parent=injector)

        assert child.get(token) == "s3cr3t"

    def test_child_default_applies_when_parent_lacks_registration(self, injector: SimpleInjector) -> None:
        token = InjectionToken[str]("MODE", default_factory=lambda: inject("ENV"))
        child = SimpleInjector(parent=injector, name="child")
        child.register_provider(CustomProvider(token="ENV", use_value="child-env"))

        assert child.require(token) == "child-env"


class TestConstructorInjection:
    def test_unresolved_parameters_name_token_and_positions(self, injector: SimpleInjector) -> None:
        @injectable(dependencies=[ServiceA, "MISSING"])
        class NeedsTwo:
            def __init__(self, a: ServiceA, missing: object) -> None:
                self.a = a
                self.missing = missing

        injector.register_provider(ServiceA)
        injector.register_provider(NeedsTwo)

        with pytest.raises(InjectWireUnresolvedParametersError, match=r"NeedsTwo\(ServiceA, \?\)") as exc_info:
            injector.require(NeedsTwo)

        assert exc_info.value.token is NeedsTwo
        assert exc_info.value.unresolved_positions == (1,)

    def test_disabled_constructor_injection(self, injector: SimpleInjector) -> None:
        configure(enable_constructor_injection=False)
        injector.register_provider(ServiceA)
        injector.register_provider(ServiceB)

        assert isinstance(injector.require(ServiceA), ServiceA)
        with pytest.raises(InjectWireConfigurationError, match="Constructor injection is disabled"):
            injector.require(ServiceB)

    def test_constructor_runs_inside_injection_context(self, injector: SimpleInjector) -> None:
        class UsesInject:
            def __init__(self) -> None:
                self.name = inject("NAME")

        injector.register_provider(CustomProvider(token="NAME", use_value="from-injector"))
        injector.register_provider(UsesInject)

        assert injector.require(UsesInject).name == "from-injector"

    def test_failed_resolution_is_not_cached(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceB)

        with pytest.raises(InjectWireUnresolvedParametersError):
            injector.require(ServiceB)

        injector.register_provider(ServiceA)

        assert injector.require(ServiceB).a is injector.require(ServiceA)


class TestResolveAll:
    def test_resolves_every_registered_token(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceA)
        injector.register_provider(ServiceB)

        assert injector.resolve_all() == [ServiceA, ServiceB]

    def test_first_failure_aborts(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceB)
        injector.register_provider(CustomProvider(token="OK", use_value=1))

        with pytest.raises(InjectWireUnresolvedParametersError):
            injector.resolve_all()

    def test_allow_unresolved_skips_failures(self, injector: SimpleInjector) -> None:
        injector.register_provider(ServiceB)
        injector.register_provider(CustomProvider(token="OK", use_value=1))

        assert injector.resolve_all(allow_unresolved=True) == ["OK"]

    def test_allow_unresolved_propagates_foreign_errors(self, injector: SimpleInjector) -> None:
        def explode() -> None:
            msg = "boom"
            raise RuntimeError(msg)

        injector.register_provider(CustomProvider(token="BOOM", factory=explode))

        with pytest.raises(RuntimeError, match="boom"):
            injector.resolve_all(allow_unresolved=True)


class TestDebugOutput:
    def test_print_debug_to_sink(self, injector: SimpleInjector) -> None:
        injector.register_provider(CustomProvider(token="API_URL", use_value="http://localhost"))
        lines: list[str] = []

        injector.print_debug(lines.append)

        assert lines == ['Injector \'test\' contains: {\n    "API_URL": "http://localhost"\n}']

    def test_print_debug_to_logger(self, injector: SimpleInjector, caplog: pytest.LogCaptureFixture) -> None:
        injector.register_provider(CustomProvider(token="API_URL", use_value="http://localhost"))

        with caplog.at_level(logging.INFO, logger="injectwire.injector"):
            injector.print_debug()

        assert "Injector 'test' contains" in caplog.text
        assert "http://localhost" in caplog.text

    def test_debug_snapshot(self, injector: SimpleInjector) -> None:
        token = InjectionToken[int]("PORT")
        injector.register_provider(CustomProvider(token=token, use_value=8080))
        injector.register_provider(CustomProvider(token="NOTHING", use_value=None))

        assert injector.debug_snapshot() == {"InjectionToken[PORT]": "8080", "NOTHING": "None"}

    def test_repr(self) -> None:
        assert repr(SimpleInjector(name="app")) == "SimpleInjector[app]"
        assert repr(SimpleInjector()) == "SimpleInjector"
