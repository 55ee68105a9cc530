"""Tests for scope declarations and scope lookup."""

import pytest

from injectwire.config import configure
from injectwire.exceptions import InjectWireConfigurationError
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
from injectwire.providers import CustomProvider
from injectwire.scope import Scope


class TestRegisterScope:
    def test_registers_scope_and_dependencies(self) -> None:
        class Service:
            pass

        register_scope(Service, Scope.TRANSIENT, dependencies=["A", "B"])

        assert get_injectable_metadata(Service) == InjectableMetadata(
            scope=Scope.TRANSIENT,
            dependencies=("A", "B"),
        )
        assert is_injectable(Service) is True

    def test_repeated_registration_replaces_declaration(self) -> None:
        class Service:
            pass

        register_scope(Service, Scope.TRANSIENT)
        register_scope(Service, Scope.GLOBAL)

        assert get_scope(Service) is Scope.GLOBAL

    def test_same_registration_is_idempotent(self) -> None:
        class Service:
            pass

        register_scope(Service, Scope.GLOBAL)
        register_scope(Service, Scope.GLOBAL)

        assert get_injectable_metadata(Service) == InjectableMetadata(scope=Scope.GLOBAL)

    def test_rejects_non_class(self) -> None:
        with pytest.raises(InjectWireConfigurationError, match="Only classes"):
            register_scope(lambda: None, Scope.GLOBAL)  # type: ignore[arg-type]

    def test_rejects_invalid_scope(self) -> None:
        class Service:
            pass

        with pytest.raises(InjectWireConfigurationError, match="Invalid scope"):
            register_scope(Service, "global")  # type: ignore[arg-type]

    def test_rejects_invalid_dependencies(self) -> None:
        class Service:
            pass

        with pytest.raises(InjectWireConfigurationError, match="list or tuple"):
            register_scope(Service, dependencies="AB")

        with pytest.raises(InjectWireConfigurationError, match="invalid tokens"):
            register_scope(Service, dependencies=[{}])


class TestInjectableDecorator:
    def test_bare_decorator(self) -> None:
        @injectable
        class Service:
            pass

        assert is_injectable(Service) is True
        assert get_injectable_metadata(Service) == InjectableMetadata()

    def test_parameterized_decorator(self) -> None:
        @injectable(scope=Scope.GLOBAL, dependencies=("A",))
        class Service:
            def __init__(self, a: object) -> None:
                self.a = a

        assert get_scope(Service) is Scope.GLOBAL
        metadata = get_injectable_metadata(Service)
        assert metadata is not None
        assert metadata.dependencies == ("A",)

    def test_decorator_returns_the_class(self) -> None:
        class Service:
            pass

        assert injectable(Service) is Service


class TestGetScope:
    def test_undeclared_class_gets_default_scope(self) -> None:
        class Service:
            pass

        assert is_injectable(Service) is False
        assert get_scope(Service) is Scope.INJECTOR

    def test_declared_without_scope_follows_configured_default(self) -> None:
        @injectable
        class Service:
            pass

        configure(default_scope=Scope.TRANSIENT)

        assert get_scope(Service) is Scope.TRANSIENT

    def test_custom_provider_scope(self) -> None:
        provider = CustomProvider(token="T", use_value=1, scope=Scope.GLOBAL)

        assert get_scope(provider) is Scope.GLOBAL
        assert is_global(provider) is True

    def test_custom_provider_without_scope_uses_default(self) -> None:
        assert get_scope(CustomProvider(token="T", use_value=1)) is Scope.INJECTOR

    def test_lookup_never_raises_for_arbitrary_objects(self) -> None:
        assert get_scope("token") is Scope.INJECTOR
        assert get_scope(42) is Scope.INJECTOR
        assert get_injectable_metadata("token") is None

    def test_predicates(self) -> None:
        @injectable(scope=Scope.TRANSIENT)
        class Transient:
            pass

        @injectable(scope=Scope.GLOBAL)
        class Global:
            pass

        assert is_transient(Transient) is True
        assert is_global(Transient) is False
        assert is_global(Global) is True
        assert is_transient(Global) is False


class TestUndeclaredSubclasses:
    def test_subclass_of_declared_class_gets_default_scope(self) -> None:
        @injectable(scope=Scope.GLOBAL)
        class BaseSettings:
            pass

        class Settings(BaseSettings):
            debug: bool = False

        assert is_injectable(Settings) is False
        assert get_scope(Settings) is Scope.INJECTOR

    def test_subclass_follows_configured_default(self) -> None:
        class BaseSettings:
            pass

        class Settings(BaseSettings):
            pass

        configure(default_scope=Scope.TRANSIENT)

        assert get_scope(Settings) is Scope.TRANSIENT
