from __future__ import annotations

import injectwire
from injectwire import Injector, SimpleInjector, create_injector, injection_context, root_injector


def test_all_exports_are_importable() -> None:
    missing = [name for name in injectwire.__all__ if not hasattr(injectwire, name)]

    assert missing == []


def test_all_has_no_duplicates() -> None:
    assert len(set(injectwire.__all__)) == len(injectwire.__all__)


def test_injectors_implement_injector_protocol() -> None:
    assert isinstance(SimpleInjector(), Injector)
    assert isinstance(root_injector, Injector)
    assert isinstance(create_injector(name="public"), Injector)


def test_module_level_aliases_share_one_context() -> None:
    assert injectwire.set_current_injector.__self__ is injection_context  # type: ignore[attr-defined]
    assert injectwire.run_with_injector.__self__ is injection_context  # type: ignore[attr-defined]
