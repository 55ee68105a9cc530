from __future__ import annotations

import inspect
import weakref
from typing import Any, get_type_hints

from injectwire.exceptions import InjectWireDependencyInferenceError
from injectwire.injectables import get_injectable_metadata
from injectwire.markers import extract_inject_token
from injectwire.providers import Token

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class ParameterTypeProbe:
    """Extract the constructor parameter tokens of a class.

    An explicit manifest declared with ``injectable``/``register_scope`` wins.
    Otherwise the required positional parameters of ``__init__`` are read from
    its annotations; ``Annotated[T, Inject(token)]`` selects a token other than
    ``T``. Parameters with defaults keep their defaults.
    """

    def __init__(self) -> None:
        self._cache: weakref.WeakKeyDictionary[type[Any], tuple[Token, ...] | None] = (
            weakref.WeakKeyDictionary()
        )

    def get_parameter_tokens(self, cls: type[Any]) -> tuple[Token, ...] | None:
        """Return the ordered parameter tokens, or ``None`` when nothing is declared.

        Raises:
            InjectWireDependencyInferenceError: If annotations are missing or
                cannot be evaluated, or a required keyword-only parameter exists.

        """
        metadata = get_injectable_metadata(cls)
        if metadata is not None and metadata.dependencies is not None:
            return metadata.dependencies or None

        if cls in self._cache:
            return self._cache[cls]

        tokens = self._infer_from_annotations(cls)
        self._cache[cls] = tokens
        return tokens

    def _infer_from_annotations(self, cls: type[Any]) -> tuple[Token, ...] | None:
        init_func = cls.__init__
        if init_func is object.__init__:
            return None

        try:
            signature = inspect.signature(init_func)
        except (TypeError, ValueError):
            return None

        required = [
            parameter
            for parameter in list(signature.parameters.values())[1:]
            if parameter.default is inspect.Parameter.empty
            and parameter.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ]
        if not required:
            return None

        keyword_only = [p.name for p in required if p.kind not in _POSITIONAL_KINDS]
        if keyword_only:
            msg = (
                f"Cannot infer dependencies of '{cls.__qualname__}': required keyword-only "
                f"parameters {keyword_only!r} are not supported."
            )
            raise InjectWireDependencyInferenceError(msg)

        try:
            type_hints = get_type_hints(init_func, include_extras=True)
        except (TypeError, NameError) as error:
            msg = f"Cannot evaluate constructor annotations of '{cls.__qualname__}': {error}"
            raise InjectWireDependencyInferenceError(msg) from error

        missing = [parameter.name for parameter in required if parameter.name not in type_hints]
        if missing:
            msg = (
                f"Cannot infer dependencies of '{cls.__qualname__}': parameters {missing!r} "
                "have no annotation. Annotate them or declare dependencies explicitly."
            )
            raise InjectWireDependencyInferenceError(msg)

        return tuple(extract_inject_token(type_hints[parameter.name]) for parameter in required)
