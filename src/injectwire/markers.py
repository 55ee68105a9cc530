from __future__ import annotations

from typing import Annotated, Any, NamedTuple, get_args, get_origin

_ANNOTATED_MARKER_MIN_ARGS = 2


class Inject(NamedTuple):
    """Name the token a constructor parameter is resolved from.

    Attach ``Inject`` metadata to ``typing.Annotated`` when the parameter type
    is not the registry key, for example for string or ``InjectionToken`` keys.

    Examples:
        .. code-block:: python

            API_URL = InjectionToken[str]("API_URL")


            class Client:
                def __init__(self, url: Annotated[str, Inject(API_URL)]) -> None:
                    self.url = url

    """

    token: Any


def extract_inject_token(annotation: Any) -> Any:
    """Return the token named by ``Inject`` metadata, or the annotation itself."""
    if get_origin(annotation) is not Annotated:
        return annotation

    args = get_args(annotation)
    if len(args) < _ANNOTATED_MARKER_MIN_ARGS:
        return annotation  # pragma: no cover - Annotated requires at least 2 args

    for metadata in reversed(args[1:]):
        if isinstance(metadata, Inject):
            return metadata.token
    return args[0]
