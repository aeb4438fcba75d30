"""Format handler variants.

A handler turns a value (plus a format token) into a display string. Raw
handler definitions registered by users (strings, mappings, callables and
repository objects) are coerced into one of the variants below before they
are applied, so the set of handler shapes is closed and explicit.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

ALIAS_PREFIX = "alias:"


@dataclass(frozen=True)
class PatternHandler:
    """printf-style pattern with a single positional argument."""

    pattern: str


@dataclass(frozen=True)
class LookupHandler:
    """Mapping from raw values to display values."""

    mapping: Mapping[Any, Any]


@dataclass(frozen=True)
class CallableHandler:
    """Function called with the value (and the format, if it accepts one)."""

    func: Callable[..., Any]


@dataclass(frozen=True)
class RepositoryHandler:
    """Object exposing a single-key ``find(value)`` lookup."""

    repository: Any


@dataclass(frozen=True)
class AliasHandler:
    """Redirects a format to another format of the same rich handler."""

    target: str


Handler = Union[
    PatternHandler,
    LookupHandler,
    CallableHandler,
    RepositoryHandler,
    AliasHandler,
]

HANDLER_TYPES = (
    PatternHandler,
    LookupHandler,
    CallableHandler,
    RepositoryHandler,
    AliasHandler,
)


def is_repository(obj: Any) -> bool:
    """Check whether an object exposes a callable ``find`` method."""
    return callable(getattr(obj, "find", None))


def as_handler(definition: Any, allow_alias: bool = False) -> Handler | None:
    """Coerce a raw handler definition into a handler variant.

    Args:
        definition: A handler variant, pattern string, mapping, callable or
            repository-like object
        allow_alias: Whether strings starting with ``alias:`` become
            AliasHandler instances instead of patterns

    Returns:
        The matching handler variant, or None when the definition has no
        recognised shape
    """
    if isinstance(definition, HANDLER_TYPES):
        return definition
    if isinstance(definition, str):
        if allow_alias and definition.startswith(ALIAS_PREFIX):
            return AliasHandler(definition[len(ALIAS_PREFIX):])
        return PatternHandler(definition)
    if isinstance(definition, Mapping):
        return LookupHandler(definition)
    if callable(definition):
        return CallableHandler(definition)
    if is_repository(definition):
        return RepositoryHandler(definition)
    return None
