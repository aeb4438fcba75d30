"""Generic format handler.

Applies a handler variant (or a raw definition that can be coerced into one)
to a value, falling back to plain casting when there is no usable handler.
"""

import inspect
import logging
from collections.abc import Callable, Hashable
from typing import Any

from renderkit.formatter.caster import ValueCaster
from renderkit.formatter.handlers import (
    AliasHandler,
    CallableHandler,
    LookupHandler,
    PatternHandler,
    RepositoryHandler,
    as_handler,
)

logger = logging.getLogger(__name__)


def has_conversion(pattern: str) -> bool:
    """Check whether a pattern holds at least one printf conversion."""
    return "%" in pattern.replace("%%", "")


def interpolate(pattern: str, value: Any) -> str:
    """Substitute a single value into a printf-style pattern.

    A pattern without any conversion specifier is returned as-is.
    """
    if not has_conversion(pattern):
        return pattern.replace("%%", "%")
    return pattern % (value,)


def _accepts_format(func: Callable[..., Any]) -> bool:
    """Check whether a callable can take a second positional argument."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    positional = 0
    for parameter in signature.parameters.values():
        if parameter.kind == parameter.VAR_POSITIONAL:
            return True
        if parameter.kind in (
            parameter.POSITIONAL_ONLY,
            parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    return positional >= 2


class GenericFormatHandler:
    """Applies pattern, lookup, callable and repository handlers."""

    def __init__(self, caster: ValueCaster | None = None) -> None:
        self.caster = caster or ValueCaster()

    def handle(
        self,
        value: Any,
        handler: Any = None,
        format: str | None = None,
    ) -> str:
        """Format a value with a handler.

        Args:
            value: Value to format
            handler: Handler variant or raw definition (pattern string,
                mapping, callable, repository); None casts the value directly
            format: Format token passed on to callable handlers

        Returns:
            Formatted string

        Raises:
            Exception: Whatever a callable, repository or pattern raises
        """
        resolved = as_handler(handler)

        if isinstance(resolved, PatternHandler):
            return interpolate(resolved.pattern, value)

        if isinstance(resolved, LookupHandler):
            if isinstance(value, Hashable) and value in resolved.mapping:
                return self.caster.cast(resolved.mapping[value])
            return self.caster.cast(value)

        if isinstance(resolved, CallableHandler):
            if _accepts_format(resolved.func):
                result = resolved.func(value, format)
            else:
                result = resolved.func(value)
            return self.caster.cast(result)

        if isinstance(resolved, RepositoryHandler):
            return self.caster.cast(resolved.repository.find(value))

        if isinstance(resolved, AliasHandler):
            logger.debug(
                f"Alias to '{resolved.target}' outside a handler formatter, "
                "casting value"
            )

        return self.caster.cast(value)
