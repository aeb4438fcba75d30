"""Value formatting for templates.

This package contains the formatting layer:
- ValueCaster: Best-effort conversion of any value to a string
- Handler variants: Pattern, Lookup, Callable, Repository and Alias handlers
- GenericFormatHandler: Applies a handler variant to a value
- BaseHandlerFormatter: Base class for handlers declaring their formats
- DataFormatter: Resolves format strings to handlers
- FormatterExtension: Exposes the formatter to Jinja2 templates
"""

from renderkit.formatter.base import BaseHandlerFormatter, HandlerFormatter
from renderkit.formatter.caster import CastResult, ValueCaster, cast
from renderkit.formatter.data_formatter import DEFAULT_HANDLER, DataFormatter
from renderkit.formatter.extension import FormatterExtension
from renderkit.formatter.generic import GenericFormatHandler
from renderkit.formatter.handlers import (
    AliasHandler,
    CallableHandler,
    Handler,
    LookupHandler,
    PatternHandler,
    RepositoryHandler,
    as_handler,
)

__all__ = [
    "DEFAULT_HANDLER",
    "AliasHandler",
    "BaseHandlerFormatter",
    "CallableHandler",
    "CastResult",
    "DataFormatter",
    "FormatterExtension",
    "GenericFormatHandler",
    "Handler",
    "HandlerFormatter",
    "LookupHandler",
    "PatternHandler",
    "RepositoryHandler",
    "ValueCaster",
    "as_handler",
    "cast",
]
