"""Data formatter resolving format strings to handlers.

DataFormatter owns the named handler registry used by templates through the
``format_as`` and ``to_string`` helpers. A requested format is resolved to a
handler name and a sub-format by exact name, dotted ``handler.subformat``
notation, capability search over handler formatters, and finally the
``default`` handler.

Example:
    ```python
    from renderkit.formatter.data_formatter import DataFormatter

    formatter = DataFormatter({"money": "$%.2f"})
    formatter.register_handler("status", {1: "active", 0: "inactive"})

    formatter.format(9.5, "money")     # "$9.50"
    formatter.format(1, "status")      # "active"
    formatter.format(None, "money")    # ""
    ```
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from renderkit.exceptions.formatter_error import (
    FormatterError,
    HandlerNotFoundError,
)
from renderkit.formatter.base import HandlerFormatter
from renderkit.formatter.generic import GenericFormatHandler, has_conversion
from renderkit.formatter.handlers import PatternHandler

logger = logging.getLogger(__name__)

DEFAULT_HANDLER = "default"
FORMAT_SEPARATOR = "."


class DataFormatter:
    """Formats values for display using named handlers.

    Attributes:
        default_handler: Name of the fallback handler used when no other
            handler matches a format
    """

    def __init__(
        self,
        handlers: Mapping[str, Any] | None = None,
        default_handler: str = DEFAULT_HANDLER,
        generic_handler: GenericFormatHandler | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            handlers: Initial handlers by name
            default_handler: Name of the fallback handler
            generic_handler: Handler applying non-formatter definitions
        """
        self._handlers: dict[str, Any] = dict(handlers or {})
        self.default_handler = default_handler
        self._generic_handler = generic_handler or GenericFormatHandler()

    @property
    def handlers(self) -> Mapping[str, Any]:
        """Read-only view of the registered handlers."""
        return MappingProxyType(self._handlers)

    def register_handler(self, name: str, handler: Any) -> "DataFormatter":
        """Register (or replace) a handler under a name.

        Args:
            name: Handler name used in format strings
            handler: Pattern string, mapping, callable, repository object,
                handler variant or HandlerFormatter

        Returns:
            The formatter itself, for chaining
        """
        if name in self._handlers:
            logger.debug(f"Replacing formatter handler '{name}'")
        self._handlers[name] = handler
        return self

    def get_handler(self, name: str) -> Any:
        """Return a registered handler definition.

        Raises:
            HandlerNotFoundError: If no handler has that name
        """
        if name not in self._handlers:
            raise HandlerNotFoundError.for_format(name)
        return self._handlers[name]

    def resolve(self, format: str) -> tuple[str | None, str]:
        """Resolve a format string to a handler name and sub-format.

        Resolution order: an exact handler name, then dotted
        ``handler.subformat`` notation, then capability search over handler
        formatters, then the default handler.

        Dotted notation splits at the first dot only when the part before it
        is a registered handler. Any other dotted format, such as ``%.2f`` or
        ``a.b`` with no ``a`` handler, is not split: the whole string goes on
        to capability search and the default handler, and is used inline as
        a printf pattern when neither matches.

        Args:
            format: Handler name, ``handler.subformat`` pair or a format token
                declared by a HandlerFormatter

        Returns:
            Tuple of (handler name or None, sub-format)
        """
        if format in self._handlers:
            return format, format

        if FORMAT_SEPARATOR in format:
            name, sub_format = format.split(FORMAT_SEPARATOR, 1)
            if name in self._handlers:
                return name, sub_format

        return self._search_handler(format), format

    def require(self, format: str) -> tuple[str, str]:
        """Resolve a format that must match a registered handler.

        Raises:
            HandlerNotFoundError: If neither a handler nor a default matches
        """
        name, sub_format = self.resolve(format)
        if name is None:
            raise HandlerNotFoundError.for_format(format)
        return name, sub_format

    def format(self, value: Any, format: str) -> str:
        """Format a value.

        Args:
            value: Value to format; None always formats as an empty string
            format: Format string to resolve

        Returns:
            Formatted string

        Raises:
            FormatterError: If the resolved handler fails
        """
        if value is None:
            return ""

        name, sub_format = self.resolve(format)
        handler = self._select_handler(name, format)

        try:
            if isinstance(handler, HandlerFormatter):
                return handler.handle(value, sub_format)
            return self._generic_handler.handle(value, handler, format)
        except Exception as e:
            logger.debug(f"Formatter handler for '{format}' failed: {e}")
            raise FormatterError.for_handler(format, str(e)) from e

    def _select_handler(self, name: str | None, format: str) -> Any:
        if name is not None:
            return self._handlers.get(name, name)
        # unresolved printf-style formats are used inline
        if has_conversion(format):
            return PatternHandler(format)
        return None

    def _search_handler(self, format: str) -> str | None:
        for name, handler in self._handlers.items():
            if not isinstance(handler, HandlerFormatter):
                continue
            if format in handler.supported_formats():
                logger.debug(f"Format '{format}' supported by handler '{name}'")
                return name

        if self.default_handler in self._handlers:
            return self.default_handler
        return None
