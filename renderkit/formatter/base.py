"""Handler formatters that declare their own supported formats.

This module defines the HandlerFormatter protocol consumed by DataFormatter
during capability search, and BaseHandlerFormatter, an abstract base class
that builds a table of per-format handlers once and applies them.

Example:
    ```python
    from renderkit.formatter.base import BaseHandlerFormatter

    class BooleanFormatter(BaseHandlerFormatter):
        def create_handlers(self) -> dict:
            return {
                "yes_no": {True: "Yes", False: "No"},
                "si_no": "alias:yes_no",
            }

    BooleanFormatter().handle(True, "si_no")   # "Yes"
    ```
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from renderkit.exceptions.formatter_error import (
    FormatterError,
    HandlerNotFoundError,
)
from renderkit.formatter.generic import GenericFormatHandler
from renderkit.formatter.handlers import AliasHandler, Handler, as_handler

logger = logging.getLogger(__name__)


@runtime_checkable
class HandlerFormatter(Protocol):
    """Handler that knows which formats it supports."""

    def handle(self, value: Any, format: str) -> str:
        """Format a value using one of the supported formats."""
        ...

    def supported_formats(self) -> list[str]:
        """Return the formats this handler accepts."""
        ...


class BaseHandlerFormatter(ABC):
    """Abstract base class for handler formatters.

    Subclasses only provide the format table through create_handlers(). The
    table is built on first use and coerced into handler variants; strings
    starting with ``alias:`` redirect to another format of the same table.
    Alias chains are followed with cycle detection.
    """

    def __init__(self, generic_handler: GenericFormatHandler | None = None) -> None:
        self._handlers: dict[str, Handler | None] | None = None
        self._generic_handler = generic_handler or GenericFormatHandler()

    @abstractmethod
    def create_handlers(self) -> dict[str, Any]:
        """Create the mapping of format names to handler definitions.

        Returns:
            Dictionary of format name to pattern, mapping, callable,
            repository, ``alias:<format>`` string or handler variant

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError("Subclasses must implement create_handlers")

    @property
    def handlers(self) -> dict[str, Handler | None]:
        """Format table, built once from create_handlers()."""
        if self._handlers is None:
            self._handlers = {
                name: as_handler(definition, allow_alias=True)
                for name, definition in self.create_handlers().items()
            }
        return self._handlers

    def supported_formats(self) -> list[str]:
        """Return the supported format names in declaration order."""
        return list(self.handlers)

    def handle(self, value: Any, format: str) -> str:
        """Format a value using one of the supported formats.

        Args:
            value: Value to format
            format: Supported format name

        Returns:
            Formatted string

        Raises:
            HandlerNotFoundError: If the format (or an alias target) is not
                supported
            FormatterError: If aliases form a cycle
        """
        chain = [format]
        handler = self._lookup(format)
        while isinstance(handler, AliasHandler):
            target = handler.target
            if target in chain:
                raise FormatterError(
                    f"Alias cycle detected: {' -> '.join([*chain, target])}",
                    context={"format": format, "chain": [*chain, target]},
                )
            chain.append(target)
            handler = self._lookup(target)

        if len(chain) > 1:
            logger.debug(f"Resolved format alias chain {' -> '.join(chain)}")

        return self._generic_handler.handle(value, handler, chain[-1])

    def _lookup(self, format: str) -> Handler | None:
        if format not in self.handlers:
            raise HandlerNotFoundError.for_format(format)
        return self.handlers[format]
