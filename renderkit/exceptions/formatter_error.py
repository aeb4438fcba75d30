"""Formatter error exceptions.

This module defines the exceptions raised by the value-formatting layer:
FormatterError wraps any failure raised by a registered handler, and
HandlerNotFoundError is raised when a format cannot be matched to a handler
in a context that requires one.
"""

from renderkit.exceptions.base import BaseRendererError


class FormatterError(BaseRendererError):
    """Raised when formatting a value fails.

    The message carries the requested format and the inner error text; the
    inner exception type is not part of the message.
    """

    @classmethod
    def for_handler(cls, format: str, error: str) -> "FormatterError":
        """Create the error for a handler that raised while formatting.

        Args:
            format: Format string that was requested
            error: Message of the underlying error

        Returns:
            FormatterError instance
        """
        return cls(
            f'Error in formatter handler "{format}": {error}',
            context={"format": format, "error": error},
        )

    @classmethod
    def for_format(cls, format: str) -> "FormatterError":
        """Create the error for a format with no formatter."""
        return cls(
            f'Formatter "{format}" not found.',
            context={"format": format},
        )


class HandlerNotFoundError(FormatterError):
    """Raised when a format resolves to no registered handler."""

    @classmethod
    def for_format(cls, format: str) -> "HandlerNotFoundError":
        """Create the error for a format no handler supports."""
        return cls(
            f'Handler for the format "{format}" not found.',
            context={"format": format},
        )
