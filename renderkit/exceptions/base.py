"""Base exception class for all renderer errors.

This module defines the BaseRendererError class that serves as the base
for all custom exceptions in the package. Every error raised while resolving
an engine, formatting a value or rendering a template inherits from it, so a
caller can catch all rendering failures with a single exception type.
"""


class BaseRendererError(Exception):
    """Base exception for all renderer errors.

    Attributes:
        message: Error message describing what went wrong
        context: Optional dictionary with additional error context
    """

    def __init__(
        self,
        message: str,
        context: dict | None = None
    ) -> None:
        """Initialize base renderer error.

        Args:
            message: Human-readable error message
            context: Optional dictionary with additional error context
                (e.g., template name, engine name, format string)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of the error.

        Returns:
            Error message string
        """
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error.

        Returns:
            Detailed error representation including context
        """
        context_str = f", context={self.context}" if self.context else ""
        return f"{self.__class__.__name__}({self.message!r}{context_str})"
