"""Configuration error exception.

This module defines the ConfigurationError exception raised when an engine
rejects its options, for example an invalid page layout for the PDF engine.
"""

from renderkit.exceptions.base import BaseRendererError


class ConfigurationError(BaseRendererError):
    """Raised when a configuration option is missing or invalid."""

    @classmethod
    def for_missing_option(cls, option: str) -> "ConfigurationError":
        """Create the error for a required option that was not given."""
        return cls(
            f'Required configuration option "{option}" is missing.',
            context={"option": option},
        )

    @classmethod
    def for_invalid_option(
        cls,
        option: str,
        value: str,
        expected: str,
    ) -> "ConfigurationError":
        """Create the error for an option with an invalid value.

        Args:
            option: Name of the option
            value: Offending value, already converted to text
            expected: Description of what was expected

        Returns:
            ConfigurationError instance
        """
        return cls(
            f'Invalid value "{value}" for configuration option "{option}". '
            f"Expected: {expected}.",
            context={"option": option, "value": value},
        )
