"""Engine lookup error.

This module defines the EngineNotFoundError exception raised when the
renderer cannot find an engine for a requested or derived engine name.
"""

from renderkit.exceptions.base import BaseRendererError


class EngineNotFoundError(BaseRendererError):
    """Raised when no rendering engine is registered under a name."""

    @classmethod
    def for_engine(cls, engine: str) -> "EngineNotFoundError":
        """Create the error for a missing engine name."""
        return cls(
            f'Rendering engine "{engine}" not found.',
            context={"engine": engine},
        )

    @classmethod
    def for_extension(cls, extension: str) -> "EngineNotFoundError":
        """Create the error for an extension no engine declares."""
        return cls(
            f'No engine found for extension "{extension}".',
            context={"extension": extension},
        )
