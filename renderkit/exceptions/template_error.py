"""Template error exceptions.

This module defines TemplateNotFoundError, raised when a file-based engine
cannot resolve a template identifier to a readable file, and RenderingError,
raised when the underlying template library fails on a resolved template.
"""

from renderkit.exceptions.base import BaseRendererError


class TemplateNotFoundError(BaseRendererError):
    """Raised when a template cannot be found or read."""

    @classmethod
    def for_template(cls, template: str) -> "TemplateNotFoundError":
        """Create the error for a template identifier."""
        return cls(
            f'Template "{template}" not found or is not readable.',
            context={"template": template},
        )

    @classmethod
    def for_path(cls, path: str) -> "TemplateNotFoundError":
        """Create the error for a template search path."""
        return cls(
            f'Template path "{path}" not found or is not readable.',
            context={"path": path},
        )


class RenderingError(BaseRendererError):
    """Raised when a template fails to compile or render."""

    @classmethod
    def for_template(cls, template: str, error: str) -> "RenderingError":
        """Create the error for a template that failed to render."""
        return cls(
            f'Error rendering template "{template}": {error}',
            context={"template": template, "error": error},
        )
