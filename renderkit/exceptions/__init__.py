"""Custom exception classes for the renderer.

This package contains the exception hierarchy:
- BaseRendererError: Base exception for all renderer errors
- EngineNotFoundError: Raised when no engine matches a name
- FormatterError: Raised when a formatting handler fails
- HandlerNotFoundError: Raised when a format matches no handler
- TemplateNotFoundError: Raised when a template file cannot be found
- RenderingError: Raised when a template library fails to render
- ConfigurationError: Raised when an option is missing or invalid
"""

from renderkit.exceptions.base import BaseRendererError
from renderkit.exceptions.configuration_error import ConfigurationError
from renderkit.exceptions.engine_error import EngineNotFoundError
from renderkit.exceptions.formatter_error import (
    FormatterError,
    HandlerNotFoundError,
)
from renderkit.exceptions.template_error import (
    RenderingError,
    TemplateNotFoundError,
)

__all__ = [
    "BaseRendererError",
    "ConfigurationError",
    "EngineNotFoundError",
    "FormatterError",
    "HandlerNotFoundError",
    "RenderingError",
    "TemplateNotFoundError",
]
