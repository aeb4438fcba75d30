"""Template rendering facade.

Selects a rendering engine per template (explicit engine, output format,
file extension or default) and formats template values through named
handlers.
"""

from renderkit.factory import AVAILABLE_ENGINES, create_renderer
from renderkit.formatter.data_formatter import DataFormatter
from renderkit.renderer import DEFAULT_ENGINE, Renderer

__version__ = "0.1.0"

__all__ = [
    "AVAILABLE_ENGINES",
    "DEFAULT_ENGINE",
    "DataFormatter",
    "Renderer",
    "create_renderer",
]
