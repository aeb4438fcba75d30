"""Rendering engines.

This package contains the engine base classes, the shared Jinja2 template
service and the concrete engines:
- JinjaEngine: ``.html.j2`` / ``.txt.j2`` templates
- MarkdownEngine: Markdown templates wrapped in an HTML layout
- PythonEngine: native Python templates wrapped in an HTML layout
- PdfEngine: ``.pdf.j2`` templates converted to PDF bytes
"""

from renderkit.engines.base import Engine, WrappingEngine, merge_context
from renderkit.engines.jinja_engine import JinjaEngine
from renderkit.engines.markdown_engine import MarkdownEngine
from renderkit.engines.pdf_engine import PdfEngine
from renderkit.engines.python_engine import PythonEngine
from renderkit.engines.template_service import TemplateService

__all__ = [
    "Engine",
    "JinjaEngine",
    "MarkdownEngine",
    "PdfEngine",
    "PythonEngine",
    "TemplateService",
    "WrappingEngine",
    "merge_context",
]
