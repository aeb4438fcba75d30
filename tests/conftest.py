"""Pytest configuration and shared fixtures.

This module contains pytest configuration and shared fixtures used
across all test files.
"""

from pathlib import Path

import pytest

import renderkit.config as config_module
from renderkit.config import Config
from renderkit.engines.jinja_engine import JinjaEngine
from renderkit.engines.markdown_engine import MarkdownEngine
from renderkit.engines.pdf_engine import PdfEngine
from renderkit.engines.python_engine import PythonEngine
from renderkit.engines.template_service import TemplateService
from renderkit.formatter.data_formatter import DataFormatter
from renderkit.renderer import Renderer

TEMPLATES_DIR = Path(__file__).parent / "fixtures" / "templates"


@pytest.fixture
def templates_dir() -> Path:
    """Directory holding the fixture templates."""
    return TEMPLATES_DIR


@pytest.fixture
def formatter() -> DataFormatter:
    """Create a formatter with a pattern and a lookup handler."""
    return DataFormatter({
        "money": "$%.2f",
        "status": {1: "active", 0: "inactive"},
    })


@pytest.fixture
def template_service(formatter: DataFormatter) -> TemplateService:
    """Create a template service over the fixture templates."""
    return TemplateService([TEMPLATES_DIR], formatter)


@pytest.fixture
def renderer(template_service: TemplateService, formatter: DataFormatter) -> Renderer:
    """Create a renderer with every built-in engine registered."""
    renderer = Renderer()
    renderer.add_engine("jinja", JinjaEngine(template_service))
    renderer.add_engine("markdown", MarkdownEngine(template_service))
    renderer.add_engine("python", PythonEngine(template_service, formatter))
    renderer.add_engine("pdf", PdfEngine(template_service))
    return renderer


@pytest.fixture
def config() -> Config:
    """Create a Config that ignores any .env file."""
    return Config(_env_file=None, template_paths=[TEMPLATES_DIR])


@pytest.fixture
def invoice_data() -> dict:
    """Sample data for the invoice templates."""
    return {
        "title": "Invoice 42",
        "total": 12.5,
        "items": [
            {"name": "Pen", "price": 2.5},
            {"name": "Notebook", "price": 10.0},
        ],
    }


@pytest.fixture(autouse=True)
def reset_global_config():
    """Reset the cached global configuration around each test."""
    config_module._config = None
    yield
    config_module._config = None
