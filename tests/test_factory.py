"""Tests for the renderer factory."""

import logging
from pathlib import Path

import pytest

from renderkit.config import Config
from renderkit.engines.jinja_engine import JinjaEngine
from renderkit.engines.markdown_engine import MarkdownEngine
from renderkit.engines.pdf_engine import PdfEngine
from renderkit.engines.python_engine import PythonEngine
from renderkit.engines.template_service import TemplateService
from renderkit.exceptions.template_error import TemplateNotFoundError
from renderkit.factory import AVAILABLE_ENGINES, create_renderer, create_template_service


class TestCreateRenderer:
    """Tests for create_renderer()."""

    def test_requested_engines(self, config: Config) -> None:
        """Test requested engines are built, jinja always included."""
        renderer = create_renderer(engines=["markdown", "pdf"], config=config)

        assert list(renderer.engines) == ["jinja", "markdown", "pdf"]
        assert isinstance(renderer.get_engine("jinja"), JinjaEngine)
        assert isinstance(renderer.get_engine("markdown"), MarkdownEngine)
        assert isinstance(renderer.get_engine("pdf"), PdfEngine)

    def test_all_engines(self, config: Config) -> None:
        """Test every available engine can be created."""
        renderer = create_renderer(engines=AVAILABLE_ENGINES, config=config)
        assert isinstance(renderer.get_engine("python"), PythonEngine)
        assert set(renderer.engines) == set(AVAILABLE_ENGINES)

    def test_engines_from_config(self, templates_dir: Path) -> None:
        """Test engines default to the configured list."""
        config = Config(_env_file=None, engines=["python"], template_paths=[templates_dir])
        renderer = create_renderer(config=config)
        assert renderer.has_engine("python")

    def test_unknown_engine_skipped(
        self,
        config: Config,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test unknown engine names are skipped with a warning."""
        with caplog.at_level(logging.WARNING, logger="renderkit.factory"):
            renderer = create_renderer(engines=["latex", "markdown"], config=config)

        assert not renderer.has_engine("latex")
        assert renderer.has_engine("markdown")
        assert "Unknown engine 'latex' skipped" in caplog.text

    def test_engine_instance(self, config: Config, templates_dir: Path) -> None:
        """Test engine instances are registered under their name."""
        engine = MarkdownEngine(TemplateService([templates_dir]), wrapper_template=None)
        renderer = create_renderer(engines=[engine], config=config)
        assert renderer.get_engine("markdown") is engine

    def test_formatters_and_paths(self, config: Config, templates_dir: Path) -> None:
        """Test formatters and search paths reach the templates."""
        renderer = create_renderer(
            paths=[templates_dir],
            formatters={"money": "%.1f EUR"},
            config=config,
        )
        output = renderer.render("custom_template.html.j2", {"title": "T", "total": 2})
        assert "<p>2.0 EUR</p>" in output

    def test_filters(self, config: Config) -> None:
        """Test extra filters are installed."""
        renderer = create_renderer(filters={"shout": str.upper}, config=config)
        service = renderer.get_engine("jinja").template_service
        assert service.render_string("{{ 'x'|shout }}") == "X"

    def test_config_values(self, templates_dir: Path) -> None:
        """Test wrapper, content key and default engine come from config."""
        config = Config(
            _env_file=None,
            engines=["markdown"],
            template_paths=[templates_dir],
            default_engine="markdown",
            wrapper_template="alt_layout",
            content_var_name="body",
        )
        renderer = create_renderer(config=config)

        assert renderer.default_engine == "markdown"
        assert renderer.render("msg", {"title": "Hi"}) == (
            "<main><p>Hello <strong>Hi</strong></p></main>\n"
        )

    def test_missing_path(self, config: Config, tmp_path: Path) -> None:
        """Test a missing search path is reported."""
        with pytest.raises(TemplateNotFoundError):
            create_renderer(paths=[tmp_path / "missing"], config=config)


class TestCreateTemplateService:
    """Tests for create_template_service()."""

    def test_uses_config_paths(self, config: Config, templates_dir: Path) -> None:
        """Test search paths default to the configured ones."""
        service = create_template_service(config=config)
        assert service.paths == [templates_dir]

    def test_autoescape_from_config(self, templates_dir: Path) -> None:
        """Test the autoescape setting is honoured."""
        config = Config(_env_file=None, autoescape=False, template_paths=[templates_dir])
        service = create_template_service(config=config)
        assert service.render_string("{{ v }}", {"v": "<b>"}) == "<b>"
