"""Tests for Renderer engine dispatch."""

from collections.abc import Mapping
from typing import Any
from unittest.mock import Mock

import pytest

from renderkit.engines.base import Engine
from renderkit.exceptions.engine_error import EngineNotFoundError
from renderkit.renderer import DEFAULT_ENGINE, FORMAT_TO_ENGINE, Renderer


class StubEngine(Engine):
    """Engine returning its name and the template."""

    def __init__(self, name: str, extensions: list[str]) -> None:
        self.name = name
        self.extensions = extensions

    def supported_extensions(self) -> list[str]:
        return self.extensions

    def render(
        self,
        template: str,
        data: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        return f"{self.name}:{template}"


@pytest.fixture
def stub_renderer() -> Renderer:
    """Create a renderer with stub engines for each built-in name."""
    renderer = Renderer()
    renderer.add_engine("jinja", StubEngine("jinja", ["html.j2", "txt.j2"]))
    renderer.add_engine("markdown", StubEngine("markdown", ["md", "markdown"]))
    renderer.add_engine("python", StubEngine("python", ["py", "pyhtml"]))
    renderer.add_engine("pdf", StubEngine("pdf", ["pdf.j2"]))
    return renderer


class TestRegistry:
    """Tests for engine registration."""

    def test_add_engine_returns_renderer(self) -> None:
        """Test add_engine() can be chained."""
        renderer = Renderer()
        assert renderer.add_engine("a", StubEngine("a", ["a"])) is renderer

    def test_extension_map(self, stub_renderer: Renderer) -> None:
        """Test declared extensions map to the engine name."""
        assert stub_renderer.extension_map == {
            "html.j2": "jinja",
            "txt.j2": "jinja",
            "md": "markdown",
            "markdown": "markdown",
            "py": "python",
            "pyhtml": "python",
            "pdf.j2": "pdf",
        }

    def test_extension_map_is_a_copy(self, stub_renderer: Renderer) -> None:
        """Test changing the returned table does not affect the renderer."""
        stub_renderer.extension_map["md"] = "other"
        assert stub_renderer.extension_map["md"] == "markdown"

    def test_last_registration_wins(self) -> None:
        """Test a shared extension belongs to the last engine registered."""
        renderer = Renderer()
        renderer.add_engine("first", StubEngine("first", ["tpl"]))
        renderer.add_engine("second", StubEngine("second", ["tpl"]))

        assert renderer.extension_map == {"tpl": "second"}
        assert renderer.render("page.tpl") == "second:page.tpl"

    def test_engines_view(self, stub_renderer: Renderer) -> None:
        """Test the engines view is read-only."""
        assert list(stub_renderer.engines) == ["jinja", "markdown", "python", "pdf"]
        with pytest.raises(TypeError):
            stub_renderer.engines["x"] = StubEngine("x", [])  # type: ignore[index]

    def test_constructor_engines(self) -> None:
        """Test engines passed to the constructor are registered."""
        renderer = Renderer({"md": StubEngine("md", ["md"])}, default_engine="md")
        assert renderer.has_engine("md")
        assert renderer.render("notes") == "md:notes"

    def test_get_engine(self, stub_renderer: Renderer) -> None:
        """Test registered engines are returned."""
        assert stub_renderer.get_engine("pdf").name == "pdf"

    def test_get_engine_nonexistent(self, stub_renderer: Renderer) -> None:
        """Test an unknown engine name raises EngineNotFoundError naming it."""
        with pytest.raises(EngineNotFoundError) as exc_info:
            stub_renderer.get_engine("nonexistent")

        assert "nonexistent" in str(exc_info.value)
        assert exc_info.value.context == {"engine": "nonexistent"}


class TestResolveEngineName:
    """Tests for engine resolution priority."""

    def test_explicit_engine_wins(self, stub_renderer: Renderer) -> None:
        """Test the engine option beats format and extension."""
        options = {"engine": "python", "format": "pdf"}
        assert stub_renderer.resolve_engine_name("notes.md", options) == "python"

    def test_format_beats_extension(self, stub_renderer: Renderer) -> None:
        """Test the format option beats the extension."""
        assert stub_renderer.resolve_engine_name("notes.md", {"format": "html"}) == "jinja"
        assert stub_renderer.resolve_engine_name("notes.md", {"format": "pdf"}) == "pdf"

    def test_unmapped_format_used_as_engine(self, stub_renderer: Renderer) -> None:
        """Test formats without a mapping name the engine directly."""
        assert stub_renderer.resolve_engine_name("page", {"format": "markdown"}) == "markdown"

    def test_empty_options_ignored(self, stub_renderer: Renderer) -> None:
        """Test empty engine and format options fall through."""
        options = {"engine": "", "format": None}
        assert stub_renderer.resolve_engine_name("notes.md", options) == "markdown"

    def test_extension(self, stub_renderer: Renderer) -> None:
        """Test the template extension selects the engine."""
        assert stub_renderer.resolve_engine_name("report.pdf.j2") == "pdf"
        assert stub_renderer.resolve_engine_name("dir/view.pyhtml") == "python"

    def test_default(self, stub_renderer: Renderer) -> None:
        """Test templates without a known extension use the default."""
        assert stub_renderer.resolve_engine_name("page") == DEFAULT_ENGINE
        assert stub_renderer.resolve_engine_name("page.unknown") == DEFAULT_ENGINE

    def test_extension_needs_dot_boundary(self) -> None:
        """Test an extension only matches after a dot."""
        renderer = Renderer(default_engine="fallback")
        renderer.add_engine("twig", StubEngine("twig", ["twig"]))

        assert renderer.resolve_engine_name("mytwig") == "fallback"
        assert renderer.resolve_engine_name("page.xtwig") == "fallback"
        assert renderer.resolve_engine_name("page.twig") == "twig"

    @pytest.mark.parametrize("order", [("twig", "html"), ("html", "twig")])
    def test_longest_extension_wins(self, order: tuple[str, str]) -> None:
        """Test html.twig beats twig whatever the registration order."""
        engines = {
            "twig": StubEngine("twig", ["twig"]),
            "html": StubEngine("html", ["html.twig"]),
        }
        renderer = Renderer()
        for name in order:
            renderer.add_engine(name, engines[name])

        assert renderer.resolve_engine_name("page.html.twig") == "html"
        assert renderer.resolve_engine_name("page.twig") == "twig"

    def test_format_mapping(self) -> None:
        """Test the output format table."""
        assert FORMAT_TO_ENGINE == {"html": "jinja", "pdf": "pdf"}


class TestRender:
    """Tests for Renderer.render()."""

    def test_delegates_to_engine(self) -> None:
        """Test the selected engine receives the call unchanged."""
        engine = Mock(spec=Engine)
        engine.supported_extensions.return_value = ["md"]
        engine.render.return_value = b"%PDF-bytes"
        renderer = Renderer().add_engine("markdown", engine)
        data = {"title": "Hi"}
        options = {"lang": "de"}

        assert renderer.render("notes.md", data, options) == b"%PDF-bytes"
        engine.render.assert_called_once_with("notes.md", data, options)

    def test_unregistered_engine(self, stub_renderer: Renderer) -> None:
        """Test an unregistered resolved engine raises EngineNotFoundError."""
        with pytest.raises(EngineNotFoundError, match="latex"):
            stub_renderer.render("paper", {}, {"engine": "latex"})

    def test_engine_errors_propagate(self) -> None:
        """Test engine exceptions are not wrapped."""
        engine = Mock(spec=Engine)
        engine.supported_extensions.return_value = []
        engine.render.side_effect = RuntimeError("boom")
        renderer = Renderer().add_engine("jinja", engine)

        with pytest.raises(RuntimeError, match="boom"):
            renderer.render("page")
