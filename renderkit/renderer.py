"""Renderer dispatching templates to rendering engines.

The Renderer owns the engine registry and the extension table derived from
it. For each render call it resolves an engine name, in order, from the
explicit ``engine`` option, the ``format`` option, the template's file
extension and finally the default engine, and delegates to that engine.

Example:
    ```python
    from renderkit.renderer import Renderer

    renderer = Renderer()
    renderer.add_engine("jinja", JinjaEngine(template_service))
    renderer.add_engine("markdown", MarkdownEngine(template_service))

    renderer.render("notes.md", {"title": "Notes"})           # markdown
    renderer.render("report", {}, {"format": "html"})          # jinja
    ```
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from renderkit.engines.base import Engine
from renderkit.exceptions.engine_error import EngineNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ENGINE = "jinja"

# Output formats that are served by an engine of a different name
FORMAT_TO_ENGINE = {
    "html": "jinja",
    "pdf": "pdf",
}

ENGINE_OPTION = "engine"
FORMAT_OPTION = "format"


class Renderer:
    """Facade selecting a rendering engine per template.

    Attributes:
        default_engine: Engine name used when nothing else selects one
    """

    def __init__(
        self,
        engines: Mapping[str, Engine] | None = None,
        default_engine: str = DEFAULT_ENGINE,
    ) -> None:
        """Initialize the renderer.

        Args:
            engines: Engines to register, by name
            default_engine: Fallback engine name
        """
        self._engines: dict[str, Engine] = {}
        self._extensions: dict[str, str] = {}
        self.default_engine = default_engine
        for name, engine in (engines or {}).items():
            self.add_engine(name, engine)

    @property
    def engines(self) -> Mapping[str, Engine]:
        """Read-only view of the registered engines."""
        return MappingProxyType(self._engines)

    @property
    def extension_map(self) -> dict[str, str]:
        """Copy of the extension to engine name table."""
        return dict(self._extensions)

    def add_engine(self, name: str, engine: Engine) -> "Renderer":
        """Register an engine and the extensions it declares.

        An extension already claimed by another engine is taken over by this
        one.

        Args:
            name: Engine name
            engine: Engine instance

        Returns:
            The renderer itself, for chaining
        """
        self._engines[name] = engine
        for extension in engine.supported_extensions():
            extension = extension.lstrip(".")
            previous = self._extensions.get(extension)
            if previous is not None and previous != name:
                logger.debug(
                    f"Extension '{extension}' moved from engine '{previous}' to '{name}'"
                )
            self._extensions[extension] = name
        logger.debug(f"Registered engine '{name}' ({engine.__class__.__name__})")
        return self

    def has_engine(self, name: str) -> bool:
        return name in self._engines

    def get_engine(self, name: str) -> Engine:
        """Return a registered engine.

        Raises:
            EngineNotFoundError: If no engine has that name
        """
        try:
            return self._engines[name]
        except KeyError:
            raise EngineNotFoundError.for_engine(name) from None

    def resolve_engine_name(
        self,
        template: str,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        """Determine which engine renders a template.

        Args:
            template: Template identifier
            options: Runtime options; ``engine`` and ``format`` are honoured

        Returns:
            Engine name (not necessarily registered)
        """
        options = options or {}

        engine = options.get(ENGINE_OPTION)
        if engine:
            logger.debug(f"Engine '{engine}' requested explicitly for '{template}'")
            return str(engine)

        output_format = options.get(FORMAT_OPTION)
        if output_format:
            engine = FORMAT_TO_ENGINE.get(output_format, output_format)
            logger.debug(f"Format '{output_format}' selects engine '{engine}'")
            return engine

        engine = self._match_extension(template)
        if engine is not None:
            return engine

        logger.debug(f"Using default engine '{self.default_engine}' for '{template}'")
        return self.default_engine

    def render(
        self,
        template: str,
        data: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str | bytes:
        """Render a template with the engine selected for it.

        Args:
            template: Template identifier (name or file path)
            data: Template data
            options: Runtime options passed to the engine

        Returns:
            Whatever the engine produces: text, or bytes for binary formats

        Raises:
            EngineNotFoundError: If the selected engine is not registered
            BaseRendererError: Whatever the engine raises
        """
        engine = self.get_engine(self.resolve_engine_name(template, options))
        return engine.render(template, data, options)

    def _match_extension(self, template: str) -> str | None:
        # longest suffix first; sorted() is stable so ties keep registration order
        for extension in sorted(self._extensions, key=len, reverse=True):
            if template.endswith(f".{extension}"):
                name = self._extensions[extension]
                logger.debug(
                    f"Extension '{extension}' of '{template}' selects engine '{name}'"
                )
                return name
        return None
