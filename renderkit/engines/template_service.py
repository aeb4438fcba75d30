"""Jinja2 template service shared by the engines.

The template service owns the Jinja2 environment: search paths, autoescape
policy, the formatter helpers and any extra filters. Every engine that needs
HTML output (the Jinja engine itself, the layout step of the Markdown and
Python engines, and the PDF engine) renders through it.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    Undefined,
)

from renderkit.exceptions.template_error import (
    RenderingError,
    TemplateNotFoundError,
)
from renderkit.formatter.data_formatter import DataFormatter
from renderkit.formatter.extension import FormatterExtension

logger = logging.getLogger(__name__)

# Suffixes tried, in order, when a template name is given without one
INFERRED_SUFFIXES = (".html.j2", ".txt.j2", ".j2")

TEMPLATE_SUFFIXES = (".j2", ".jinja", ".jinja2")
ESCAPED_EXTENSIONS = (".html", ".htm", ".xml", ".pdf")


def should_autoescape(template_name: str | None) -> bool:
    """Decide whether a template's output is HTML-escaped.

    Inline sources and templates without a recognizable extension are
    escaped; ``.txt.j2`` and similar non-markup templates are not.
    """
    if template_name is None:
        return True
    name = template_name.lower()
    for suffix in TEMPLATE_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    stem = Path(name).suffix
    if not stem:
        return True
    return stem in ESCAPED_EXTENSIONS


def _candidates(template: str, suffixes: Iterable[str]) -> list[str]:
    names = [template]
    if not any(template.endswith(suffix) for suffix in suffixes):
        names.extend(f"{template}{suffix}" for suffix in suffixes)
    return names


class TemplateService:
    """Renders Jinja2 templates from search paths or file paths.

    Attributes:
        paths: Template search directories, in order
        environment: Configured Jinja2 environment
    """

    def __init__(
        self,
        paths: Iterable[str | Path] | None = None,
        formatter: DataFormatter | None = None,
        autoescape: bool = True,
        strict: bool = False,
        filters: Mapping[str, Callable[..., Any]] | None = None,
        globals: Mapping[str, Any] | None = None,
        extensions: Iterable[str] | None = None,
    ) -> None:
        """Initialize the template service.

        Args:
            paths: Directories searched for templates
            formatter: Formatter exposed as ``format_as`` / ``to_string``
            autoescape: Enable HTML autoescaping for markup templates
            strict: Raise on undefined variables instead of rendering blanks
            filters: Extra Jinja2 filters
            globals: Extra Jinja2 globals
            extensions: Jinja2 extensions to load

        Raises:
            TemplateNotFoundError: If a search path is not a readable directory
        """
        self.paths = [Path(path) for path in (paths or [])]
        for path in self.paths:
            if not path.is_dir():
                raise TemplateNotFoundError.for_path(str(path))

        self.formatter = formatter or DataFormatter()
        self.environment = Environment(
            loader=FileSystemLoader([str(path) for path in self.paths]),
            autoescape=should_autoescape if autoescape else False,
            undefined=StrictUndefined if strict else Undefined,
            extensions=list(extensions or []),
            keep_trailing_newline=True,
        )
        FormatterExtension(self.formatter).install(self.environment)
        if filters:
            self.environment.filters.update(filters)
        if globals:
            self.environment.globals.update(globals)

        logger.debug(
            f"Initialized template service with {len(self.paths)} search paths"
        )

    def find_file(self, template: str, suffixes: Iterable[str]) -> Path:
        """Resolve a template identifier to an existing file.

        Tries the identifier as a path, then with each inferred suffix, and
        then both forms inside every search path.

        Args:
            template: File path or name relative to a search path
            suffixes: Suffixes appended when the identifier has none of them

        Returns:
            Path of the template file

        Raises:
            TemplateNotFoundError: If no readable file matches
        """
        names = _candidates(template, tuple(suffixes))
        for name in names:
            candidate = Path(name)
            if candidate.is_file():
                return candidate
        for path in self.paths:
            for name in names:
                candidate = path / name
                if candidate.is_file():
                    return candidate
        raise TemplateNotFoundError.for_template(template)

    def get_template(self, template: str) -> Template:
        """Load a template by search-path name or file path.

        Raises:
            TemplateNotFoundError: If the template cannot be found
            RenderingError: If the template does not compile
        """
        for name in _candidates(template, INFERRED_SUFFIXES):
            try:
                if Path(name).is_file():
                    return self._load_file(Path(name))
                if not Path(name).is_absolute():
                    try:
                        return self.environment.get_template(name)
                    except TemplateNotFound as e:
                        # a missing include inside a found template is not a miss
                        if e.name != name:
                            raise
            except TemplateNotFound as e:
                raise TemplateNotFoundError.for_template(e.name or name) from e
            except TemplateError as e:
                raise RenderingError.for_template(template, str(e)) from e
        raise TemplateNotFoundError.for_template(template)

    def render(self, template: str, context: Mapping[str, Any] | None = None) -> str:
        """Render a template with a context.

        Raises:
            TemplateNotFoundError: If the template (or an include) is missing
            RenderingError: If Jinja2 fails while rendering
        """
        compiled = self.get_template(template)
        logger.debug(f"Rendering template '{compiled.name or template}'")
        return self._render(compiled, template, context)

    def render_string(
        self,
        source: str,
        context: Mapping[str, Any] | None = None,
        name: str = "<string>",
        autoescape: bool | None = None,
    ) -> str:
        """Render an inline template source.

        Args:
            source: Template source
            context: Render context
            name: Name used in error messages
            autoescape: Override the environment autoescape policy

        Raises:
            RenderingError: If the source does not compile or render
        """
        environment = self.environment
        if autoescape is not None:
            environment = environment.overlay(autoescape=autoescape)
        try:
            compiled = environment.from_string(source)
        except TemplateError as e:
            raise RenderingError.for_template(name, str(e)) from e
        return self._render(compiled, name, context)

    def _load_file(self, path: Path) -> Template:
        overlay = self.environment.overlay(
            loader=ChoiceLoader([
                FileSystemLoader(str(path.parent)),
                self.environment.loader,
            ]),
        )
        return overlay.get_template(path.name)

    def _render(
        self,
        compiled: Template,
        template: str,
        context: Mapping[str, Any] | None,
    ) -> str:
        try:
            return compiled.render(dict(context or {}))
        except TemplateNotFound as e:
            raise TemplateNotFoundError.for_template(e.name or template) from e
        except TemplateError as e:
            raise RenderingError.for_template(template, str(e)) from e
