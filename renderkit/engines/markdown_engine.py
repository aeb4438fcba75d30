"""Markdown engine converting Markdown templates to HTML.

A Markdown template is first rendered as a Jinja2 source (so it can use the
context and the formatter helpers), then converted to HTML with
Python-Markdown, and finally wrapped in the layout template.
"""

import logging
from collections.abc import Iterable
from typing import Any

import markdown

from renderkit.engines.base import (
    DEFAULT_CONTENT_VAR,
    DEFAULT_WRAPPER_TEMPLATE,
    WrappingEngine,
)
from renderkit.engines.template_service import TemplateService
from renderkit.exceptions.template_error import TemplateNotFoundError

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")
DEFAULT_MARKDOWN_EXTENSIONS = ("extra", "sane_lists")


class MarkdownEngine(WrappingEngine):
    """Renders ``.md`` and ``.markdown`` templates into an HTML layout."""

    name = "markdown"

    def __init__(
        self,
        template_service: TemplateService,
        wrapper_template: str | None = DEFAULT_WRAPPER_TEMPLATE,
        content_var_name: str = DEFAULT_CONTENT_VAR,
        markdown_extensions: Iterable[str] = DEFAULT_MARKDOWN_EXTENSIONS,
    ) -> None:
        super().__init__(template_service, wrapper_template, content_var_name)
        self.markdown_extensions = list(markdown_extensions)

    def supported_extensions(self) -> list[str]:
        return ["md", "markdown"]

    def render_content(self, template: str, context: dict[str, Any]) -> str:
        """Render a Markdown file to an HTML fragment.

        Raises:
            TemplateNotFoundError: If the Markdown file cannot be found or read
            RenderingError: If the Jinja2 pass fails
        """
        path = self.template_service.find_file(template, MARKDOWN_SUFFIXES)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateNotFoundError.for_template(template) from e

        # Markdown sources are not HTML, so no autoescaping here
        text = self.template_service.render_string(
            source, context, name=str(path), autoescape=False
        )
        logger.debug(f"Converting Markdown template '{path}' to HTML")
        return markdown.markdown(text, extensions=self.markdown_extensions)
