"""PDF engine rendering HTML templates to PDF documents.

The engine renders a ``.pdf.j2`` template to HTML through the template
service and converts the HTML into a PDF document with ReportLab. The page
layout is read from ``options["config"]["pdf"]``.

Example:
    ```python
    engine = PdfEngine(template_service)
    pdf_bytes = engine.render(
        "invoice.pdf.j2",
        {"title": "Invoice 42"},
        {"config": {"pdf": {"page_size": "Letter", "orientation": "landscape"}}},
    )
    ```
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from renderkit.engines.base import Engine, merge_context
from renderkit.engines.pdf_document import build_pdf
from renderkit.engines.template_service import TemplateService
from renderkit.exceptions.configuration_error import ConfigurationError
from renderkit.exceptions.template_error import RenderingError
from renderkit.models.pdf_layout_config import PDFLayoutConfig

logger = logging.getLogger(__name__)

PDF_OPTION = "pdf"


class PdfEngine(Engine):
    """Renders ``.pdf.j2`` templates into PDF bytes."""

    name = "pdf"

    def __init__(self, template_service: TemplateService) -> None:
        self.template_service = template_service

    def supported_extensions(self) -> list[str]:
        return ["pdf.j2"]

    def render(
        self,
        template: str,
        data: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> bytes:
        """Render a template to a PDF document.

        Returns:
            PDF document bytes

        Raises:
            ConfigurationError: If the PDF layout options are invalid
            TemplateNotFoundError: If the template cannot be found
            RenderingError: If the template or the PDF build fails
        """
        layout = self.layout_config(options)
        context = merge_context(options, data)
        html = self.template_service.render(template, context)

        title = context.get("title")
        logger.debug(
            f"Building PDF for '{template}' "
            f"({layout.page_size}, {layout.orientation})"
        )
        try:
            return build_pdf(html, layout, title=str(title) if title else None)
        except Exception as e:
            logger.error(f"PDF build failed for '{template}': {e}")
            raise RenderingError.for_template(template, str(e)) from e

    @staticmethod
    def layout_config(options: Mapping[str, Any] | None) -> PDFLayoutConfig:
        """Validate the page layout options of a render call.

        Args:
            options: Runtime options; the layout lives under
                ``options["config"]["pdf"]``

        Returns:
            Validated layout configuration

        Raises:
            ConfigurationError: If the layout options are not a mapping or
                fail validation
        """
        config = (options or {}).get("config") or {}
        if not isinstance(config, Mapping):
            raise ConfigurationError.for_invalid_option(
                "config", _describe(config), "a mapping of engine options"
            )

        values = config.get(PDF_OPTION) or {}
        if not isinstance(values, Mapping):
            raise ConfigurationError.for_invalid_option(
                PDF_OPTION, _describe(values), "a mapping of PDF layout options"
            )

        try:
            return PDFLayoutConfig(**values)
        except ValidationError as e:
            raise ConfigurationError.for_invalid_option(
                PDF_OPTION, _describe(values), str(e)
            ) from e


def _describe(value: Any) -> str:
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return repr(value)
