"""Jinja2 engine rendering HTML and text templates."""

import logging
from collections.abc import Mapping
from typing import Any

from renderkit.engines.base import Engine, merge_context
from renderkit.engines.template_service import TemplateService

logger = logging.getLogger(__name__)


class JinjaEngine(Engine):
    """Renders ``.html.j2`` and ``.txt.j2`` templates with Jinja2.

    The render context is the template data merged over ``{"options": options}``.
    """

    name = "jinja"

    def __init__(self, template_service: TemplateService) -> None:
        self.template_service = template_service

    def supported_extensions(self) -> list[str]:
        return ["html.j2", "txt.j2"]

    def render(
        self,
        template: str,
        data: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        context = merge_context(options, data)
        return self.template_service.render(template, context)
