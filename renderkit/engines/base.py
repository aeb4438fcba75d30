"""Base classes for rendering engines.

This module implements the Engine abstract base class every renderer engine
derives from, the context merge shared by all engines, and WrappingEngine,
which renders inner content and then places it in a layout template.

Example:
    ```python
    from renderkit.engines.base import Engine

    class UpperEngine(Engine):
        name = "upper"

        def supported_extensions(self) -> list[str]:
            return ["up"]

        def render(self, template, data=None, options=None) -> str:
            return template.upper()
    ```
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

if TYPE_CHECKING:
    from renderkit.engines.template_service import TemplateService

logger = logging.getLogger(__name__)

DEFAULT_WRAPPER_TEMPLATE = "html"
DEFAULT_CONTENT_VAR = "content"
WRAPPER_TEMPLATE_KEY = "wrapper_template"


def merge_context(
    options: Mapping[str, Any] | None,
    data: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Merge render options and template data into a render context.

    The options are exposed under the ``options`` key; data values win over
    it and nested mappings are merged recursively. Inputs are not modified.

    Args:
        options: Runtime options of the render call
        data: Template data

    Returns:
        New context dictionary
    """
    return _merge_recursive({"options": dict(options or {})}, data or {})


def _merge_recursive(
    base: Mapping[str, Any],
    override: Mapping[str, Any],
) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge_recursive(current, value)
        else:
            merged[key] = value
    return merged


class Engine(ABC):
    """Abstract base class for rendering engines.

    An engine turns a template identifier plus data into output. Engines are
    registered with a Renderer once and are not modified afterwards.

    Attributes:
        name: Engine name used for registration and explicit selection
    """

    name: str = ""

    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """Return the file extensions (without leading dot) this engine renders.

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError("Subclasses must implement supported_extensions")

    @abstractmethod
    def render(
        self,
        template: str,
        data: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str | bytes:
        """Render a template.

        Args:
            template: Template identifier (name or file path)
            data: Template data
            options: Runtime options; unknown keys are exposed to the
                template under ``options``

        Returns:
            Rendered output

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError("Subclasses must implement render")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class WrappingEngine(Engine):
    """Engine that places its rendered content inside a layout template.

    Subclasses implement render_content(); render() merges the context,
    renders the inner content and then renders the wrapper template through
    the template service with the content bound to ``content_var_name``.
    The context key ``wrapper_template`` overrides the wrapper per call, and a
    wrapper of None returns the inner content unchanged.
    """

    def __init__(
        self,
        template_service: "TemplateService",
        wrapper_template: str | None = DEFAULT_WRAPPER_TEMPLATE,
        content_var_name: str = DEFAULT_CONTENT_VAR,
    ) -> None:
        self.template_service = template_service
        self.wrapper_template = wrapper_template
        self.content_var_name = content_var_name

    @abstractmethod
    def render_content(self, template: str, context: dict[str, Any]) -> str:
        """Render the inner content of a template.

        Implementations may add keys to ``context``; they are visible to the
        wrapper template.

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError("Subclasses must implement render_content")

    def render(
        self,
        template: str,
        data: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        context = merge_context(options, data)
        content = self.render_content(template, context)

        wrapper = context.get(WRAPPER_TEMPLATE_KEY, self.wrapper_template)
        if not wrapper:
            return content

        logger.debug(f"Wrapping '{template}' output in layout '{wrapper}'")
        wrapper_context = {**context, self.content_var_name: Markup(content)}
        return self.template_service.render(wrapper, wrapper_context)
