"""Factory assembling a configured Renderer.

create_renderer() wires one DataFormatter and one TemplateService into the
requested engines and registers them on a Renderer. Anything not passed
explicitly is taken from the global Config.

Example:
    ```python
    from renderkit.factory import create_renderer

    renderer = create_renderer(
        engines=["markdown", "pdf"],
        paths=["templates"],
        formatters={"money": "$%.2f"},
    )
    renderer.render("invoice.pdf.j2", {"title": "Invoice", "total": 12.5})
    ```
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from renderkit.config import Config, get_config
from renderkit.engines.base import Engine
from renderkit.engines.jinja_engine import JinjaEngine
from renderkit.engines.markdown_engine import MarkdownEngine
from renderkit.engines.pdf_engine import PdfEngine
from renderkit.engines.python_engine import PythonEngine
from renderkit.engines.template_service import TemplateService
from renderkit.formatter.data_formatter import DataFormatter
from renderkit.renderer import Renderer

logger = logging.getLogger(__name__)

AVAILABLE_ENGINES = ("jinja", "markdown", "python", "pdf")


def create_template_service(
    paths: Iterable[str | Path] | None = None,
    formatter: DataFormatter | None = None,
    filters: Mapping[str, Callable[..., Any]] | None = None,
    config: Config | None = None,
) -> TemplateService:
    """Create the Jinja2 template service shared by the engines.

    Args:
        paths: Template search directories; defaults to config.template_paths
        formatter: Formatter exposed to templates
        filters: Extra Jinja2 filters
        config: Optional Config instance. If not provided, uses get_config()

    Returns:
        TemplateService instance

    Raises:
        TemplateNotFoundError: If a search path does not exist
    """
    config = config or get_config()
    return TemplateService(
        paths=list(paths) if paths is not None else config.template_paths,
        formatter=formatter,
        autoescape=config.autoescape,
        filters=filters,
    )


def _build_engine(
    name: str,
    template_service: TemplateService,
    formatter: DataFormatter,
    config: Config,
) -> Engine:
    if name == "jinja":
        return JinjaEngine(template_service)
    if name == "markdown":
        return MarkdownEngine(
            template_service,
            wrapper_template=config.wrapper_template,
            content_var_name=config.content_var_name,
        )
    if name == "python":
        return PythonEngine(
            template_service,
            formatter=formatter,
            wrapper_template=config.wrapper_template,
            content_var_name=config.content_var_name,
            vars_prefix=config.vars_prefix,
        )
    return PdfEngine(template_service)


def create_renderer(
    engines: Iterable[str | Engine] | None = None,
    paths: Iterable[str | Path] | None = None,
    formatters: Mapping[str, Any] | None = None,
    filters: Mapping[str, Callable[..., Any]] | None = None,
    config: Config | None = None,
) -> Renderer:
    """Create a Renderer with its engines.

    The Jinja engine is always registered, since the layout step of the
    Markdown and Python engines renders through the template service.

    Args:
        engines: Engine names from AVAILABLE_ENGINES or Engine instances;
            defaults to config.engines
        paths: Template search directories; defaults to config.template_paths
        formatters: Formatter handlers by name
        filters: Extra Jinja2 filters
        config: Optional Config instance. If not provided, uses get_config()

    Returns:
        Configured Renderer instance

    Raises:
        TemplateNotFoundError: If a search path does not exist
    """
    config = config or get_config()
    formatter = DataFormatter(formatters)
    template_service = create_template_service(paths, formatter, filters, config)
    renderer = Renderer(default_engine=config.default_engine)
    renderer.add_engine("jinja", JinjaEngine(template_service))

    requested = list(engines) if engines is not None else list(config.engines)
    for entry in requested:
        if isinstance(entry, Engine):
            renderer.add_engine(entry.name, entry)
            continue

        name = str(entry).strip().lower()
        if name not in AVAILABLE_ENGINES:
            logger.warning(
                f"Unknown engine '{entry}' skipped. "
                f"Available engines: {', '.join(AVAILABLE_ENGINES)}"
            )
            continue
        if renderer.has_engine(name):
            continue
        renderer.add_engine(name, _build_engine(name, template_service, formatter, config))

    if not renderer.has_engine(renderer.default_engine):
        logger.warning(
            f"Default engine '{renderer.default_engine}' is not registered"
        )

    logger.info(f"Renderer created with engines: {', '.join(renderer.engines)}")
    return renderer
