"""Python engine executing native Python templates.

A Python template is a plain ``.py`` (or ``.pyhtml``) file executed with the
render context as its globals. Whatever it prints (or passes to ``echo``) is
the rendered content, which is then wrapped in the layout template.

Example template (``invoice.py``):
    ```python
    print(f"<h1>{escape(title)}</h1>")
    print(f"<p>Due {format_as(due_date, 'date')}</p>")
    view_title = f"Invoice {number}"   # exported to the layout
    ```
"""

import functools
import io
import logging
from pathlib import Path
from typing import Any

from markupsafe import escape

from renderkit.engines.base import (
    DEFAULT_CONTENT_VAR,
    DEFAULT_WRAPPER_TEMPLATE,
    WrappingEngine,
)
from renderkit.engines.template_service import TemplateService
from renderkit.exceptions.template_error import TemplateNotFoundError
from renderkit.formatter.caster import ValueCaster
from renderkit.formatter.data_formatter import DataFormatter
from renderkit.formatter.extension import STRING_FORMAT

logger = logging.getLogger(__name__)

PYTHON_SUFFIXES = (".py", ".pyhtml")
DEFAULT_VARS_PREFIX = "view_"


class PythonEngine(WrappingEngine):
    """Renders ``.py`` and ``.pyhtml`` templates into an HTML layout.

    Attributes:
        formatter: Formatter exposed to templates as ``format_as`` and
            ``to_string``
        vars_prefix: Template globals starting with this prefix are copied
            back into the context seen by the layout
    """

    name = "python"

    def __init__(
        self,
        template_service: TemplateService,
        formatter: DataFormatter | None = None,
        wrapper_template: str | None = DEFAULT_WRAPPER_TEMPLATE,
        content_var_name: str = DEFAULT_CONTENT_VAR,
        vars_prefix: str = DEFAULT_VARS_PREFIX,
    ) -> None:
        super().__init__(template_service, wrapper_template, content_var_name)
        self.formatter = formatter or template_service.formatter
        self.vars_prefix = vars_prefix
        self._caster = ValueCaster()

    def supported_extensions(self) -> list[str]:
        return ["py", "pyhtml"]

    def render_content(self, template: str, context: dict[str, Any]) -> str:
        """Execute a Python template and return its printed output.

        Raises:
            TemplateNotFoundError: If the template file cannot be found or read
            Exception: Whatever the template code raises
        """
        path = self.template_service.find_file(template, PYTHON_SUFFIXES)
        code = self._compile(template, path)

        with io.StringIO() as buffer:
            namespace = {
                **self._helpers(),
                **context,
                "__name__": "__template__",
                "__file__": str(path),
                "print": functools.partial(print, file=buffer),
                "echo": functools.partial(self._echo, buffer),
            }
            exec(code, namespace)
            output = buffer.getvalue()

        exported = {
            key: value
            for key, value in namespace.items()
            if key.startswith(self.vars_prefix)
        }
        if exported:
            logger.debug(f"Template '{path}' exported {sorted(exported)}")
            context.update(exported)

        return output

    def _compile(self, template: str, path: Path) -> Any:
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateNotFoundError.for_template(template) from e
        return compile(source, str(path), "exec")

    def _helpers(self) -> dict[str, Any]:
        return {
            "format_as": self.formatter.format,
            "to_string": lambda value: self.formatter.format(value, STRING_FORMAT),
            "escape": escape,
        }

    def _echo(self, buffer: io.StringIO, *values: Any) -> None:
        buffer.write("".join(self._caster.cast(value) for value in values))
