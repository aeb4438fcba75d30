"""Template helpers exposing the data formatter.

Registers ``format_as`` and ``to_string`` as Jinja2 filters and globals so
templates can write ``{{ invoice.date|format_as('date') }}`` or
``{{ to_string(payload) }}``. Output is marked safe: handlers are trusted to
produce display markup.
"""

from typing import Any

from jinja2 import Environment
from markupsafe import Markup

from renderkit.formatter.data_formatter import DataFormatter

STRING_FORMAT = "string"


class FormatterExtension:
    """Bridges a DataFormatter into a Jinja2 environment."""

    def __init__(self, formatter: DataFormatter) -> None:
        self.formatter = formatter

    def format_as(self, value: Any, format: str) -> Markup:
        """Format a value with the named format, marked safe for output."""
        return Markup(self.formatter.format(value, format))

    def to_string(self, value: Any) -> Markup:
        """Cast a value to its display string, marked safe for output."""
        return Markup(self.formatter.format(value, STRING_FORMAT))

    def helpers(self) -> dict[str, Any]:
        """Return the helper callables keyed by template name."""
        return {
            "format_as": self.format_as,
            "to_string": self.to_string,
        }

    def install(self, environment: Environment) -> Environment:
        """Register the helpers as filters and globals of an environment."""
        helpers = self.helpers()
        environment.filters.update(helpers)
        environment.globals.update(helpers)
        return environment
