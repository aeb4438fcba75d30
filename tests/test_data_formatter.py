"""Tests for DataFormatter resolution and formatting."""

from datetime import date
from typing import Any
from unittest.mock import Mock

import pytest

from renderkit.exceptions.formatter_error import FormatterError, HandlerNotFoundError
from renderkit.formatter.base import BaseHandlerFormatter
from renderkit.formatter.caster import cast
from renderkit.formatter.data_formatter import DataFormatter


class DateFormatter(BaseHandlerFormatter):
    """Rich handler with short and long date formats."""

    def create_handlers(self) -> dict[str, Any]:
        return {
            "short": lambda value: value.strftime("%d.%m"),
            "long": lambda value: value.strftime("%d %B %Y"),
            "iso": "alias:long",
        }


class RecordingFormatter:
    """Rich handler recording the sub-formats it receives."""

    def __init__(self, label: str, formats: list[str]) -> None:
        self.label = label
        self.formats = formats
        self.calls: list[tuple[Any, str]] = []

    def handle(self, value: Any, format: str) -> str:
        self.calls.append((value, format))
        return f"{self.label}:{format}:{value}"

    def supported_formats(self) -> list[str]:
        return self.formats


class TestResolve:
    """Tests for resolving format strings."""

    def test_exact_name(self, formatter: DataFormatter) -> None:
        """Test a registered name resolves to itself."""
        assert formatter.resolve("money") == ("money", "money")

    def test_dotted_notation(self) -> None:
        """Test handler.subformat splits on the first dot."""
        formatter = DataFormatter({"date": DateFormatter()})
        assert formatter.resolve("date.short") == ("date", "short")
        assert formatter.resolve("date.a.b") == ("date", "a.b")

    def test_exact_name_with_dot_wins(self) -> None:
        """Test a registered dotted name is not split."""
        formatter = DataFormatter({"date.short": "%s", "date": "<%s>"})
        assert formatter.resolve("date.short") == ("date.short", "date.short")

    def test_capability_search(self) -> None:
        """Test formats declared by a rich handler resolve to it."""
        formatter = DataFormatter({"date": DateFormatter()})
        assert formatter.resolve("long") == ("date", "long")

    def test_capability_search_first_registered_wins(self) -> None:
        """Test the earlier of two handlers declaring a format wins."""
        first = RecordingFormatter("first", ["x"])
        second = RecordingFormatter("second", ["x", "y"])
        formatter = DataFormatter({"first": first, "second": second})

        assert formatter.resolve("x") == ("first", "x")
        assert formatter.resolve("y") == ("second", "y")
        assert formatter.format(1, "x") == "first:x:1"
        assert second.calls == []

    def test_default_fallback(self) -> None:
        """Test unknown formats fall back to the default handler."""
        formatter = DataFormatter({"default": "<%s>"})
        assert formatter.resolve("anything") == ("default", "anything")

    def test_unregistered_dotted_prefix_is_not_split(self) -> None:
        """Test a dotted format with an unknown prefix reaches the default."""
        formatter = DataFormatter({"default": "<%s>"})
        assert formatter.resolve("x.y") == ("default", "x.y")
        assert DataFormatter().resolve("x.y") == (None, "x.y")

    def test_unresolved(self) -> None:
        """Test formats matching nothing resolve to no handler."""
        assert DataFormatter().resolve("anything") == (None, "anything")

    def test_custom_default_handler_name(self) -> None:
        """Test the fallback handler name is configurable."""
        formatter = DataFormatter({"fallback": "<%s>"}, default_handler="fallback")
        assert formatter.format(1, "zzz") == "<1>"


class TestFormat:
    """Tests for DataFormatter.format()."""

    def test_pattern(self, formatter: DataFormatter) -> None:
        """Test a registered pattern interpolates the value."""
        assert formatter.format(3.14159, "money") == "$%.2f" % (3.14159,)

    def test_lookup_hit_and_miss(self, formatter: DataFormatter) -> None:
        """Test lookups translate known values and cast others."""
        assert formatter.format(1, "status") == "active"
        assert formatter.format(5, "status") == cast(5)

    def test_none_formats_as_empty_string(self) -> None:
        """Test None short-circuits before any handler runs."""
        handler = Mock(return_value="called")
        formatter = DataFormatter({"default": handler, "named": handler})

        assert formatter.format(None, "named") == ""
        assert formatter.format(None, "unknown") == ""
        handler.assert_not_called()

    def test_dotted_format_calls_handler_with_subformat(self) -> None:
        """Test date.short invokes the date handler with sub-format short."""
        recorder = RecordingFormatter("date", [])
        formatter = DataFormatter({"date": recorder})

        assert formatter.format("2024-03-05", "date.short") == "date:short:2024-03-05"
        assert recorder.calls == [("2024-03-05", "short")]

    def test_rich_handler(self) -> None:
        """Test rich handlers format through their own table."""
        formatter = DataFormatter({"date": DateFormatter()})
        day = date(2024, 3, 5)

        assert formatter.format(day, "date.short") == "05.03"
        assert formatter.format(day, "date.iso") == "05 March 2024"
        assert formatter.format(day, "short") == "05.03"

    def test_default_round_trip(self) -> None:
        """Test unmatched formats go through the default handler."""
        formatter = DataFormatter()
        formatter.register_handler("default", lambda value: str(value).upper())

        assert formatter.format(42, "anything") == "42"
        assert formatter.format("abc", "anything") == "ABC"

    def test_inline_pattern(self) -> None:
        """Test an unregistered printf format is used as a pattern."""
        assert DataFormatter().format(2.5, "%.3f") == "2.500"

    def test_unresolved_format_casts(self) -> None:
        """Test an unresolved plain token casts the value."""
        assert DataFormatter().format([1, 2], "unknown") == "[\n    1,\n    2\n]"
        assert DataFormatter().format(True, "unknown") == "true"

    def test_handler_error_is_wrapped(self) -> None:
        """Test handler failures become FormatterError."""
        formatter = DataFormatter({"ratio": lambda value: 1 / value})

        with pytest.raises(FormatterError) as exc_info:
            formatter.format(0, "ratio")

        error = exc_info.value
        assert str(error) == 'Error in formatter handler "ratio": division by zero'
        assert error.context == {"format": "ratio", "error": "division by zero"}
        assert isinstance(error.__cause__, ZeroDivisionError)

    def test_unknown_subformat_is_wrapped(self) -> None:
        """Test a rich handler rejecting a sub-format surfaces as FormatterError."""
        formatter = DataFormatter({"date": DateFormatter()})

        with pytest.raises(FormatterError, match='Handler for the format "medium" not found'):
            formatter.format(date(2024, 3, 5), "date.medium")


class TestRegistry:
    """Tests for handler registration and lookup."""

    def test_register_handler_chains_and_overwrites(self) -> None:
        """Test registration returns the formatter and replaces handlers."""
        formatter = DataFormatter({"money": "$%.2f"})
        result = formatter.register_handler("money", "%.1f EUR")

        assert result is formatter
        assert formatter.format(2, "money") == "2.0 EUR"

    def test_registration_order_kept(self) -> None:
        """Test handlers keep insertion order."""
        formatter = DataFormatter({"b": "%s"}).register_handler("a", "%s")
        assert list(formatter.handlers) == ["b", "a"]

    def test_handlers_view_is_read_only(self, formatter: DataFormatter) -> None:
        """Test the handlers view cannot be modified."""
        with pytest.raises(TypeError):
            formatter.handlers["new"] = "%s"  # type: ignore[index]

    def test_get_handler(self, formatter: DataFormatter) -> None:
        """Test registered definitions are returned as given."""
        assert formatter.get_handler("money") == "$%.2f"

    def test_get_handler_missing(self, formatter: DataFormatter) -> None:
        """Test a missing handler raises HandlerNotFoundError."""
        with pytest.raises(HandlerNotFoundError, match='Handler for the format "nope" not found.'):
            formatter.get_handler("nope")

    def test_require(self, formatter: DataFormatter) -> None:
        """Test require() resolves strictly."""
        assert formatter.require("money") == ("money", "money")
        with pytest.raises(HandlerNotFoundError):
            formatter.require("unknown")

    def test_require_uses_default(self) -> None:
        """Test require() accepts the default fallback."""
        formatter = DataFormatter({"default": "%s"})
        assert formatter.require("unknown") == ("default", "unknown")
