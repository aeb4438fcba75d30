"""Best-effort conversion of arbitrary values to display strings.

This module provides the ValueCaster used as the last step of every
formatting path. Casting never raises: values that cannot be serialized are
rendered as a diagnostic message instead, so an odd value inside a template
does not abort an otherwise successful render.

Example:
    ```python
    from renderkit.formatter.caster import ValueCaster

    caster = ValueCaster()
    caster.cast(3.5)              # "3.5"
    caster.cast({"a": [1, 2]})    # pretty-printed JSON
    result = caster.try_cast(object())
    result.ok                     # False
    ```
"""

import dataclasses
import json
import logging
import numbers
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)

SERIALIZATION_FAILED = "Serialization for data type {type_name} failed: {error}"


@dataclass(frozen=True)
class CastResult:
    """Outcome of casting a value to a string.

    Attributes:
        text: Display string (a diagnostic message when casting failed)
        error: Failure reason, or None when the value was cast normally
    """

    text: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the value was converted without a serialization failure."""
        return self.error is None


def _json_default(value: Any) -> Any:
    """Convert values the json module does not know about."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _has_own_str(value: Any) -> bool:
    """Check whether the value's class defines its own __str__."""
    return type(value).__str__ is not object.__str__


def _failed(value: Any, error: Exception) -> CastResult:
    type_name = type(value).__name__
    logger.debug(f"Could not serialize {type_name}: {error}")
    return CastResult(
        SERIALIZATION_FAILED.format(type_name=type_name, error=error),
        error=str(error),
    )


class ValueCaster:
    """Converts any value to a string without raising.

    Priority order:
    1. None, strings, booleans and numbers get their canonical text form.
    2. Objects whose class defines ``__str__`` are stringified.
    3. Everything else is serialized as indented JSON, or turned into a
       diagnostic message when serialization fails.
    """

    def __init__(self, indent: int = 4) -> None:
        self.indent = indent

    def try_cast(self, value: Any) -> CastResult:
        """Cast a value and report whether serialization failed.

        Args:
            value: Any value

        Returns:
            CastResult with the display text and the failure reason, if any
        """
        if value is None:
            return CastResult("")
        if isinstance(value, str):
            return CastResult(value)
        if isinstance(value, bool):
            return CastResult("true" if value else "false")
        if isinstance(value, numbers.Number):
            return CastResult(str(value))
        if _has_own_str(value) and not isinstance(value, BaseModel):
            # str() raises TypeError when __str__ returns a non-string
            try:
                return CastResult(str(value))
            except Exception as e:
                return _failed(value, e)

        try:
            text = json.dumps(
                value,
                indent=self.indent,
                ensure_ascii=False,
                default=_json_default,
            )
        except (TypeError, ValueError, RecursionError) as e:
            return _failed(value, e)
        return CastResult(text)

    def cast(self, value: Any) -> str:
        """Cast a value to its display string.

        Args:
            value: Any value

        Returns:
            Display string, or a diagnostic message if serialization failed
        """
        return self.try_cast(value).text


_default_caster = ValueCaster()


def cast(value: Any) -> str:
    """Cast a value with the shared default caster."""
    return _default_caster.cast(value)
