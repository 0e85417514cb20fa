"""Validation rules for product inputs.

A ``Rule`` pairs a predicate with the message reported when the
predicate fails.  Rules receive the raw request value, which may be
``None`` when the input was missing, and are evaluated independently so
one input can report several messages.
"""

from __future__ import annotations

import math
import re
from typing import Any, Callable, Optional

from rest_framework import serializers

_INT_RE = re.compile(r"[-+]?(0|[1-9][0-9]*)")
_NUMERIC_RE = re.compile(r"[+-]?([0-9]*[.])?[0-9]+")
_BOOLEAN_STRINGS = {"true", "false", "1", "0"}


def as_text(value: Any) -> str:
    """Render a raw input the way it is checked: missing and structured
    values become the empty string."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_number(value: Any) -> Optional[float]:
    """Finite float for ``value``, or ``None`` when it has none."""
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def is_int(value: Any) -> bool:
    return bool(_INT_RE.fullmatch(as_text(value)))


def is_numeric(value: Any) -> bool:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return as_number(value) is not None
    return bool(_NUMERIC_RE.fullmatch(as_text(value))) and as_number(value) is not None


def is_not_empty(value: Any) -> bool:
    return as_text(value) != ""


def is_positive(value: Any) -> bool:
    number = as_number(value)
    return number is not None and number > 0


def is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return value in (0, 1)
    return isinstance(value, str) and value in _BOOLEAN_STRINGS


def to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value in ("true", "1")
    return bool(value)


class Rule:
    """DRF validator that raises ``message`` when ``check(value)`` is false."""

    def __init__(self, check: Callable[[Any], bool], message: str) -> None:
        self.check = check
        self.message = message

    def __call__(self, value: Any) -> None:
        if not self.check(value):
            raise serializers.ValidationError(self.message)

    def __repr__(self) -> str:
        return f"Rule({self.check.__name__}, {self.message!r})"
