"""
Value rule node and a small set of primitive constraints.

Primitive matching belongs to the value evaluator, which is pluggable (see
evaluation.value_ops). The constraints here cover the common cases used by
loaders and tests:
- AnyValue: any JSON value
- TypeValue: a JSON type (string, integer, float, number, boolean, null, ...)
- IntegerRange: an integer within inclusive bounds
- StringLiteral: one exact string
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from ..types import Evaluation
from .base import RuleBase


class ValueConstraint(Protocol):
    """A primitive constraint that can judge a single value."""

    def check(self, data: Any) -> Evaluation: ...


# =============================================================================
# Primitive Constraints
# =============================================================================

JSON_TYPES = frozenset({
    "any", "string", "integer", "float", "number", "boolean", "null",
    "array", "object",
})


def _is_integer(data: Any) -> bool:
    return isinstance(data, int) and not isinstance(data, bool)


@dataclass(frozen=True)
class AnyValue:
    """Matches any value."""

    def check(self, data: Any) -> Evaluation:
        return Evaluation.passed()

    def __repr__(self) -> str:
        return "Any()"


@dataclass(frozen=True)
class TypeValue:
    """
    Matches values of one JSON type.

    Examples:
        TypeValue("string")
        TypeValue("integer")   # booleans are not integers
    """
    type_name: str

    def __post_init__(self):
        if self.type_name not in JSON_TYPES:
            raise ValueError(
                f"TypeValue: unknown type '{self.type_name}'. "
                f"Valid types: {sorted(JSON_TYPES)}"
            )

    def check(self, data: Any) -> Evaluation:
        t = self.type_name
        if t == "any":
            ok = True
        elif t == "string":
            ok = isinstance(data, str)
        elif t == "integer":
            ok = _is_integer(data)
        elif t == "float":
            ok = isinstance(data, float)
        elif t == "number":
            ok = _is_integer(data) or isinstance(data, float)
        elif t == "boolean":
            ok = isinstance(data, bool)
        elif t == "null":
            ok = data is None
        elif t == "array":
            ok = isinstance(data, (list, tuple))
        else:
            ok = isinstance(data, dict)
        if ok:
            return Evaluation.passed()
        return Evaluation.failed(f"{data!r} is not of type {t}")

    def __repr__(self) -> str:
        return f"Type({self.type_name})"


@dataclass(frozen=True)
class IntegerRange:
    """
    Matches integers within inclusive bounds; either bound may be open.

    Examples:
        IntegerRange(0, 4)       # :0..4
        IntegerRange(low=10)     # :10..
    """
    low: int | None = None
    high: int | None = None

    def __post_init__(self):
        if self.low is not None and self.high is not None and self.low > self.high:
            raise ValueError(
                f"IntegerRange: low ({self.low}) must be <= high ({self.high})"
            )

    def check(self, data: Any) -> Evaluation:
        if not _is_integer(data):
            return Evaluation.failed(f"{data!r} is not an integer")
        if self.low is not None and data < self.low:
            return Evaluation.failed(f"{data} is less than {self.low}")
        if self.high is not None and data > self.high:
            return Evaluation.failed(f"{data} is greater than {self.high}")
        return Evaluation.passed()

    def __repr__(self) -> str:
        low = "" if self.low is None else self.low
        high = "" if self.high is None else self.high
        return f"Int({low}..{high})"


@dataclass(frozen=True)
class StringLiteral:
    """Matches exactly one string."""
    value: str

    def check(self, data: Any) -> Evaluation:
        if data == self.value and isinstance(data, str):
            return Evaluation.passed()
        return Evaluation.failed(f"{data!r} is not {self.value!r}")

    def __repr__(self) -> str:
        return f"Str({self.value!r})"


# =============================================================================
# Value Rule Node
# =============================================================================

@dataclass(frozen=True)
class ValueRule(RuleBase):
    """
    A rule constraining a single scalar value.

    The constraint is opaque to the engine and handed to the value
    evaluator.

    Examples:
        ValueRule(IntegerRange(0, 4), name="my_integers")
        ValueRule(TypeValue("string"))
    """
    kind = "value"

    constraint: Any

    def __repr__(self) -> str:
        return f"Value({self.constraint!r})"


__all__ = [
    "ValueConstraint",
    "JSON_TYPES",
    "AnyValue",
    "TypeValue",
    "IntegerRange",
    "StringLiteral",
    "ValueRule",
]
