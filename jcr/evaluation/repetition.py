"""
Repetition resolution: occurrence flags -> Cardinality.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import RepetitionError
from ..types import EXACTLY_ONCE, Cardinality

if TYPE_CHECKING:
    from ..rule_nodes import RuleNode


def _parse_count(literal: int | str, rule: "RuleNode", what: str) -> int:
    """Parse a repetition literal as a non-negative integer."""
    if isinstance(literal, bool):
        raise RepetitionError(rule.label, f"{what} must be an integer, got {literal!r}")
    if isinstance(literal, int):
        value = literal
    elif isinstance(literal, str) and literal.strip().isdigit():
        value = int(literal.strip())
    else:
        raise RepetitionError(rule.label, f"{what} must be an integer, got {literal!r}")
    if value < 0:
        raise RepetitionError(rule.label, f"{what} must be >= 0, got {value}")
    return value


def resolve_repetition(rule: "RuleNode") -> Cardinality:
    """
    Derive the allowed occurrence count for a rule.

    Priority:
        optional      -> 0..1
        one_or_more   -> 1..*
        specific n    -> n..n
        interval      -> min..max, missing bounds default to 0 and *
        (nothing)     -> 1..1

    Raises:
        RepetitionError: If a literal is not a non-negative integer or
            min > max.
    """
    rep = rule.repetition
    if rep.optional:
        return Cardinality(0, 1)
    if rep.one_or_more:
        return Cardinality(1, None)
    if rep.specific is not None:
        n = _parse_count(rep.specific, rule, "specific repetition")
        return Cardinality(n, n)
    if rep.interval or rep.min is not None or rep.max is not None:
        low = 0 if rep.min is None else _parse_count(rep.min, rule, "repetition min")
        high = None if rep.max is None else _parse_count(rep.max, rule, "repetition max")
        if high is not None and low > high:
            raise RepetitionError(rule.label, f"min ({low}) is greater than max ({high})")
        return Cardinality(low, high)
    return EXACTLY_ONCE
