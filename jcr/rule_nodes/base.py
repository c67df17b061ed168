"""
Base node types for the rule AST.

This module defines the pieces every rule node shares:
- Repetition: raw occurrence flags as emitted by a parser
- RuleBase: name, annotations and repetition carried by every node
- RuleEntry: a rule plus the combinator joining it to the previous entry
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from .constants import Annotation, Combinator

if TYPE_CHECKING:
    from .types import RuleNode


@dataclass(frozen=True)
class Repetition:
    """
    Occurrence flags for a rule inside an aggregate.

    Literals are kept exactly as written (int or digit string) and checked
    when the repetition is resolved, not here.

    Attributes:
        optional: `?` - zero or one
        one_or_more: `+` - one or more
        specific: `n` - exactly n
        interval: `*` marker present
        min: Lower bound literal of `min*max`
        max: Upper bound literal of `min*max`

    Examples:
        Repetition()                      # exactly once
        Repetition(optional=True)         # 0..1
        Repetition(specific=2)            # 2..2
        Repetition(interval=True)         # 0..*
        Repetition(min="1", max="3")      # 1..3
    """
    optional: bool = False
    one_or_more: bool = False
    specific: int | str | None = None
    interval: bool = False
    min: int | str | None = None
    max: int | str | None = None


ONCE = Repetition()


@dataclass(frozen=True, kw_only=True)
class RuleBase:
    """
    Fields shared by every rule node.

    Attributes:
        name: Rule name, used for tracing and callback lookup
        annotations: Modifiers such as reject or unordered
        repetition: Occurrence flags when used inside an aggregate
    """
    kind: ClassVar[str] = "rule"

    name: str | None = None
    annotations: frozenset[Annotation] = frozenset()
    repetition: Repetition = ONCE

    def has_annotation(self, annotation: Annotation) -> bool:
        return annotation in self.annotations

    @property
    def label(self) -> str:
        """Short description for failure reasons."""
        if self.name:
            return f"rule '{self.name}'"
        return f"{self.kind} rule"


@dataclass(frozen=True)
class RuleEntry:
    """
    A rule in an aggregate body.

    The combinator joins this entry to the one before it; it is ignored on
    the first entry.
    """
    rule: "RuleNode"
    combinator: Combinator = Combinator.SEQUENCE

    def __repr__(self) -> str:
        if self.combinator is Combinator.CHOICE:
            return f"| {self.rule!r}"
        return repr(self.rule)


def make_entries(
    rules: "tuple[RuleNode | RuleEntry, ...]",
    combinator: Combinator = Combinator.SEQUENCE,
) -> tuple[RuleEntry, ...]:
    """Wrap bare rules as entries sharing one combinator."""
    return tuple(
        r if isinstance(r, RuleEntry) else RuleEntry(r, combinator)
        for r in rules
    )


def check_single_combinator(owner: str, entries: tuple[RuleEntry, ...]) -> Combinator:
    """
    Return the combinator used by an aggregate body.

    Raises ValueError if the entries mix choice and sequence.
    """
    combinators = {e.combinator for e in entries[1:]}
    if len(combinators) > 1:
        raise ValueError(
            f"{owner}: entries must use a single combinator, "
            f"got {sorted(c.value for c in combinators)}"
        )
    if combinators:
        return combinators.pop()
    return Combinator.SEQUENCE


__all__ = [
    "Repetition",
    "ONCE",
    "RuleBase",
    "RuleEntry",
    "make_entries",
    "check_single_combinator",
]
