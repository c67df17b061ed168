"""
Aggregate and member rule nodes.

This module defines the nodes that match collections:
- GroupRule: alternatives or conjunctions over the same datum
- ArrayRule: rules matched against array elements
- ObjectRule: rules matched against object members
- MemberRule: a member name matcher plus the rule for its value
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .base import RuleBase, RuleEntry, check_single_combinator, make_entries
from .constants import Combinator

if TYPE_CHECKING:
    from .types import RuleNode


# =============================================================================
# Aggregate Nodes
# =============================================================================

@dataclass(frozen=True)
class AggregateRule(RuleBase):
    """
    Shared shape of group, array and object rules.

    Attributes:
        entries: Body rules in declaration order (may be empty)
    """
    entries: tuple[RuleEntry, ...] = ()

    def __post_init__(self):
        """Validate entries."""
        for entry in self.entries:
            if not isinstance(entry, RuleEntry):
                raise ValueError(
                    f"{type(self).__name__}: entries must be RuleEntry, "
                    f"got {type(entry).__name__}"
                )
        check_single_combinator(type(self).__name__, self.entries)

    @property
    def combinator(self) -> Combinator:
        return check_single_combinator(type(self).__name__, self.entries)

    @classmethod
    def of(cls, *rules: "RuleNode | RuleEntry", **fields: Any):
        """Build with sequence-joined entries."""
        return cls(entries=make_entries(rules, Combinator.SEQUENCE), **fields)

    @classmethod
    def choice(cls, *rules: "RuleNode | RuleEntry", **fields: Any):
        """Build with choice-joined entries."""
        return cls(entries=make_entries(rules, Combinator.CHOICE), **fields)

    def __repr__(self) -> str:
        sep = " | " if self.combinator is Combinator.CHOICE else ", "
        body = sep.join(repr(e.rule) for e in self.entries)
        return f"{type(self).__name__}({body})"


@dataclass(frozen=True, repr=False)
class GroupRule(AggregateRule):
    """
    A parenthesised group: every entry is tried against the same datum.

    Examples:
        GroupRule.choice(ValueRule(StringLiteral("foo")),
                         ValueRule(StringLiteral("bar")))   # ( :"foo" | :"bar" )
    """
    kind = "group"


@dataclass(frozen=True, repr=False)
class ArrayRule(AggregateRule):
    """
    An array rule: entries consume array elements.

    Ordered by default; with the unordered annotation each entry may match
    elements anywhere in the array.

    Examples:
        ArrayRule.of(TargetRef("my_integers", repetition=Repetition(specific=2)),
                     TargetRef("my_strings", repetition=Repetition(specific=2)))
    """
    kind = "array"


@dataclass(frozen=True, repr=False)
class ObjectRule(AggregateRule):
    """
    An object rule: entries are matched against (name, value) members.

    Members not claimed by any entry are allowed.
    """
    kind = "object"


# =============================================================================
# Member Nodes
# =============================================================================

@dataclass(frozen=True)
class KeyLiteral:
    """Matches one exact member name."""
    name: str

    def matches(self, key: Any) -> bool:
        return key == self.name

    def __repr__(self) -> str:
        return repr(self.name)


@dataclass(frozen=True)
class KeyPattern:
    """
    Matches member names by regular expression (searched, so anchor
    explicitly when needed).
    """
    pattern: str

    def __post_init__(self):
        """Validate the pattern compiles."""
        try:
            re.compile(self.pattern)
        except re.error as e:
            raise ValueError(f"KeyPattern: invalid regex {self.pattern!r}: {e}") from e

    def matches(self, key: Any) -> bool:
        return isinstance(key, str) and re.search(self.pattern, key) is not None

    def __repr__(self) -> str:
        return f"/{self.pattern}/"


KeyMatcher = KeyLiteral | KeyPattern


@dataclass(frozen=True)
class MemberRule(RuleBase):
    """
    An object member: a name matcher and the rule for the member's value.

    Examples:
        MemberRule(KeyLiteral("port"), ValueRule(IntegerRange(0, 65535)))
        MemberRule(KeyPattern(r"^p\\d+$"), TargetRef("param"))
    """
    kind = "member"

    key: KeyMatcher
    rule: "RuleNode"

    @property
    def label(self) -> str:
        if self.name:
            return f"rule '{self.name}'"
        return f"member {self.key!r}"

    def __repr__(self) -> str:
        return f"Member({self.key!r}: {self.rule!r})"


__all__ = [
    "AggregateRule",
    "GroupRule",
    "ArrayRule",
    "ObjectRule",
    "KeyLiteral",
    "KeyPattern",
    "KeyMatcher",
    "MemberRule",
]
