"""
Rule AST node types.

Nodes are frozen dataclasses: built once by a parser or loader, then shared
read-only by every evaluation.

Node Categories:
- Value nodes: ValueRule (+ primitive constraints)
- Aggregate nodes: GroupRule, ArrayRule, ObjectRule
- Member nodes: MemberRule with KeyLiteral / KeyPattern
- Reference nodes: TargetRef

Type Hierarchy:
    RuleNode = ValueRule | GroupRule | ArrayRule | ObjectRule | MemberRule | TargetRef

Usage:
    # [ 2 my_integers, 2 my_strings ]
    root = ArrayRule.of(
        TargetRef("my_integers", repetition=Repetition(specific=2)),
        TargetRef("my_strings", repetition=Repetition(specific=2)),
    )
    my_integers = ValueRule(IntegerRange(0, 4))
    my_strings = GroupRule.choice(
        ValueRule(StringLiteral("foo")),
        ValueRule(StringLiteral("bar")),
    )
"""

from .constants import (
    Annotation,
    Combinator,
    ANNOTATION_TOKENS,
    DEFAULT_MAX_DEPTH,
    TRACE_PREVIEW_LENGTH,
)
from .base import (
    Repetition,
    ONCE,
    RuleBase,
    RuleEntry,
    make_entries,
)
from .values import (
    ValueConstraint,
    AnyValue,
    TypeValue,
    IntegerRange,
    StringLiteral,
    ValueRule,
)
from .aggregates import (
    AggregateRule,
    GroupRule,
    ArrayRule,
    ObjectRule,
    KeyLiteral,
    KeyPattern,
    KeyMatcher,
    MemberRule,
)
from .references import TargetRef
from .types import RuleNode, RULE_NODE_TYPES


__all__ = [
    # Constants
    "Annotation",
    "Combinator",
    "ANNOTATION_TOKENS",
    "DEFAULT_MAX_DEPTH",
    "TRACE_PREVIEW_LENGTH",
    # Base
    "Repetition",
    "ONCE",
    "RuleBase",
    "RuleEntry",
    "make_entries",
    # Value nodes
    "ValueConstraint",
    "AnyValue",
    "TypeValue",
    "IntegerRange",
    "StringLiteral",
    "ValueRule",
    # Aggregate nodes
    "AggregateRule",
    "GroupRule",
    "ArrayRule",
    "ObjectRule",
    "KeyLiteral",
    "KeyPattern",
    "KeyMatcher",
    "MemberRule",
    # Reference nodes
    "TargetRef",
    # Type aliases
    "RuleNode",
    "RULE_NODE_TYPES",
]
