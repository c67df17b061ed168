"""
Type aliases for the rule AST.

Placed in a separate module to avoid circular imports.
"""

from __future__ import annotations

from .aggregates import ArrayRule, GroupRule, MemberRule, ObjectRule
from .references import TargetRef
from .values import ValueRule


# Every node kind the evaluator dispatches on
RuleNode = ValueRule | GroupRule | ArrayRule | ObjectRule | MemberRule | TargetRef

RULE_NODE_TYPES = (ValueRule, GroupRule, ArrayRule, ObjectRule, MemberRule, TargetRef)


__all__ = [
    "RuleNode",
    "RULE_NODE_TYPES",
]
