"""
Member rule evaluation: a member name matcher plus a rule for the value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..rule_nodes import MemberRule
from ..types import Evaluation
from .annotations import apply_rejection
from .protocols import RuleEvaluatorProtocol

if TYPE_CHECKING:
    from ..context import EvalContext


def eval_member(
    rule: MemberRule,
    path: str,
    data: Any,
    ctx: "EvalContext",
    evaluator: RuleEvaluatorProtocol,
) -> Evaluation:
    """
    Evaluate a MemberRule against a (name, value) pair.

    Succeeds iff the name matches the key matcher and the value matches
    the member's rule.
    """
    if not (isinstance(data, tuple) and len(data) == 2):
        return apply_rejection(
            rule.annotations,
            Evaluation.failed(f"{data!r} is not an object member at {path}"),
        )

    key, value = data
    if not rule.key.matches(key):
        return apply_rejection(
            rule.annotations,
            Evaluation.failed(f"member name {key!r} does not match {rule.key!r} at {path}"),
        )

    with ctx.consuming():
        result = evaluator.evaluate(rule.rule, path, value, ctx)
    if not result.success:
        detail = f": {result.reason}" if result.reason else ""
        result = Evaluation.failed(f"member {key!r} at {path} is invalid{detail}")
    return apply_rejection(rule.annotations, result)
