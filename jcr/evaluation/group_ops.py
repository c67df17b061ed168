"""
Group rule evaluation.

A group tries its entries against the same datum with the same combinator
short-circuit as other aggregates: a choice group succeeds at its first
matching entry, a sequence group fails at its first non-matching one.

This covers groups evaluated against one value (a root rule, a member
value). Groups that are entries of an array or object are spliced into
that aggregate instead (see aggregate.match_group).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..rule_nodes import GroupRule
from ..types import Evaluation
from .aggregate import short_circuits
from .annotations import apply_rejection
from .protocols import RuleEvaluatorProtocol

if TYPE_CHECKING:
    from ..context import EvalContext


def eval_group(
    rule: GroupRule,
    path: str,
    data: Any,
    ctx: "EvalContext",
    evaluator: RuleEvaluatorProtocol,
) -> Evaluation:
    """Evaluate a GroupRule. An empty group places no constraint."""
    retval = Evaluation.passed()
    previous: Evaluation | None = None
    for entry in rule.entries:
        if short_circuits(entry, previous):
            break
        retval = evaluator.evaluate(entry.rule, path, data, ctx)
        previous = retval
    return apply_rejection(rule.annotations, retval)
