"""
Array rule evaluation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..rule_nodes import Annotation, ArrayRule
from ..types import Evaluation
from .aggregate import KeyedMatcher, PositionalMatcher, evaluate_aggregate
from .annotations import apply_rejection
from .protocols import RuleEvaluatorProtocol

if TYPE_CHECKING:
    from ..context import EvalContext


def eval_array(
    rule: ArrayRule,
    path: str,
    data: Any,
    ctx: "EvalContext",
    evaluator: RuleEvaluatorProtocol,
) -> Evaluation:
    """
    Evaluate an ArrayRule.

    Ordered arrays match entries positionally; with the unordered
    annotation each entry may claim elements anywhere. Either way every
    element must be claimed.
    """
    if not isinstance(data, (list, tuple)):
        return apply_rejection(
            rule.annotations,
            Evaluation.failed(f"{data!r} is not an array at {path} for {rule.label}"),
        )

    elements = [(f"{path}[{i}]", item) for i, item in enumerate(data)]
    if rule.has_annotation(Annotation.UNORDERED):
        ctx.emit("Rule has unordered annotation")
        matcher = KeyedMatcher("array", path, data, elements, allow_extra=False)
    else:
        matcher = PositionalMatcher("array", path, data, elements)
    return evaluate_aggregate(rule.entries, rule.annotations, matcher, ctx, evaluator)
