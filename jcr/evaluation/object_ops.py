"""
Object rule evaluation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..rule_nodes import ObjectRule
from ..types import Evaluation
from .aggregate import KeyedMatcher, evaluate_aggregate
from .annotations import apply_rejection
from .protocols import RuleEvaluatorProtocol

if TYPE_CHECKING:
    from ..context import EvalContext


def eval_object(
    rule: ObjectRule,
    path: str,
    data: Any,
    ctx: "EvalContext",
    evaluator: RuleEvaluatorProtocol,
) -> Evaluation:
    """
    Evaluate an ObjectRule.

    Each entry is tested against every unclaimed (name, value) member; the
    number of members it matches must fit its repetition. Members no entry
    claims are allowed.
    """
    if not isinstance(data, dict):
        return apply_rejection(
            rule.annotations,
            Evaluation.failed(f"{data!r} is not an object at {path} for {rule.label}"),
        )

    elements = [(f"{path}.{key}", (key, value)) for key, value in data.items()]
    matcher = KeyedMatcher("object", path, data, elements, allow_extra=True)
    return evaluate_aggregate(rule.entries, rule.annotations, matcher, ctx, evaluator)
