"""
Value rule evaluation.

The engine treats primitive constraints as opaque: a value evaluator
(pluggable on RuleEvaluator) judges each one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..errors import RuleConfigError
from ..rule_nodes import ValueRule
from ..types import Evaluation
from .annotations import apply_rejection
from .protocols import ValueEvaluator

if TYPE_CHECKING:
    from ..context import EvalContext


def evaluate_value(constraint: Any, data: Any) -> Evaluation:
    """
    Default value evaluator: delegate to the constraint's check().

    Raises:
        RuleConfigError: If the constraint cannot judge values.
    """
    check = getattr(constraint, "check", None)
    if check is None:
        raise RuleConfigError(
            f"No value evaluator for constraint {constraint!r}"
        )
    return check(data)


def eval_value(
    rule: ValueRule,
    path: str,
    data: Any,
    ctx: "EvalContext",
    value_evaluator: ValueEvaluator,
) -> Evaluation:
    """Evaluate a ValueRule against a single value."""
    result = value_evaluator(rule.constraint, data)
    if not result.success:
        detail = f": {result.reason}" if result.reason else ""
        result = Evaluation.failed(f"{rule.label} failed at {path}{detail}")
    return apply_rejection(rule.annotations, result)
