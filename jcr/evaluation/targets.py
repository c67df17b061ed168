"""
Target reference resolution for rule evaluation.

Handles TargetRef lookup with circular reference detection.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from ..errors import CyclicReferenceError, UnresolvedTargetError
from ..rule_nodes import TargetRef
from ..types import Evaluation
from .annotations import apply_rejection
from .protocols import RuleEvaluatorProtocol

if TYPE_CHECKING:
    from ..context import EvalContext
    from ..rule_nodes import RuleNode


def resolve_target(name: str, ruleset: Mapping[str, "RuleNode"]) -> "RuleNode":
    """
    Look up a named rule.

    Raises:
        UnresolvedTargetError: If the name is not in the ruleset.
    """
    target = ruleset.get(name)
    if target is None:
        raise UnresolvedTargetError(name)
    return target


@contextmanager
def enter_reference(name: str, ctx: "EvalContext") -> Iterator[None]:
    """
    Track a reference followed without consuming data.

    Following the same name twice before any element, member or value is
    descended into can never terminate, so it is reported as a ruleset
    defect instead.

    Raises:
        CyclicReferenceError: If `name` is already on the current chain.
    """
    if name in ctx.reference_chain:
        raise CyclicReferenceError(ctx.reference_chain + [name])
    ctx.reference_chain.append(name)
    try:
        yield
    finally:
        ctx.reference_chain.pop()


def eval_target_ref(
    rule: TargetRef,
    path: str,
    data: Any,
    ctx: "EvalContext",
    evaluator: RuleEvaluatorProtocol,
) -> Evaluation:
    """
    Evaluate a TargetRef by evaluating the rule it names.

    The named rule is dispatched as itself (so its own name, annotations
    and callback apply); reject annotations on the reference apply on top.
    """
    target = resolve_target(rule.target, ctx.ruleset)
    ctx.emit(f"Referencing target rule {rule.target}")
    with enter_reference(rule.target, ctx):
        result = evaluator.evaluate(target, path, data, ctx)
    return apply_rejection(rule.annotations, result)
