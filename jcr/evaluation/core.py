"""
Rule Evaluator: dispatches rule nodes to their evaluators.

Evaluates a rule AST against decoded JSON data. Supports named and
anonymous rules, target references resolved through a ruleset, and
caller-registered callbacks that override a named rule's verdict.

Key Features:
- Combinator short-circuit for groups, arrays and objects
- Repetition counting for aggregate entries
- Reject annotation inverts verdicts
- Unresolved references, cycles and runaway recursion raise
  RuleConfigError instead of failing the data

Usage:
    evaluator = RuleEvaluator()
    ctx = EvalContext(ruleset=ruleset, callbacks={"my_integers": handler})
    result = evaluator.evaluate(ruleset.root, "$", data, ctx)
    # result is Evaluation with success=True/False and a reason on failure
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from ..context import EvalContext
from ..errors import RecursionDepthError, RuleConfigError
from ..rule_nodes import (
    ArrayRule,
    GroupRule,
    MemberRule,
    ObjectRule,
    TargetRef,
    ValueRule,
    DEFAULT_MAX_DEPTH,
)
from ..types import Evaluation
from .array_ops import eval_array
from .callbacks import invoke_callback
from .group_ops import eval_group
from .member_ops import eval_member
from .object_ops import eval_object
from .protocols import ValueEvaluator
from .targets import eval_target_ref
from .value_ops import eval_value, evaluate_value

if TYPE_CHECKING:
    from ..callbacks import CallbackHandler
    from ..rule_nodes import RuleNode
    from ..utils.debug import TraceSink


class RuleEvaluator:
    """
    Evaluates rule trees against data.

    Stateless - all per-call state lives in the EvalContext, so one
    evaluator can serve concurrent evaluations of different data.

    Attributes:
        value_evaluator: Judges primitive constraints on ValueRule nodes

    Example:
        evaluator = RuleEvaluator()
        ctx = EvalContext(ruleset={"port": ValueRule(IntegerRange(0, 65535))})
        result = evaluator.evaluate(TargetRef("port"), "$", 8080, ctx)
    """

    def __init__(self, value_evaluator: ValueEvaluator = evaluate_value):
        """
        Initialize evaluator.

        Args:
            value_evaluator: (constraint, data) -> Evaluation for value rules.
        """
        self._value_evaluator = value_evaluator

    def evaluate(
        self,
        rule: "RuleNode",
        path: str,
        data: Any,
        ctx: EvalContext,
    ) -> Evaluation:
        """
        Evaluate a rule against data.

        Args:
            rule: The rule node to evaluate.
            path: Label of the data's location (e.g. "$", "$[0]", "$.name").
            data: Decoded JSON value (or a (name, value) pair for members).
            ctx: Per-call evaluation context.

        Returns:
            Evaluation with success flag and failure reason.

        Raises:
            RuleConfigError: On ruleset defects (unresolved names,
                malformed repetitions, reference cycles, max depth).
        """
        ctx.depth += 1
        try:
            if ctx.depth > ctx.max_depth:
                raise RecursionDepthError(ctx.max_depth, path)

            if rule.name:
                ctx.emit(f"* Named Rule: {rule.name}", data)

            result = self._dispatch(rule, path, data, ctx)

            handler = ctx.callback_for(rule)
            if handler is not None:
                result = invoke_callback(handler, rule, data, result, ctx)
            return result
        except RecursionError as e:
            # The interpreter stack ran out before max_depth was reached
            if ctx.depth > 1:
                raise
            raise RecursionDepthError(ctx.max_depth, path) from e
        finally:
            ctx.depth -= 1

    def _dispatch(
        self,
        rule: "RuleNode",
        path: str,
        data: Any,
        ctx: EvalContext,
    ) -> Evaluation:
        if isinstance(rule, TargetRef):
            return eval_target_ref(rule, path, data, ctx, self)
        elif isinstance(rule, ValueRule):
            return eval_value(rule, path, data, ctx, self._value_evaluator)
        elif isinstance(rule, GroupRule):
            return eval_group(rule, path, data, ctx, self)
        elif isinstance(rule, ArrayRule):
            return eval_array(rule, path, data, ctx, self)
        elif isinstance(rule, ObjectRule):
            return eval_object(rule, path, data, ctx, self)
        elif isinstance(rule, MemberRule):
            return eval_member(rule, path, data, ctx, self)
        else:
            raise RuleConfigError(f"Unknown rule type: {type(rule).__name__}")


def evaluate_rule(
    rule: "RuleNode",
    data: Any,
    ruleset: Mapping[str, "RuleNode"] | None = None,
    callbacks: Mapping[str, "CallbackHandler"] | None = None,
    trace: "TraceSink | None" = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Evaluation:
    """
    Convenience function to evaluate a rule.

    Args:
        rule: The rule to evaluate.
        data: Decoded JSON value.
        ruleset: Name -> rule mapping for target references.
        callbacks: Name -> handler overrides.
        trace: Optional trace sink.
        max_depth: Maximum nested evaluations.

    Returns:
        Evaluation with evaluation outcome.
    """
    ctx = EvalContext(
        ruleset=ruleset or {},
        callbacks=callbacks or {},
        trace=trace,
        max_depth=max_depth,
    )
    return RuleEvaluator().evaluate(rule, "$", data, ctx)
