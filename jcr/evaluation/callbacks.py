"""
Callback invocation: passes a named rule's verdict through its handler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..callbacks import CallbackHandler, CallbackResult
from ..types import Evaluation

if TYPE_CHECKING:
    from ..context import EvalContext
    from ..rule_nodes import RuleNode


def normalize_callback_result(
    outcome: CallbackResult,
    default: Evaluation,
) -> Evaluation:
    """
    Fold a handler's return value into an Evaluation.

    None keeps `default`; bool -> Evaluation(value); str -> failure with
    that reason; Evaluation passes through.

    Raises:
        TypeError: For any other return type.
    """
    if outcome is None:
        return default
    if isinstance(outcome, Evaluation):
        return outcome
    if isinstance(outcome, bool):
        return Evaluation(success=outcome, reason=None)
    if isinstance(outcome, str):
        return Evaluation.failed(outcome)
    raise TypeError(
        f"Callback returned {type(outcome).__name__}; "
        "expected None, bool, str or Evaluation"
    )


def invoke_callback(
    handler: CallbackHandler,
    rule: "RuleNode",
    data: Any,
    evaluation: Evaluation,
    ctx: "EvalContext",
) -> Evaluation:
    """
    Call the handler's success or failure hook and return its verdict.

    Exceptions raised by the handler are not caught.
    """
    if evaluation.success:
        outcome = handler.on_success(rule, data)
    else:
        outcome = handler.on_failure(rule, data, evaluation)
    result = normalize_callback_result(outcome, evaluation)
    ctx.emit(
        f"Callback {rule.name} given evaluation of {evaluation.success} "
        f"and returned {result.success}"
    )
    return result
