"""
Shared protocols for rule evaluation.

Provides Protocol classes to avoid circular imports between evaluation modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from ..types import Evaluation

if TYPE_CHECKING:
    from ..context import EvalContext
    from ..rule_nodes import RuleNode


class RuleEvaluatorProtocol(Protocol):
    """Protocol for the rule dispatcher to avoid circular imports."""

    def evaluate(
        self,
        rule: "RuleNode",
        path: str,
        data: Any,
        ctx: "EvalContext",
    ) -> Evaluation: ...


class ValueEvaluator(Protocol):
    """Judges a primitive constraint against a single value."""

    def __call__(self, constraint: Any, data: Any) -> Evaluation: ...
