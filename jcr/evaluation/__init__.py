"""
Rule Evaluation Package.

- core.py: RuleEvaluator class and main evaluate() dispatch
- aggregate.py: shared combinator/repetition loop and element matchers
- array_ops.py, object_ops.py, group_ops.py, member_ops.py: aggregate kinds
- value_ops.py: ValueRule evaluation via a pluggable value evaluator
- repetition.py: occurrence flags -> Cardinality
- annotations.py: annotation partitioning and rejection
- targets.py: TargetRef resolution with cycle detection
- callbacks.py: callback invocation and result normalization

Usage:
    from jcr.evaluation import RuleEvaluator, evaluate_rule

    result = evaluate_rule(rule, data, ruleset=ruleset)
"""

from .core import RuleEvaluator, evaluate_rule
from .repetition import resolve_repetition
from .annotations import partition_annotations, apply_rejection
from .targets import resolve_target
from .callbacks import invoke_callback, normalize_callback_result
from .value_ops import evaluate_value

__all__ = [
    "RuleEvaluator",
    "evaluate_rule",
    "resolve_repetition",
    "partition_annotations",
    "apply_rejection",
    "resolve_target",
    "invoke_callback",
    "normalize_callback_result",
    "evaluate_value",
]
