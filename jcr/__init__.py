"""
JSON Content Rules evaluation engine.

Decides whether decoded JSON data conforms to a ruleset of named and
anonymous rules, returning an Evaluation with a reason on failure.

Design principles:
- Rule trees are immutable and shared; per-call state lives in EvalContext
- Data that does not conform is a failed Evaluation, never an exception
- Ruleset defects (unresolved names, bad repetitions, reference cycles)
  raise RuleConfigError
- Callbacks registered by rule name may replace a named rule's verdict
"""

from .types import (
    Evaluation,
    Cardinality,
)
from .errors import (
    RuleConfigError,
    UnresolvedTargetError,
    RepetitionError,
    CyclicReferenceError,
    RecursionDepthError,
    RuleLoadError,
)
from .callbacks import (
    CallbackHandler,
    FunctionCallback,
)
from .context import EvalContext
from .ruleset import RuleSet
from .evaluation import (
    RuleEvaluator,
    evaluate_rule,
)
from .validator import Validator
from .loader import (
    load_ruleset,
    load_ruleset_file,
)

__all__ = [
    # Types
    "Evaluation",
    "Cardinality",
    # Errors
    "RuleConfigError",
    "UnresolvedTargetError",
    "RepetitionError",
    "CyclicReferenceError",
    "RecursionDepthError",
    "RuleLoadError",
    # Callbacks
    "CallbackHandler",
    "FunctionCallback",
    # Evaluation
    "EvalContext",
    "RuleSet",
    "RuleEvaluator",
    "evaluate_rule",
    "Validator",
    # Loading
    "load_ruleset",
    "load_ruleset_file",
]
