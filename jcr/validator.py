"""
Validator: evaluates JSON data against a ruleset.

Holds a ruleset and a callback registry and builds a fresh evaluation
context for every call, so one Validator can be reused for many
documents.

Usage:
    validator = Validator(ruleset)
    validator.register_callback("my_integers", lambda rule, data, *e: data % 2 == 0)

    result = validator.evaluate([2, 4, "foo", "bar"])
    if not result.success:
        print(result.reason)
"""

from __future__ import annotations

import json
from typing import Any, Callable, Mapping

from .callbacks import CallbackHandler, CallbackResult, as_handler
from .config import get_config
from .context import EvalContext
from .evaluation import RuleEvaluator, resolve_target
from .evaluation.protocols import ValueEvaluator
from .evaluation.value_ops import evaluate_value
from .ruleset import RuleSet
from .types import Evaluation
from .utils.debug import TraceSink, is_trace_enabled, log_trace
from .utils.logger import get_logger


class Validator:
    """
    Evaluates data against a RuleSet.

    Attributes:
        ruleset: Rules to validate against
        callbacks: Rule name -> CallbackHandler overrides
    """

    def __init__(
        self,
        ruleset: RuleSet,
        callbacks: Mapping[str, CallbackHandler | Callable[..., CallbackResult]] | None = None,
        *,
        trace: TraceSink | None = None,
        max_depth: int | None = None,
        value_evaluator: ValueEvaluator = evaluate_value,
    ):
        config = get_config()
        self.ruleset = ruleset
        self.callbacks: dict[str, CallbackHandler] = {}
        for name, callback in (callbacks or {}).items():
            self.register_callback(name, callback)
        if trace is None and (config.eval.trace or is_trace_enabled()):
            trace = log_trace
        self._trace = trace
        self._max_depth = max_depth if max_depth is not None else config.eval.max_depth
        self._preview_length = config.eval.preview_length
        self._evaluator = RuleEvaluator(value_evaluator)
        get_logger().debug(f"Validator config: {config.summary_short()}")

    def register_callback(
        self,
        name: str,
        callback: CallbackHandler | Callable[..., CallbackResult],
    ) -> None:
        """Register a handler (or plain function) for the rule `name`."""
        self.callbacks[name] = as_handler(callback)

    def unregister_callback(self, name: str) -> None:
        self.callbacks.pop(name, None)

    def evaluate(self, data: Any, root: str | None = None) -> Evaluation:
        """
        Evaluate data against the root rule, or the rule named `root`.

        Raises:
            RuleConfigError: If the ruleset is defective.
        """
        rule = self.ruleset.root if root is None else resolve_target(root, self.ruleset)
        ctx = EvalContext(
            ruleset=self.ruleset,
            callbacks=dict(self.callbacks),
            trace=self._trace,
            max_depth=self._max_depth,
            preview_length=self._preview_length,
        )
        result = self._evaluator.evaluate(rule, "$", data, ctx)
        if not result.success:
            get_logger().debug(f"Validation failed: {result.to_dict()}")
        return result

    def evaluate_json(self, text: str, root: str | None = None) -> Evaluation:
        """Decode a JSON document and evaluate it."""
        return self.evaluate(json.loads(text), root=root)
