"""
Callback handlers: caller-supplied overrides for named rules.

A handler registered under a rule name sees the engine's verdict for every
evaluation of that rule and may replace it. Each hook returns:
- None: keep the engine's verdict
- bool: success or failure with no reason
- str: failure with this reason
- Evaluation: used as-is

State the handler needs (counters, collected values) lives on the handler
object and belongs to the caller.

Usage:
    class EvenOnly(CallbackHandler):
        def __init__(self):
            self.calls = 0

        def on_success(self, rule, data):
            self.calls += 1
            return data % 2 == 0

    validator.register_callback("my_integers", EvenOnly())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Union

from .types import Evaluation

if TYPE_CHECKING:
    from .rule_nodes import RuleNode


CallbackResult = Union[None, bool, str, Evaluation]


class CallbackHandler:
    """
    Base class for rule callbacks. Override only the hooks you need.
    """

    def on_success(self, rule: "RuleNode", data: Any) -> CallbackResult:
        """Called when the rule matched the data."""
        return None

    def on_failure(
        self,
        rule: "RuleNode",
        data: Any,
        evaluation: Evaluation,
    ) -> CallbackResult:
        """Called when the rule did not match; `evaluation` is the engine's verdict."""
        return None


class FunctionCallback(CallbackHandler):
    """
    Adapts a plain function to a handler.

    The function is called as func(rule, data) on success and
    func(rule, data, evaluation) on failure.
    """

    def __init__(self, func: Callable[..., CallbackResult]):
        self._func = func

    def on_success(self, rule: "RuleNode", data: Any) -> CallbackResult:
        return self._func(rule, data)

    def on_failure(
        self,
        rule: "RuleNode",
        data: Any,
        evaluation: Evaluation,
    ) -> CallbackResult:
        return self._func(rule, data, evaluation)

    def __repr__(self) -> str:
        return f"FunctionCallback({getattr(self._func, '__name__', self._func)!r})"


def as_handler(callback: "CallbackHandler | Callable[..., CallbackResult]") -> CallbackHandler:
    """Return `callback` as a CallbackHandler, wrapping plain callables."""
    if isinstance(callback, CallbackHandler):
        return callback
    if callable(callback):
        return FunctionCallback(callback)
    raise TypeError(
        f"Callback must be a CallbackHandler or callable, got {type(callback).__name__}"
    )


__all__ = [
    "CallbackResult",
    "CallbackHandler",
    "FunctionCallback",
    "as_handler",
]
