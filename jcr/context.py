"""
Evaluation context: everything one top-level evaluation needs.

A context is created per evaluate() call and never shared between calls.
The ruleset and callbacks it points to may be shared; the recursion
bookkeeping it holds may not.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from .rule_nodes.constants import DEFAULT_MAX_DEPTH, TRACE_PREVIEW_LENGTH
from .utils.debug import TraceSink, format_preview

if TYPE_CHECKING:
    from .callbacks import CallbackHandler
    from .rule_nodes import RuleNode


_NO_DATA = object()


@dataclass
class EvalContext:
    """
    Per-call evaluation state.

    Attributes:
        ruleset: Name -> rule mapping used to resolve target references
        callbacks: Name -> handler overrides for named rules
        trace: Optional sink receiving (message, data preview)
        max_depth: Maximum nested evaluate() calls before aborting
        preview_length: Characters of data shown in trace previews
        depth: Current nesting depth (bookkeeping)
        reference_chain: Names followed since data was last consumed
    """
    ruleset: Mapping[str, "RuleNode"]
    callbacks: Mapping[str, "CallbackHandler"] = field(default_factory=dict)
    trace: TraceSink | None = None
    max_depth: int = DEFAULT_MAX_DEPTH
    preview_length: int = TRACE_PREVIEW_LENGTH
    depth: int = field(default=0, init=False)
    reference_chain: list[str] = field(default_factory=list, init=False)

    def emit(self, message: str, data: Any = _NO_DATA) -> None:
        """Send a trace line to the sink, if any."""
        if self.trace is None:
            return
        preview = None if data is _NO_DATA else format_preview(data, self.preview_length)
        self.trace(message, preview)

    def callback_for(self, rule: "RuleNode") -> "CallbackHandler | None":
        if rule.name is None:
            return None
        return self.callbacks.get(rule.name)

    @contextmanager
    def consuming(self) -> Iterator[None]:
        """
        Scope for evaluating a part of the current data (an element, a
        member, a member value). References followed inside start a fresh
        chain.
        """
        saved = self.reference_chain
        self.reference_chain = []
        try:
            yield
        finally:
            self.reference_chain = saved
