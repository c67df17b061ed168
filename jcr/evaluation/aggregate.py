"""
Aggregate evaluation shared by array and object rules.

One loop walks the body entries in order, applying combinator
short-circuits and checking each entry's match count against its
cardinality. What counts as a "data element" and how an entry claims
elements is delegated to a matcher:

- KeyedMatcher: every unclaimed element is tested against the entry
  (object members, unordered arrays)
- PositionalMatcher: the entry consumes consecutive elements from a cursor
  (ordered arrays)

An element is claimed as soon as an entry matches it, whether or not the
entry's cardinality check then passes.

Groups used as entries (directly or through references) do not match a
single element. Their bodies are spliced into the enclosing aggregate and
matched over the same elements, once per repetition.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol

from ..rule_nodes import Annotation, Combinator, GroupRule, RuleEntry, TargetRef
from ..types import Cardinality, Evaluation
from .annotations import apply_rejection
from .callbacks import invoke_callback
from .protocols import RuleEvaluatorProtocol
from .repetition import resolve_repetition
from .targets import enter_reference, resolve_target

if TYPE_CHECKING:
    from ..context import EvalContext
    from ..rule_nodes import RuleNode


# =============================================================================
# Matchers
# =============================================================================

class ElementMatcher(Protocol):
    """How an aggregate enumerates and claims data elements."""

    kind: str
    path: str
    data: Any

    @property
    def claimed(self) -> int: ...

    def is_empty(self) -> bool: ...

    def match(
        self,
        rule: "RuleNode",
        cardinality: Cardinality,
        ctx: "EvalContext",
        evaluator: RuleEvaluatorProtocol,
    ) -> int: ...

    def finish(self, retval: Evaluation) -> Evaluation: ...


class KeyedMatcher:
    """
    Tests every unclaimed element against each entry and counts successes.

    Attributes:
        kind: "object" or "array", for failure reasons
        path: Location of the aggregate's data
        data: The aggregate's data, handed to callbacks of spliced groups
        allow_extra: Whether unclaimed elements are acceptable at the end
    """

    def __init__(
        self,
        kind: str,
        path: str,
        data: Any,
        elements: Iterable[tuple[str, Any]],
        allow_extra: bool = True,
    ):
        self.kind = kind
        self.path = path
        self.data = data
        self._elements = list(elements)
        self._allow_extra = allow_extra
        self._claimed: set[int] = set()

    @property
    def claimed(self) -> int:
        return len(self._claimed)

    def is_empty(self) -> bool:
        return not self._elements

    def match(self, rule, cardinality, ctx, evaluator) -> int:
        count = 0
        for i, (label, datum) in enumerate(self._elements):
            if i in self._claimed:
                continue
            with ctx.consuming():
                e = evaluator.evaluate(rule, label, datum, ctx)
            if e.success:
                self._claimed.add(i)
                count += 1
        return count

    def finish(self, retval: Evaluation) -> Evaluation:
        unclaimed = len(self._elements) - len(self._claimed)
        if retval.success and not self._allow_extra and unclaimed:
            return Evaluation.failed(
                f"{self.kind} at {self.path} has {unclaimed} more items than specified"
            )
        return retval


class PositionalMatcher:
    """
    Consumes consecutive elements from a cursor.

    Every required slot (up to the entry's minimum) is evaluated, so each
    gets a verdict; the leading run of successes is consumed. Once the
    minimum is met, further elements are taken while they match and the
    maximum allows. Elements left after the last entry are a failure.
    """

    def __init__(self, kind: str, path: str, data: Any, elements: Iterable[tuple[str, Any]]):
        self.kind = kind
        self.path = path
        self.data = data
        self._elements = list(elements)
        self._cursor = 0

    @property
    def claimed(self) -> int:
        return self._cursor

    def is_empty(self) -> bool:
        return not self._elements

    def _matches_at(self, index, rule, ctx, evaluator) -> bool:
        label, datum = self._elements[index]
        with ctx.consuming():
            return evaluator.evaluate(rule, label, datum, ctx).success

    def match(self, rule, cardinality, ctx, evaluator) -> int:
        size = len(self._elements)
        count = 0
        contiguous = True
        index = self._cursor
        while index < size and index - self._cursor < cardinality.min:
            if self._matches_at(index, rule, ctx, evaluator) and contiguous:
                count += 1
            else:
                contiguous = False
            index += 1

        if contiguous:
            index = self._cursor + count
            while index < size and cardinality.allows_more(count):
                if not self._matches_at(index, rule, ctx, evaluator):
                    break
                count += 1
                index += 1

        self._cursor += count
        return count

    def finish(self, retval: Evaluation) -> Evaluation:
        remaining = len(self._elements) - self._cursor
        if retval.success and remaining:
            return Evaluation.failed(
                f"{self.kind} at {self.path} has {remaining} more items than specified"
            )
        return retval


# =============================================================================
# Spliced Groups
# =============================================================================

def spliced_group(rule: "RuleNode", ctx: "EvalContext") -> GroupRule | None:
    """
    The group an aggregate entry stands for, following references.

    Returns None when the entry is not a group. A reference cycle also
    returns None; evaluating the entry then reports it.
    """
    seen: set[str] = set()
    while isinstance(rule, TargetRef):
        if rule.target in seen:
            return None
        seen.add(rule.target)
        rule = resolve_target(rule.target, ctx.ruleset)
    if isinstance(rule, GroupRule):
        return rule
    return None


def _splice(
    rule: "RuleNode",
    matcher: ElementMatcher,
    ctx: "EvalContext",
    evaluator: RuleEvaluatorProtocol,
) -> Evaluation:
    """One pass of a group (or a reference to one) over the matcher's elements."""
    if rule.name:
        ctx.emit(f"* Named Rule: {rule.name}", matcher.data)

    if isinstance(rule, TargetRef):
        target = resolve_target(rule.target, ctx.ruleset)
        ctx.emit(f"Referencing target rule {rule.target}")
        with enter_reference(rule.target, ctx):
            result = _splice(target, matcher, ctx, evaluator)
    else:
        ctx.emit(f"Rule has {len(rule.entries)} sub-rules")
        result = match_entries(rule.entries, matcher, ctx, evaluator) or Evaluation.passed()
    result = apply_rejection(rule.annotations, result)

    handler = ctx.callback_for(rule)
    if handler is not None:
        result = invoke_callback(handler, rule, matcher.data, result, ctx)
    return result


def match_group(
    rule: "RuleNode",
    cardinality: Cardinality,
    matcher: ElementMatcher,
    ctx: "EvalContext",
    evaluator: RuleEvaluatorProtocol,
) -> int:
    """
    Count how many times a spliced group matches in a row.

    A pass that claims no elements would match the same way forever, so
    it stands for every remaining required repetition.
    """
    count = 0
    while cardinality.allows_more(count):
        before = matcher.claimed
        if not _splice(rule, matcher, ctx, evaluator).success:
            break
        count += 1
        if matcher.claimed == before:
            return max(count, cardinality.min)
    return count


# =============================================================================
# Shared Loop
# =============================================================================

def short_circuits(entry: RuleEntry, retval: Evaluation | None) -> bool:
    """
    Whether the previous entry's outcome settles the aggregate.

    choice: the first success wins. sequence: the first failure loses.
    """
    if retval is None:
        return False
    if entry.combinator is Combinator.CHOICE:
        return retval.success
    return not retval.success


def check_cardinality(
    count: int,
    cardinality: Cardinality,
    rule: "RuleNode",
    kind: str,
    path: str,
) -> Evaluation:
    """Compare a match count against the allowed occurrences."""
    if count == 0 and cardinality.min > 0:
        return Evaluation.failed(f"{kind} at {path} does not contain {rule.label}")
    if count < cardinality.min:
        return Evaluation.failed(
            f"{kind} at {path} does not have enough {rule.label} "
            f"(found {count}, expected {cardinality})"
        )
    if cardinality.max is not None and count > cardinality.max:
        return Evaluation.failed(
            f"{kind} at {path} has too many {rule.label} "
            f"(found {count}, expected {cardinality})"
        )
    return Evaluation.passed()


def match_entries(
    entries: tuple[RuleEntry, ...],
    matcher: ElementMatcher,
    ctx: "EvalContext",
    evaluator: RuleEvaluatorProtocol,
) -> Evaluation | None:
    """
    Match body entries in declaration order until a combinator
    short-circuits. Returns the last entry's outcome, or None for an
    empty body.
    """
    retval: Evaluation | None = None
    for entry in entries:
        if short_circuits(entry, retval):
            break

        cardinality = resolve_repetition(entry.rule)
        ctx.emit(
            f"rule repetition min = {cardinality.min} "
            f"max = {'*' if cardinality.unbounded else cardinality.max}"
        )

        if spliced_group(entry.rule, ctx) is not None:
            count = match_group(entry.rule, cardinality, matcher, ctx, evaluator)
        else:
            count = matcher.match(entry.rule, cardinality, ctx, evaluator)
        retval = check_cardinality(count, cardinality, entry.rule, matcher.kind, matcher.path)
    return retval


def evaluate_aggregate(
    entries: tuple[RuleEntry, ...],
    annotations: Iterable[Annotation],
    matcher: ElementMatcher,
    ctx: "EvalContext",
    evaluator: RuleEvaluatorProtocol,
) -> Evaluation:
    """
    Match body entries against a collection of data elements.

    Empty bodies only accept empty collections. Otherwise the last
    outcome (after the matcher's final check) is the aggregate's verdict,
    subject to rejection.
    """
    annotations = frozenset(annotations)
    ctx.emit(f"Rule has {len(entries)} sub-rules")

    if not entries:
        if matcher.is_empty():
            return apply_rejection(annotations, Evaluation.passed())
        return apply_rejection(
            annotations,
            Evaluation.failed(
                f"Non-empty {matcher.kind} at {matcher.path} where empty expected"
            ),
        )

    retval = match_entries(entries, matcher, ctx, evaluator)
    return apply_rejection(annotations, matcher.finish(retval))
