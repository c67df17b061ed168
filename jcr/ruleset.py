"""
RuleSet: the name -> rule mapping consulted by target references.

Rules stored under a name carry that name, so tracing and callbacks see
it. The ruleset is read-only once built and may be shared by any number
of evaluations.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterator, Mapping

from .errors import RuleConfigError
from .rule_nodes import Annotation, RuleNode, RULE_NODE_TYPES


class RuleSet(Mapping[str, RuleNode]):
    """
    Named rules plus the root rule data is validated against.

    The root is the explicit `root` rule if given (usually an unnamed
    top-level rule), otherwise the one named rule annotated as root.

    Example:
        ruleset = RuleSet(
            {"my_integers": ValueRule(IntegerRange(0, 4))},
            root=ArrayRule.of(TargetRef("my_integers", repetition=Repetition(specific=2))),
        )
    """

    def __init__(
        self,
        rules: Mapping[str, RuleNode] | None = None,
        root: RuleNode | None = None,
    ):
        self._rules: dict[str, RuleNode] = {}
        for name, rule in (rules or {}).items():
            self._rules[name] = _named(name, rule)
        if root is not None and not isinstance(root, RULE_NODE_TYPES):
            raise TypeError(f"RuleSet: root must be a rule node, got {type(root).__name__}")
        self._root = root

    def __getitem__(self, name: str) -> RuleNode:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def with_rule(self, name: str, rule: RuleNode) -> "RuleSet":
        """Return a new ruleset with `rule` added (or replaced) under `name`."""
        rules = dict(self._rules)
        rules[name] = rule
        return RuleSet(rules, root=self._root)

    @property
    def root(self) -> RuleNode:
        """
        The rule data is validated against by default.

        Raises:
            RuleConfigError: If there is no root, or several named rules
                claim to be root.
        """
        if self._root is not None:
            return self._root
        roots = [r for r in self._rules.values() if r.has_annotation(Annotation.ROOT)]
        if len(roots) == 1:
            return roots[0]
        if not roots:
            raise RuleConfigError("Ruleset has no root rule")
        names = ", ".join(sorted(r.name or "?" for r in roots))
        raise RuleConfigError(f"Ruleset has several root rules: {names}")

    def __repr__(self) -> str:
        return f"RuleSet({sorted(self._rules)}, root={self._root!r})"


def _named(name: str, rule: RuleNode) -> RuleNode:
    if not isinstance(rule, RULE_NODE_TYPES):
        raise TypeError(f"RuleSet: rule '{name}' is not a rule node: {type(rule).__name__}")
    if rule.name == name:
        return rule
    return replace(rule, name=name)
