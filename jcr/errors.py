"""
Configuration errors for rule evaluation.

These are grammar or setup defects discovered while evaluating. They are
raised, never folded into a failed Evaluation, so callers can tell a broken
ruleset apart from data that simply does not conform.
"""

from __future__ import annotations


class RuleConfigError(Exception):
    """Base class for ruleset defects found at evaluation time."""


class UnresolvedTargetError(RuleConfigError):
    """A target reference names a rule that is not in the ruleset."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(
            f"Target rule '{target}' not in ruleset. "
            "Rule names should have been checked before evaluation."
        )


class RepetitionError(RuleConfigError):
    """A repetition literal is malformed or the bounds are inverted."""

    def __init__(self, rule_label: str, message: str):
        self.rule_label = rule_label
        super().__init__(f"Invalid repetition on {rule_label}: {message}")


class CyclicReferenceError(RuleConfigError):
    """Named rules reference each other without consuming any data."""

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__(
            "Circular rule reference detected: " + " -> ".join(self.chain)
        )


class RecursionDepthError(RuleConfigError):
    """Evaluation nested deeper than the configured maximum."""

    def __init__(self, max_depth: int, path: str):
        self.max_depth = max_depth
        self.path = path
        super().__init__(
            f"Rule evaluation exceeded max depth {max_depth} at {path}"
        )


class RuleLoadError(RuleConfigError):
    """A ruleset document has an invalid shape."""

    def __init__(self, location: str, message: str):
        self.location = location
        super().__init__(f"Invalid rule at '{location}': {message}")
