"""
Target reference node: a pointer to a named rule in the ruleset.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import RuleBase


@dataclass(frozen=True)
class TargetRef(RuleBase):
    """
    A reference to a named rule, resolved through the ruleset at
    evaluation time.

    Attributes:
        target: Name of the referenced rule

    Examples:
        TargetRef("my_integers")
        TargetRef("my_strings", repetition=Repetition(one_or_more=True))
    """
    kind = "reference"

    target: str

    def __post_init__(self):
        """Validate TargetRef parameters."""
        if not self.target:
            raise ValueError("TargetRef: target is required")

    @property
    def label(self) -> str:
        return f"rule '{self.name or self.target}'"

    def __repr__(self) -> str:
        return f"Ref({self.target!r})"


__all__ = ["TargetRef"]
