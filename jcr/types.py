"""
Rule evaluation type definitions.

Dataclasses shared by every evaluator: the verdict and the occurrence bounds.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Evaluation:
    """
    Result of evaluating a rule against data.

    Contains:
    - success: Whether the data conforms to the rule
    - reason: Human-readable explanation when it does not
    """

    success: bool
    reason: str | None = None

    @classmethod
    def passed(cls) -> "Evaluation":
        """Create a successful evaluation."""
        return cls(success=True, reason=None)

    @classmethod
    def failed(cls, reason: str | None = None) -> "Evaluation":
        """Create a failed evaluation."""
        return cls(success=False, reason=reason)

    def inverted(self) -> "Evaluation":
        """Flip the verdict. A flip to success carries no reason."""
        if self.success:
            return Evaluation(success=False, reason=self.reason)
        return Evaluation(success=True, reason=None)

    def to_dict(self) -> dict:
        """Convert to dict for logging/serialization."""
        return {
            "success": self.success,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Cardinality:
    """
    Allowed occurrence count for a rule inside an aggregate.

    Attributes:
        min: Minimum number of matches (inclusive)
        max: Maximum number of matches (inclusive), None for unbounded

    Examples:
        Cardinality()          # exactly once
        Cardinality(0, 1)      # optional
        Cardinality(1, None)   # one or more
    """

    min: int = 1
    max: int | None = 1

    def __post_init__(self):
        """Validate bounds."""
        if self.min < 0:
            raise ValueError(f"Cardinality: min must be >= 0, got {self.min}")
        if self.max is not None:
            if self.max < 0:
                raise ValueError(f"Cardinality: max must be >= 0, got {self.max}")
            if self.min > self.max:
                raise ValueError(
                    f"Cardinality: min ({self.min}) must be <= max ({self.max})"
                )

    @property
    def unbounded(self) -> bool:
        return self.max is None

    def allows_more(self, count: int) -> bool:
        """Whether one more match than `count` still fits under max."""
        return self.max is None or count < self.max

    def __str__(self) -> str:
        upper = "*" if self.max is None else str(self.max)
        return f"{self.min}..{upper}"


EXACTLY_ONCE = Cardinality(1, 1)
