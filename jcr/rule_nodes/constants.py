"""
Constants for rule nodes and evaluation.

- Annotation and combinator enums
- Textual annotation tokens as a parser emits them
- Evaluation limits
"""

from __future__ import annotations

from enum import Enum


class Annotation(Enum):
    """Rule modifiers."""
    REJECT = "reject"          # Invert the rule's verdict
    UNORDERED = "unordered"    # Array elements may match in any order
    ROOT = "root"              # Marks the ruleset's entry rule


class Combinator(Enum):
    """How an aggregate entry joins the entry before it."""
    CHOICE = "choice"          # OR: stop at the first success
    SEQUENCE = "sequence"      # AND: stop at the first failure


ANNOTATION_TOKENS = {
    "@{reject}": Annotation.REJECT,
    "@{not}": Annotation.REJECT,
    "@{unordered}": Annotation.UNORDERED,
    "@{root}": Annotation.ROOT,
}

# Hard limit on nested evaluate() calls for one top-level evaluation.
# Each nested call costs up to about 7 interpreter frames, so this stays
# well inside the default recursion limit of 1000.
DEFAULT_MAX_DEPTH = 100

# Data previews in trace output are cut to this many characters
TRACE_PREVIEW_LENGTH = 30

__all__ = [
    "Annotation",
    "Combinator",
    "ANNOTATION_TOKENS",
    "DEFAULT_MAX_DEPTH",
    "TRACE_PREVIEW_LENGTH",
]
