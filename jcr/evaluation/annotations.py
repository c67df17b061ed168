"""
Annotation handling: splitting leading annotations from body rules, and
the reject annotation's verdict inversion.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from ..rule_nodes.constants import ANNOTATION_TOKENS, Annotation
from ..types import Evaluation


def _as_annotation(item: Any) -> Annotation | None:
    if isinstance(item, Annotation):
        return item
    if isinstance(item, str):
        return ANNOTATION_TOKENS.get(item.strip())
    return None


def partition_annotations(
    items: Sequence[Any],
) -> tuple[tuple[Annotation, ...], tuple[Any, ...]]:
    """
    Split a rule body into its leading annotations and the body rules.

    Items are scanned in order; Annotation members and annotation tokens
    ("@{reject}", "@{unordered}", "@{root}") are collected until the first
    other item. That item and everything after it are body rules.

    Examples:
        partition_annotations(["@{unordered}", rule_a, rule_b])
        # -> ((Annotation.UNORDERED,), (rule_a, rule_b))
    """
    annotations: list[Annotation] = []
    index = 0
    for item in items:
        annotation = _as_annotation(item)
        if annotation is None:
            break
        annotations.append(annotation)
        index += 1
    return tuple(annotations), tuple(items[index:])


def apply_rejection(
    annotations: Iterable[Annotation],
    evaluation: Evaluation,
) -> Evaluation:
    """
    Invert the verdict when a reject annotation is present.

    A failure flipped to success loses its reason; a success flipped to
    failure keeps the (empty) reason it had.
    """
    if Annotation.REJECT in annotations:
        return evaluation.inverted()
    return evaluation
