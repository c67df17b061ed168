"""
Ruleset Loader: dict/YAML to rule AST conversion.

Builds a RuleSet from an already structured description of the rule tree.
This is not a parser for the rule language's text syntax; it reads the
tree a parser would produce, written out as plain data.

YAML Schema:
```yaml
root:
  array:
    - ref: my_integers
      repeat: 2
    - ref: my_strings
      repeat: 2

rules:
  my_integers:
    value: {integer: [0, 4]}
  my_strings:
    group:
      choice:
        - value: {literal: foo}
        - value: {literal: bar}
```

Rule kinds (exactly one per rule):
    value:  any | <type name> | {type: ...} | {integer: [low, high]} | {literal: "..."}
    group:  [rules...] | {sequence: [rules...]} | {choice: [rules...]}
    array:  same body forms as group
    object: same body forms as group
    member: {name: "...", rule: <rule>} | {pattern: "...", rule: <rule>}
    ref:    <rule name>

Modifiers (optional on any rule):
    annotations: [reject, unordered, root]
    optional: true | one_or_more: true
    repeat: <n> | "*" | {min: <n>, max: <n>}

Aggregate bodies may start with annotation tokens ("@{unordered}", ...).

Usage:
    ruleset = load_ruleset(yaml.safe_load(text))
    ruleset = load_ruleset_file("rules/example.yaml")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import RuleLoadError
from .evaluation.annotations import partition_annotations
from .rule_nodes import (
    ANNOTATION_TOKENS,
    Annotation,
    AnyValue,
    ArrayRule,
    Combinator,
    GroupRule,
    IntegerRange,
    KeyLiteral,
    KeyPattern,
    MemberRule,
    ObjectRule,
    Repetition,
    RuleEntry,
    RuleNode,
    StringLiteral,
    TargetRef,
    TypeValue,
    ValueRule,
)
from .ruleset import RuleSet


RULE_KINDS = ("value", "group", "array", "object", "member", "ref")

MODIFIER_KEYS = frozenset({"annotations", "optional", "one_or_more", "repeat"})

AGGREGATE_TYPES = {
    "group": GroupRule,
    "array": ArrayRule,
    "object": ObjectRule,
}


# =============================================================================
# Modifiers
# =============================================================================

def parse_annotations(data: Any, where: str) -> frozenset[Annotation]:
    """Parse an annotations list (names or tokens)."""
    if data is None:
        return frozenset()
    if not isinstance(data, list):
        raise RuleLoadError(where, f"annotations must be a list, got {type(data).__name__}")
    result = set()
    for item in data:
        if isinstance(item, str) and item in ANNOTATION_TOKENS:
            result.add(ANNOTATION_TOKENS[item])
            continue
        try:
            result.add(Annotation(item))
        except ValueError:
            valid = [a.value for a in Annotation]
            raise RuleLoadError(where, f"unknown annotation {item!r}. Valid: {valid}") from None
    return frozenset(result)


def parse_repetition(data: dict, where: str) -> Repetition:
    """
    Parse repetition modifiers.

    Literals are kept as written; they are validated when evaluated.
    """
    optional = bool(data.get("optional", False))
    one_or_more = bool(data.get("one_or_more", False))
    repeat = data.get("repeat")

    if repeat is None:
        return Repetition(optional=optional, one_or_more=one_or_more)
    if optional or one_or_more:
        raise RuleLoadError(where, "repeat cannot be combined with optional/one_or_more")
    if repeat == "*":
        return Repetition(interval=True)
    if isinstance(repeat, dict):
        unknown = set(repeat) - {"min", "max"}
        if unknown:
            raise RuleLoadError(where, f"unknown repeat keys: {sorted(unknown)}")
        return Repetition(interval=True, min=repeat.get("min"), max=repeat.get("max"))
    if isinstance(repeat, (int, str)):
        return Repetition(specific=repeat)
    raise RuleLoadError(where, f"invalid repeat value {repeat!r}")


# =============================================================================
# Rule Kinds
# =============================================================================

def parse_value_constraint(data: Any, where: str) -> Any:
    """Parse a value constraint."""
    if data == "any" or data is None:
        return AnyValue()
    if isinstance(data, str):
        data = {"type": data}
    if not isinstance(data, dict) or len(data) != 1:
        raise RuleLoadError(where, f"value must be a type name or a one-key mapping, got {data!r}")

    (kind, arg), = data.items()
    try:
        if kind == "type":
            return TypeValue(arg)
        if kind == "integer":
            if not isinstance(arg, list) or len(arg) != 2:
                raise RuleLoadError(where, "integer range must be [low, high]")
            return IntegerRange(arg[0], arg[1])
        if kind == "literal":
            if not isinstance(arg, str):
                raise RuleLoadError(where, "literal must be a string")
            return StringLiteral(arg)
    except ValueError as e:
        raise RuleLoadError(where, str(e)) from e
    raise RuleLoadError(where, f"unknown value constraint '{kind}'")


def parse_body(
    data: Any,
    where: str,
) -> tuple[frozenset[Annotation], tuple[RuleEntry, ...]]:
    """
    Parse an aggregate body into its leading annotations and entries.

    Accepts a list (sequence), or {sequence: [...]} / {choice: [...]}.
    """
    combinator = Combinator.SEQUENCE
    if isinstance(data, dict):
        if len(data) != 1 or next(iter(data)) not in ("sequence", "choice"):
            raise RuleLoadError(where, "body mapping must be {sequence: [...]} or {choice: [...]}")
        (key, data), = data.items()
        combinator = Combinator(key)
    if data is None:
        data = []
    if not isinstance(data, list):
        raise RuleLoadError(where, f"body must be a list, got {type(data).__name__}")

    annotations, body = partition_annotations(data)
    entries = tuple(
        RuleEntry(parse_rule(item, f"{where}[{i}]"), combinator)
        for i, item in enumerate(body, start=len(annotations))
    )
    return frozenset(annotations), entries


def parse_member(data: Any, where: str) -> tuple[Any, RuleNode]:
    """Parse a member's key matcher and value rule."""
    if not isinstance(data, dict) or "rule" not in data:
        raise RuleLoadError(where, "member requires 'rule' and one of 'name'/'pattern'")
    if ("name" in data) == ("pattern" in data):
        raise RuleLoadError(where, "member requires exactly one of 'name'/'pattern'")
    try:
        key = KeyLiteral(data["name"]) if "name" in data else KeyPattern(data["pattern"])
    except ValueError as e:
        raise RuleLoadError(where, str(e)) from e
    return key, parse_rule(data["rule"], f"{where}.rule")


def parse_rule(data: Any, where: str = "root") -> RuleNode:
    """
    Parse one rule description into a rule node.

    Args:
        data: Rule mapping (see module docstring).
        where: Location used in error messages.

    Returns:
        The rule node.

    Raises:
        RuleLoadError: If the description is malformed.
    """
    if not isinstance(data, dict):
        raise RuleLoadError(where, f"rule must be a mapping, got {type(data).__name__}")

    kinds = [k for k in RULE_KINDS if k in data]
    if len(kinds) != 1:
        raise RuleLoadError(where, f"rule must have exactly one of {list(RULE_KINDS)}, got {kinds}")
    kind = kinds[0]

    unknown = set(data) - MODIFIER_KEYS - {kind}
    if unknown:
        raise RuleLoadError(where, f"unknown keys: {sorted(unknown)}")

    annotations = parse_annotations(data.get("annotations"), where)
    repetition = parse_repetition(data, where)
    arg = data[kind]

    if kind == "value":
        return ValueRule(
            parse_value_constraint(arg, where),
            annotations=annotations,
            repetition=repetition,
        )
    elif kind == "ref":
        if not isinstance(arg, str) or not arg:
            raise RuleLoadError(where, "ref must be a rule name")
        return TargetRef(arg, annotations=annotations, repetition=repetition)
    elif kind == "member":
        key, rule = parse_member(arg, where)
        return MemberRule(key, rule, annotations=annotations, repetition=repetition)
    else:
        body_annotations, entries = parse_body(arg, f"{where}.{kind}")
        return AGGREGATE_TYPES[kind](
            entries=entries,
            annotations=annotations | body_annotations,
            repetition=repetition,
        )


# =============================================================================
# Rulesets
# =============================================================================

def load_ruleset(data: dict) -> RuleSet:
    """
    Build a RuleSet from a ruleset mapping with optional `root` and
    `rules` keys.
    """
    if not isinstance(data, dict):
        raise RuleLoadError("ruleset", f"expected a mapping, got {type(data).__name__}")
    unknown = set(data) - {"root", "rules"}
    if unknown:
        raise RuleLoadError("ruleset", f"unknown keys: {sorted(unknown)}")

    rules_data = data.get("rules") or {}
    if not isinstance(rules_data, dict):
        raise RuleLoadError("rules", "rules must be a mapping of name -> rule")

    rules = {
        str(name): parse_rule(rule, f"rules.{name}")
        for name, rule in rules_data.items()
    }
    root = parse_rule(data["root"], "root") if data.get("root") is not None else None
    return RuleSet(rules, root=root)


def load_ruleset_file(path: str | Path) -> RuleSet:
    """Load a RuleSet from a YAML (or JSON) file."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return load_ruleset(data)
