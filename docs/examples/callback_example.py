#!/usr/bin/env python3
"""
Example: Validating JSON with a ruleset and callbacks

Key features demonstrated:
- Loading a ruleset from YAML
- Overriding a named rule's verdict with a callback
- Tracing an evaluation
"""

import sys
from pathlib import Path

sys.path.insert(0, ".")

from jcr import CallbackHandler, Validator, load_ruleset_file
from jcr.utils.debug import enable_trace
from jcr.utils.logger import setup_logger

RULES = Path(__file__).with_name("example_rules.yaml")


class EvenIntegers(CallbackHandler):
    """Accept only even integers, whatever the range check said."""

    def __init__(self):
        self.calls = 0

    def on_success(self, rule, data):
        self.calls += 1
        return isinstance(data, int) and data % 2 == 0

    def on_failure(self, rule, data, evaluation):
        self.calls += 1
        return isinstance(data, int) and data % 2 == 0


def example_1_basic_validation():
    """Validate documents against the root rule."""
    print("\n=== Example 1: Basic Validation ===\n")

    validator = Validator(load_ruleset_file(RULES))
    for text in ('[2, 4, "foo", "bar"]', '[1, 2, "foo", "baz"]'):
        result = validator.evaluate_json(text)
        print(f"{text}: {result.success} {result.reason or ''}")


def example_2_callbacks():
    """Override my_integers with a parity check."""
    print("\n=== Example 2: Callbacks ===\n")

    handler = EvenIntegers()
    validator = Validator(load_ruleset_file(RULES), {"my_integers": handler})
    for data in ([2, 4, "foo", "bar"], [3, 4, "foo", "bar"]):
        result = validator.evaluate(data)
        print(f"{data}: {result.success} (callback calls so far: {handler.calls})")


def example_3_trace():
    """Print every evaluation step."""
    print("\n=== Example 3: Trace ===\n")

    setup_logger("DEBUG")
    enable_trace()
    Validator(load_ruleset_file(RULES)).evaluate([0, 2, "bar", "foo"])


if __name__ == "__main__":
    example_1_basic_validation()
    example_2_callbacks()
    example_3_trace()
