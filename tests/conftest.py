"""
Pytest configuration for rule engine tests.
"""

import pytest

from jcr import EvalContext, RuleEvaluator, RuleSet
from jcr.config import reset_config
from jcr.rule_nodes import (
    ArrayRule,
    GroupRule,
    IntegerRange,
    Repetition,
    StringLiteral,
    TargetRef,
    ValueRule,
)
from tests.helpers import ParityCallback


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Each test sees a config built from a clean environment."""
    for var in ("JCR_TRACE", "JCR_MAX_DEPTH", "JCR_TRACE_PREVIEW", "JCR_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def evaluator() -> RuleEvaluator:
    return RuleEvaluator()


@pytest.fixture
def make_ctx():
    """Factory for evaluation contexts."""
    def _make(ruleset=None, callbacks=None, **kwargs) -> EvalContext:
        return EvalContext(ruleset=ruleset or {}, callbacks=callbacks or {}, **kwargs)
    return _make


@pytest.fixture
def example_ruleset() -> RuleSet:
    """
    [ 2 my_integers, 2 my_strings ]
    my_integers :0..4
    my_strings ( :"foo" | :"bar" )
    """
    return RuleSet(
        {
            "my_integers": ValueRule(IntegerRange(0, 4)),
            "my_strings": GroupRule.choice(
                ValueRule(StringLiteral("foo")),
                ValueRule(StringLiteral("bar")),
            ),
        },
        root=ArrayRule.of(
            TargetRef("my_integers", repetition=Repetition(specific=2)),
            TargetRef("my_strings", repetition=Repetition(specific=2)),
        ),
    )


@pytest.fixture
def parity_callback() -> ParityCallback:
    return ParityCallback()
