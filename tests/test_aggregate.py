"""
Tests for group, array, object and member evaluation.

Validates that:
1. Choice bodies stop at the first success, sequence bodies at the first failure
2. Entry match counts are checked against their repetition
3. Ordered arrays consume elements positionally, unordered arrays anywhere
4. Elements are claimed as soon as they match, even by a failing alternative
5. Objects allow unmatched members, arrays do not
6. Groups inside arrays and objects match over the enclosing elements
"""

import pytest

from jcr import RuleSet
from jcr.rule_nodes import (
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
    StringLiteral,
    TargetRef,
    TypeValue,
    ValueRule,
)
from tests.helpers import CountingCallback

UNORDERED = frozenset({Annotation.UNORDERED})


def integer(**fields) -> ValueRule:
    return ValueRule(TypeValue("integer"), **fields)


def string(**fields) -> ValueRule:
    return ValueRule(TypeValue("string"), **fields)


@pytest.fixture
def foo_bar_ruleset() -> RuleSet:
    return RuleSet({
        "foo": ValueRule(StringLiteral("foo")),
        "bar": ValueRule(StringLiteral("bar")),
    })


# =============================================================================
# Groups
# =============================================================================

class TestGroupRule:
    """Test groups evaluated against a single datum."""

    def test_choice_stops_at_first_success(self, evaluator, make_ctx, foo_bar_ruleset):
        foo_cb, bar_cb = CountingCallback(), CountingCallback()
        ctx = make_ctx(foo_bar_ruleset, {"foo": foo_cb, "bar": bar_cb})
        rule = GroupRule.choice(TargetRef("foo"), TargetRef("bar"))

        assert evaluator.evaluate(rule, "$", "foo", ctx).success
        assert foo_cb.successes == ["foo"]
        assert bar_cb.calls == 0

    def test_choice_tries_next_alternative(self, evaluator, make_ctx, foo_bar_ruleset):
        foo_cb, bar_cb = CountingCallback(), CountingCallback()
        ctx = make_ctx(foo_bar_ruleset, {"foo": foo_cb, "bar": bar_cb})
        rule = GroupRule.choice(TargetRef("foo"), TargetRef("bar"))

        assert evaluator.evaluate(rule, "$", "bar", ctx).success
        assert len(foo_cb.failures) == 1
        assert bar_cb.successes == ["bar"]

    def test_choice_fails_when_no_alternative_matches(self, evaluator, make_ctx, foo_bar_ruleset):
        rule = GroupRule.choice(TargetRef("foo"), TargetRef("bar"))
        result = evaluator.evaluate(rule, "$", "baz", make_ctx(foo_bar_ruleset))
        assert not result.success
        assert "'baz' is not 'bar'" in result.reason

    def test_sequence_stops_at_first_failure(self, evaluator, make_ctx, foo_bar_ruleset):
        foo_cb, bar_cb = CountingCallback(), CountingCallback()
        ctx = make_ctx(foo_bar_ruleset, {"foo": foo_cb, "bar": bar_cb})
        rule = GroupRule.of(TargetRef("bar"), TargetRef("foo"))

        assert not evaluator.evaluate(rule, "$", "foo", ctx).success
        assert len(bar_cb.failures) == 1
        assert foo_cb.calls == 0

    def test_sequence_requires_every_entry(self, evaluator, make_ctx):
        rule = GroupRule.of(string(), ValueRule(StringLiteral("foo")))
        assert evaluator.evaluate(rule, "$", "foo", make_ctx()).success
        assert not evaluator.evaluate(rule, "$", "bar", make_ctx()).success

    def test_empty_group_succeeds(self, evaluator, make_ctx):
        assert evaluator.evaluate(GroupRule.of(), "$", {"any": 1}, make_ctx()).success

    def test_mixed_combinators_rejected(self):
        with pytest.raises(ValueError, match="single combinator"):
            GroupRule(entries=(
                RuleEntry(string()),
                RuleEntry(integer(), Combinator.SEQUENCE),
                RuleEntry(ValueRule(AnyValue()), Combinator.CHOICE),
            ))

    def test_group_inside_array_is_repeated_over_elements(self, evaluator, make_ctx):
        rule = ArrayRule.of(
            GroupRule.choice(integer(), string(), repetition=Repetition(interval=True)),
        )
        assert evaluator.evaluate(rule, "$", [1, "a", 2], make_ctx()).success
        result = evaluator.evaluate(rule, "$", [1, None], make_ctx())
        assert not result.success
        assert "has 1 more items than specified" in result.reason


# =============================================================================
# Arrays
# =============================================================================

class TestOrderedArray:
    """Test positional matching of array elements."""

    def test_elements_in_order(self, evaluator, make_ctx):
        rule = ArrayRule.of(string(), integer())
        assert evaluator.evaluate(rule, "$", ["a", 1], make_ctx()).success

    def test_elements_out_of_order(self, evaluator, make_ctx):
        rule = ArrayRule.of(string(), integer())
        result = evaluator.evaluate(rule, "$", [1, "a"], make_ctx())
        assert not result.success
        assert result.reason == "array at $ does not contain value rule"

    def test_leftover_elements_fail(self, evaluator, make_ctx):
        rule = ArrayRule.of(string(), integer())
        result = evaluator.evaluate(rule, "$", ["a", 1, 2], make_ctx())
        assert not result.success
        assert result.reason == "array at $ has 1 more items than specified"

    def test_not_an_array(self, evaluator, make_ctx):
        result = evaluator.evaluate(ArrayRule.of(string()), "$", {"a": 1}, make_ctx())
        assert not result.success
        assert "is not an array at $" in result.reason

    def test_empty_rule_accepts_empty_array(self, evaluator, make_ctx):
        assert evaluator.evaluate(ArrayRule.of(), "$", [], make_ctx()).success

    def test_empty_rule_rejects_elements(self, evaluator, make_ctx):
        result = evaluator.evaluate(ArrayRule.of(), "$", [1], make_ctx())
        assert result.reason == "Non-empty array at $ where empty expected"

    def test_one_or_more(self, evaluator, make_ctx):
        rule = ArrayRule.of(integer(repetition=Repetition(one_or_more=True)))
        assert evaluator.evaluate(rule, "$", [1, 2, 3], make_ctx()).success
        assert not evaluator.evaluate(rule, "$", [], make_ctx()).success

    def test_zero_or_more_then_string(self, evaluator, make_ctx):
        rule = ArrayRule.of(integer(repetition=Repetition(interval=True)), string())
        assert evaluator.evaluate(rule, "$", [1, 2, "a"], make_ctx()).success
        assert evaluator.evaluate(rule, "$", ["a"], make_ctx()).success

    def test_exact_count(self, evaluator, make_ctx):
        rule = ArrayRule.of(integer(repetition=Repetition(specific=2)))
        assert evaluator.evaluate(rule, "$", [1, 2], make_ctx()).success

        short = evaluator.evaluate(rule, "$", [1], make_ctx())
        assert short.reason == (
            "array at $ does not have enough value rule (found 1, expected 2..2)"
        )

        long = evaluator.evaluate(rule, "$", [1, 2, 3], make_ctx())
        assert long.reason == "array at $ has 1 more items than specified"

    def test_every_required_slot_is_evaluated(self, evaluator, make_ctx):
        callback = CountingCallback()
        ctx = make_ctx(RuleSet({"n": integer()}), {"n": callback})
        rule = ArrayRule.of(TargetRef("n", repetition=Repetition(specific=2)))

        assert not evaluator.evaluate(rule, "$", ["x", 1], ctx).success
        assert callback.calls == 2
        assert callback.successes == [1]

    def test_failed_choice_alternative_keeps_its_matches(self, evaluator, make_ctx):
        rule = ArrayRule.choice(
            integer(repetition=Repetition(specific=2)),
            ValueRule(TypeValue("number")),
        )
        result = evaluator.evaluate(rule, "$", [1], make_ctx())
        assert not result.success
        assert result.reason == "array at $ does not contain value rule"

    def test_repeated_group_of_pairs(self, evaluator, make_ctx):
        rule = ArrayRule.of(
            GroupRule.of(integer(), string(), repetition=Repetition(interval=True)),
        )
        assert evaluator.evaluate(rule, "$", [1, "a", 2, "b"], make_ctx()).success
        assert evaluator.evaluate(rule, "$", [], make_ctx()).success

        result = evaluator.evaluate(rule, "$", [1, "a", "b"], make_ctx())
        assert result.reason == "array at $ has 1 more items than specified"

    def test_nested_array_failure(self, evaluator, make_ctx):
        rule = ArrayRule.of(ArrayRule.of(integer()))
        result = evaluator.evaluate(rule, "$", [["x"]], make_ctx())
        assert not result.success
        assert result.reason == "array at $ does not contain array rule"


class TestUnorderedArray:
    """Test arrays annotated as unordered."""

    def test_elements_in_any_order(self, evaluator, make_ctx):
        rule = ArrayRule.of(string(), integer(), annotations=UNORDERED)
        assert evaluator.evaluate(rule, "$", [1, "a"], make_ctx()).success
        assert evaluator.evaluate(rule, "$", ["a", 1], make_ctx()).success

    def test_unmatched_elements_fail(self, evaluator, make_ctx):
        rule = ArrayRule.of(string(), integer(), annotations=UNORDERED)
        result = evaluator.evaluate(rule, "$", [1, "a", True], make_ctx())
        assert result.reason == "array at $ has 1 more items than specified"

    def test_too_many_matches(self, evaluator, make_ctx):
        rule = ArrayRule.of(integer(), annotations=UNORDERED)
        result = evaluator.evaluate(rule, "$", [1, 2], make_ctx())
        assert not result.success
        assert "has too many value rule (found 2, expected 1..1)" in result.reason

    def test_failed_choice_alternative_keeps_its_matches(self, evaluator, make_ctx):
        rule = ArrayRule.choice(
            integer(repetition=Repetition(specific=2)),
            integer(),
            annotations=UNORDERED,
        )
        result = evaluator.evaluate(rule, "$", [1], make_ctx())
        assert not result.success
        assert result.reason == "array at $ does not contain value rule"


# =============================================================================
# Objects
# =============================================================================

@pytest.fixture
def person_rule() -> ObjectRule:
    """{ "name": string, "age": 0..150 }"""
    return ObjectRule.of(
        MemberRule(KeyLiteral("name"), string()),
        MemberRule(KeyLiteral("age"), ValueRule(IntegerRange(0, 150))),
    )


class TestObjectRule:
    """Test matching object members."""

    def test_matching_object(self, evaluator, make_ctx, person_rule):
        data = {"name": "Ada", "age": 36}
        assert evaluator.evaluate(person_rule, "$", data, make_ctx()).success

    def test_extra_members_allowed(self, evaluator, make_ctx, person_rule):
        data = {"name": "Ada", "age": 36, "email": "ada@example.com"}
        assert evaluator.evaluate(person_rule, "$", data, make_ctx()).success

    def test_missing_member(self, evaluator, make_ctx, person_rule):
        result = evaluator.evaluate(person_rule, "$", {"name": "Ada"}, make_ctx())
        assert not result.success
        assert result.reason == "object at $ does not contain member 'age'"

    def test_invalid_member_value(self, evaluator, make_ctx, person_rule):
        result = evaluator.evaluate(person_rule, "$", {"name": 7, "age": 36}, make_ctx())
        assert not result.success
        assert result.reason == "object at $ does not contain member 'name'"

    def test_not_an_object(self, evaluator, make_ctx, person_rule):
        result = evaluator.evaluate(person_rule, "$", ["name", "age"], make_ctx())
        assert not result.success
        assert "is not an object at $" in result.reason

    def test_optional_member(self, evaluator, make_ctx):
        rule = ObjectRule.of(
            MemberRule(KeyLiteral("nick"), string(), repetition=Repetition(optional=True)),
        )
        assert evaluator.evaluate(rule, "$", {}, make_ctx()).success
        assert evaluator.evaluate(rule, "$", {"nick": "x"}, make_ctx()).success

    def test_pattern_member_count(self, evaluator, make_ctx):
        rule = ObjectRule.of(
            MemberRule(KeyPattern(r"^p\d$"), integer(), repetition=Repetition(specific=2)),
        )
        assert evaluator.evaluate(rule, "$", {"p1": 1, "p2": 2, "q": 0}, make_ctx()).success

        short = evaluator.evaluate(rule, "$", {"p1": 1}, make_ctx())
        assert "does not have enough member /^p\\d$/ (found 1, expected 2..2)" in short.reason

        long = evaluator.evaluate(rule, "$", {"p1": 1, "p2": 2, "p3": 3}, make_ctx())
        assert "has too many member /^p\\d$/ (found 3, expected 2..2)" in long.reason

    def test_empty_object_rule(self, evaluator, make_ctx):
        assert evaluator.evaluate(ObjectRule.of(), "$", {}, make_ctx()).success
        result = evaluator.evaluate(ObjectRule.of(), "$", {"a": 1}, make_ctx())
        assert result.reason == "Non-empty object at $ where empty expected"

    def test_choice_of_members(self, evaluator, make_ctx):
        rule = ObjectRule.choice(
            MemberRule(KeyLiteral("id"), integer()),
            MemberRule(KeyLiteral("uuid"), string()),
        )
        assert evaluator.evaluate(rule, "$", {"uuid": "abc"}, make_ctx()).success
        assert not evaluator.evaluate(rule, "$", {"name": "abc"}, make_ctx()).success

    def test_failed_choice_alternative_keeps_its_members(self, evaluator, make_ctx):
        rule = ObjectRule.choice(
            MemberRule(KeyPattern("^x"), integer(), repetition=Repetition(specific=2)),
            MemberRule(KeyPattern("^x"), ValueRule(AnyValue())),
        )
        result = evaluator.evaluate(rule, "$", {"x1": 1}, make_ctx())
        assert not result.success
        assert result.reason == "object at $ does not contain member /^x/"


class TestObjectGroups:
    """Test groups of members spliced into an object."""

    @pytest.fixture
    def addr_ruleset(self) -> RuleSet:
        """addr ( "street": string, "city": string )"""
        return RuleSet({
            "addr": GroupRule.of(
                MemberRule(KeyLiteral("street"), string()),
                MemberRule(KeyLiteral("city"), string()),
            ),
        })

    def test_group_members_matched_in_object(self, evaluator, make_ctx, addr_ruleset):
        rule = ObjectRule.of(MemberRule(KeyLiteral("name"), string()), TargetRef("addr"))
        data = {"name": "a", "street": "s", "city": "c"}
        assert evaluator.evaluate(rule, "$", data, make_ctx(addr_ruleset)).success

    def test_missing_group_member(self, evaluator, make_ctx, addr_ruleset):
        rule = ObjectRule.of(MemberRule(KeyLiteral("name"), string()), TargetRef("addr"))
        result = evaluator.evaluate(
            rule, "$", {"name": "a", "street": "s"}, make_ctx(addr_ruleset)
        )
        assert not result.success
        assert result.reason == "object at $ does not contain rule 'addr'"

    def test_optional_group(self, evaluator, make_ctx, addr_ruleset):
        rule = ObjectRule.of(
            MemberRule(KeyLiteral("name"), string()),
            TargetRef("addr", repetition=Repetition(optional=True)),
        )
        assert evaluator.evaluate(rule, "$", {"name": "a"}, make_ctx(addr_ruleset)).success

    def test_inline_group(self, evaluator, make_ctx):
        rule = ObjectRule.of(
            GroupRule.choice(
                MemberRule(KeyLiteral("id"), integer()),
                MemberRule(KeyLiteral("uuid"), string()),
            ),
            MemberRule(KeyLiteral("name"), string()),
        )
        assert evaluator.evaluate(rule, "$", {"uuid": "u", "name": "n"}, make_ctx()).success
        assert not evaluator.evaluate(rule, "$", {"name": "n"}, make_ctx()).success

    def test_group_callback_receives_object(self, evaluator, make_ctx, addr_ruleset):
        callback = CountingCallback()
        rule = ObjectRule.of(TargetRef("addr"))
        data = {"street": "s", "city": "c"}
        ctx = make_ctx(addr_ruleset, {"addr": callback})
        assert evaluator.evaluate(rule, "$", data, ctx).success
        assert callback.successes == [data]


class TestMemberRule:
    """Test member rules against (name, value) pairs."""

    @pytest.fixture
    def member(self) -> MemberRule:
        return MemberRule(KeyLiteral("a"), integer())

    def test_matching_member(self, evaluator, make_ctx, member):
        assert evaluator.evaluate(member, "$.a", ("a", 1), make_ctx()).success

    def test_name_mismatch(self, evaluator, make_ctx, member):
        result = evaluator.evaluate(member, "$.b", ("b", 1), make_ctx())
        assert result.reason == "member name 'b' does not match 'a' at $.b"

    def test_invalid_value(self, evaluator, make_ctx, member):
        result = evaluator.evaluate(member, "$.a", ("a", "x"), make_ctx())
        assert result.reason == (
            "member 'a' at $.a is invalid: "
            "value rule failed at $.a: 'x' is not an integer"
        )

    def test_not_a_member(self, evaluator, make_ctx, member):
        result = evaluator.evaluate(member, "$", 5, make_ctx())
        assert result.reason == "5 is not an object member at $"
