"""Unit tests for argmatch.parsing.matchers module.

Tests cover:
- ParamMatcher and OptionMatcher constraints
- Index constraint normalization
- MatcherSet registration, lookup and removal
"""

import re

import pytest

from argmatch.parsing.matchers import MatcherSet, OptionMatcher, ParamMatcher
from argmatch.parsing.models import ArgKind, ValuePolicy
from argmatch.parsing.patterns import TextOrPattern


@pytest.mark.unit
class TestParamMatcher:
    """Test suite for ParamMatcher."""

    def test_unconstrained_accepts_anything(self):
        """A matcher without constraints accepts every parameter."""
        matcher = ParamMatcher()

        assert matcher.accepts("anything", 7, 9, case_sensitive=True)
        assert matcher.kind == ArgKind.PARAM

    def test_text_constraint(self):
        """Text constraints are wrapped in TextOrPattern."""
        matcher = ParamMatcher(text="deploy")

        assert isinstance(matcher.text, TextOrPattern)
        assert matcher.accepts("deploy", 0, 0, case_sensitive=True)
        assert not matcher.accepts("Deploy", 0, 0, case_sensitive=True)
        assert matcher.accepts("Deploy", 0, 0, case_sensitive=False)

    def test_single_index(self):
        """An int index constraint accepts only that index."""
        matcher = ParamMatcher(index=1)

        assert matcher.index == frozenset({1})
        assert matcher.accepts("x", 1, 5, case_sensitive=True)
        assert not matcher.accepts("x", 0, 5, case_sensitive=True)

    def test_several_indices(self):
        """An iterable index constraint accepts any of its indices."""
        matcher = ParamMatcher(index=[0, 2])

        assert matcher.accepts("x", 2, 2, case_sensitive=True)
        assert not matcher.accepts("x", 1, 1, case_sensitive=True)

    def test_arg_index(self):
        """arg_index constrains the absolute argument position."""
        matcher = ParamMatcher(arg_index=1)

        assert matcher.accepts("x", 0, 1, case_sensitive=True)
        assert not matcher.accepts("x", 0, 0, case_sensitive=True)

    def test_negative_index_rejected(self):
        """Indices cannot be negative."""
        with pytest.raises(ValueError):
            ParamMatcher(index=-1)

    def test_bool_index_rejected(self):
        """Booleans are not indices."""
        with pytest.raises(ValueError):
            ParamMatcher(index=[True])

    def test_matchers_are_frozen(self):
        """Matchers cannot be changed after creation."""
        matcher = ParamMatcher(tag="t")

        with pytest.raises(AttributeError):
            matcher.tag = "other"


@pytest.mark.unit
class TestOptionMatcher:
    """Test suite for OptionMatcher."""

    def test_single_code(self):
        """A single code is stored as a one-element tuple."""
        matcher = OptionMatcher(codes="env")

        assert matcher.codes == (TextOrPattern("env"),)
        assert matcher.accepts_code("env", 0, 0, case_sensitive=True)
        assert not matcher.accepts_code("ENV", 0, 0, case_sensitive=True)

    def test_several_codes(self):
        """Any of several codes may match."""
        matcher = OptionMatcher(codes=["v", "verbose"])

        assert matcher.accepts_code("v", 0, 0, case_sensitive=True)
        assert matcher.accepts_code("verbose", 0, 0, case_sensitive=True)
        assert not matcher.accepts_code("q", 0, 0, case_sensitive=True)

    def test_pattern_code(self):
        """Codes can be patterns."""
        matcher = OptionMatcher(codes=re.compile(r"^D\w+$"))

        assert matcher.accepts_code("Dfoo", 0, 0, case_sensitive=True)

    def test_no_code_accepts_any(self):
        """A matcher without codes accepts every option code."""
        assert OptionMatcher().accepts_code("whatever", 3, 3, case_sensitive=True)

    def test_option_index(self):
        """Index constraints apply to the option index."""
        matcher = OptionMatcher(codes="x", index=0)

        assert matcher.accepts_code("x", 0, 4, case_sensitive=True)
        assert not matcher.accepts_code("x", 1, 4, case_sensitive=True)

    def test_value_policy_coerced(self):
        """Value policies may be given by value."""
        matcher = OptionMatcher(codes="x", value_policy="always")

        assert matcher.value_policy == ValuePolicy.ALWAYS

    def test_value_constraint(self):
        """Values are checked against the value constraint."""
        matcher = OptionMatcher(codes="level", value_text=re.compile(r"^\d+$"))

        assert matcher.accepts_value("3", case_sensitive=True)
        assert not matcher.accepts_value("high", case_sensitive=True)

    def test_no_value_constraint(self):
        """Without a value constraint every value is accepted."""
        assert OptionMatcher(codes="x").accepts_value("", case_sensitive=True)

    def test_signature_ignores_tag_and_policy(self):
        """Matchers accepting the same codes at the same indices share a signature."""
        first = OptionMatcher(codes="env", tag="a", value_policy=ValuePolicy.NONE)
        second = OptionMatcher(codes="env", tag="b", value_policy=ValuePolicy.ALWAYS)
        third = OptionMatcher(codes="env", index=0)

        assert first.signature(True) == second.signature(True)
        assert first.signature(True) != third.signature(True)


@pytest.mark.unit
class TestMatcherSet:
    """Test suite for MatcherSet."""

    def test_registration_order_kept(self, matchers):
        """Matchers are kept in the order they were added."""
        option = matchers.add_option_matcher("env", tag="env")
        param = matchers.add_param_matcher(tag="word")

        assert list(matchers) == [option, param]
        assert len(matchers) == 2
        assert matchers[0] is option

    def test_add_param_matcher_arguments(self, matchers):
        """add_param_matcher passes every constraint through."""
        matcher = matchers.add_param_matcher(
            "deploy", 0, "verb", name="verb", help="Verb to run", arg_index=0
        )

        assert matcher.text == TextOrPattern("deploy")
        assert matcher.index == frozenset({0})
        assert matcher.tag == "verb"
        assert matcher.name == "verb"
        assert matcher.help == "Verb to run"
        assert matcher.arg_index == frozenset({0})

    def test_add_option_matcher_arguments(self, matchers):
        """add_option_matcher passes every constraint through."""
        matcher = matchers.add_option_matcher(
            "n",
            None,
            ValuePolicy.ALWAYS,
            re.compile(r"^-?\d+$"),
            True,
            "count",
            name="count",
        )

        assert matcher.value_policy == ValuePolicy.ALWAYS
        assert matcher.allow_value_announcer_start is True
        assert matcher.accepts_value("-5", case_sensitive=True)
        assert matcher.tag == "count"

    def test_kind_views(self, matchers):
        """Matchers can be listed by kind."""
        matchers.add_param_matcher()
        matchers.add_option_matcher("a")
        matchers.add_param_matcher("x")

        assert len(matchers.param_matchers) == 2
        assert len(matchers.option_matchers) == 1

    def test_find_and_remove_by_name(self, matchers):
        """Matchers can be found and removed by name."""
        matchers.add_param_matcher(name="first")
        second = matchers.add_param_matcher(name="second")

        assert matchers.find("second") is second
        assert matchers.find("missing") is None
        assert matchers.remove("first") is True
        assert matchers.remove("first") is False
        assert list(matchers) == [second]

    def test_remove_at_and_clear(self, matchers):
        """Matchers can be removed by position or all at once."""
        first = matchers.add_param_matcher()
        matchers.add_param_matcher()

        assert matchers.remove_at(0) is first
        matchers.clear()
        assert len(matchers) == 0

    def test_snapshot_is_independent(self, matchers):
        """A snapshot does not see later registrations."""
        matchers.add_param_matcher()
        snapshot = matchers.snapshot()
        matchers.add_param_matcher()

        assert len(snapshot) == 1

    def test_initial_matchers(self):
        """A set can be created from existing matchers."""
        matcher = ParamMatcher(tag="t")

        assert list(MatcherSet([matcher])) == [matcher]

    def test_add_rejects_other_objects(self, matchers):
        """Only matchers can be added."""
        with pytest.raises(TypeError):
            matchers.add("not a matcher")
