"""Unit tests for RuleSet and dead-rule elimination."""

import pytest

from gitsparse.rules.lookup import lookup
from gitsparse.rules.rule import Rule
from gitsparse.rules.rule_set import FrozenRuleSet, RuleSet
from gitsparse.types import CheckoutDecision, DirFlag


def build(*lines):
    return RuleSet(Rule.from_line(line) for line in lines)


def patterns(rule_set):
    return [str(rule) for rule in rule_set]


class TestDeadRuleElimination:
    def test_negation_of_unrelated_literal_is_dropped(self):
        assert patterns(build("a.txt", "!b.txt")) == ["a.txt"]

    def test_negation_not_matched_by_wildcard_is_dropped(self):
        assert patterns(build("*.log", "!b.txt")) == ["*.log"]

    def test_negation_matched_by_wildcard_is_kept(self):
        assert patterns(build("*.txt", "!b.txt")) == ["*.txt", "!b.txt"]

    def test_negation_of_identical_literal_is_kept(self):
        assert patterns(build("b.txt", "!b.txt")) == ["b.txt", "!b.txt"]

    def test_negation_inside_included_directory_is_kept(self):
        assert patterns(build("docs/", "!docs/draft.md")) == ["docs/", "!docs/draft.md"]

    def test_wildcard_negation_is_never_dropped(self):
        assert patterns(build("!*.tmp")) == ["!*.tmp"]
        assert patterns(build("a.txt", "!*.tmp")) == ["a.txt", "!*.tmp"]

    def test_negation_with_nothing_before_is_dropped(self):
        assert patterns(build("!b.txt")) == []

    def test_negation_only_checks_earlier_rules(self):
        assert patterns(build("!b.txt", "b.txt")) == ["b.txt"]

    def test_add_rule_reports_outcome(self):
        rule_set = RuleSet()
        assert rule_set.add_rule(Rule.from_line("*.txt")) is True
        assert rule_set.add_rule(Rule.from_line("!b.txt")) is True
        assert rule_set.add_rule(Rule.from_line("!c.log")) is False
        assert len(rule_set) == 2

    def test_non_negated_rules_are_always_kept(self):
        assert patterns(build("a", "a", "b/")) == ["a", "a", "b/"]

    def test_negation_below_directory_matched_by_name_is_kept(self):
        rule_set = build("x", "!y/x/z")
        assert patterns(rule_set) == ["x", "!y/x/z"]
        assert lookup(rule_set, "y/x/z", DirFlag.FALSE) is CheckoutDecision.EXCLUDED
        assert lookup(rule_set, "y/x/w", DirFlag.FALSE) is CheckoutDecision.INCLUDED

    def test_negation_below_wildcard_directory_is_kept(self):
        rule_set = build("/*", "!x/y")
        assert patterns(rule_set) == ["/*", "!x/y"]
        assert lookup(rule_set, "x/y", DirFlag.FALSE) is CheckoutDecision.EXCLUDED


@pytest.mark.parametrize(
    "lines,paths",
    [
        (("x", "!y/x/z"), ["y/x/z", "y/x", "y/x/w", "x", "x/z"]),
        (("/*", "!/*/", "!x/y"), ["x/y", "x/z", "x", "root"]),
        (("a.txt", "!b.txt"), ["b.txt", "a.txt", "d/b.txt", "a.txt/c"]),
        (("*.log", "!b.txt"), ["b.txt", "logs/b.txt", "x.log", "x.log.d/b"]),
        (("docs/", "!docs/draft.md", "!docs/api/old"), ["docs/draft.md", "docs/api/old/a", "docs/api/new"]),
        (("src/", "!src/gen/out.c", "!other/thing"), ["other/thing", "other/thing/x", "src/gen/out.c", "src/a"]),
        (("/a/b/", "!/a/b/c/d", "!/a/x"), ["a/x", "a/x/y", "a/b/c/d/e", "a/b/c"]),
        (("x/foo/bar", "!**/foo", "!y/foo"), ["x/foo/bar", "x/foo/baz", "y/foo", "y/foo/bar"]),
        (("*.txt", "!keep.txt", "!notes/keep.txt", "!ghost"), ["ghost", "a/ghost", "ghost/b.txt", "ghost/readme"]),
    ],
)
def test_elimination_never_changes_lookup(lines, paths):
    """Dropping dead negations gives the same decisions as evaluating every rule."""
    rules = [Rule.from_line(line) for line in lines]
    pruned = RuleSet(rules)
    for path in paths:
        for dir_flag in DirFlag:
            assert lookup(pruned, path, dir_flag) is lookup(rules, path, dir_flag), (path, dir_flag)


class TestRuleSetSequence:
    def test_order_and_reverse_order(self):
        rule_set = build("/*", "!/*/", "docs/")
        assert patterns(rule_set) == ["/*", "!/*/", "docs/"]
        assert [str(rule) for rule in reversed(rule_set)] == ["docs/", "!/*/", "/*"]
        assert str(rule_set[1]) == "!/*/"
        assert rule_set.rules == tuple(rule_set)

    def test_clear(self):
        rule_set = build("/*")
        rule_set.clear()
        assert len(rule_set) == 0

    def test_repr(self):
        assert repr(build("/*")) == "RuleSet(['/*'])"


class TestFrozenRuleSet:
    def test_snapshot_is_independent_copy(self):
        rule_set = build("/*")
        snapshot = rule_set.snapshot()
        rule_set.add_rule(Rule.from_line("docs/"))
        assert patterns(snapshot) == ["/*"]
        assert isinstance(snapshot, FrozenRuleSet)

    def test_snapshot_refuses_modification(self):
        snapshot = build("/*").snapshot()
        with pytest.raises(TypeError):
            snapshot.add_rule(Rule.from_line("docs/"))
        with pytest.raises(TypeError):
            snapshot.clear()

    def test_snapshot_of_snapshot_is_same_object(self):
        snapshot = build("/*").snapshot()
        assert snapshot.snapshot() is snapshot

    def test_frozen_keeps_given_rules_verbatim(self):
        rules = [Rule.from_line("!b.txt")]
        assert patterns(FrozenRuleSet(rules)) == ["!b.txt"]
