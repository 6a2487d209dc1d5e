"""Ordered collection of sparse-checkout rules."""

import logging
import threading
from typing import Iterable, Iterator, List, Sequence, Tuple

from .rule import Rule, could_negate

logger = logging.getLogger(__name__)


class RuleSet:
    """Ordered sequence of rules in pattern-file order.

    Index 0 is the first line of the file. Lookups scan the rules in reverse so
    that, within one directory level, the rule declared last wins.

    Rules are added through add_rule(), which performs dead-rule elimination:
    a negated rule without wildcards is dropped when no earlier rule could be
    negated by it. Wildcarded negations are always kept because their effect
    on other wildcard rules cannot be decided statically.

    The lock attribute guards population of the set; the parser holds it for
    the whole build. Reads take no lock, so a RuleSet must not be read by one
    thread while another is still adding rules. Use snapshot() to hand out a
    copy that will never change.

    Example:
        >>> rules = RuleSet()
        >>> rules.add_rule(Rule.from_line("a.txt"))
        True
        >>> rules.add_rule(Rule.from_line("!b.txt"))
        False
        >>> [str(rule) for rule in rules]
        ['a.txt']
    """

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        """Create a rule set.

        Args:
            rules: Rules to add in order. They go through add_rule(), so dead
                negations among them are dropped.
        """
        self._rules: List[Rule] = []
        self.lock = threading.Lock()
        for rule in rules:
            self.add_rule(rule)

    def add_rule(self, rule: Rule) -> bool:
        """Append a rule unless it is a negation that cannot affect any earlier rule.

        Args:
            rule: The rule to append.

        Returns:
            True if the rule was inserted, False if it was dropped as dead.
        """
        if rule.is_negated and not rule.has_wildcard:
            if not any(could_negate(rule, earlier) for earlier in self._rules):
                logger.debug("Dropping sparse-checkout rule %r: it negates no earlier rule", str(rule))
                return False
        self._rules.append(rule)
        return True

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """The rules in file order."""
        return tuple(self._rules)

    def snapshot(self) -> "FrozenRuleSet":
        """Return an immutable copy of the current rules."""
        return FrozenRuleSet(self._rules)

    def clear(self) -> None:
        self._rules.clear()

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __reversed__(self) -> Iterator[Rule]:
        return reversed(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __getitem__(self, index: int) -> Rule:
        return self._rules[index]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({[str(rule) for rule in self._rules]!r})"


class FrozenRuleSet(RuleSet):
    """A RuleSet that refuses modification once constructed.

    The rules given to the constructor are taken as-is; dead-rule elimination
    has already happened in the set they were copied from.
    """

    def __init__(self, rules: Sequence[Rule] = ()) -> None:
        super().__init__()
        self._rules = list(rules)

    def add_rule(self, rule: Rule) -> bool:
        raise TypeError(f"{self.__class__.__name__} cannot be modified")

    def clear(self) -> None:
        raise TypeError(f"{self.__class__.__name__} cannot be modified")

    def snapshot(self) -> "FrozenRuleSet":
        return self
