"""Sparse-checkout rules: parsing, lookup and caching."""

from .cache import RuleSetCache
from .lookup import CandidatePath, lookup
from .parser import parse_rules
from .rule import Rule, pattern_matches
from .rule_set import FrozenRuleSet, RuleSet

__all__ = [
    "CandidatePath",
    "FrozenRuleSet",
    "Rule",
    "RuleSet",
    "RuleSetCache",
    "lookup",
    "parse_rules",
    "pattern_matches",
]
