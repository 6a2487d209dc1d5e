"""Translate sparse-checkout pattern text into a RuleSet."""

import logging
from typing import Optional

from gitsparse.exceptions import RuleSetLockError
from gitsparse.pattern_store import split_lines

from .rule import Rule
from .rule_set import RuleSet

logger = logging.getLogger(__name__)


def parse_rules(
    text: str,
    case_insensitive: bool = False,
    rule_set: Optional[RuleSet] = None,
    lock_timeout: float = -1,
) -> RuleSet:
    """Parse pattern-file text into an ordered RuleSet.

    Lines that hold no rule (blank lines, comments, malformed patterns) are
    skipped; they never fail the parse. Negations that cannot affect an earlier
    rule are dropped as they are added (see RuleSet.add_rule).

    The rule set's lock is held for the whole parse so that two threads
    populating the same set cannot interleave.

    Args:
        text: Contents of a sparse-checkout file.
        case_insensitive: Copied into every parsed rule.
        rule_set: Destination set. A new RuleSet is created when omitted.
        lock_timeout: Seconds to wait for the rule set's lock; -1 waits forever.

    Returns:
        The populated rule set.

    Raises:
        RuleSetLockError: If the lock could not be acquired in time.

    Example:
        >>> rules = parse_rules("/*\\n!/*/\\n\\n# comment\\n")
        >>> [str(rule) for rule in rules]
        ['/*', '!/*/']
    """
    if rule_set is None:
        rule_set = RuleSet()

    if not rule_set.lock.acquire(timeout=lock_timeout):
        raise RuleSetLockError()

    try:
        for lineno, line in enumerate(split_lines(text), start=1):
            rule = Rule.from_line(line, case_insensitive=case_insensitive)
            if rule is None:
                if line.strip():
                    logger.debug("Skipping sparse-checkout line %d: %r", lineno, line)
                continue
            rule_set.add_rule(rule)
    finally:
        rule_set.lock.release()

    return rule_set
