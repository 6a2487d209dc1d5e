"""A single sparse-checkout rule and the pattern-matching primitive behind it.

Glob matching is delegated to the pathspec library's gitignore patterns. Those
patterns also match every path underneath a matched directory, while a rule in
a sparse-checkout file only decides the path it matches itself; ancestors are
handled by the lookup walk. pattern_matches() therefore requires the compiled
gitignore regex to match the whole of the current path prefix.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pathspec import PathSpec

logger = logging.getLogger(__name__)

WILDCARD_CHARS = frozenset("*?[")


@lru_cache(maxsize=4096)
def _compile(pattern: str) -> PathSpec:
    return PathSpec.from_lines("gitignore", [pattern])


def _strip_trailing_whitespace(text: str) -> str:
    stripped = text.rstrip(" \t")
    if len(stripped) == len(text):
        return text
    # "foo\ " keeps its escaped space
    backslashes = len(stripped) - len(stripped.rstrip("\\"))
    if backslashes % 2:
        return text[: len(stripped) + 1]
    return stripped


@dataclass(frozen=True)
class Rule:
    """One parsed line of a sparse-checkout file.

    Attributes:
        pattern: The pattern body with the leading ``!`` and trailing ``/``
            removed. Leading ``/`` is kept; it anchors the pattern to the root.
        is_negated: The line started with ``!``. A matching negated rule
            excludes the path.
        directory_only: The line ended with ``/``. The rule is skipped for
            paths that are known not to be directories.
        has_wildcard: The pattern contains glob metacharacters. Wildcarded
            negations are never removed by dead-rule elimination.
        case_insensitive: Match without regard to case (``core.ignorecase``).

    Example:
        >>> rule = Rule.from_line("!/*/")
        >>> rule.pattern, rule.is_negated, rule.directory_only, rule.has_wildcard
        ('/*', True, True, True)
        >>> str(rule)
        '!/*/'
        >>> Rule.from_line("# a comment") is None
        True
    """

    pattern: str
    is_negated: bool = False
    directory_only: bool = False
    has_wildcard: bool = False
    case_insensitive: bool = False

    @classmethod
    def from_line(cls, line: str, case_insensitive: bool = False) -> Optional["Rule"]:
        """Parse one line of pattern text.

        Leading whitespace is ignored, trailing whitespace is ignored unless it
        is escaped with a backslash, and spaces inside the pattern are kept.

        Args:
            line: A single line without its line terminator.
            case_insensitive: Value copied into the rule's case_insensitive flag.

        Returns:
            The parsed Rule, or None when the line holds no rule (blank lines,
            comments, a lone ``!`` or ``/``, or a pattern pathspec rejects).
        """
        text = _strip_trailing_whitespace(line.lstrip(" \t"))
        if not text or text.startswith("#"):
            return None

        is_negated = text.startswith("!")
        if is_negated:
            text = text[1:]

        directory_only = text.endswith("/")
        if directory_only:
            text = text.rstrip("/")

        if not text:
            return None

        try:
            _compile("/" + text.lstrip("/"))
        except ValueError as e:
            logger.debug("Skipping invalid sparse-checkout pattern %r: %s", line, e)
            return None

        return cls(
            pattern=text,
            is_negated=is_negated,
            directory_only=directory_only,
            has_wildcard=any(c in WILDCARD_CHARS for c in text),
            case_insensitive=case_insensitive,
        )

    @property
    def full_path(self) -> bool:
        """True if the pattern is matched against the whole path rather than the final segment."""
        return "/" in self.pattern

    def __str__(self) -> str:
        return f"{'!' if self.is_negated else ''}{self.pattern}{'/' if self.directory_only else ''}"


def _matches_exactly(anchored: str, path: str) -> bool:
    regex = _compile(anchored).patterns[0].regex
    # A trailing "/**" spans every descendant; "**/*" compiles to a match-all "."
    if anchored.endswith("/**") or regex.pattern == ".":
        return regex.search(path) is not None
    return regex.fullmatch(path) is not None


def pattern_matches(rule: Rule, path: str) -> bool:
    """Check whether a rule's pattern matches a path exactly.

    Patterns containing a slash are anchored at the repository root and must
    match the whole path; a match that only exists because an ancestor of the
    path matches does not count. This holds for ``**`` inside a pattern too:
    ``**/foo`` matches ``a/foo`` but not ``a/foo/bar``. Only a trailing ``/**``
    matches everything below its directory. Patterns without a slash are
    matched against the last path segment.

    Args:
        rule: The rule to test. Its directory_only flag is not consulted here.
        path: A normalized repository-relative path without leading or
            trailing slashes.

    Returns:
        True if the pattern matches the path.

    Example:
        >>> pattern_matches(Rule("/*"), "root_file")
        True
        >>> pattern_matches(Rule("/*"), "sub/dir_file")
        False
        >>> pattern_matches(Rule("*.txt"), "docs/readme.txt")
        True
        >>> pattern_matches(Rule("**/foo"), "x/foo/bar")
        False
        >>> pattern_matches(Rule("README", case_insensitive=True), "readme")
        True
    """
    pattern = rule.pattern
    if rule.case_insensitive:
        pattern, path = pattern.lower(), path.lower()

    if not rule.full_path:
        return _matches_exactly("/" + pattern, path.rsplit("/", 1)[-1])
    return _matches_exactly("/" + pattern.lstrip("/"), path)


def could_negate(negation: Rule, earlier: Rule) -> bool:
    """Check whether a negated rule can override the result of an earlier rule.

    Used to discard negations that can never change a lookup. A negation is
    live when the earlier rule matches the negated path itself or one of the
    directories above it, since the lookup walk would otherwise reach that
    directory and apply the earlier rule. For earlier rules without wildcards
    the check is textual: the two patterns are equal, one ends with ``/`` plus
    the other, the negated path lies inside the path the earlier rule names,
    or a single-segment earlier rule names one of the negated path's
    directories. An earlier wildcarded rule is compiled with gitignore
    semantics and tested against the negated path and each of its parents.

    A single-segment negation is only checked against earlier rules for the
    same name; a directory named after an earlier rule is not assumed.

    Args:
        negation: A negated rule without wildcards.
        earlier: A rule already in the rule set.

    Returns:
        True if the negation may affect paths that the earlier rule matches.

    Example:
        >>> could_negate(Rule("b.txt", is_negated=True), Rule("*.txt", has_wildcard=True))
        True
        >>> could_negate(Rule("b.txt", is_negated=True), Rule("a.txt"))
        False
        >>> could_negate(Rule("y/x/z", is_negated=True), Rule("x"))
        True
    """
    neg = negation.pattern.lstrip("/")
    other = earlier.pattern.lstrip("/")
    if negation.case_insensitive:
        neg, other = neg.lower(), other.lower()

    if not earlier.has_wildcard:
        if neg == other:
            return True
        longer, shorter = (neg, other) if len(neg) > len(other) else (other, neg)
        if longer.endswith("/" + shorter) or neg.startswith(other + "/"):
            return True
        return not earlier.full_path and other in neg.split("/")[:-1]

    spec = _compile("/" + other if earlier.full_path else "**/" + other)
    segments = neg.split("/")
    return any(spec.match_file("/".join(segments[:end])) for end in range(len(segments), 0, -1))
