"""Classify a path against a RuleSet by walking from the path towards the root."""

from typing import Iterable, Iterator, Tuple

from gitsparse.types import CheckoutDecision, DirFlag

from .rule import Rule, pattern_matches


def normalize_path(path: str) -> str:
    """Convert a path to the repository-relative form used for matching.

    Backslashes become forward slashes, and empty and ``.`` segments are
    removed, so leading and trailing slashes disappear.

    Example:
        >>> normalize_path("./src//pkg/")
        'src/pkg'
        >>> normalize_path("/")
        ''
    """
    segments = path.replace("\\", "/").split("/")
    return "/".join(segment for segment in segments if segment not in ("", "."))


class CandidatePath:
    """A path being classified, with a cursor marking the current prefix.

    The path string never changes. The cursor is the end index of the prefix
    currently being evaluated and only ever moves towards the root.

    Attributes:
        path (str): The normalized repository-relative path.
        dir_flag (DirFlag): Directory status of the current prefix.

    Example:
        >>> candidate = CandidatePath("a/b/c.txt", DirFlag.FALSE)
        >>> [(prefix, flag.value) for prefix, flag in candidate.levels()]
        [('a/b/c.txt', 'false'), ('a/b', 'true'), ('a', 'true')]
    """

    def __init__(self, path: str, dir_flag: DirFlag = DirFlag.UNKNOWN) -> None:
        self.path = normalize_path(path)
        self.dir_flag = dir_flag
        self._end = len(self.path)

    @property
    def prefix(self) -> str:
        """The part of the path currently under evaluation."""
        return self.path[: self._end]

    @property
    def basename(self) -> str:
        """The last segment of the current prefix."""
        return self.prefix.rsplit("/", 1)[-1]

    @property
    def at_root(self) -> bool:
        """True once the prefix has no parent directory left to walk to."""
        return "/" not in self.prefix

    def to_parent(self) -> bool:
        """Shorten the prefix to its parent directory and mark it as a directory.

        Returns:
            False if the prefix was already a top-level entry (nothing to shorten).
        """
        cut = self.path.rfind("/", 0, self._end)
        if cut < 0:
            return False
        self._end = cut
        self.dir_flag = DirFlag.TRUE
        return True

    def levels(self) -> Iterator[Tuple[str, DirFlag]]:
        """Yield (prefix, dir_flag) from the full path up to its top-level entry."""
        if not self.path:
            return
        while True:
            yield self.prefix, self.dir_flag
            if not self.to_parent():
                return


def match_level(rules: Iterable[Rule], prefix: str, dir_flag: DirFlag) -> Tuple[bool, CheckoutDecision]:
    """Find the decisive rule for one directory level.

    Args:
        rules: Rules in reverse declaration order.
        prefix: The path prefix to match.
        dir_flag: Directory status of the prefix.

    Returns:
        (matched, decision). decision is meaningful only when matched is True.
    """
    for rule in rules:
        if rule.directory_only and dir_flag is DirFlag.FALSE:
            continue
        if pattern_matches(rule, prefix):
            return True, CheckoutDecision.EXCLUDED if rule.is_negated else CheckoutDecision.INCLUDED
    return False, CheckoutDecision.EXCLUDED


def lookup(rule_set: Iterable[Rule], path: str, dir_flag: DirFlag = DirFlag.UNKNOWN) -> CheckoutDecision:
    """Decide whether a path is part of the sparse checkout.

    At each level, starting with the path itself, the rules are scanned from
    the last declared to the first; the first match decides and ends the walk.
    If nothing matches, the walk moves to the parent directory. Rules matching
    nearer the leaf therefore take priority over rules matching an ancestor,
    and later rules override earlier ones within a level. A path no rule
    matches is excluded.

    Args:
        rule_set: The rules in declaration order (a RuleSet or any sequence of rules).
        path: Repository-relative path. A trailing slash does not by itself mark
            a directory here; pass dir_flag for that.
        dir_flag: Directory status of the path itself. Ancestors are always directories.

    Returns:
        CheckoutDecision.INCLUDED or CheckoutDecision.EXCLUDED.

    Example:
        >>> from gitsparse.rules.parser import parse_rules
        >>> rules = parse_rules("/*\\n!/*/\\n")
        >>> lookup(rules, "root_file", DirFlag.FALSE).value
        'included'
        >>> lookup(rules, "sub/dir_file", DirFlag.FALSE).value
        'excluded'
    """
    reversed_rules = list(rule_set)[::-1]
    candidate = CandidatePath(path, dir_flag)
    for prefix, flag in candidate.levels():
        matched, decision = match_level(reversed_rules, prefix, flag)
        if matched:
            return decision
    return CheckoutDecision.EXCLUDED
