"""Per-operation handle on a repository's sparse-checkout state."""

import logging
from types import TracebackType
from typing import Optional, Type

from gitsparse.pattern_store import PatternStore
from gitsparse.repository import Repository
from gitsparse.rules.cache import RuleSetCache
from gitsparse.rules.lookup import lookup
from gitsparse.rules.parser import parse_rules
from gitsparse.rules.rule_set import RuleSet
from gitsparse.types import CheckoutDecision, DirFlag

logger = logging.getLogger(__name__)


class SparseConfig:
    """Bundle of repository, case-sensitivity flag, pattern file and parsed rules.

    A SparseConfig lives for one logical operation. The ``core.ignorecase``
    setting is read once, when the handle is created. The rules are parsed on
    first use, either directly from the pattern file or through a
    RuleSetCache, and released by close(). Use it as a context manager so the
    rules are released on every exit path.

    Attributes:
        repository (Repository): The repository the handle belongs to.
        ignore_case (bool): Value of ``core.ignorecase`` at construction.
        store (PatternStore): Text-level access to the pattern file.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     repo = Repository.init(tmpdir)
        ...     with SparseConfig(repo) as sparse:
        ...         sparse.store.set(["/*", "!/*/"])
        ...         sparse.lookup("README", DirFlag.FALSE).value
        'included'
    """

    def __init__(self, repository: Repository, cache: Optional[RuleSetCache] = None) -> None:
        """Create a handle.

        Args:
            repository: The repository to operate on.
            cache: Optional cache to take parsed rules from. Without one, the
                pattern file is parsed for this handle alone.

        Raises:
            ConfigError: If ``core.ignorecase`` cannot be read.
        """
        self.repository = repository
        self.ignore_case = repository.ignore_case()
        self.store = PatternStore(repository.sparse_checkout_file)
        self._cache = cache
        self._rules: Optional[RuleSet] = None

    @property
    def rules(self) -> RuleSet:
        """The parsed rules of the pattern file; a missing file gives an empty set.

        Raises:
            PatternFileError: If the pattern file cannot be read.
            RuleSetLockError: If the rule set cannot be locked for parsing.
        """
        if self._rules is None:
            if self._cache is not None:
                self._rules = self._cache.get_or_build(self.store.path, self.ignore_case)
            else:
                self._rules = parse_rules(self.store.read_text(), self.ignore_case)
        return self._rules

    def lookup(self, path: str, dir_flag: DirFlag = DirFlag.UNKNOWN) -> CheckoutDecision:
        """Classify a path against the pattern file's rules."""
        return lookup(self.rules, path, dir_flag)

    def close(self) -> None:
        """Release the parsed rules. Cached rule sets stay in their cache."""
        if self._rules is not None and self._cache is None:
            self._rules.clear()
        self._rules = None

    def __enter__(self) -> "SparseConfig":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
