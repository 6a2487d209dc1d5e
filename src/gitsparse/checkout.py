"""Public sparse-checkout operations on a repository.

Sparse checkout has two persistent states, stored as ``core.sparseCheckout`` in
the repository configuration: disabled and enabled. The pattern file
(``info/sparse-checkout``) exists independently of that flag; nothing here
ever deletes it, and disabling sparse checkout leaves it untouched.

Example:
    >>> import tempfile
    >>> with tempfile.TemporaryDirectory() as tmpdir:
    ...     checkout = SparseCheckout(Repository.init(tmpdir))
    ...     checkout.check_path("sub/file.txt").value
    ...     checkout.init()
    ...     checkout.list_patterns()
    ...     checkout.check_path("sub/file.txt").value
    'included'
    ['/*', '!/*/']
    'excluded'
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from gitsparse.pattern_store import PatternStore
from gitsparse.repository import SPARSE_CHECKOUT_KEY, Repository
from gitsparse.rules.cache import RuleSetCache
from gitsparse.rules.lookup import normalize_path
from gitsparse.sparse_config import SparseConfig
from gitsparse.types import CheckoutDecision, DirFlag

logger = logging.getLogger(__name__)

# Every entry in the root directory, no subdirectories
DEFAULT_PATTERNS = ("/*", "!/*/")


@dataclass
class InitOptions:
    """Options for SparseCheckout.init().

    Attributes:
        patterns: Patterns to write when the pattern file does not exist yet.
            When None, DEFAULT_PATTERNS are written.
    """

    patterns: Optional[Sequence[str]] = None


class SparseCheckout:
    """Sparse-checkout operations on one repository.

    Each call reads the configuration and the pattern file afresh; nothing is
    kept between calls except the optional RuleSetCache.

    Concurrent writers are not coordinated. set_patterns() and add_patterns()
    rewrite the pattern file in place, so with several writers the last one
    wins and earlier additions can be lost.

    Attributes:
        repository (Repository): The repository operated on.
        cache (Optional[RuleSetCache]): Cache used by check_path(), if any.
    """

    def __init__(self, repository: Repository, cache: Optional[RuleSetCache] = None) -> None:
        self.repository = repository
        self.cache = cache

    @property
    def store(self) -> PatternStore:
        return PatternStore(self.repository.sparse_checkout_file)

    def is_enabled(self) -> bool:
        """Return the ``core.sparseCheckout`` setting; False when unset."""
        return self.repository.config.get_bool(SPARSE_CHECKOUT_KEY, False)

    def init(self, options: Optional[InitOptions] = None) -> None:
        """Enable sparse checkout and create the pattern file if it does not exist.

        A newly created file receives options.patterns, or DEFAULT_PATTERNS
        when no patterns were given. An existing file is never modified, so
        calling init() again is harmless.

        Raises:
            ConfigError: If the setting cannot be written.
            PatternFileError: If the pattern file cannot be created or written.
        """
        options = options or InitOptions()
        self.repository.config.set_bool(SPARSE_CHECKOUT_KEY, True)

        store = self.store
        if store.create():
            logger.debug("Keeping existing sparse-checkout file %s", store.path)
            return

        patterns = DEFAULT_PATTERNS if options.patterns is None else options.patterns
        store.set(list(patterns))

    def disable(self) -> None:
        """Turn sparse checkout off. The pattern file and the working tree are left as they are.

        Raises:
            ConfigError: If the setting cannot be written.
        """
        self.repository.config.set_bool(SPARSE_CHECKOUT_KEY, False)

    def list_patterns(self) -> List[str]:
        """Return the patterns of the pattern file in order; a missing file gives an empty list.

        Raises:
            PatternFileError: If the file cannot be read.
        """
        return self.store.list()

    def set_patterns(self, patterns: Sequence[str]) -> None:
        """Replace the pattern file's contents, enabling sparse checkout first if needed.

        Raises:
            ConfigError: If the configuration cannot be read or written.
            PatternFileError: If the pattern file cannot be written.
        """
        if not self.is_enabled():
            self.init()
        self.store.set(patterns)

    def add_patterns(self, patterns: Sequence[str]) -> None:
        """Append patterns to the pattern file. Does nothing while sparse checkout is disabled.

        Raises:
            ConfigError: If the configuration cannot be read.
            PatternFileError: If the pattern file cannot be read or written.
        """
        if not self.is_enabled():
            logger.debug("Sparse checkout is disabled; not adding %d pattern(s)", len(patterns))
            return
        self.store.add(patterns)

    def dir_flag(self, path: str) -> DirFlag:
        """Determine whether path names a directory.

        The root is always a directory and a trailing slash marks one. In a
        bare repository anything else counts as a file. Otherwise the working
        tree is consulted; paths that do not exist count as files.
        """
        normalized = normalize_path(path)
        if not normalized or path.replace("\\", "/").endswith("/"):
            return DirFlag.TRUE
        workdir = self.repository.workdir
        if workdir is None:
            return DirFlag.FALSE
        return DirFlag.TRUE if (workdir / normalized).is_dir() else DirFlag.FALSE

    def check_path(self, path: str) -> CheckoutDecision:
        """Decide whether a repository-relative path belongs in the sparse checkout.

        Every path is included while sparse checkout is disabled.

        Raises:
            ConfigError: If the configuration cannot be read.
            PatternFileError: If the pattern file cannot be read.
            RuleSetLockError: If the rules cannot be locked for parsing.
        """
        if not self.is_enabled():
            return CheckoutDecision.INCLUDED

        with SparseConfig(self.repository, self.cache) as sparse:
            return sparse.lookup(path, self.dir_flag(path))


def sparse_checkout_init(repository: Repository, options: Optional[InitOptions] = None) -> None:
    SparseCheckout(repository).init(options)


def sparse_checkout_list(repository: Repository) -> List[str]:
    return SparseCheckout(repository).list_patterns()


def sparse_checkout_set(repository: Repository, patterns: Sequence[str]) -> None:
    SparseCheckout(repository).set_patterns(patterns)


def sparse_checkout_add(repository: Repository, patterns: Sequence[str]) -> None:
    SparseCheckout(repository).add_patterns(patterns)


def sparse_checkout_disable(repository: Repository) -> None:
    SparseCheckout(repository).disable()


def sparse_check_path(
    repository: Repository, path: str, cache: Optional[RuleSetCache] = None
) -> CheckoutDecision:
    return SparseCheckout(repository, cache).check_path(path)
