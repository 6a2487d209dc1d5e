"""Cache of parsed sparse-checkout files."""

import logging
import os
import threading
from pathlib import Path
from typing import Dict, Optional, Tuple

from gitsparse.pattern_store import read_pattern_text
from gitsparse.types import PathType

from .parser import parse_rules
from .rule_set import FrozenRuleSet

logger = logging.getLogger(__name__)

FileStamp = Optional[Tuple[int, int, int]]


def file_stamp(path: PathType) -> FileStamp:
    """Return (mtime_ns, size, inode) of a file, or None if it does not exist."""
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return None
    return st.st_mtime_ns, st.st_size, st.st_ino


class RuleSetCache:
    """Parsed rule sets keyed by pattern file and case sensitivity.

    get_or_build() returns the cached rule set while the file's modification
    time, size and inode are unchanged, and parses the file again otherwise.
    The check and the build run under one mutex, so concurrent callers for the
    same file parse it once. Callers receive immutable snapshots that can be
    shared between threads without further locking.

    A file rewritten with the same size within the filesystem's timestamp
    granularity is not noticed; call invalidate() after writing if that matters.

    Example:
        >>> import tempfile, os
        >>> with tempfile.NamedTemporaryFile(mode="w", delete=False) as f:
        ...     _ = f.write("/*\\n!/*/\\n")
        >>> cache = RuleSetCache()
        >>> first = cache.get_or_build(f.name)
        >>> cache.get_or_build(f.name) is first
        True
        >>> len(first)
        2
        >>> os.unlink(f.name)
    """

    def __init__(self, lock_timeout: float = -1) -> None:
        """Create an empty cache.

        Args:
            lock_timeout: Passed to parse_rules() for every build.
        """
        self.lock_timeout = lock_timeout
        self._lock = threading.Lock()
        self._entries: Dict[Tuple[str, bool], Tuple[FileStamp, FrozenRuleSet]] = {}

    def get_or_build(self, path: PathType, case_insensitive: bool = False) -> FrozenRuleSet:
        """Return the rule set for a pattern file, parsing it if needed.

        A missing file yields an empty rule set.

        Args:
            path: Location of the pattern file.
            case_insensitive: Flag copied into the parsed rules; part of the key.

        Raises:
            PatternFileError: If the file exists but cannot be read.
            RuleSetLockError: If the parse could not lock its rule set.
        """
        key = (str(Path(path)), case_insensitive)
        with self._lock:
            stamp = file_stamp(path)
            entry = self._entries.get(key)
            if entry is not None and entry[0] == stamp:
                logger.debug("Using cached sparse-checkout rules for %s", key[0])
                return entry[1]

            text = read_pattern_text(path) or ""
            rule_set = parse_rules(text, case_insensitive, lock_timeout=self.lock_timeout).snapshot()
            self._entries[key] = (stamp, rule_set)
            logger.debug("Parsed %d sparse-checkout rule(s) from %s", len(rule_set), key[0])
            return rule_set

    def invalidate(self, path: Optional[PathType] = None) -> None:
        """Forget the cached rules for one file, or for all files if path is None."""
        with self._lock:
            if path is None:
                self._entries.clear()
                return
            name = str(Path(path))
            for key in [key for key in self._entries if key[0] == name]:
                del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)
