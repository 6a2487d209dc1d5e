"""Text-level access to the sparse-checkout pattern file.

The operations here work on the raw lines of the file and never go through the
rule parser. Writes truncate the file and write it again in place; there is no
temporary file or rename and no file lock. Two processes running add() at the
same time can each read the old contents, and the last one to write wins.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence

from gitsparse.exceptions import PatternFileError
from gitsparse.types import PathType

logger = logging.getLogger(__name__)

LINE_SPLIT = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """Split text on CRLF, LF or a lone CR.

    Example:
        >>> split_lines("a\\r\\nb\\rc\\n")
        ['a', 'b', 'c', '']
    """
    return LINE_SPLIT.split(text)


def read_pattern_text(path: PathType) -> Optional[str]:
    """Read a pattern file as UTF-8 text.

    Args:
        path: Location of the pattern file.

    Returns:
        The file contents, or None if the file does not exist.

    Raises:
        PatternFileError: If the file exists but cannot be read.
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise PatternFileError(path, getattr(e, "strerror", None) or str(e)) from e


class PatternStore:
    """List, overwrite and extend the patterns stored in a sparse-checkout file.

    Attributes:
        path (Path): Location of the pattern file.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     store = PatternStore(Path(tmpdir) / "info" / "sparse-checkout")
        ...     store.set(["/*", "!/*/"])
        ...     store.add(["docs/"])
        ...     store.list()
        ['/*', '!/*/', 'docs/']
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def _make_parent(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PatternFileError(self.path, e.strerror or str(e)) from e

    def create(self) -> bool:
        """Create an empty pattern file, including its directory, unless it exists.

        Returns:
            True if the file already existed, False if it was created.

        Raises:
            PatternFileError: If the directory or the file cannot be created.
        """
        self._make_parent()
        try:
            with open(self.path, "x", encoding="utf-8"):
                pass
        except FileExistsError:
            return True
        except OSError as e:
            raise PatternFileError(self.path, e.strerror or str(e)) from e
        logger.debug("Created sparse-checkout file %s", self.path)
        return False

    def read_text(self) -> str:
        """Return the file contents; a missing file reads as empty."""
        text = read_pattern_text(self.path)
        return "" if text is None else text

    def list(self) -> List[str]:
        """Return the non-empty lines of the file in order.

        CRLF, LF and lone CR line endings are all accepted. A missing file
        yields an empty list.

        Raises:
            PatternFileError: If the file cannot be read.
        """
        return [line for line in split_lines(self.read_text()) if line]

    def set(self, patterns: Sequence[str]) -> None:
        """Overwrite the file with the given patterns, one per line.

        Lines are terminated with a bare LF. The file is truncated before the
        new contents are written, so a failed write can leave it empty.

        Args:
            patterns: Patterns in the order they should appear.

        Raises:
            PatternFileError: If the file cannot be truncated or written.
        """
        content = "".join(f"{pattern}\n" for pattern in patterns)
        self._make_parent()
        try:
            with open(self.path, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
        except OSError as e:
            raise PatternFileError(self.path, e.strerror or str(e)) from e
        logger.debug("Wrote %d pattern(s) to %s", len(patterns), self.path)

    def add(self, patterns: Sequence[str]) -> None:
        """Append patterns after the existing ones.

        Existing patterns keep their order and duplicates are not removed. This
        is a read followed by set(), with no locking in between.

        Raises:
            PatternFileError: If the file cannot be read or written.
        """
        self.set(self.list() + list(patterns))
