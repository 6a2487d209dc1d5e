"""Repository discovery and the repository configuration file.

Only the parts of a git repository that sparse checkout needs are modelled:
where the git directory and working tree are, whether the repository is bare,
and boolean settings in the ``config`` file.
"""

import configparser
import logging
from pathlib import Path
from typing import Optional, Tuple

from gitsparse.exceptions import ConfigError, RepositoryNotFoundError
from gitsparse.types import PathType

logger = logging.getLogger(__name__)

SPARSE_CHECKOUT_KEY = "core.sparseCheckout"
IGNORE_CASE_KEY = "core.ignorecase"
SPARSE_CHECKOUT_FILE = "sparse-checkout"


def _split_key(key: str) -> Tuple[str, str]:
    section, sep, option = key.rpartition(".")
    if not sep or not section or not option:
        raise ConfigError("key does not contain a section", key=key)
    return section, option.lower()


class RepositoryConfig:
    """Boolean settings stored in a repository's ``config`` file.

    Keys are given in dotted form (``core.sparseCheckout``). Option names are
    case-insensitive, as in git. A missing file, section or option is not an
    error: get_bool() returns the default instead.

    Attributes:
        path (Path): Location of the config file.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     config = RepositoryConfig(Path(tmpdir) / "config")
        ...     config.get_bool("core.sparseCheckout", False)
        ...     config.set_bool("core.sparseCheckout", True)
        ...     config.get_bool("core.sparsecheckout", False)
        False
        True
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)

    def _load(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(interpolation=None, strict=False, allow_no_value=True)
        try:
            parser.read(self.path, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as e:
            raise ConfigError(f"cannot parse {self.path}: {e}") from e
        return parser

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Read a boolean setting.

        Accepts the spellings git accepts: true/yes/on/1 and false/no/off/0. An
        option written without a value counts as true.

        Args:
            key: Dotted configuration key.
            default: Value returned when the key is not set.

        Raises:
            ConfigError: If the file cannot be parsed or the value is not a boolean.
        """
        section, option = _split_key(key)
        parser = self._load()
        if not parser.has_option(section, option):
            return default

        value = parser.get(section, option)
        if value is None:
            return True
        state = value.strip().lower()
        if state == "":
            return False
        if state not in configparser.ConfigParser.BOOLEAN_STATES:
            raise ConfigError(f"bad boolean value {value!r}", key=key)
        return configparser.ConfigParser.BOOLEAN_STATES[state]

    def set_bool(self, key: str, value: bool) -> None:
        """Write a boolean setting as ``true`` or ``false``.

        Raises:
            ConfigError: If the file cannot be parsed or written.
        """
        section, option = _split_key(key)
        parser = self._load()
        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, option, "true" if value else "false")
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                parser.write(f)
        except OSError as e:
            raise ConfigError(f"cannot write {self.path}: {e.strerror or e}", key=key) from e
        logger.debug("Set %s = %s in %s", key, value, self.path)


class Repository:
    """Handle on a git repository on disk.

    Attributes:
        git_dir (Path): The git directory (``.git`` or the bare repository itself).
        workdir (Optional[Path]): The working tree, or None for a bare repository.
        config (RepositoryConfig): The repository's configuration file.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     repo = Repository.init(tmpdir)
        ...     repo.is_bare, repo.sparse_checkout_file.relative_to(tmpdir).as_posix()
        (False, '.git/info/sparse-checkout')
    """

    def __init__(self, git_dir: PathType, workdir: Optional[PathType] = None) -> None:
        self.git_dir = Path(git_dir)
        self.workdir = Path(workdir) if workdir is not None else None
        self.config = RepositoryConfig(self.git_dir / "config")

    @staticmethod
    def _looks_like_git_dir(path: Path) -> bool:
        return (path / "HEAD").is_file() and (path / "objects").is_dir()

    @classmethod
    def open(cls, path: PathType) -> "Repository":
        """Open the repository rooted exactly at path (working tree or bare git directory).

        Raises:
            RepositoryNotFoundError: If path is neither.
        """
        path = Path(path)
        if (path / ".git").is_dir():
            return cls(path / ".git", path)
        if cls._looks_like_git_dir(path):
            return cls(path)
        raise RepositoryNotFoundError(f"not a git repository: {path}")

    @classmethod
    def discover(cls, start: Optional[PathType] = None) -> "Repository":
        """Find the repository containing start (default: the current directory).

        Raises:
            RepositoryNotFoundError: If no repository contains start.
        """
        current = Path(start or Path.cwd()).resolve()
        for candidate in (current, *current.parents):
            try:
                return cls.open(candidate)
            except RepositoryNotFoundError:
                continue
        raise RepositoryNotFoundError(f"could not find a git repository from {current}")

    @classmethod
    def init(cls, path: PathType, bare: bool = False) -> "Repository":
        """Create a minimal repository layout at path and open it.

        Existing files are kept. This creates only what sparse checkout needs
        (HEAD, objects/, refs/, info/ and config), not a full git repository.
        """
        root = Path(path)
        git_dir = root if bare else root / ".git"
        for sub in ("objects", "refs/heads", "refs/tags", "info"):
            (git_dir / sub).mkdir(parents=True, exist_ok=True)
        head = git_dir / "HEAD"
        if not head.exists():
            head.write_text("ref: refs/heads/main\n", encoding="utf-8")
        repo = cls(git_dir, None if bare else root)
        if not repo.config.path.exists():
            repo.config.set_bool("core.bare", bare)
        return repo

    @property
    def is_bare(self) -> bool:
        return self.workdir is None

    @property
    def info_dir(self) -> Path:
        return self.git_dir / "info"

    @property
    def sparse_checkout_file(self) -> Path:
        return self.info_dir / SPARSE_CHECKOUT_FILE

    def ignore_case(self) -> bool:
        """The ``core.ignorecase`` setting; False when unset."""
        return self.config.get_bool(IGNORE_CASE_KEY, False)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(git_dir={str(self.git_dir)!r}, workdir={self.workdir and str(self.workdir)!r})"
