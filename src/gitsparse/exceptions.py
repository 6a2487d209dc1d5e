from typing import Optional

from gitsparse.types import PathType


class SparseCheckoutError(Exception):
    """
    Base class for all errors raised by gitsparse.

    Callers that only need to know that a sparse-checkout operation failed can catch this
    class; the subclasses describe which collaborator failed.

    Example:
        >>> issubclass(PatternFileError, SparseCheckoutError)
        True
    """

    pass


class PatternFileError(SparseCheckoutError):
    """
    Exception raised when the sparse-checkout pattern file cannot be created, read or written.

    The operation that raised it is aborted and nothing is rolled back. In particular a failure
    while overwriting the file may leave it truncated.

    Attributes:
        path (str): Path of the pattern file.

    Example:
        >>> error = PatternFileError("/repo/.git/info/sparse-checkout", "Permission denied")
        >>> str(error)
        'Cannot access sparse-checkout file /repo/.git/info/sparse-checkout: Permission denied'
    """

    def __init__(self, path: PathType, reason: str) -> None:
        """
        Initialize the exception with the offending path and the underlying reason.

        Args:
            path: Path of the pattern file.
            reason: Description of the failure, usually the strerror of the OSError.
        """
        self.path = str(path)
        super().__init__(f"Cannot access sparse-checkout file {self.path}: {reason}")


class RuleSetLockError(SparseCheckoutError, OSError):
    """
    Exception raised when the lock guarding a rule set cannot be acquired for parsing.

    It is also an OSError, so callers that treat operating-system failures alike
    (such as the CLI) handle it together with file errors.

    Example:
        >>> str(RuleSetLockError())
        'Failed to lock sparse-checkout rules'
        >>> isinstance(RuleSetLockError(), OSError)
        True
    """

    def __init__(self, message: str = "Failed to lock sparse-checkout rules") -> None:
        super().__init__(message)


class ConfigError(SparseCheckoutError):
    """
    Exception raised when the repository configuration cannot be read, written or parsed.

    A missing configuration file or key is not an error; callers receive the default value.

    Attributes:
        key (Optional[str]): The dotted configuration key involved, if any.

    Example:
        >>> error = ConfigError("bad boolean value 'maybe'", key="core.sparseCheckout")
        >>> str(error)
        "core.sparseCheckout: bad boolean value 'maybe'"
    """

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        self.key = key
        super().__init__(f"{key}: {message}" if key else message)


class RepositoryNotFoundError(SparseCheckoutError):
    """Raised when no git directory can be discovered."""
