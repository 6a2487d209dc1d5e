from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class CheckoutDecision(Enum):
    """Outcome of classifying a path against the sparse-checkout rules.

    Attributes:
        INCLUDED: The path should be materialized in the working tree.
        EXCLUDED: The path should be left out of the working tree.
    """

    INCLUDED = "included"
    EXCLUDED = "excluded"


class DirFlag(Enum):
    """Whether a candidate path is known to be a directory.

    Directory-only rules (patterns ending in ``/``) are skipped for paths whose
    flag is FALSE. UNKNOWN paths are treated like directories for that check.

    Attributes:
        FALSE: Known to be a regular file (or not to exist).
        TRUE: Known to be a directory.
        UNKNOWN: Directory status has not been determined.
    """

    FALSE = "false"
    TRUE = "true"
    UNKNOWN = "unknown"
