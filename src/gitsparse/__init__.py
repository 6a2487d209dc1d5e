"""Sparse-checkout rule evaluation for git working trees.

This package decides which paths of a repository should be materialized in a
sparse checkout, and manages the ``info/sparse-checkout`` pattern file and the
``core.sparseCheckout`` setting that drive that decision.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("gitsparse")
except PackageNotFoundError:
    __version__ = "unknown"
