"""Command-line argument parsing for gitsparse.

This module defines the command-line interface for gitsparse,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from gitsparse import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with gitsparse's subcommands.
    """
    description = """
    gitsparse: inspect and edit the sparse-checkout configuration of a git repository.

    Patterns live in .git/info/sparse-checkout, one per line, using gitignore syntax:
    a leading ! negates a pattern, a trailing / restricts it to directories, and a
    leading / anchors it to the repository root. For each path, the pattern declared
    last that matches the path itself decides; if none does, its parent directories
    are tried in turn. Paths no pattern matches are excluded.
    """

    epilog = """
    Examples:
      # Enable sparse checkout with the default patterns (root files only)
      gitsparse init

      # Enable sparse checkout with custom initial patterns
      gitsparse init "/*" "!/*/" "/docs/"

      # Show the current patterns
      gitsparse list

      # Replace or extend the patterns
      gitsparse set "/*" "!/*/" "/src/"
      gitsparse add "/tests/"

      # Ask whether paths are part of the sparse checkout
      gitsparse check README.md src/main.c docs/

      # Turn sparse checkout off (the pattern file is kept)
      gitsparse disable

      # Operate on a repository elsewhere, with debug logging
      gitsparse -C /path/to/repo -v list
    """

    parser = argparse.ArgumentParser(
        prog="gitsparse",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Version information
    parser.add_argument(
        "-V", "--version", action="version", version=f"gitsparse {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "-C",
        dest="directory",
        type=Path,
        metavar="DIR",
        default=None,
        help="Look for the repository starting at DIR instead of the current directory.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    init_parser = subparsers.add_parser(
        "init",
        help="Enable sparse checkout; create the pattern file if it does not exist.",
    )
    init_parser.add_argument(
        "patterns",
        nargs="*",
        metavar="PATTERN",
        help="Patterns for a newly created pattern file (default: '/*' '!/*/').",
    )

    subparsers.add_parser("list", help="Print the patterns, one per line.")

    set_parser = subparsers.add_parser(
        "set",
        help="Replace all patterns, enabling sparse checkout if needed.",
    )
    set_parser.add_argument("patterns", nargs="+", metavar="PATTERN", help="New patterns, in order.")

    add_parser = subparsers.add_parser(
        "add",
        help="Append patterns. Has no effect while sparse checkout is disabled.",
    )
    add_parser.add_argument("patterns", nargs="+", metavar="PATTERN", help="Patterns to append, in order.")

    subparsers.add_parser("disable", help="Disable sparse checkout. The pattern file is kept.")

    check_parser = subparsers.add_parser(
        "check",
        help="Print whether each path is included in or excluded from the sparse checkout.",
    )
    check_parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="Repository-relative paths. A trailing / marks a directory.",
    )

    return parser
