"""Command-line interface for gitsparse.

Exit Codes:
    0: Successful completion
    1: Runtime error (no repository, unreadable configuration or pattern file, ...)
    2: Command-line syntax error

Example:
    # Enable sparse checkout and list the default patterns
    $ gitsparse init
    $ gitsparse list
    /*
    !/*/

    # Classify paths
    $ gitsparse check README.md src/main.c
    included	README.md
    excluded	src/main.c
"""

import argparse
import logging
import sys
from typing import List, Optional

from gitsparse.checkout import InitOptions, SparseCheckout
from gitsparse.cli.argparser import create_parser
from gitsparse.exceptions import SparseCheckoutError
from gitsparse.repository import Repository


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; debug records only when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(args: argparse.Namespace) -> None:
    """Execute the subcommand selected on the command line.

    Raises:
        SparseCheckoutError: If the operation fails.
    """
    checkout = SparseCheckout(Repository.discover(args.directory))

    if args.command == "init":
        checkout.init(InitOptions(patterns=args.patterns or None))
    elif args.command == "list":
        for pattern in checkout.list_patterns():
            print(pattern)
    elif args.command == "set":
        checkout.set_patterns(args.patterns)
    elif args.command == "add":
        if not checkout.is_enabled():
            print("Warning: sparse checkout is not enabled; no patterns were added.", file=sys.stderr)
        checkout.add_patterns(args.patterns)
    elif args.command == "disable":
        checkout.disable()
    elif args.command == "check":
        for path in args.paths:
            print(f"{checkout.check_path(path).value}\t{path}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the gitsparse command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
    """
    parser = create_parser()
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        run(args)
    except (SparseCheckoutError, OSError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
