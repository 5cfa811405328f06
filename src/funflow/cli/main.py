"""Main CLI dispatcher for funflow.

This module provides the `funflow` command line, dispatching to the
sub-commands for solving, evaluating, drawing and inspecting FUN programs.
"""

import argparse
import sys

from funflow import __version__

from .solve import add_solve_parser
from .run import add_run_parser
from .graph import add_graph_parser
from .labels import add_labels_parser


def build_parser():
    parser = argparse.ArgumentParser(
        description="funflow - constraint-based analysis of FUN programs", prog="funflow"
    )

    parser.add_argument("--version", action="version", version="funflow %s" % __version__)

    subparsers = parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )

    add_solve_parser(subparsers)
    add_run_parser(subparsers)
    add_graph_parser(subparsers)
    add_labels_parser(subparsers)
    return parser


def main(argv=None):
    """Main entry point for the funflow CLI.

    Returns:
        int: Exit code (0 for success, 1 for error).
    """
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
