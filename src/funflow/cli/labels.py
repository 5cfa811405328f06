"""
CLI functionality for listing the labels of a program.

Rule scripts address expressions by label; this prints the table needed to
write them.
"""

import traceback

from funflow.language.fun.ast import walk
from funflow.language.fun.parser import parse

from .common import (
    add_logging_arguments,
    add_program_arguments,
    configure_logging,
    read_program,
    report_error,
)


def add_labels_parser(subparsers):
    """Add labels subcommand parser."""
    parser = subparsers.add_parser(
        "labels", help="List every expression with its label, tag and position"
    )
    add_program_arguments(parser)
    add_logging_arguments(parser)
    parser.set_defaults(func=run_labels)


def describe(node):
    detail = ""
    if node.type == "n":
        detail = str(node.value)
    elif node.type == "var":
        detail = node.name
    elif node.type in ("fn", "let"):
        detail = node.variable
    elif node.type == "fun":
        detail = "%s %s" % (node.name, node.variable)
    return "#%-4d %-6s %-12s %d:%d" % (node.label, node.type, detail, node.line, node.column)


def run_labels(args):
    """Print one line per expression, in label order."""
    configure_logging(args)
    try:
        program = parse(read_program(args))
        for node in walk(program):
            print(describe(node).rstrip())
        return 0
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        return report_error(e)
