"""
CLI functionality for syntax tree diagrams.
"""

import traceback

from funflow.language.fun.parser import parse
from funflow.language.fun.visualizer import renderDot, renderGraphic

from .common import (
    add_logging_arguments,
    add_output_argument,
    add_program_arguments,
    configure_logging,
    read_program,
    report_error,
    write_output,
)


def add_graph_parser(subparsers):
    """Add graph subcommand parser."""
    parser = subparsers.add_parser(
        "graph", help="Draw the labelled syntax tree of a FUN program"
    )
    add_program_arguments(parser)
    parser.add_argument(
        "--format",
        "-f",
        choices=["dot", "svg", "png", "pdf"],
        default="dot",
        help="Output format; anything but dot needs Graphviz (default: dot)",
    )
    add_output_argument(parser)
    add_logging_arguments(parser)
    parser.set_defaults(func=run_graph)


def run_graph(args):
    """Write the syntax tree diagram of a program."""
    configure_logging(args)
    try:
        program = parse(read_program(args))
        if args.format == "dot":
            write_output(args, renderDot(program))
        else:
            write_output(args, renderGraphic(program, args.format))
        return 0
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        return report_error(e)
