"""
CLI functionality for evaluating a program.
"""

import traceback

from funflow.language.fun.evaluator import MAX_RECURSION, evaluate, formatValue
from funflow.language.fun.parser import parse

from .common import (
    add_logging_arguments,
    add_program_arguments,
    configure_logging,
    read_program,
    report_error,
)


def add_run_parser(subparsers):
    """Add run subcommand parser."""
    parser = subparsers.add_parser("run", help="Evaluate a FUN program")
    add_program_arguments(parser)
    parser.add_argument(
        "--max-recursion",
        type=int,
        default=MAX_RECURSION,
        help="Maximum nesting of function applications (default: %d)" % MAX_RECURSION,
    )
    add_logging_arguments(parser)
    parser.set_defaults(func=run_run)


def run_run(args):
    """Evaluate a FUN program and print its value."""
    configure_logging(args)
    try:
        program = parse(read_program(args))
        print(formatValue(evaluate(program, args.max_recursion)))
        return 0
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        return report_error(e)
