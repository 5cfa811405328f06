"""
Helpers shared by the funflow sub-commands.
"""

import logging
import sys
from pathlib import Path


def add_program_arguments(parser):
    """Add the PROGRAM positional and the -e/--expression alternative."""
    parser.add_argument(
        "program",
        nargs="?",
        type=Path,
        help="File containing a FUN program",
    )
    parser.add_argument(
        "-e",
        "--expression",
        help="FUN program text, instead of a file",
    )


def add_output_argument(parser):
    parser.add_argument(
        "--output", "-o", type=Path, help="Output file (default: stdout)"
    )


def add_logging_arguments(parser):
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="Debug output"
    )


def configure_logging(args):
    level = (
        logging.DEBUG
        if getattr(args, "debug", False)
        else logging.INFO
        if getattr(args, "verbose", False)
        else logging.WARNING
    )
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def read_program(args):
    """Return the program text named by the command line."""
    if args.expression is not None:
        if args.program is not None:
            raise ValueError("give either a program file or --expression, not both")
        return args.expression
    if args.program is None:
        raise ValueError("a program file or --expression is required")
    if str(args.program) == "-":
        return sys.stdin.read()
    return args.program.read_text(encoding="utf-8")


def write_output(args, text):
    if args.output:
        mode = "wb" if isinstance(text, bytes) else "w"
        with open(args.output, mode) as f:
            f.write(text)
        logging.getLogger(__name__).info("output written to %s", args.output)
    elif isinstance(text, bytes):
        sys.stdout.buffer.write(text)
    else:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")


def report_error(e):
    print(f"Error: {e}", file=sys.stderr)
    return 1
