"""
CLI functionality for solving a program under rule sets.
"""

import json
import traceback

from funflow.application.context import AnalysisContext
from funflow.application.pipeline import analyse
from funflow.analysis.constraints.dependencies import dependencyGraph, recursiveComponents
from funflow.config import SolverConfig
from funflow.rulesets.loader import loadRuleset
from funflow.util.application.console import Console
from funflow.util.io.formatting import elapsedTime, formatValues

from .common import (
    add_logging_arguments,
    add_output_argument,
    add_program_arguments,
    configure_logging,
    read_program,
    report_error,
    write_output,
)


def add_solve_parser(subparsers):
    """Add solve subcommand parser."""
    parser = subparsers.add_parser(
        "solve", help="Compute the least solution of a rule set for a program"
    )
    add_program_arguments(parser)
    parser.add_argument(
        "--ruleset",
        "-r",
        action="append",
        default=[],
        help="Built-in rule set (cfa, signs) or rule script path; repeatable (default: cfa)",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--cycles",
        action="store_true",
        help="Also report the entry groups the solver iterates over",
    )
    parser.add_argument("--max-steps", type=int, help="Abort after this many worklist steps")
    parser.add_argument("--timeout", type=float, help="Abort the drain after this many seconds")
    parser.add_argument("--rss-limit-mb", type=int, help="Abort when memory use exceeds this")
    parser.add_argument(
        "--config", type=str, help="Configuration file (default: ./funflow.toml)"
    )
    add_output_argument(parser)
    add_logging_arguments(parser)
    parser.set_defaults(func=run_solve)


def format_text(analysis):
    return "".join(
        ("%s: %s" % (name, formatValues(values))).rstrip() + "\n"
        for name, values in analysis.items()
    )


def format_cycles(components):
    if not components:
        return "no recursive entries\n"
    return "".join("cycle: %s\n" % ", ".join(component) for component in components)


def run_solve(args):
    """Solve a FUN program and print the analysis."""
    configure_logging(args)
    try:
        config = SolverConfig.load(config_path=args.config).override(
            max_steps=args.max_steps,
            timeout=args.timeout,
            rss_limit_mb=args.rss_limit_mb,
        )
        rulesets = [loadRuleset(name) for name in (args.ruleset or ["cfa"])]
        source = read_program(args)

        context = AnalysisContext(Console(verbose=args.verbose), config)
        analysis = analyse(context, source, rulesets)

        if args.format == "json":
            document = {"analysis": analysis}
            if args.cycles:
                document["cycles"] = recursiveComponents(dependencyGraph(context.solver))
            output = json.dumps(document, indent=2)
        else:
            output = format_text(analysis)
            if args.cycles:
                output += format_cycles(recursiveComponents(dependencyGraph(context.solver)))

        write_output(args, output)

        if args.verbose:
            for path, elapsed in context.console.timings:
                context.console.output("%-10s %s" % (" | ".join(path), elapsedTime(elapsed)), 0)
            for phase, values in context.stats.items():
                for name, value in values.items():
                    context.console.output("%s.%s = %s" % (phase, name, value), 0)
        return 0

    except Exception as e:
        if args.debug:
            traceback.print_exc()
        return report_error(e)
