"""Analysis pipeline.

Runs the phases of an analysis in order, each inside a console scope so a
verbose run prints how long it took:

1. parse: program text to a labelled tree
2. scopes: scope resolution (inside the Solver constructor)
3. rules: the rule sets define and seed their rules
4. drain: the worklist runs to the fixpoint

Every phase fails fast; an exception from any of them ends the run with no
analysis.
"""

import logging

from funflow.analysis.constraints.solver import Solver
from funflow.language.fun.parser import parse
from funflow.rulesets.loader import combine

LOG = logging.getLogger(__name__)


def parseProgram(context, source):
    with context.console.scope("parse"):
        context.program = parse(source)
    return context.program


def analyse(context, source, rulesets):
    """
    Parse a program and solve it under the given rule sets.

    Args:
        context: AnalysisContext of the run.
        source: FUN program text.
        rulesets: Callables taking the solver's Environment, run in order.

    Returns:
        Dict from entry name to its list of values.
    """
    program = parseProgram(context, source)

    with context.console.scope("scopes"):
        solver = Solver(program, context.config)
    context.solver = solver
    context.stats["scopes"]["expressions"] = len(solver.scope.byLabel)
    context.stats["scopes"]["variables"] = len(solver.scope.bindings)

    with context.console.scope("rules"):
        combine(rulesets)(solver.environment)
    context.stats["rules"]["rules"] = len(solver.table)
    context.stats["rules"]["entries"] = len(solver.store)

    with context.console.scope("drain"):
        analysis = solver.solve()
    context.stats["drain"]["steps"] = solver.propagator.steps
    context.stats["drain"]["enactments"] = solver.propagator.enactments
    context.stats["drain"]["entries"] = len(solver.store)

    LOG.info(
        "solved %d expressions: %d rules, %d entries, %d steps",
        len(solver.scope.byLabel),
        len(solver.table),
        len(solver.store),
        solver.propagator.steps,
    )
    return analysis
