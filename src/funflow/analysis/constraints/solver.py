"""Constraint solver facade.

A Solver owns every piece of state of one analysis: scope information, the
entry store, the rule arena and the worklist. Nothing is shared between
solvers, so independent analyses may run side by side.

Typical use:

    solver = Solver(expression)
    cfa(solver.environment)
    analysis = solver.solve()

or in one call, `solve(expression, ruleset=cfa)`.
"""

import logging

from funflow.application.errors import SolverClosed
from .scope import resolveScopes
from .entries import EntryStore
from .rules import RuleTable, RuleTranslator
from .worklist import Propagator
from .environment import Environment
from .result import formatAnalysis

__all__ = ["Solver", "solve"]

LOG = logging.getLogger(__name__)


class Solver(object):
    """
    One solve over one program.

    Scope resolution runs in the constructor, so an unbound variable or a
    name collision is reported before a single rule is seen.

    Attributes:
        expression: Root of the analysed program.
        scope: ScopeInfo of the program.
        store: EntryStore with the canonical entries.
        table: RuleTable with the translated rules.
        propagator: The worklist engine.
        environment: Environment handed to rule sets.
        closed: True once solve() has drained the worklist.
        failure: The exception that aborted the drain, if any.
    """

    def __init__(self, expression, config=None, observer=None):
        self.expression = expression
        self.config = config
        self.scope = resolveScopes(expression)
        self.store = EntryStore(self.scope)
        self.table = RuleTable()
        self.translator = RuleTranslator(self.store, self.table)

        budget = config.budget() if config is not None else None
        self.propagator = Propagator(self.store, self.table, budget, observer)
        self.environment = Environment(self)
        self.closed = False
        self.failure = None

    def define(self, rule):
        """Translate a rule and enact it once.

        Raises:
            SolverClosed: solve() has already run.
            UnknownReference: The rule does not have a recognised shape.
            InvalidValue: Seeding produced a value that is not a number or string.
        """
        if self.closed:
            raise SolverClosed("Rules cannot be defined after the analysis has been solved.")
        translated = self.translator.translate(rule)
        self.propagator.enact(translated)
        return translated

    def defineAll(self, rules):
        for rule in rules:
            self.define(rule)

    def solve(self):
        """Drain to the fixpoint and return the analysis.

        Returns:
            Dict from entry name to its list of values, see formatAnalysis.

        Raises:
            NonTermination: The configured budget was exceeded.
            SolverClosed: An earlier solve() failed; the entries are incomplete.
        """
        if self.failure is not None:
            raise SolverClosed(
                "The analysis is unavailable, its drain failed: %s" % (self.failure,)
            )
        if not self.closed:
            self.closed = True
            LOG.debug(
                "draining %d rules over %d entries", len(self.table), len(self.store)
            )
            try:
                self.propagator.drain()
            except Exception as e:
                self.failure = e
                raise
        return formatAnalysis(self.store)

    @property
    def steps(self):
        return self.propagator.steps


def solve(expression, rules=(), ruleset=None, config=None):
    """
    Analyse a program in one call.

    Args:
        expression: Root of a labelled FUN program.
        rules: Rules to define, in order.
        ruleset: Optional callable receiving the Environment; runs after
            `rules` have been defined.
        config: Optional SolverConfig carrying the drain budget.

    Returns:
        Dict from entry name to its list of values.
    """
    solver = Solver(expression, config)
    solver.defineAll(rules)
    if ruleset is not None:
        ruleset(solver.environment)
    return solver.solve()
