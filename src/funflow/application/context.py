"""
Shared state of one funflow run.

An AnalysisContext travels through the pipeline phases. It carries the
console used for phase timing, the solver configuration, and the statistics
the phases record (entry and rule counts, worklist steps) so front ends can
report them without reaching into solver internals.
"""

import collections

from funflow.config import SolverConfig
from funflow.util.application.console import Console


class AnalysisContext(object):
    """
    Context for one analysis run.

    Attributes:
        console: Console for structured phase output.
        config: SolverConfig with the drain limits.
        stats: Nested dict of statistics, stats[phase][name] = value.
        program: Root expression of the program being analysed, once parsed.
        solver: The Solver of the run, once created.
    """
    __slots__ = "console", "config", "stats", "program", "solver"

    def __init__(self, console=None, config=None):
        self.console = console if console is not None else Console()
        self.config = config if config is not None else SolverConfig()
        self.stats = collections.defaultdict(dict)
        self.program = None
        self.solver = None
