"""
Hierarchical console output with phase timing.

The pipeline opens one scope per phase (parsing, scope resolution, rule
registration, drain); each scope reports its elapsed time when it closes.
Output is only produced when the console is verbose, so a quiet console can
be threaded through library code at no cost.
"""

import sys
import time
from funflow.util.io import formatting


class Scope(object):
    """One timed phase in the scope tree.

    Attributes:
        parent: Enclosing scope, or None for the root.
        name: Phase name.
    """

    def __init__(self, parent, name):
        self.parent = parent
        self.name = name
        self._start = None
        self._end = None

    def begin(self):
        self._start = time.perf_counter()

    def end(self):
        self._end = time.perf_counter()

    @property
    def elapsed(self):
        return self._end - self._start

    def path(self):
        if self.parent is None:
            return ()
        else:
            return self.parent.path() + (self.name,)

    def child(self, name):
        return Scope(self, name)


class ConsoleScopeManager(object):
    """Context manager returned by Console.scope()."""

    __slots__ = "console", "name"

    def __init__(self, console, name):
        self.console = console
        self.name = name

    def __enter__(self):
        self.console.begin(self.name)

    def __exit__(self, type, value, tb):
        self.console.end()


class Console(object):
    """Phase-structured output stream.

    Attributes:
        out: Output stream (default: sys.stderr, so stdout stays machine readable).
        root: Root scope.
        current: Innermost open scope.
        verbose: If False, nothing is written.
        timings: List of (path, elapsed seconds) for every closed scope.
    """

    def __init__(self, out=None, verbose=False):
        if out is None:
            out = sys.stderr
        self.out = out

        self.root = Scope(None, "root")
        self.current = self.root

        self.verbose = verbose
        self.timings = []

    def path(self):
        """Current scope path, e.g. "[ solve | drain ]"."""
        return "[ %s ]" % " | ".join(self.current.path())

    def begin(self, name):
        scope = self.current.child(name)
        scope.begin()
        self.current = scope

        self.output("begin %s" % self.path(), 0)

    def end(self):
        self.current.end()
        self.timings.append((self.current.path(), self.current.elapsed))
        self.output(
            "end   %s %s" % (self.path(), formatting.elapsedTime(self.current.elapsed)),
            0,
        )
        self.current = self.current.parent

    def scope(self, name):
        """Time a phase.

        Example:
            with console.scope("drain"):
                propagator.drain()
        """
        return ConsoleScopeManager(self, name)

    def output(self, s, tabs=1):
        if not self.verbose:
            return

        if tabs:
            self.out.write("\t" * tabs)
        self.out.write(s)
        self.out.write("\n")
