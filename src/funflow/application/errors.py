"""
Error classes for funflow.

Every failure the toolkit reports derives from SolverError. The solver never
recovers from one of these: scope errors abort before any rule is seeded, and
errors raised while rules are registered or drained abort the whole solve, so
no partial analysis is ever produced.
"""


class SolverError(Exception):
    """Base class of all funflow errors."""
    pass


class ParseError(SolverError):
    """
    Raised when program text does not match the FUN grammar.

    Attributes:
        line: 1-based line of the offending input.
        column: 1-based column of the offending input.
        expected: Sorted list of token descriptions the parser would accept.
    """

    def __init__(self, message, line, column, expected=()):
        SolverError.__init__(self, message)
        self.line = line
        self.column = column
        self.expected = sorted(expected)


class UnboundVariable(SolverError):
    """A `var` expression names a variable no enclosing binder introduces."""

    def __init__(self, node):
        SolverError.__init__(
            self,
            "Variable expression #%d references an unbound variable '%s'."
            % (node.label, node.name),
        )
        self.node = node


class NameCollision(SolverError):
    """A `fun` expression uses one identifier as function name and parameter."""

    def __init__(self, node):
        SolverError.__init__(
            self,
            "Function expression #%d uses same name '%s' for variable and function."
            % (node.label, node.name),
        )
        self.node = node


class DuplicateLabel(SolverError):
    """Two expressions of one tree carry the same label."""

    def __init__(self, node):
        SolverError.__init__(self, "Label %d is used by more than one expression." % node.label)
        self.node = node


class UnknownLabel(SolverError, LookupError):
    """label() was asked for a label that does not occur in the program."""

    def __init__(self, label):
        SolverError.__init__(self, "Label %r not found." % (label,))
        self.label = label


class UnknownReference(SolverError):
    """A rule side does not match any recognised reference or rule shape."""
    pass


class InvalidValue(SolverError):
    """A rule produced a value that is neither a number nor a string."""
    pass


class SolverClosed(SolverError):
    """A rule was defined after the analysis has already been drained,
    or the analysis was requested again after a failed drain."""
    pass


class NonTermination(SolverError):
    """
    Raised when a solve exceeds its budget.

    The engine itself cannot decide termination; this only fires when a
    caller supplied a step, time or memory budget and the drain ran past it.

    Attributes:
        steps: Number of worklist steps performed before the abort.
    """

    def __init__(self, message, steps):
        SolverError.__init__(self, message)
        self.steps = steps


class EvaluationError(SolverError):
    """Raised by the evaluator for a run-time failure of the FUN program."""
    pass
