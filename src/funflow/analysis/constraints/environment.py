"""The API rule sets program against.

A rule set receives an Environment and uses three calls to describe its
analysis:

- label(n): the expression carrying label n
- type(*tags): every expression with one of the given variant tags
- define(rule): register one rule

plus the `expression` attribute holding the program root. Rules can be
defined any number of times before the solver drains; afterwards the
environment is closed.
"""

from funflow.application.errors import UnknownLabel
from . import references

__all__ = ["Environment", "ExpressionSequence"]


class ExpressionSequence(object):
    """Lazy, restartable sequence of expressions selected by tag.

    The node lists are captured when the sequence is created; every
    iteration yields the nodes of the first tag, then of the second, and so
    on, each group in definition order.
    """
    __slots__ = ("_groups",)

    def __init__(self, groups):
        self._groups = tuple(groups)

    def __iter__(self):
        for group in self._groups:
            yield from group

    def __len__(self):
        return sum(len(group) for group in self._groups)

    def __bool__(self):
        return any(self._groups)

    def __repr__(self):
        return "ExpressionSequence(%r)" % (list(self),)


class Environment(object):
    """
    Rule-authoring surface of one solver.

    Attributes:
        expression: Root of the analysed program.
    """

    def __init__(self, solver):
        self._solver = solver
        self.expression = solver.expression

    def label(self, n):
        """Return the expression with label n.

        Raises:
            UnknownLabel: No expression of the program carries the label.
        """
        try:
            return self._solver.scope.byLabel[n]
        except (KeyError, TypeError):
            raise UnknownLabel(n) from None

    def type(self, *tags):
        """Return every expression whose variant tag is one of `tags`."""
        byType = self._solver.scope.byType
        return ExpressionSequence(tuple(byType.get(tag, ())) for tag in tags)

    def define(self, rule):
        """Register and seed one rule.

        Raises:
            SolverClosed: The solver has already drained.
            UnknownReference: The rule does not have a recognised shape.
        """
        self._solver.define(rule)

    def namespace(self):
        """Globals for a rule script: the three calls, the root expression and
        the rule constructors."""
        names = {
            "define": self.define,
            "label": self.label,
            "type": self.type,
            "expression": self.expression,
        }
        for name in references.__all__:
            names[name] = getattr(references, name)
        return names
