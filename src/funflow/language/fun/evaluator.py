"""Reference evaluator for FUN programs.

Computes the run-time value of a program by walking its tree. Values are
Python ints, Python bools, or the `fn`/`fun` node itself standing for a
function. Application evaluates the function body on top of the caller's
context, adding the parameter (and, for `fun`, the function name for
recursion).

The evaluator is independent of the constraint solver; it exists so the value
a program actually computes can be compared with what an analysis predicts.
"""

import sys

from funflow.application.errors import EvaluationError
from funflow.util.typedispatch import TypeDispatcher, dispatch, defaultdispatch
from . import ast

__all__ = ["evaluate", "formatValue", "MAX_RECURSION", "Evaluator"]

MAX_RECURSION = 100

# Upper bound on interpreter frames one nested application takes.
_FRAMES_PER_APPLICATION = 40


def _truncatingDivide(a, b):
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _strictEquals(a, b):
    if isinstance(a, ast.Expression) or isinstance(b, ast.Expression):
        return a is b
    return type(a) is type(b) and a == b


ARITHMETIC = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _truncatingDivide,
}

COMPARISON = {
    "<": lambda a, b: a < b,
    ">": lambda a, b: a > b,
    "<=": lambda a, b: a <= b,
    ">=": lambda a, b: a >= b,
}

EQUALITY = {
    "==": _strictEquals,
    "!=": lambda a, b: not _strictEquals(a, b),
}


def formatValue(value):
    """Render a FUN value the way the command line prints results."""
    if isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, int):
        return str(value)
    else:
        return "reference to #%d" % value.label


class Evaluator(TypeDispatcher):
    """Evaluates one expression tree.

    Attributes:
        maxRecursion: Maximum nesting depth of function applications.
    """

    def __init__(self, maxRecursion=MAX_RECURSION):
        self.maxRecursion = maxRecursion

    def _castError(self, node, result, needed):
        return EvaluationError(
            "Evaluation of expression #%d yielded %s, needed %s."
            % (node.label, formatValue(result), needed)
        )

    def _asNumber(self, node, context, depth):
        result = self(node, context, depth)
        if isinstance(result, bool) or not isinstance(result, int):
            raise self._castError(node, result, "number")
        return result

    def _asBoolean(self, node, context, depth):
        result = self(node, context, depth)
        if not isinstance(result, bool):
            raise self._castError(node, result, "boolean")
        return result

    @dispatch(ast.NumericConstant, ast.BooleanConstant)
    def visitConstant(self, node, context, depth):
        return node.value

    @dispatch(ast.Variable)
    def visitVariable(self, node, context, depth):
        if node.name not in context:
            raise EvaluationError(
                'Variable "%s" in expression #%d not in scope.' % (node.name, node.label)
            )
        return context[node.name]

    @dispatch(ast.Operation)
    def visitOperation(self, node, context, depth):
        op = node.operator
        if op in ARITHMETIC:
            left = self._asNumber(node.left, context, depth)
            right = self._asNumber(node.right, context, depth)
            if op == "/" and right == 0:
                raise EvaluationError("Division by zero in expression #%d." % node.label)
            return ARITHMETIC[op](left, right)
        elif op in COMPARISON:
            left = self._asNumber(node.left, context, depth)
            right = self._asNumber(node.right, context, depth)
            return COMPARISON[op](left, right)
        elif op in EQUALITY:
            left = self(node.left, context, depth)
            right = self(node.right, context, depth)
            return EQUALITY[op](left, right)
        elif op == "||":
            return self._asBoolean(node.left, context, depth) or self._asBoolean(
                node.right, context, depth
            )
        else:
            assert op == "&&", op
            return self._asBoolean(node.left, context, depth) and self._asBoolean(
                node.right, context, depth
            )

    @dispatch(ast.If)
    def visitIf(self, node, context, depth):
        if self._asBoolean(node.condition, context, depth):
            return self(node.thenBody, context, depth)
        else:
            return self(node.elseBody, context, depth)

    @dispatch(ast.Fn, ast.Fun)
    def visitFunction(self, node, context, depth):
        return node

    @dispatch(ast.Application)
    def visitApplication(self, node, context, depth):
        argument = self(node.argument, context, depth)
        callable = self(node.callable, context, depth)

        if not isinstance(callable, (ast.Fn, ast.Fun)):
            raise self._castError(node.callable, callable, "reference to fn or fun expression")

        if depth + 1 > self.maxRecursion:
            raise EvaluationError("Limit of %d recursions exceeded." % self.maxRecursion)

        inner = dict(context)
        if isinstance(callable, ast.Fun):
            inner[callable.name] = callable
        inner[callable.variable] = argument
        return self(callable.body, inner, depth + 1)

    @dispatch(ast.Let)
    def visitLet(self, node, context, depth):
        inner = dict(context)
        inner[node.variable] = self(node.value, context, depth)
        return self(node.body, inner, depth)

    @defaultdispatch
    def visitDefault(self, node, context, depth):
        raise TypeError("Cannot evaluate %r" % (node,))


def evaluate(expression, maxRecursion=MAX_RECURSION):
    """Evaluate a FUN program.

    Args:
        expression: Root of the program tree.
        maxRecursion: Maximum nesting depth of function applications.

    Returns:
        An int, a bool, or the Fn/Fun node of a function value.

    Raises:
        EvaluationError: On a run-time type error, an unbound name, division
            by zero, or when the recursion limit is exceeded.
    """
    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(limit + (maxRecursion + 1) * _FRAMES_PER_APPLICATION)
    try:
        return Evaluator(maxRecursion)(expression, {}, 0)
    except RecursionError:
        raise EvaluationError(
            "Program nests too deeply to evaluate within %d recursions." % maxRecursion
        ) from None
    finally:
        sys.setrecursionlimit(limit)
