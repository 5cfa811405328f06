"""Sign analysis on top of 0-CFA.

Besides function labels, expressions now also evaluate to abstract atoms:
"-", "0" and "+" for integers and "true"/"false" for booleans. Operators are
interpreted by running the concrete operator on a few representatives of each
atom and abstracting the results again, so the abstract semantics follows the
evaluator by construction. Conditionals only take a branch the condition may
select.
"""

from funflow.analysis.constraints.references import (
    Constant,
    Dynamic,
    ExpressionReference,
    Rule,
)
from funflow.language.fun.ast import OPERATORS
from funflow.language.fun.evaluator import ARITHMETIC, COMPARISON, EQUALITY
from .cfa import (
    defineCallRules,
    defineFunctionRules,
    defineLetRules,
    defineVariableRules,
)

__all__ = ["signs", "signOf", "abstractOperation"]

NEGATIVE = "-"
ZERO = "0"
POSITIVE = "+"
TRUE = "true"
FALSE = "false"

NUMERIC = dict(ARITHMETIC, **COMPARISON)

REPRESENTATIVES = {
    NEGATIVE: (-2, -1),
    ZERO: (0,),
    POSITIVE: (1, 2),
    TRUE: (True,),
    FALSE: (False,),
}


def signOf(n):
    if n < 0:
        return NEGATIVE
    elif n == 0:
        return ZERO
    else:
        return POSITIVE


def abstractOf(value):
    if isinstance(value, bool):
        return TRUE if value else FALSE
    return signOf(value)


def isNumberAtom(value):
    return value in (NEGATIVE, ZERO, POSITIVE)


def isBooleanAtom(value):
    return value in (TRUE, FALSE)


def representatives(env, value):
    """Concrete values an abstract value stands for.

    Function labels stand for their node, which is how the evaluator
    represents functions.
    """
    if isinstance(value, str):
        return REPRESENTATIVES[value]
    return (env.label(value),)


def abstractOperation(env, operator):
    """Compute callback for a binary operator over [C(left), C(right)]."""

    def numeric(snapshots):
        lefts, rights = snapshots
        concrete = NUMERIC[operator]
        result = {}
        for a in filter(isNumberAtom, lefts):
            for b in filter(isNumberAtom, rights):
                for x in REPRESENTATIVES[a]:
                    for y in REPRESENTATIVES[b]:
                        if operator == "/" and y == 0:
                            continue
                        result[abstractOf(concrete(x, y))] = None
        return result

    def equality(snapshots):
        lefts, rights = snapshots
        result = {}
        for a in lefts:
            for b in rights:
                for x in representatives(env, a):
                    for y in representatives(env, b):
                        result[abstractOf(EQUALITY[operator](x, y))] = None
        return result

    def shortCircuit(snapshots):
        # `true || r` and `false && r` never look at r.
        lefts, rights = snapshots
        decisive = TRUE if operator == "||" else FALSE
        result = {}
        for a in filter(isBooleanAtom, lefts):
            if a == decisive:
                result[a] = None
            else:
                for b in filter(isBooleanAtom, rights):
                    result[b] = None
        return result

    if operator in NUMERIC:
        return numeric
    elif operator in EQUALITY:
        return equality
    else:
        assert operator in ("||", "&&"), operator
        return shortCircuit


def whenCondition(atom):
    def compute(snapshots):
        conditions, branch = snapshots
        return branch if atom in conditions else ()

    compute.__qualname__ = "whenCondition(%s)" % atom
    return compute


def defineConstantRules(env):
    for node in env.type("n"):
        env.define(Rule(Constant(signOf(node.value)), ExpressionReference(node)))

    for node in env.type("true", "false"):
        env.define(Rule(Constant(node.type), ExpressionReference(node)))


def defineOperationRules(env):
    for node in env.type(*OPERATORS):
        env.define(
            Rule(
                Dynamic(
                    [ExpressionReference(node.left), ExpressionReference(node.right)],
                    abstractOperation(env, node.operator),
                ),
                ExpressionReference(node),
            )
        )


def defineConditionalRules(env):
    for node in env.type("if"):
        for atom, branch in ((TRUE, node.thenBody), (FALSE, node.elseBody)):
            env.define(
                Rule(
                    Dynamic(
                        [ExpressionReference(node.condition), ExpressionReference(branch)],
                        whenCondition(atom),
                    ),
                    ExpressionReference(node),
                )
            )


def signs(env):
    """Define the sign analysis rules for the environment's program."""
    defineFunctionRules(env)
    defineConstantRules(env)
    defineVariableRules(env)
    defineOperationRules(env)
    defineConditionalRules(env)
    defineLetRules(env)
    defineCallRules(env)
