"""0-CFA: which functions may each expression evaluate to.

Function values are represented by the label of their `fn`/`fun` node. The
rules are the textbook constraints of a monovariant control flow analysis:

- a function expression evaluates to itself; a `fun` also binds its name to
  itself
- a variable evaluates to whatever its binding holds
- an `if` evaluates to either branch
- `let x = v in e` binds x to the values of v and evaluates to e
- for every application site and every function that may be called there,
  the argument flows into the parameter and the body flows into the site
"""

from funflow.analysis.constraints.references import (
    BoundVariableReference,
    Constant,
    Dynamic,
    ExpressionReference,
    FunctionVariableReference,
    Rule,
    VariableReference,
)

__all__ = [
    "cfa",
    "defineFunctionRules",
    "defineVariableRules",
    "defineIfRules",
    "defineLetRules",
    "defineCallRules",
]


def defineFunctionRules(env):
    for node in env.type("fn", "fun"):
        env.define(Rule(Constant(node.label), ExpressionReference(node)))
        if node.type == "fun":
            env.define(Rule(Constant(node.label), FunctionVariableReference(node)))


def defineVariableRules(env):
    for node in env.type("var"):
        env.define(Rule(VariableReference(node), ExpressionReference(node)))


def defineIfRules(env):
    for node in env.type("if"):
        env.define(Rule(ExpressionReference(node.thenBody), ExpressionReference(node)))
        env.define(Rule(ExpressionReference(node.elseBody), ExpressionReference(node)))


def defineLetRules(env):
    for node in env.type("let"):
        env.define(Rule(ExpressionReference(node.value), BoundVariableReference(node)))
        env.define(Rule(ExpressionReference(node.body), ExpressionReference(node)))


def whenCalled(function):
    """Compute callback forwarding its second snapshot if `function` may be called.

    The first snapshot is the set of functions at the call site; the second
    is the data to forward.
    """
    label = function.label

    def compute(snapshots):
        callables, forwarded = snapshots
        return forwarded if label in callables else ()

    compute.__qualname__ = "whenCalled(#%d)" % label
    return compute


def defineCallRules(env):
    functions = list(env.type("fn", "fun"))
    for app in env.type("app"):
        for function in functions:
            guard = whenCalled(function)
            env.define(
                Rule(
                    Dynamic(
                        [ExpressionReference(app.callable), ExpressionReference(app.argument)],
                        guard,
                    ),
                    BoundVariableReference(function),
                )
            )
            env.define(
                Rule(
                    Dynamic(
                        [ExpressionReference(app.callable), ExpressionReference(function.body)],
                        guard,
                    ),
                    ExpressionReference(app),
                )
            )


def cfa(env):
    """Define the 0-CFA rules for the environment's program."""
    defineFunctionRules(env)
    defineVariableRules(env)
    defineIfRules(env)
    defineLetRules(env)
    defineCallRules(env)
