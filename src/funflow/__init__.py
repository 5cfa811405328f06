"""funflow: constraint-based analysis of FUN programs.

Parse a program, describe an analysis as rules between entries, and let the
worklist solver compute the least solution:

    from funflow import parse, solve
    from funflow.rulesets import cfa

    analysis = solve(parse("((fn x => x) (fn y => y))"), ruleset=cfa)
"""

__version__ = "0.1.0"

from funflow.application.errors import (
    SolverError,
    ParseError,
    UnboundVariable,
    NameCollision,
    DuplicateLabel,
    UnknownLabel,
    UnknownReference,
    InvalidValue,
    SolverClosed,
    NonTermination,
    EvaluationError,
)
from funflow.language.fun import parse, evaluate, formatValue
from funflow.analysis.constraints import (
    Rule,
    Constant,
    Dynamic,
    VariableReference,
    BoundVariableReference,
    FunctionVariableReference,
    ExpressionReference,
    Budget,
    Solver,
    solve,
)
from funflow.config import SolverConfig
