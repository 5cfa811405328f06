"""Constraint propagation over FUN programs.

Rule sets describe an analysis as rules between entries; the solver
canonicalises the entries, translates the rules into propagation edges and
drains a worklist to the least fixpoint.
"""

from .references import (
    Reference,
    VariableReference,
    BoundVariableReference,
    FunctionVariableReference,
    ExpressionReference,
    Constant,
    Dynamic,
    Rule,
)
from .scope import resolveScopes, ScopeInfo
from .entries import Entry, EntryStore
from .budget import Budget
from .environment import Environment
from .solver import Solver, solve
from .result import formatAnalysis
from .dependencies import dependencyGraph, recursiveComponents

__all__ = [
    "Reference",
    "VariableReference",
    "BoundVariableReference",
    "FunctionVariableReference",
    "ExpressionReference",
    "Constant",
    "Dynamic",
    "Rule",
    "resolveScopes",
    "ScopeInfo",
    "Entry",
    "EntryStore",
    "Budget",
    "Environment",
    "Solver",
    "solve",
    "formatAnalysis",
    "dependencyGraph",
    "recursiveComponents",
]
