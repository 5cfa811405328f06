"""The FUN language: AST model, parser, evaluator and tree diagrams."""

from .ast import (
    Expression,
    NumericConstant,
    BooleanConstant,
    Variable,
    Operation,
    If,
    Fn,
    Fun,
    Application,
    Let,
    OPERATORS,
    TAGS,
    assignLabels,
    walk,
)
from .parser import parse
from .evaluator import evaluate, formatValue

__all__ = [
    "Expression",
    "NumericConstant",
    "BooleanConstant",
    "Variable",
    "Operation",
    "If",
    "Fn",
    "Fun",
    "Application",
    "Let",
    "OPERATORS",
    "TAGS",
    "assignLabels",
    "walk",
    "parse",
    "evaluate",
    "formatValue",
]
