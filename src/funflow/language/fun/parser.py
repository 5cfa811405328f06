"""Parser for FUN source text.

The grammar mirrors the concrete syntax of the language: atoms (`true`,
`false`, integers, lower-case names) stand alone, everything else is written
in parentheses:

    (if c then a else b)      (fn x => e)        (fun f x => e)
    (let x = v in e)          (a + b)            (f x)

`->` is accepted for `=>` and `:=` for `=`. Operators do not nest without
parentheses, so there is no precedence to resolve. Note that `-1` is an
integer literal, so `(x -1)` applies `x` to `-1`; write `(x - 1)` to subtract.
"""

from lark import Lark, Transformer, v_args
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
    VisitError,
)

from funflow.application.errors import ParseError
from . import ast

__all__ = ["parse", "RESERVED"]

RESERVED = frozenset(["if", "then", "else", "fn", "fun", "let", "in", "true", "false"])

GRAMMAR = r"""
start: expr

?expr: atom
     | "(" inner ")"                      -> group

?inner: "if" expr "then" expr "else" expr -> if_expr
      | "fn" NAME ARROW expr              -> fn_expr
      | "fun" NAME NAME ARROW expr        -> fun_expr
      | "let" NAME BIND expr "in" expr    -> let_expr
      | expr OPERATOR expr                -> operation
      | expr expr                         -> application
      | atom

?atom: "true"                             -> true
     | "false"                            -> false
     | INTEGER                            -> number
     | NAME                               -> variable

ARROW: "=>" | "->"
BIND: ":=" | "="
OPERATOR: /<=|>=|==|!=|\|\||&&|[-+*\/<>]/
INTEGER: /-?[0-9]+/
NAME: /[a-z_]+/

%import common.WS
%ignore WS
"""

_parser = Lark(GRAMMAR, parser="lalr", propagate_positions=True, maybe_placeholders=False)


@v_args(meta=True)
class ExpressionBuilder(Transformer):
    """Turns the lark parse tree into FUN AST nodes (labels still 0)."""

    def _position(self, meta):
        return dict(line=meta.end_line, column=meta.end_column)

    def _name(self, token):
        name = str(token)
        if name in RESERVED:
            raise ParseError(
                "Error at line %d, column %d. Reserved keywords cannot be used as variable."
                % (token.line, token.column),
                token.line,
                token.column,
                ["NAME"],
            )
        return name

    def start(self, meta, children):
        return children[0]

    def group(self, meta, children):
        # A parenthesised expression is positioned after its closing paren.
        node = children[0]
        node.line = meta.end_line
        node.column = meta.end_column
        return node

    def true(self, meta, children):
        return ast.BooleanConstant(True, **self._position(meta))

    def false(self, meta, children):
        return ast.BooleanConstant(False, **self._position(meta))

    def number(self, meta, children):
        return ast.NumericConstant(int(children[0]), **self._position(meta))

    def variable(self, meta, children):
        return ast.Variable(self._name(children[0]), **self._position(meta))

    def operation(self, meta, children):
        left, operator, right = children
        return ast.Operation(str(operator), left, right, **self._position(meta))

    def application(self, meta, children):
        callable, argument = children
        return ast.Application(callable, argument, **self._position(meta))

    def if_expr(self, meta, children):
        condition, thenBody, elseBody = children
        return ast.If(condition, thenBody, elseBody, **self._position(meta))

    def fn_expr(self, meta, children):
        variable, _arrow, body = children
        return ast.Fn(self._name(variable), body, **self._position(meta))

    def fun_expr(self, meta, children):
        name, variable, _arrow, body = children
        return ast.Fun(self._name(name), self._name(variable), body, **self._position(meta))

    def let_expr(self, meta, children):
        variable, _bind, value, body = children
        return ast.Let(self._name(variable), value, body, **self._position(meta))


def _describeExpected(error):
    if isinstance(error, UnexpectedToken):
        return error.expected
    elif isinstance(error, UnexpectedCharacters):
        return error.allowed or ()
    elif isinstance(error, UnexpectedEOF):
        return error.expected
    return ()


def parse(source):
    """Parse FUN source text into a labelled expression tree.

    Args:
        source: Program text; surrounding whitespace is ignored.

    Returns:
        The root Expression, labelled 1..n in pre-order.

    Raises:
        ParseError: If the text is not a FUN expression.
    """
    try:
        tree = _parser.parse(source)
    except UnexpectedInput as e:
        line = getattr(e, "line", -1)
        column = getattr(e, "column", -1)
        expected = _describeExpected(e)
        raise ParseError(
            "Error at line %s, column %s. Expected: %s"
            % (line, column, ", ".join(sorted(expected)) or "end of input"),
            line,
            column,
            expected,
        ) from e

    try:
        root = ExpressionBuilder().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        raise
    return ast.assignLabels(root)
