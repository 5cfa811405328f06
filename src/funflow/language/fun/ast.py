"""AST node classes for the FUN language.

FUN is a small call-by-value functional language: integer and boolean
constants, variables, twelve binary operators, conditionals, anonymous
functions (`fn x => e`), named recursive functions (`fun f x => e`),
application and `let`.

Every node carries:
- type: the variant tag (`n`, `true`, `false`, `var`, an operator symbol,
  `if`, `fn`, `fun`, `app`, `let`), used by rule sets to select nodes
- label: a positive integer, unique in the tree, assigned in pre-order
- line/column: source position just after the node's text

Label 0 never names a node; diagram output uses it for the invisible root.
"""

OPERATORS = ("+", "-", "*", "/", "<", ">", "<=", ">=", "==", "!=", "||", "&&")

TAGS = ("n", "true", "false", "var") + OPERATORS + ("if", "fn", "fun", "app", "let")


class Expression(object):
    """Base class of all FUN expression nodes."""
    __slots__ = "label", "line", "column"

    type = None

    def __init__(self, label=0, line=0, column=0):
        self.label = label
        self.line = line
        self.column = column

    def children(self):
        """Direct sub-expressions in label (pre-order) order."""
        return ()

    def isBinder(self):
        """True for nodes that bind a variable (fn, fun, let)."""
        return False

    def __repr__(self):
        return "%s#%d" % (type(self).__name__, self.label)


class NumericConstant(Expression):
    __slots__ = ("value",)

    type = "n"

    def __init__(self, value, **kargs):
        Expression.__init__(self, **kargs)
        self.value = value

    def __repr__(self):
        return "NumericConstant#%d(%d)" % (self.label, self.value)


class BooleanConstant(Expression):
    __slots__ = ("value",)

    def __init__(self, value, **kargs):
        Expression.__init__(self, **kargs)
        self.value = bool(value)

    @property
    def type(self):
        return "true" if self.value else "false"


class Variable(Expression):
    __slots__ = ("name",)

    type = "var"

    def __init__(self, name, **kargs):
        Expression.__init__(self, **kargs)
        self.name = name

    def __repr__(self):
        return "Variable#%d(%s)" % (self.label, self.name)


class Operation(Expression):
    """Binary operation; the operator symbol doubles as the variant tag."""
    __slots__ = ("operator", "left", "right")

    def __init__(self, operator, left, right, **kargs):
        assert operator in OPERATORS, operator
        Expression.__init__(self, **kargs)
        self.operator = operator
        self.left = left
        self.right = right

    @property
    def type(self):
        return self.operator

    def children(self):
        return (self.left, self.right)


class If(Expression):
    __slots__ = ("condition", "thenBody", "elseBody")

    type = "if"

    def __init__(self, condition, thenBody, elseBody, **kargs):
        Expression.__init__(self, **kargs)
        self.condition = condition
        self.thenBody = thenBody
        self.elseBody = elseBody

    def children(self):
        return (self.condition, self.thenBody, self.elseBody)


class Fn(Expression):
    """Anonymous single-argument function `fn variable => body`."""
    __slots__ = ("variable", "body")

    type = "fn"

    def __init__(self, variable, body, **kargs):
        Expression.__init__(self, **kargs)
        self.variable = variable
        self.body = body

    def children(self):
        return (self.body,)

    def isBinder(self):
        return True


class Fun(Expression):
    """Named recursive function `fun name variable => body`."""
    __slots__ = ("name", "variable", "body")

    type = "fun"

    def __init__(self, name, variable, body, **kargs):
        Expression.__init__(self, **kargs)
        self.name = name
        self.variable = variable
        self.body = body

    def children(self):
        return (self.body,)

    def isBinder(self):
        return True


class Application(Expression):
    __slots__ = ("callable", "argument")

    type = "app"

    def __init__(self, callable, argument, **kargs):
        Expression.__init__(self, **kargs)
        self.callable = callable
        self.argument = argument

    def children(self):
        return (self.callable, self.argument)


class Let(Expression):
    """`let variable = value in body`; variable is in scope for body only."""
    __slots__ = ("variable", "value", "body")

    type = "let"

    def __init__(self, variable, value, body, **kargs):
        Expression.__init__(self, **kargs)
        self.variable = variable
        self.value = value
        self.body = body

    def children(self):
        return (self.value, self.body)

    def isBinder(self):
        return True


def walk(root):
    """Yield every node of the tree in pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children()))


def assignLabels(root):
    """Number the nodes of a tree 1, 2, 3, ... in pre-order.

    Returns:
        The root, for chaining.
    """
    for label, node in enumerate(walk(root), 1):
        node.label = label
    return root
