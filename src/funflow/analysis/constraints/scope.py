"""Scope resolution for FUN programs.

One pass over the tree maps every variable occurrence to the label of the
node that binds it and builds the two indices rule sets query: nodes by
label and nodes by variant tag. Binding rules:

- `fn x => e` binds x to the fn node in e
- `fun f x => e` binds both f and x to the fun node in e; f == x is an error
- `let x = v in e` binds x to the let node in e only (not in v)

Any failure aborts the solve before a single rule is seeded.
"""

from funflow.application.errors import DuplicateLabel, NameCollision, UnboundVariable
from funflow.language.fun import ast
from funflow.util.typedispatch import TypeDispatcher, dispatch, defaultdispatch

__all__ = ["Context", "ScopeInfo", "ScopeResolver", "resolveScopes"]


class Context(object):
    """Immutable map from variable name to binder label.

    Extending a context returns a new one; the receiver is never changed, so
    sibling subtrees cannot see each other's bindings.
    """
    __slots__ = ("_names",)

    def __init__(self, names=None):
        self._names = dict(names) if names else {}

    def extend(self, label, *names):
        extended = dict(self._names)
        for name in names:
            extended[name] = label
        return Context(extended)

    def lookup(self, node):
        """Binder label for a `var` node; raises UnboundVariable on a miss."""
        try:
            return self._names[node.name]
        except KeyError:
            raise UnboundVariable(node) from None

    def __contains__(self, name):
        return name in self._names

    def __repr__(self):
        return "Context(%r)" % (self._names,)


class ScopeInfo(object):
    """Result of scope resolution.

    Attributes:
        root: The program's root expression.
        bindings: Map from each Variable node to the label of its binder.
        byLabel: Map from label to node.
        byType: Map from variant tag to the nodes of that tag, in traversal order.
    """
    __slots__ = "root", "bindings", "byLabel", "byType"

    def __init__(self, root):
        self.root = root
        self.bindings = {}
        self.byLabel = {}
        self.byType = {}

    def binderOf(self, variable):
        """Label of the binder of a Variable node, or None if unknown here."""
        return self.bindings.get(variable)


class ScopeResolver(TypeDispatcher):
    """Walks the tree threading a Context and fills a ScopeInfo."""

    def __init__(self, info):
        self.info = info

    def _record(self, node):
        if node.label in self.info.byLabel:
            raise DuplicateLabel(node)
        self.info.byLabel[node.label] = node
        self.info.byType.setdefault(node.type, []).append(node)

    @dispatch(ast.NumericConstant, ast.BooleanConstant)
    def visitConstant(self, node, context):
        self._record(node)

    @dispatch(ast.Variable)
    def visitVariable(self, node, context):
        self._record(node)
        self.info.bindings[node] = context.lookup(node)

    @dispatch(ast.Operation)
    def visitOperation(self, node, context):
        self._record(node)
        self(node.left, context)
        self(node.right, context)

    @dispatch(ast.If)
    def visitIf(self, node, context):
        self._record(node)
        self(node.condition, context)
        self(node.thenBody, context)
        self(node.elseBody, context)

    @dispatch(ast.Fn)
    def visitFn(self, node, context):
        self._record(node)
        self(node.body, context.extend(node.label, node.variable))

    @dispatch(ast.Fun)
    def visitFun(self, node, context):
        self._record(node)
        if node.name == node.variable:
            raise NameCollision(node)
        self(node.body, context.extend(node.label, node.name, node.variable))

    @dispatch(ast.Application)
    def visitApplication(self, node, context):
        self._record(node)
        self(node.callable, context)
        self(node.argument, context)

    @dispatch(ast.Let)
    def visitLet(self, node, context):
        self._record(node)
        self(node.value, context)
        self(node.body, context.extend(node.label, node.variable))

    @defaultdispatch
    def visitDefault(self, node, context):
        raise TypeError("Not a FUN expression: %r" % (node,))


def resolveScopes(root):
    """Resolve every variable of a program.

    Args:
        root: Root expression; labels must already be unique.

    Returns:
        ScopeInfo with bindings and label/tag indices.

    Raises:
        UnboundVariable: A variable has no enclosing binder.
        NameCollision: A fun node uses one name for function and parameter.
    """
    info = ScopeInfo(root)
    ScopeResolver(info)(root, Context())
    return info
