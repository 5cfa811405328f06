"""Syntax tree diagrams for FUN programs.

Produces a Graphviz digraph with one boxed node per expression, labelled with
its text and `[#label]`, and edges labelled with the child's role. An
invisible node `0` points at the root so the tree hangs from a fixed anchor.
"""

from funflow.util.io import dot
from funflow.util.typedispatch import TypeDispatcher, dispatch, defaultdispatch
from . import ast

__all__ = ["renderDot", "renderGraphic", "TreeDiagram"]


class TreeDiagram(TypeDispatcher):
    """Adds the nodes and edges for one subtree to a dot.Digraph."""

    def __init__(self, graph):
        self.graph = graph

    def _node(self, node, text=None):
        self.graph.node(
            node.label, label="%s [#%d]" % (text if text is not None else node.type, node.label)
        )
        return node.label

    def _connect(self, node, child, role=None):
        target = self(child)
        if role is None:
            self.graph.edge(node.label, target)
        else:
            self.graph.edge(node.label, target, label=role)

    @dispatch(ast.NumericConstant)
    def visitNumber(self, node):
        return self._node(node, str(node.value))

    @dispatch(ast.BooleanConstant)
    def visitBoolean(self, node):
        return self._node(node)

    @dispatch(ast.Variable)
    def visitVariable(self, node):
        return self._node(node, node.name)

    @dispatch(ast.Operation)
    def visitOperation(self, node):
        label = self._node(node)
        self._connect(node, node.left, "left")
        self._connect(node, node.right, "right")
        return label

    @dispatch(ast.If)
    def visitIf(self, node):
        label = self._node(node)
        self._connect(node, node.condition, "condition")
        self._connect(node, node.thenBody, "then")
        self._connect(node, node.elseBody, "else")
        return label

    @dispatch(ast.Fn)
    def visitFn(self, node):
        label = self._node(node, "fn %s" % node.variable)
        self._connect(node, node.body)
        return label

    @dispatch(ast.Fun)
    def visitFun(self, node):
        label = self._node(node, "fun %s %s" % (node.name, node.variable))
        self._connect(node, node.body)
        return label

    @dispatch(ast.Application)
    def visitApplication(self, node):
        label = self._node(node)
        self._connect(node, node.callable, "callable")
        self._connect(node, node.argument, "argument")
        return label

    @dispatch(ast.Let)
    def visitLet(self, node):
        label = self._node(node)
        self._connect(node, node.value, node.variable)
        self._connect(node, node.body, "in")
        return label

    @defaultdispatch
    def visitDefault(self, node):
        raise TypeError("Cannot draw %r" % (node,))


def renderDot(expression):
    """Return the DOT text of the syntax tree diagram."""
    graph = dot.Digraph("CS", nodetype=dot.Style(shape="box"))
    graph.node(0, style="invis")
    root = TreeDiagram(graph)(expression)
    graph.edge(0, root)
    return graph.toDot()


def renderGraphic(expression, format="svg"):
    """Render the diagram through Graphviz; returns the image bytes."""
    return dot.compileDot(renderDot(expression), format)
