"""Rule declarations: references, constants, dynamic rules.

A rule `Rule(lhs, rhs)` states that every value of `lhs` belongs to the
entry named by `rhs`. `rhs` is always a reference; `lhs` is a Constant, a
reference (a live view of another entry) or a Dynamic rule computing its
values from the current data of its dependencies.

References name entries in four ways:

- VariableReference(var node): the variable's binding, found through scope
  resolution
- BoundVariableReference(fn/fun/let node): the binding the node introduces
- FunctionVariableReference(fun node): the function name the node binds
- ExpressionReference(node): the values of an expression, by its label

Rule sets may also use the dictionary shape of the rule language, e.g.
`{"lhs": {"constant": 1}, "rhs": {"expression": node}}`; coerceRule turns
those into the classes below.
"""

from funflow.application.errors import UnknownReference

__all__ = [
    "Reference",
    "VariableReference",
    "BoundVariableReference",
    "FunctionVariableReference",
    "ExpressionReference",
    "Constant",
    "Dynamic",
    "Rule",
    "coerceReference",
    "coerceLhs",
    "coerceRule",
]


class Reference(object):
    """Base class of the four ways to name an entry."""
    __slots__ = ("node",)

    def __init__(self, node):
        self.node = node

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.node)


class VariableReference(Reference):
    __slots__ = ()


class BoundVariableReference(Reference):
    __slots__ = ()


class FunctionVariableReference(Reference):
    __slots__ = ()


class ExpressionReference(Reference):
    __slots__ = ()


class Constant(object):
    """A single literal value (number or string atom)."""
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return "Constant(%r)" % (self.value,)


class Dynamic(object):
    """Values computed from the data of other entries.

    Attributes:
        dependencies: References whose entries feed `compute`.
        compute: Callable receiving one tuple of values per dependency (in
            order) and returning an iterable of values. It must be pure and
            monotone: more input values never yield fewer output values.
    """
    __slots__ = ("dependencies", "compute")

    def __init__(self, dependencies, compute):
        self.dependencies = tuple(dependencies)
        self.compute = compute

    def __repr__(self):
        return "Dynamic(%r, %r)" % (self.dependencies, self.compute)


class Rule(object):
    __slots__ = ("lhs", "rhs")

    def __init__(self, lhs, rhs):
        self.lhs = lhs
        self.rhs = rhs

    def __repr__(self):
        return "Rule(%r, %r)" % (self.lhs, self.rhs)


_REFERENCE_KEYS = {
    "variable": VariableReference,
    "boundVariable": BoundVariableReference,
    "functionVariable": FunctionVariableReference,
    "expression": ExpressionReference,
}


def coerceReference(ref):
    """Accept a Reference or a one-key dictionary such as {"variable": node}."""
    if isinstance(ref, Reference):
        return ref
    if isinstance(ref, dict) and len(ref) == 1:
        (key, node), = ref.items()
        cls = _REFERENCE_KEYS.get(key)
        if cls is not None:
            return cls(node)
    raise UnknownReference("Unknown reference type: %r" % (ref,))


def coerceLhs(lhs):
    """Accept any valid left-hand side, in object or dictionary shape."""
    if isinstance(lhs, (Constant, Dynamic, Reference)):
        return lhs
    if isinstance(lhs, dict):
        if set(lhs) == {"constant"}:
            return Constant(lhs["constant"])
        if set(lhs) == {"dynamic", "dependencies"}:
            return Dynamic(
                [coerceReference(d) for d in lhs["dependencies"]], lhs["dynamic"]
            )
    return coerceReference(lhs)


def coerceRule(rule):
    """Accept a Rule or a {"lhs": ..., "rhs": ...} dictionary."""
    if isinstance(rule, Rule):
        lhs, rhs = rule.lhs, rule.rhs
    elif isinstance(rule, dict) and set(rule) == {"lhs", "rhs"}:
        lhs, rhs = rule["lhs"], rule["rhs"]
    else:
        raise UnknownReference("Unknown rule shape: %r" % (rule,))

    lhs = coerceLhs(lhs)
    if isinstance(lhs, Dynamic):
        lhs = Dynamic([coerceReference(d) for d in lhs.dependencies], lhs.compute)
    return Rule(lhs, coerceReference(rhs))
