"""Analysis entries and their canonical store.

An entry is one fact set the analysis computes. Its identity is a category
and a discriminator:

- `p` (program point): `variableName#binderLabel`, one per binding
- `C` (cache): the label of an expression

Entries live in a flat arena and are addressed by integer id. The store is the
only place entries are created, so references that denote the same binding
always resolve to the same Entry object. Alongside the arena the store keeps
the reverse adjacency entry id -> ids of the rules that read the entry.
"""

import logging
import math

from funflow.application.errors import InvalidValue, UnknownReference
from funflow.language.fun import ast
from funflow.util.typedispatch import TypeDispatcher, dispatch, defaultdispatch
from .references import (
    BoundVariableReference,
    ExpressionReference,
    FunctionVariableReference,
    VariableReference,
)

__all__ = ["Entry", "EntryStore", "PROGRAM_POINT", "CACHE"]

LOG = logging.getLogger(__name__)

PROGRAM_POINT = "p"
CACHE = "C"


def checkValue(value):
    # bool is an int subclass and would collide with 0/1 in the data set.
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidValue(
            "Rules may only produce numbers or strings, got %r." % (value,)
        )
    # nan never equals itself and would defeat the duplicate check.
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidValue("Rules may only produce finite numbers, got %r." % (value,))
    return value


class Entry(object):
    """One tracked fact set.

    Attributes:
        id: Index in the store's arena.
        category: PROGRAM_POINT or CACHE.
        key: Discriminator, a "name#label" string or an expression label.
        data: Insertion-ordered, duplicate-free values (dict used as an ordered set).
        pending: True while the entry sits in the worklist.
    """
    __slots__ = "id", "category", "key", "data", "pending"

    def __init__(self, id, category, key):
        self.id = id
        self.category = category
        self.key = key
        self.data = {}
        self.pending = False

    @property
    def name(self):
        return "%s(%s)" % (self.category, self.key)

    def add(self, value):
        """Insert a value; returns True if it was not present before."""
        if checkValue(value) in self.data:
            return False
        self.data[value] = None
        return True

    def values(self):
        """Snapshot of the current data, in insertion order."""
        return tuple(self.data)

    def __contains__(self, value):
        return value in self.data

    def __len__(self):
        return len(self.data)

    def __repr__(self):
        return "Entry(%s, %r)" % (self.name, list(self.data))


class ReferenceResolver(TypeDispatcher):
    """Maps each reference variant to its canonical (category, key) pair."""

    def __init__(self, scope):
        self.scope = scope

    def _expect(self, ref, *types):
        if not isinstance(ref.node, types):
            raise UnknownReference(
                "%s expects %s, got %r."
                % (type(ref).__name__, " or ".join(t.__name__ for t in types), ref.node)
            )
        return ref.node

    @dispatch(VariableReference)
    def visitVariable(self, ref):
        node = self._expect(ref, ast.Variable)
        binder = self.scope.binderOf(node)
        if binder is None:
            raise UnknownReference("Rule references an unknown variable: %r." % (node,))
        return PROGRAM_POINT, "%s#%d" % (node.name, binder)

    @dispatch(BoundVariableReference)
    def visitBoundVariable(self, ref):
        node = self._expect(ref, ast.Fn, ast.Fun, ast.Let)
        return PROGRAM_POINT, "%s#%d" % (node.variable, node.label)

    @dispatch(FunctionVariableReference)
    def visitFunctionVariable(self, ref):
        node = self._expect(ref, ast.Fun)
        return PROGRAM_POINT, "%s#%d" % (node.name, node.label)

    @dispatch(ExpressionReference)
    def visitExpression(self, ref):
        node = self._expect(ref, ast.Expression)
        if node.label not in self.scope.byLabel:
            raise UnknownReference("Rule references an unknown expression: %r." % (node,))
        return CACHE, node.label

    @defaultdispatch
    def visitDefault(self, ref):
        raise UnknownReference("Unknown reference type: %r" % (ref,))


class EntryStore(object):
    """Arena of entries plus the entry -> dependent rules adjacency.

    Attributes:
        entries: List of Entry, indexed by entry id.
        lut: Map from (category, key) to entry id.
        dependents: List, indexed by entry id, of dicts used as ordered sets
            of rule ids that must be re-enacted when the entry grows.
    """

    def __init__(self, scope):
        self.scope = scope
        self.entries = []
        self.lut = {}
        self.dependents = []
        self._resolver = ReferenceResolver(scope)

    def getOrCreate(self, category, key):
        index = self.lut.get((category, key))
        if index is not None:
            return self.entries[index]

        entry = Entry(len(self.entries), category, key)
        self.entries.append(entry)
        self.dependents.append({})
        self.lut[(category, key)] = entry.id
        LOG.debug("created entry %s", entry.name)
        return entry

    def resolveReference(self, ref):
        """The canonical Entry a reference denotes, created on first use."""
        category, key = self._resolver(ref)
        return self.getOrCreate(category, key)

    def addDependent(self, entry, ruleId):
        self.dependents[entry.id][ruleId] = None

    def dependentRules(self, entry):
        return tuple(self.dependents[entry.id])

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)
