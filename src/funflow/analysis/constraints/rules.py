"""Translation of rule declarations into propagation edges.

Each Rule becomes exactly one TranslatedRule, stored in a flat arena and
addressed by its id. The kind is picked from the rule's left-hand side:

- ConstantRule yields one literal and never depends on anything
- ReferenceRule yields the current data of one entry
- DynamicRule yields what its callback computes from the data of its
  dependencies

Reference and dynamic rules are registered as dependents of the entries they
read, so the worklist knows what to re-enact when one of those entries grows.
"""

import logging

from funflow.util.typedispatch import TypeDispatcher, dispatch, defaultdispatch
from funflow.application.errors import UnknownReference
from .references import Constant, Dynamic, Reference, coerceRule

__all__ = [
    "TranslatedRule",
    "ConstantRule",
    "ReferenceRule",
    "DynamicRule",
    "RuleTable",
    "RuleTranslator",
]

LOG = logging.getLogger(__name__)


class TranslatedRule(object):
    """An edge of the propagation graph.

    Attributes:
        id: Index in the rule arena.
        rhs: The Entry receiving the values.
        dependencies: Entries whose growth re-triggers the rule.
        source: The Rule the edge was translated from.
    """
    __slots__ = "id", "rhs", "dependencies", "source"

    def __init__(self, id, rhs, dependencies, source):
        self.id = id
        self.rhs = rhs
        self.dependencies = dependencies
        self.source = source

    def values(self):
        raise NotImplementedError

    def __repr__(self):
        return "%s#%d(-> %s)" % (type(self).__name__, self.id, self.rhs.name)


class ConstantRule(TranslatedRule):
    __slots__ = ("value",)

    def __init__(self, id, rhs, value, source):
        TranslatedRule.__init__(self, id, rhs, (), source)
        self.value = value

    def values(self):
        return (self.value,)


class ReferenceRule(TranslatedRule):
    __slots__ = ()

    def values(self):
        return self.dependencies[0].values()


class DynamicRule(TranslatedRule):
    __slots__ = ("compute", "arguments")

    def __init__(self, id, rhs, arguments, compute, source):
        # A dependency listed twice is still only one reverse link.
        TranslatedRule.__init__(
            self, id, rhs, tuple(dict.fromkeys(arguments)), source
        )
        self.arguments = tuple(arguments)
        self.compute = compute

    def values(self):
        snapshots = tuple(entry.values() for entry in self.arguments)
        return self.compute(snapshots)


class RuleTable(object):
    """Arena of translated rules: rule id -> TranslatedRule."""

    def __init__(self):
        self.rules = []

    def nextId(self):
        return len(self.rules)

    def add(self, rule):
        assert rule.id == len(self.rules), rule
        self.rules.append(rule)
        return rule

    def dependenciesOf(self, ruleId):
        return self.rules[ruleId].dependencies

    def __getitem__(self, ruleId):
        return self.rules[ruleId]

    def __iter__(self):
        return iter(self.rules)

    def __len__(self):
        return len(self.rules)


class RuleTranslator(TypeDispatcher):
    """Dispatches on the left-hand side of a rule.

    Called as translator(lhs, rhs, source) once the rhs reference has already
    been resolved to its Entry.
    """

    def __init__(self, store, table):
        self.store = store
        self.table = table

    @dispatch(Constant)
    def visitConstant(self, lhs, rhs, source):
        return ConstantRule(self.table.nextId(), rhs, lhs.value, source)

    @dispatch(Reference)
    def visitReference(self, lhs, rhs, source):
        entry = self.store.resolveReference(lhs)
        return ReferenceRule(self.table.nextId(), rhs, (entry,), source)

    @dispatch(Dynamic)
    def visitDynamic(self, lhs, rhs, source):
        arguments = [self.store.resolveReference(d) for d in lhs.dependencies]
        return DynamicRule(self.table.nextId(), rhs, arguments, lhs.compute, source)

    @defaultdispatch
    def visitDefault(self, lhs, rhs, source):
        raise UnknownReference("Unknown rule left-hand side: %r" % (lhs,))

    def translate(self, rule):
        """Translate and register one rule.

        Args:
            rule: A Rule, or the dictionary shape of one.

        Returns:
            The new TranslatedRule, already linked from its dependencies.

        Raises:
            UnknownReference: A side of the rule is not a recognised shape or
                names an entry that cannot exist in this program.
        """
        rule = coerceRule(rule)
        rhs = self.store.resolveReference(rule.rhs)
        translated = self.table.add(self(rule.lhs, rhs, rule))

        for entry in translated.dependencies:
            self.store.addDependent(entry, translated.id)

        LOG.debug("translated %r", translated)
        return translated
