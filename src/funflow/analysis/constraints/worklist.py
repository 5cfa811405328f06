"""Worklist fixpoint engine.

Seeding enacts each rule once as it is defined. The drain then takes changed
entries off a FIFO queue and re-enacts the rules that depend on them.
Entries that grow while the drain runs are appended to the same queue and
visited in the same drain, so a single entry can be processed many times,
each time seeing the then-current data of its dependencies. The drain ends
when the queue is empty: no entry can grow without new rules.
"""

import collections
import logging

__all__ = ["Propagator"]

LOG = logging.getLogger(__name__)


class Propagator(object):
    """
    Enacts translated rules and drains the queue of changed entries.

    Attributes:
        store: EntryStore holding the entries and their dependent rules.
        table: RuleTable holding the translated rules.
        queue: Entries waiting to be processed, in order of becoming pending.
        steps: Number of entries dequeued so far.
        observer: Optional callable invoked as observer(entry, value) for every
            value inserted into an entry.
    """

    def __init__(self, store, table, budget=None, observer=None):
        self.store = store
        self.table = table
        self.budget = budget
        self.observer = observer
        self.queue = collections.deque()
        self.steps = 0
        self.enactments = 0

    def mark(self, entry):
        if not entry.pending:
            entry.pending = True
            self.queue.append(entry)

    def enact(self, rule):
        """Insert every value the rule yields; returns True if the rhs grew."""
        self.enactments += 1
        rhs = rule.rhs
        changed = False

        # The lhs may read rhs itself, so iterate over a snapshot.
        for value in tuple(rule.values()):
            if rhs.add(value):
                changed = True
                if self.observer is not None:
                    self.observer(rhs, value)

        if changed:
            self.mark(rhs)
        return changed

    def drain(self):
        """Process the queue until it is empty.

        Raises:
            NonTermination: A Budget was given and the drain ran past it.
        """
        queue = self.queue
        budget = self.budget
        if budget is not None:
            budget.start()

        while queue:
            entry = queue.popleft()
            entry.pending = False
            self.steps += 1

            if budget is not None:
                budget.check(self.steps)

            for ruleId in self.store.dependentRules(entry):
                self.enact(self.table[ruleId])

        LOG.debug(
            "fixpoint after %d steps, %d enactments", self.steps, self.enactments
        )
