"""Properties every solve must have, checked over the built-in rule sets."""

import itertools
import random
import unittest

from funflow.analysis.constraints import (
    BoundVariableReference,
    ExpressionReference,
    Solver,
    VariableReference,
)
from funflow.language.fun.parser import parse
from funflow.rulesets import cfa, signs

PROGRAMS = [
    "((fn x => x) (fn y => y))",
    "(let id = (fn x => x) in ((id id) (id 3)))",
    "(let fact = (fun f n => (if (n <= 0) then 1 else (n * (f (n - 1))))) in (fact 5))",
    "(let twice = (fn g => (fn x => (g (g x)))) in ((twice (fn y => (y - 1))) -4))",
    "((fun loop x => (loop x)) (fn z => z))",
]


class RecordingEnvironment(object):
    """Collects the rules of a rule set instead of defining them."""

    def __init__(self, env):
        self.env = env
        self.expression = env.expression
        self.rules = []

    def label(self, n):
        return self.env.label(n)

    def type(self, *tags):
        return self.env.type(*tags)

    def define(self, rule):
        self.rules.append(rule)


def collectRules(root, ruleset):
    recorder = RecordingEnvironment(Solver(root).environment)
    ruleset(recorder)
    return recorder.rules


def asSets(analysis):
    return {name: frozenset(values) for name, values in analysis.items()}


def solveInOrder(root, rules):
    solver = Solver(root)
    solver.defineAll(rules)
    return solver.solve()


class TestConfluence(unittest.TestCase):
    def assertConfluent(self, source, ruleset):
        root = parse(source)
        rules = collectRules(root, ruleset)
        expected = solveInOrder(root, rules)

        orders = [list(reversed(rules))]
        rng = random.Random(1729)
        for _ in range(4):
            shuffled = list(rules)
            rng.shuffle(shuffled)
            orders.append(shuffled)

        for order in orders:
            analysis = solveInOrder(root, order)
            self.assertEqual(list(analysis), list(expected))
            self.assertEqual(asSets(analysis), asSets(expected))

    def testCfa(self):
        for source in PROGRAMS:
            self.assertConfluent(source, cfa)

    def testSigns(self):
        for source in PROGRAMS:
            self.assertConfluent(source, signs)


class TestMonotonicity(unittest.TestCase):
    def testDataOnlyGrows(self):
        for source in PROGRAMS:
            root = parse(source)
            snapshots = []
            solver = Solver(
                root,
                observer=lambda entry, value: snapshots.append(
                    {e.name: frozenset(e.data) for e in solver.store}
                ),
            )
            signs(solver.environment)
            solver.solve()

            self.assertTrue(snapshots)
            for before, after in zip(snapshots, snapshots[1:]):
                for name, values in before.items():
                    self.assertLessEqual(values, after[name])


class TestCanonicalization(unittest.TestCase):
    def testVariableAndBinderAreOneEntry(self):
        root = parse("(let id = (fn x => x) in ((id id) (id 3)))")
        solver = Solver(root)
        for var in solver.scope.byType["var"]:
            binder = solver.scope.byLabel[solver.scope.binderOf(var)]
            self.assertIs(
                solver.store.resolveReference(VariableReference(var)),
                solver.store.resolveReference(BoundVariableReference(binder)),
            )

    def testEveryEntryIsUnique(self):
        root = parse(PROGRAMS[2])
        solver = Solver(root)
        signs(solver.environment)
        names = [e.name for e in solver.store]
        self.assertEqual(len(names), len(set(names)))
        for a, b in itertools.combinations(solver.store, 2):
            self.assertNotEqual((a.category, a.key), (b.category, b.key))

    def testExpressionEntriesMatchLabels(self):
        root = parse(PROGRAMS[0])
        solver = Solver(root)
        for label, node in solver.scope.byLabel.items():
            self.assertEqual(solver.store.resolveReference(ExpressionReference(node)).key, label)
