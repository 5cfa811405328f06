import unittest

from funflow.analysis.constraints.scope import Context, resolveScopes
from funflow.application.errors import DuplicateLabel, NameCollision, UnboundVariable
from funflow.language.fun import ast
from funflow.language.fun.parser import parse


def binders(root):
    info = resolveScopes(root)
    return {node.label: info.binderOf(node) for node in info.byType.get("var", ())}


class TestContext(unittest.TestCase):
    def testExtendDoesNotMutate(self):
        base = Context()
        inner = base.extend(3, "x", "f")
        self.assertNotIn("x", base)
        self.assertIn("x", inner)
        self.assertIn("f", inner)

    def testLookupMiss(self):
        with self.assertRaises(UnboundVariable):
            Context().lookup(ast.Variable("q", label=4))


class TestResolveScopes(unittest.TestCase):
    def testFn(self):
        self.assertEqual(binders(parse("(fn x => x)")), {2: 1})

    def testFunBindsNameAndParameter(self):
        # Fun 1, App 2, f 3, x 4
        self.assertEqual(binders(parse("(fun f x => (f x))")), {3: 1, 4: 1})

    def testLetBodyOnly(self):
        self.assertEqual(binders(parse("(let x = 1 in x)")), {3: 1})
        with self.assertRaises(UnboundVariable):
            resolveScopes(parse("(let x = x in x)"))

    def testShadowing(self):
        self.assertEqual(binders(parse("(fn x => (fn x => x))")), {3: 2})

    def testSiblingScopesDoNotLeak(self):
        with self.assertRaises(UnboundVariable) as cm:
            resolveScopes(parse("((fn x => x) x)"))
        self.assertEqual(cm.exception.node.label, 4)

    def testUnbound(self):
        with self.assertRaises(UnboundVariable) as cm:
            resolveScopes(parse("(fn x => y)"))
        self.assertEqual(
            str(cm.exception),
            "Variable expression #2 references an unbound variable 'y'.",
        )

    def testNameCollision(self):
        with self.assertRaises(NameCollision) as cm:
            resolveScopes(parse("(fun f f => f)"))
        self.assertEqual(cm.exception.node.label, 1)

    def testDuplicateLabel(self):
        root = ast.Application(
            ast.NumericConstant(1, label=2), ast.NumericConstant(2, label=2), label=1
        )
        with self.assertRaises(DuplicateLabel) as cm:
            resolveScopes(root)
        self.assertEqual(str(cm.exception), "Label 2 is used by more than one expression.")

    def testIndices(self):
        info = resolveScopes(parse("((fn x => x) (fn y => y))"))
        self.assertEqual(sorted(info.byLabel), [1, 2, 3, 4, 5])
        self.assertEqual([n.label for n in info.byType["fn"]], [2, 4])
        self.assertEqual([n.label for n in info.byType["var"]], [3, 5])
        self.assertEqual([n.label for n in info.byType["app"]], [1])
        self.assertIs(info.root, info.byLabel[1])
