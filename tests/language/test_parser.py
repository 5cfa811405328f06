import unittest

from funflow.application.errors import ParseError
from funflow.language.fun import ast
from funflow.language.fun.parser import parse


class TestParseAtoms(unittest.TestCase):
    def testNumber(self):
        node = parse("42")
        self.assertIsInstance(node, ast.NumericConstant)
        self.assertEqual(node.value, 42)
        self.assertEqual(node.label, 1)
        self.assertEqual(node.type, "n")

    def testNegativeNumber(self):
        self.assertEqual(parse("-7").value, -7)

    def testBooleans(self):
        self.assertEqual(parse("true").type, "true")
        self.assertEqual(parse("false").type, "false")
        self.assertIs(parse("false").value, False)

    def testVariable(self):
        node = parse("  some_name \n")
        self.assertIsInstance(node, ast.Variable)
        self.assertEqual(node.name, "some_name")

    def testParenthesizedAtom(self):
        self.assertEqual(parse("(5)").value, 5)


class TestParseCompound(unittest.TestCase):
    def testLabelsArePreOrder(self):
        root = parse("(let f = (fn x => (x + 1)) in (f 2))")
        nodes = list(ast.walk(root))
        self.assertEqual([n.label for n in nodes], list(range(1, 9)))
        self.assertEqual(
            [n.type for n in nodes], ["let", "fn", "+", "var", "n", "app", "var", "n"]
        )

    def testLet(self):
        root = parse("(let x := 1 in x)")
        self.assertIsInstance(root, ast.Let)
        self.assertEqual(root.variable, "x")
        self.assertEqual(root.value.value, 1)
        self.assertEqual(root.body.name, "x")

    def testArrows(self):
        for source in ("(fn x => x)", "(fn x -> x)"):
            root = parse(source)
            self.assertIsInstance(root, ast.Fn)
            self.assertEqual(root.variable, "x")

    def testFun(self):
        root = parse("(fun f n => (f n))")
        self.assertIsInstance(root, ast.Fun)
        self.assertEqual((root.name, root.variable), ("f", "n"))
        self.assertIsInstance(root.body, ast.Application)

    def testIf(self):
        root = parse("(if (a < b) then a else b)")
        self.assertIsInstance(root, ast.If)
        self.assertEqual(root.condition.operator, "<")
        self.assertEqual([c.label for c in root.children()], [2, 5, 6])

    def testAllOperators(self):
        for operator in ast.OPERATORS:
            root = parse("(a %s b)" % operator)
            self.assertIsInstance(root, ast.Operation)
            self.assertEqual(root.type, operator)

    def testMinusIsLiteralWithoutSpace(self):
        root = parse("(x -1)")
        self.assertIsInstance(root, ast.Application)
        self.assertEqual(root.argument.value, -1)

        root = parse("(x - 1)")
        self.assertIsInstance(root, ast.Operation)

    def testPositions(self):
        root = parse("(fn x => x)")
        self.assertEqual((root.line, root.column), (1, 12))
        self.assertEqual((root.body.line, root.body.column), (1, 11))

        root = parse("(fn x =>\n  x)")
        self.assertEqual((root.body.line, root.body.column), (2, 4))
        self.assertEqual((root.line, root.column), (2, 5))


class TestParseErrors(unittest.TestCase):
    def testMissingBody(self):
        with self.assertRaises(ParseError) as cm:
            parse("(fn x => )")
        self.assertEqual(cm.exception.line, 1)
        self.assertEqual(cm.exception.column, 10)
        self.assertTrue(cm.exception.expected)
        self.assertEqual(cm.exception.expected, sorted(cm.exception.expected))
        self.assertTrue(str(cm.exception).startswith("Error at line 1, column 10."))

    def testUnclosed(self):
        with self.assertRaises(ParseError):
            parse("(1 + 2")

    def testTooManyArguments(self):
        with self.assertRaises(ParseError):
            parse("(f x y)")

    def testBadCharacter(self):
        with self.assertRaises(ParseError):
            parse("X")

    def testReservedName(self):
        with self.assertRaises(ParseError):
            parse("(fn if => x)")

        with self.assertRaises(ParseError):
            parse("(let then = 1 in 2)")
