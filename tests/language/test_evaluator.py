import unittest

from funflow.application.errors import EvaluationError
from funflow.language.fun import ast
from funflow.language.fun.evaluator import evaluate, formatValue
from funflow.language.fun.parser import parse


def run(source):
    return formatValue(evaluate(parse(source)))


class TestEvaluate(unittest.TestCase):
    def testConstants(self):
        self.assertEqual(run("42"), "42")
        self.assertEqual(run("true"), "true")
        self.assertEqual(run("false"), "false")

    def testArithmetic(self):
        self.assertEqual(run("(2 + 3)"), "5")
        self.assertEqual(run("(2 - 3)"), "-1")
        self.assertEqual(run("(2 * (3 + 4))"), "14")

    def testDivisionTruncatesTowardZero(self):
        self.assertEqual(run("(7 / 2)"), "3")
        self.assertEqual(run("(7 / -2)"), "-3")
        self.assertEqual(run("(-7 / 2)"), "-3")

    def testComparison(self):
        self.assertEqual(run("(1 < 2)"), "true")
        self.assertEqual(run("(2 <= 1)"), "false")
        self.assertEqual(run("(2 >= 2)"), "true")

    def testStrictEquality(self):
        self.assertEqual(run("(1 == 1)"), "true")
        self.assertEqual(run("(1 == true)"), "false")
        self.assertEqual(run("(true != false)"), "true")
        self.assertEqual(run("(let f = (fn x => x) in (f == f))"), "true")

    def testShortCircuit(self):
        self.assertEqual(run("(true || (1 + true))"), "true")
        self.assertEqual(run("(false && (1 + true))"), "false")

    def testFunctionValue(self):
        self.assertEqual(run("((fn x => x) (fn y => y))"), "reference to #4")

    def testLetAndApplication(self):
        self.assertEqual(run("(let f = (fn x => (x + 1)) in (f 2))"), "3")

    def testRecursion(self):
        source = (
            "(let fact = (fun f n => (if (n <= 0) then 1 else (n * (f (n - 1))))) "
            "in (fact 5))"
        )
        self.assertEqual(run(source), "120")

    def testCallerContextIsExtended(self):
        source = "(let y = 1 in (let f = (fn x => y) in (let y = 2 in (f 0))))"
        self.assertEqual(run(source), "2")

    def testReturnsNode(self):
        root = parse("(fn x => x)")
        self.assertIs(evaluate(root), root)


class TestEvaluateErrors(unittest.TestCase):
    def assertFails(self, source, message=None):
        with self.assertRaises(EvaluationError) as cm:
            evaluate(parse(source))
        if message is not None:
            self.assertEqual(str(cm.exception), message)

    def testTypeMismatch(self):
        self.assertFails(
            "(true + 1)", "Evaluation of expression #2 yielded true, needed number."
        )
        self.assertFails("(if 1 then 2 else 3)")
        self.assertFails("(1 || true)")

    def testNotCallable(self):
        self.assertFails(
            "(1 2)",
            "Evaluation of expression #2 yielded 1, needed reference to fn or fun expression.",
        )

    def testUnbound(self):
        self.assertFails("x", 'Variable "x" in expression #1 not in scope.')

    def testDivisionByZero(self):
        self.assertFails("(1 / 0)")

    def testRecursionLimit(self):
        self.assertFails("((fun f x => (f x)) 1)", "Limit of 100 recursions exceeded.")

    def testDeepRecursionWithinLimit(self):
        source = (
            "(let sum = (fun f n => (if (n <= 0) then 1 else (n + (f (n - 1))))) "
            "in (sum %d))"
        )
        self.assertEqual(evaluate(parse(source % 99)), 4951)
        self.assertEqual(evaluate(parse(source % 300), maxRecursion=400), 45151)
        with self.assertRaises(EvaluationError):
            evaluate(parse(source % 100))

    def testCustomLimit(self):
        root = parse("((fun f n => (if (n <= 0) then 0 else (f (n - 1)))) 5)")
        self.assertEqual(evaluate(root, maxRecursion=10), 0)
        with self.assertRaises(EvaluationError):
            evaluate(root, maxRecursion=3)


class TestFormatValue(unittest.TestCase):
    def testValues(self):
        self.assertEqual(formatValue(True), "true")
        self.assertEqual(formatValue(-3), "-3")
        self.assertEqual(formatValue(ast.Fn("x", ast.Variable("x"), label=7)), "reference to #7")
