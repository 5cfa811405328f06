import contextlib
import io
import json
import os
import tempfile
import unittest

from funflow.cli.main import build_parser, main


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def file(self, name, text):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w") as f:
            f.write(text)
        return path

    def invoke(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()


class TestSolveCommand(CliTestCase):
    program = "((fn x => x) (fn y => y))"

    def testText(self):
        code, out, err = self.invoke("solve", "-e", self.program)
        self.assertEqual(code, 0, err)
        lines = out.splitlines()
        self.assertEqual(lines[0], "C(1): 4")
        self.assertIn("C(5):", lines)
        self.assertIn("p(x#2): 4", lines)

    def testProgramFile(self):
        path = self.file("id.fun", self.program + "\n")
        code, out, err = self.invoke("solve", path, "--ruleset", "cfa")
        self.assertEqual(code, 0, err)
        self.assertTrue(out.startswith("C(1): 4\n"))

    def testJson(self):
        code, out, err = self.invoke("solve", "-e", "(1 + 2)", "-r", "signs", "--format", "json")
        self.assertEqual(code, 0, err)
        document = json.loads(out)
        self.assertEqual(document["analysis"], {"C(1)": ["+"], "C(2)": ["+"], "C(3)": ["+"]})

    def testCycles(self):
        code, out, err = self.invoke("solve", "-e", "((fun f x => (f x)) 1)", "--cycles")
        self.assertEqual(code, 0, err)
        self.assertIn("cycle: C(5), p(x#2)", out.splitlines())
        self.assertIn("cycle: C(3)", out.splitlines())

        code, out, err = self.invoke("solve", "-e", self.program, "--cycles")
        self.assertIn("no recursive entries", out)

    def testOutputFile(self):
        target = os.path.join(self.tmp.name, "analysis.txt")
        code, out, err = self.invoke("solve", "-e", self.program, "-o", target)
        self.assertEqual(code, 0, err)
        self.assertEqual(out, "")
        with open(target) as f:
            self.assertTrue(f.read().startswith("C(1): 4"))

    def testScopeError(self):
        code, out, err = self.invoke("solve", "-e", "(fn x => y)")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertEqual(
            err.strip(), "Error: Variable expression #2 references an unbound variable 'y'."
        )

    def testStepLimit(self):
        script = self.file(
            "grow.py",
            "define(Rule(Dynamic([ExpressionReference(expression)], "
            "lambda s: s[0] + (len(s[0]),)), ExpressionReference(expression)))\n",
        )
        code, out, err = self.invoke("solve", "-e", "1", "-r", script, "--max-steps", "20")
        self.assertEqual(code, 1)
        self.assertIn("Error: Drain exceeded 20 steps", err)

    def testConfigFile(self):
        script = self.file(
            "grow.py",
            "define(Rule(Dynamic([ExpressionReference(expression)], "
            "lambda s: s[0] + (len(s[0]),)), ExpressionReference(expression)))\n",
        )
        config = self.file("funflow.toml", "[solver]\nmax_steps = 7\n")
        code, out, err = self.invoke("solve", "-e", "1", "-r", script, "--config", config)
        self.assertEqual(code, 1)
        self.assertIn("7 steps", err)

    def testVerboseReportsPhasesAndStats(self):
        code, out, err = self.invoke("solve", "-e", self.program, "-v")
        self.assertEqual(code, 0, err)
        self.assertTrue(out.startswith("C(1): 4\n"))
        self.assertIn("drain.steps = ", err)
        self.assertIn("scopes.expressions = 5", err)

    def testUnknownRuleset(self):
        code, out, err = self.invoke("solve", "-e", "1", "-r", "nosuchset")
        self.assertEqual(code, 1)
        self.assertTrue(err.startswith("Error: "))

    def testProgramRequired(self):
        code, out, err = self.invoke("solve")
        self.assertEqual(code, 1)
        self.assertIn("required", err)


class TestOtherCommands(CliTestCase):
    def testRun(self):
        code, out, err = self.invoke("run", "-e", "(let f = (fn x => (x * 2)) in (f 21))")
        self.assertEqual((code, out), (0, "42\n"))

    def testRunError(self):
        code, out, err = self.invoke("run", "-e", "(1 / 0)")
        self.assertEqual(code, 1)
        self.assertEqual(err.strip(), "Error: Division by zero in expression #1.")

    def testParseError(self):
        code, out, err = self.invoke("run", "-e", "(fn x => )")
        self.assertEqual(code, 1)
        self.assertTrue(err.startswith("Error: Error at line 1, column 10."))

    def testGraph(self):
        code, out, err = self.invoke("graph", "-e", "(fn x => x)")
        self.assertEqual(code, 0, err)
        self.assertTrue(out.startswith('digraph "CS" {'))
        self.assertIn('"1" [label="fn x [#1]"];', out)

    def testLabels(self):
        code, out, err = self.invoke("labels", "-e", "(let x = 1 in x)")
        self.assertEqual(code, 0, err)
        lines = out.splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[0].startswith("#1"))
        self.assertIn("let", lines[0].split())
        self.assertEqual(lines[2].split()[:3], ["#3", "var", "x"])

    def testParserRequiresCommand(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                build_parser().parse_args([])
