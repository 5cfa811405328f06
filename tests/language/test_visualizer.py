import unittest

from funflow.language.fun.parser import parse
from funflow.language.fun.visualizer import renderDot


class TestRenderDot(unittest.TestCase):
    def testFunction(self):
        text = renderDot(parse("(fn x => x)"))
        lines = text.splitlines()

        self.assertEqual(lines[0], 'digraph "CS" {')
        self.assertEqual(lines[-1], "}")
        self.assertIn('\tnode [shape="box"];', lines)
        self.assertIn('\t"0" [style="invis"];', lines)
        self.assertIn('\t"1" [label="fn x [#1]"];', lines)
        self.assertIn('\t"2" [label="x [#2]"];', lines)
        self.assertIn('\t"1" -> "2";', lines)
        self.assertIn('\t"0" -> "1";', lines)

    def testEdgeRoles(self):
        text = renderDot(parse("(let x = (if true then 1 else 2) in (x + x))"))

        self.assertIn('"1" -> "2" [label="x"];', text)
        self.assertIn('"1" -> "6" [label="in"];', text)
        self.assertIn('"2" -> "3" [label="condition"];', text)
        self.assertIn('"2" -> "4" [label="then"];', text)
        self.assertIn('"2" -> "5" [label="else"];', text)
        self.assertIn('"6" -> "7" [label="left"];', text)
        self.assertIn('"6" -> "8" [label="right"];', text)
        self.assertIn('"6" [label="+ [#6]"];', text)
        self.assertIn('"3" [label="true [#3]"];', text)

    def testApplication(self):
        text = renderDot(parse("(fun f n => (f n))"))

        self.assertIn('"1" [label="fun f n [#1]"];', text)
        self.assertIn('"2" -> "3" [label="callable"];', text)
        self.assertIn('"2" -> "4" [label="argument"];', text)
