"""
Unit tests for visitor.py

Tests the traversal directives, state threading and error propagation
through the libclang callback.
"""

import unittest
from pathlib import Path

from clangdoc.translation_unit import TranslationUnit
from clangdoc.visitor import ChildVisitResult

FIXTURES = Path(__file__).parent / "fixtures"


def record_and_recurse(cursor, parent, names):
    names.append(cursor.spelling)
    return ChildVisitResult.RECURSE


def record_and_continue(cursor, parent, names):
    names.append(cursor.spelling)
    return ChildVisitResult.CONTINUE


def record_and_break(cursor, parent, names):
    names.append(cursor.spelling)
    return ChildVisitResult.BREAK


class TestChildVisitResult(unittest.TestCase):
    def test_engine_encoding(self):
        """Values match enum CXChildVisitResult."""
        self.assertEqual(ChildVisitResult.BREAK, 0)
        self.assertEqual(ChildVisitResult.CONTINUE, 1)
        self.assertEqual(ChildVisitResult.RECURSE, 2)


class TestVisitChildren(unittest.TestCase):
    """Traverse traversal.cpp:

    namespace alpha { void beta(); }
    void gamma();
    void delta();
    """

    def setUp(self):
        self.tu = TranslationUnit(FIXTURES / "traversal.cpp")
        self.addCleanup(self.tu.close)
        self.root = self.tu.cursor

    def test_recurse_visits_grandchildren(self):
        names = []
        self.root.visit_children(record_and_recurse, names)
        self.assertEqual(names, ["alpha", "beta", "gamma", "delta"])

    def test_recurse_only_into_selected_node(self):
        def recurse_into_alpha(cursor, parent, names):
            names.append(cursor.spelling)
            if cursor.spelling == "alpha":
                return ChildVisitResult.RECURSE
            return ChildVisitResult.CONTINUE

        names = []
        self.root.visit_children(recurse_into_alpha, names)
        self.assertEqual(names, ["alpha", "beta", "gamma", "delta"])

    def test_continue_skips_children(self):
        names = []
        self.root.visit_children(record_and_continue, names)
        self.assertEqual(names, ["alpha", "gamma", "delta"])
        self.assertNotIn("beta", names)

    def test_break_stops_everything(self):
        names = []
        self.root.visit_children(record_and_break, names)
        self.assertEqual(names, ["alpha"])

    def test_break_inside_recursion_abandons_siblings(self):
        def break_at_beta(cursor, parent, names):
            names.append(cursor.spelling)
            if cursor.spelling == "beta":
                return ChildVisitResult.BREAK
            return ChildVisitResult.RECURSE

        names = []
        self.root.visit_children(break_at_beta, names)
        self.assertEqual(names, ["alpha", "beta"])

    def test_traversal_is_repeatable(self):
        first, second = [], []
        self.root.visit_children(record_and_recurse, first)
        self.root.visit_children(record_and_recurse, second)
        self.assertEqual(first, second)

    def test_parent_is_passed(self):
        def record_pairs(cursor, parent, pairs):
            pairs.append((cursor.spelling, parent.spelling))
            return ChildVisitResult.RECURSE

        pairs = []
        self.root.visit_children(record_pairs, pairs)
        self.assertIn(("beta", "alpha"), pairs)
        self.assertIn(("gamma", self.root.spelling), pairs)

    def test_state_object_is_shared(self):
        class Counter:
            visits = 0

        def count(cursor, parent, counter):
            counter.visits += 1
            return ChildVisitResult.RECURSE

        counter = Counter()
        self.root.visit_children(count, counter)
        self.assertEqual(counter.visits, 4)

    def test_nested_traversal(self):
        def children_of_alpha(cursor, parent, names):
            if cursor.spelling == "alpha":
                cursor.visit_children(record_and_continue, names)
            return ChildVisitResult.CONTINUE

        names = []
        self.root.visit_children(children_of_alpha, names)
        self.assertEqual(names, ["beta"])

    def test_callback_exception_propagates(self):
        def explode(cursor, parent, names):
            names.append(cursor.spelling)
            raise ValueError("callback failed")

        names = []
        with self.assertRaises(ValueError):
            self.root.visit_children(explode, names)
        self.assertEqual(names, ["alpha"])

    def test_invalid_return_value(self):
        def forget_return(cursor, parent, names):
            names.append(cursor.spelling)

        with self.assertRaises(TypeError):
            self.root.visit_children(forget_return, [])

    def test_bare_integer_is_rejected(self):
        with self.assertRaises(TypeError):
            self.root.visit_children(lambda c, p, s: 1, None)


if __name__ == "__main__":
    unittest.main()
