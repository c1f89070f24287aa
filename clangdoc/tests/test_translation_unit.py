"""
Unit tests for translation_unit.py

Covers the path precondition, diagnostic gating and release of the AST and
its index, against both a fake library and libclang itself.
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from clangdoc.config import PARSE_ERROR_MESSAGE
from clangdoc.diagnostics import DiagnosticSeverity
from clangdoc.exceptions import NotAFileError, ParseError
from clangdoc.native import CXString
from clangdoc.translation_unit import TranslationUnit

FIXTURES = Path(__file__).parent / "fixtures"


class FakeLibraryTestCase(unittest.TestCase):
    """Routes every libclang call made by the unit and its index to a mock."""

    def setUp(self):
        self.lib = MagicMock()
        self.lib.clang_createIndex.return_value = 0x1
        self.lib.clang_parseTranslationUnit.return_value = 0x2
        self.lib.clang_getNumDiagnostics.return_value = 0
        self.lib.clang_getDiagnosticSpelling.return_value = CXString()
        self.lib.clang_formatDiagnostic.return_value = CXString()
        for target in ("clangdoc.translation_unit.get_library", "clangdoc.index.get_library"):
            patcher = patch(target, return_value=self.lib)
            patcher.start()
            self.addCleanup(patcher.stop)

    def _report(self, *severities):
        self.lib.clang_getNumDiagnostics.return_value = len(severities)
        self.lib.clang_getDiagnostic.side_effect = lambda tu, i: 0x100 + i
        self.lib.clang_getDiagnosticSeverity.side_effect = (
            lambda diag: severities[diag - 0x100]
        )


class TestPathPrecondition(FakeLibraryTestCase):
    """Invalid paths fail before libclang is touched."""

    def test_missing_path(self):
        with self.assertRaises(NotAFileError):
            TranslationUnit("/definitely/missing.cpp")
        self.assertEqual(self.lib.method_calls, [])

    def test_directory_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(NotAFileError):
                TranslationUnit(tmpdir)
        self.assertEqual(self.lib.method_calls, [])

    def test_not_a_file_is_file_not_found(self):
        with self.assertRaises(FileNotFoundError):
            TranslationUnit.with_arguments("/definitely/missing.c", ["-xc"])


class TestDiagnosticGating(FakeLibraryTestCase):
    """Parse results are accepted or rejected by severity."""

    def setUp(self):
        super().setUp()
        self.source = str(FIXTURES / "clean.cpp")

    def test_null_unit_fails_and_releases_index(self):
        self.lib.clang_parseTranslationUnit.return_value = None
        with self.assertRaises(ParseError) as ctx:
            TranslationUnit(self.source)
        self.assertEqual(str(ctx.exception), PARSE_ERROR_MESSAGE)
        self.lib.clang_disposeIndex.assert_called_once_with(0x1)
        self.lib.clang_disposeTranslationUnit.assert_not_called()

    def test_error_diagnostic_fails(self):
        self._report(DiagnosticSeverity.WARNING, DiagnosticSeverity.ERROR)
        with self.assertRaises(ParseError) as ctx:
            TranslationUnit(self.source)
        self.assertEqual(str(ctx.exception), PARSE_ERROR_MESSAGE)
        self.assertEqual(
            [d.severity for d in ctx.exception.diagnostics],
            [DiagnosticSeverity.WARNING, DiagnosticSeverity.ERROR],
        )
        self.lib.clang_disposeTranslationUnit.assert_called_once_with(0x2)
        self.lib.clang_disposeIndex.assert_called_once_with(0x1)
        self.assertEqual(self.lib.clang_disposeDiagnostic.call_count, 2)

    def test_fatal_diagnostic_fails(self):
        self._report(DiagnosticSeverity.FATAL)
        with self.assertRaises(ParseError):
            TranslationUnit(self.source)

    def test_lesser_diagnostics_are_tolerated(self):
        self._report(
            DiagnosticSeverity.IGNORED,
            DiagnosticSeverity.NOTE,
            DiagnosticSeverity.WARNING,
        )
        tu = TranslationUnit(self.source)
        self.assertEqual(len(tu.diagnostics), 3)
        self.lib.clang_disposeTranslationUnit.assert_not_called()
        tu.close()

    def test_close_releases_unit_then_index_once(self):
        tu = TranslationUnit(self.source)
        tu.close()
        tu.close()
        self.lib.clang_disposeTranslationUnit.assert_called_once_with(0x2)
        self.lib.clang_disposeIndex.assert_called_once_with(0x1)
        names = [c[0] for c in self.lib.method_calls]
        self.assertLess(
            names.index("clang_disposeTranslationUnit"),
            names.index("clang_disposeIndex"),
        )

    def test_default_arguments(self):
        with TranslationUnit(self.source) as tu:
            self.assertEqual(tu.arguments, ("-xc++", "-std=c++20"))
        args = self.lib.clang_parseTranslationUnit.call_args[0]
        self.assertEqual(args[3], 2)
        self.assertEqual(list(args[2]), [b"-xc++", b"-std=c++20"])
        self.assertIsNone(args[4])
        self.assertEqual(args[5], 0)
        self.assertEqual(args[6], 0)

    def test_explicit_arguments(self):
        with TranslationUnit.with_arguments(self.source, ["-xc", "-Iinclude"]) as tu:
            self.assertEqual(tu.arguments, ("-xc", "-Iinclude"))
        args = self.lib.clang_parseTranslationUnit.call_args[0]
        self.assertEqual(list(args[2]), [b"-xc", b"-Iinclude"])


class TestParseWithLibclang(unittest.TestCase):
    """Parse the fixture files for real."""

    def test_clean_file(self):
        with TranslationUnit(FIXTURES / "clean.cpp") as tu:
            self.assertEqual(tu.diagnostics, ())
            self.assertFalse(tu.closed)
            self.assertEqual(tu.spelling, str(FIXTURES / "clean.cpp"))
        self.assertTrue(tu.closed)

    def test_warning_only_file(self):
        arguments = ["-xc++", "-std=c++20", "-Wunused-variable"]
        with TranslationUnit.with_arguments(FIXTURES / "warning.cpp", arguments) as tu:
            severities = [d.severity for d in tu.diagnostics]
        self.assertIn(DiagnosticSeverity.WARNING, severities)

    def test_warning_file_with_default_dialect(self):
        with TranslationUnit.from_path(FIXTURES / "warning.cpp") as tu:
            self.assertFalse(any(d.is_error for d in tu.diagnostics))

    def test_missing_semicolon_fails(self):
        with self.assertRaises(ParseError) as ctx:
            TranslationUnit(FIXTURES / "syntax_error.cpp")
        errors = [d for d in ctx.exception.diagnostics if d.is_error]
        self.assertTrue(errors)
        self.assertIn("expected ';'", errors[0].spelling)
        self.assertIn("syntax_error.cpp", errors[0].formatted)

    def test_c_dialect(self):
        with TranslationUnit.with_arguments(FIXTURES / "plain.c", ["-xc", "-std=c11"]) as tu:
            names = [c.spelling for c in tu.cursor.children()]
        self.assertEqual(names, ["add"])

    def test_cpp_only_code_fails_as_c(self):
        with self.assertRaises(ParseError):
            TranslationUnit.with_arguments(FIXTURES / "kinds.cpp", ["-xc", "-std=c11"])


if __name__ == "__main__":
    unittest.main()
