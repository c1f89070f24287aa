"""
Unit tests for index.py
"""

import unittest
from unittest.mock import MagicMock, patch

from clangdoc.exceptions import IndexCreationError
from clangdoc.index import Index


class TestIndexWithFakeLibrary(unittest.TestCase):
    """Test handle ownership against a fake library."""

    def setUp(self):
        self.lib = MagicMock()
        patcher = patch("clangdoc.index.get_library", return_value=self.lib)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_null_handle_raises(self):
        self.lib.clang_createIndex.return_value = None
        with self.assertRaises(IndexCreationError):
            Index(0, 1)
        self.lib.clang_disposeIndex.assert_not_called()

    def test_flags_are_passed_through(self):
        self.lib.clang_createIndex.return_value = 0xBEEF
        index = Index(exclude_declarations_from_pch=True, display_diagnostics=False)
        self.lib.clang_createIndex.assert_called_once_with(1, 0)
        index.close()

    def test_close_disposes_exactly_once(self):
        self.lib.clang_createIndex.return_value = 0xBEEF
        index = Index(0, 0)
        index.close()
        index.close()
        self.lib.clang_disposeIndex.assert_called_once_with(0xBEEF)
        self.assertTrue(index.closed)

    def test_context_manager_disposes(self):
        self.lib.clang_createIndex.return_value = 0xBEEF
        with Index(0, 0) as index:
            self.assertEqual(index.handle, 0xBEEF)
        self.lib.clang_disposeIndex.assert_called_once_with(0xBEEF)

    def test_garbage_collection_disposes(self):
        self.lib.clang_createIndex.return_value = 0xBEEF
        index = Index(0, 0)
        index.__del__()
        index.__del__()
        self.lib.clang_disposeIndex.assert_called_once_with(0xBEEF)


class TestIndexWithLibclang(unittest.TestCase):
    """Test against the real library."""

    def test_create_and_close(self):
        with Index(0, 0) as index:
            self.assertIsNotNone(index.handle)
        self.assertIsNone(index.handle)


if __name__ == "__main__":
    unittest.main()
