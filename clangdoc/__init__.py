"""
clangdoc: a small, safe binding over libclang for documentation extraction.

Parses a source file with a chosen dialect, refuses units with error
diagnostics, walks the AST through a visitor callback and renders the
documentation comments attached to declarations.
"""

from clangdoc.comment import CommentKind, ParsedComment
from clangdoc.cursor import Cursor, CursorKind
from clangdoc.diagnostics import DiagnosticRecord, DiagnosticSeverity
from clangdoc.exceptions import (
    ClangDocError,
    FileResolutionError,
    IndexCreationError,
    InternalConsistencyError,
    LibraryLoadError,
    NotAFileError,
    ParseError,
)
from clangdoc.file import FileHandle, SourceLocation
from clangdoc.index import Index
from clangdoc.strings import to_text
from clangdoc.translation_unit import TranslationUnit
from clangdoc.visitor import ChildVisitResult

__all__ = [
    # Ownership
    "Index",
    "TranslationUnit",
    # Views
    "Cursor",
    "CursorKind",
    "ChildVisitResult",
    "ParsedComment",
    "CommentKind",
    "FileHandle",
    "SourceLocation",
    # Diagnostics
    "DiagnosticRecord",
    "DiagnosticSeverity",
    # Strings
    "to_text",
    # Errors
    "ClangDocError",
    "FileResolutionError",
    "IndexCreationError",
    "InternalConsistencyError",
    "LibraryLoadError",
    "NotAFileError",
    "ParseError",
]
