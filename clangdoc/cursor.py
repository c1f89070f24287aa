"""
Cursors: non-owning views onto nodes of a parsed translation unit.
"""

import functools
from ctypes import byref, c_uint
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, TypeVar

from clangdoc.comment import ParsedComment
from clangdoc.file import FileHandle, SourceLocation
from clangdoc.native import CXCursor, CXFile, get_library
from clangdoc.strings import to_text
from clangdoc.visitor import ChildVisitResult, visit_children

S = TypeVar("S")


class CursorKind(Enum):
    """The node kinds documentation extraction distinguishes."""

    NAMESPACE = "Namespace"
    CLASS_DECL = "ClassDecl"
    STRUCT_DECL = "StructDecl"
    FUNCTION_DECL = "FunctionDecl"
    METHOD = "Method"
    CLASS_TEMPLATE = "ClassTemplate"
    FUNCTION_TEMPLATE = "FunctionTemplate"

    @classmethod
    def from_raw(cls, raw: int) -> Optional["CursorKind"]:
        """Map a ``CXCursorKind`` code, or None outside the recognized subset."""
        return _RAW_CURSOR_KINDS.get(raw)


# CXCursorKind codes from clang-c/Index.h
_RAW_CURSOR_KINDS: Dict[int, CursorKind] = {
    2: CursorKind.STRUCT_DECL,  # CXCursor_StructDecl
    4: CursorKind.CLASS_DECL,  # CXCursor_ClassDecl
    8: CursorKind.FUNCTION_DECL,  # CXCursor_FunctionDecl
    21: CursorKind.METHOD,  # CXCursor_CXXMethod
    22: CursorKind.NAMESPACE,  # CXCursor_Namespace
    30: CursorKind.FUNCTION_TEMPLATE,  # CXCursor_FunctionTemplate
    31: CursorKind.CLASS_TEMPLATE,  # CXCursor_ClassTemplate
}


class Cursor:
    """A node in the AST of a ``TranslationUnit``.

    Cheap to create and copy. It keeps a reference to its unit so garbage
    collection never frees the AST underneath it, but it does not survive an
    explicit ``close()`` of that unit.
    """

    __slots__ = ("_cursor", "_tu")

    def __init__(self, cursor: CXCursor, translation_unit=None):
        self._cursor = cursor
        self._tu = translation_unit

    @property
    def translation_unit(self):
        return self._tu

    @property
    def raw_kind(self) -> int:
        """The unmapped ``CXCursorKind`` code."""
        return get_library().clang_getCursorKind(self._cursor)

    @property
    def kind(self) -> Optional[CursorKind]:
        return CursorKind.from_raw(self.raw_kind)

    @property
    def spelling(self) -> Optional[str]:
        """Declared name, or None for unnamed nodes.

        Anonymous records, enums and namespaces are None even where libclang
        would synthesize a ``(unnamed struct at ...)`` label for them.
        """
        lib = get_library()
        if lib.clang_Cursor_isAnonymous(self._cursor):
            return None
        return to_text(lib.clang_getCursorSpelling(self._cursor), lib) or None

    @property
    def semantic_parent(self) -> Optional["Cursor"]:
        """The declaration scope this node belongs to, or None at the root.

        Differs from the visitor's ``parent`` for out-of-line definitions:
        ``void ui::Widget::draw() {}`` at file scope has ``Widget`` here.
        """
        lib = get_library()
        parent = lib.clang_getCursorSemanticParent(self._cursor)
        if lib.clang_Cursor_isNull(parent):
            return None
        return Cursor(parent, self._tu)

    @property
    def canonical(self) -> "Cursor":
        """The first declaration of the entity; shared by all redeclarations."""
        return Cursor(get_library().clang_getCanonicalCursor(self._cursor), self._tu)

    @property
    def raw_comment(self) -> Optional[str]:
        """Verbatim documentation comment attached to the node, if any."""
        return to_text(get_library().clang_Cursor_getRawCommentText(self._cursor))

    @property
    def parsed_comment(self) -> ParsedComment:
        comment = get_library().clang_Cursor_getParsedComment(self._cursor)
        return ParsedComment(comment, self._tu)

    @property
    def location(self) -> SourceLocation:
        lib = get_library()
        raw_file = CXFile()
        line, column, offset = c_uint(), c_uint(), c_uint()
        lib.clang_getSpellingLocation(
            lib.clang_getCursorLocation(self._cursor),
            byref(raw_file),
            byref(line),
            byref(column),
            byref(offset),
        )
        file = None
        if raw_file.value:
            file = FileHandle._from_raw(self._tu, raw_file.value)
        return SourceLocation(file, line.value, column.value)

    def visit_children(
        self,
        callback: Callable[["Cursor", "Cursor", S], ChildVisitResult],
        state: S,
    ) -> None:
        """Walk the descendants of this cursor depth-first.

        ``callback(cursor, parent, state)`` runs for each immediate child and,
        when it returns ``RECURSE``, for that child's children before the next
        sibling. ``CONTINUE`` skips the children, ``BREAK`` ends the whole walk.

        Example:
            >>> def collect(cursor, parent, names):
            ...     names.append(cursor.spelling)
            ...     return ChildVisitResult.RECURSE
            >>> names = []
            >>> tu.cursor.visit_children(collect, names)
        """
        visit_children(
            get_library(),
            self._cursor,
            functools.partial(Cursor, translation_unit=self._tu),
            callback,
            state,
        )

    def children(self) -> List["Cursor"]:
        """Immediate children in source order."""

        def collect(cursor, parent, found):
            found.append(cursor)
            return ChildVisitResult.CONTINUE

        found: List[Cursor] = []
        self.visit_children(collect, found)
        return found

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return bool(get_library().clang_equalCursors(self._cursor, other._cursor))

    def __hash__(self) -> int:
        return get_library().clang_hashCursor(self._cursor)

    def __repr__(self) -> str:
        kind = self.kind
        label = kind.name if kind is not None else f"raw:{self.raw_kind}"
        return f"Cursor({label}, {self.spelling!r})"
