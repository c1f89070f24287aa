"""
ctypes layer over the libclang C API.

Declares the engine's by-value structures and the prototypes of the functions
this package calls, and loads the shared library once per process. The library
file is located through ``clang.cindex`` from the ``libclang`` distribution
unless configuration names one explicitly.
"""

import ctypes
import functools
import logging
from ctypes import (
    CFUNCTYPE,
    POINTER,
    Structure,
    c_char_p,
    c_int,
    c_uint,
    c_ulonglong,
    c_void_p,
    py_object,
)
from typing import List, Optional, Sequence, Tuple

from clangdoc import config
from clangdoc.exceptions import LibraryLoadError

logger = logging.getLogger(__name__)


class CXString(Structure):
    """Engine-owned text; must be released with ``clang_disposeString``."""

    _fields_ = [("data", c_void_p), ("private_flags", c_uint)]


class CXCursor(Structure):
    _fields_ = [("kind", c_int), ("xdata", c_int), ("data", c_void_p * 3)]


class CXComment(Structure):
    _fields_ = [("ast_node", c_void_p), ("translation_unit", c_void_p)]


class CXSourceLocation(Structure):
    _fields_ = [("ptr_data", c_void_p * 2), ("int_data", c_uint)]


class CXFileUniqueID(Structure):
    _fields_ = [("data", c_ulonglong * 3)]


# Opaque handles
CXIndex = c_void_p
CXTranslationUnit = c_void_p
CXDiagnostic = c_void_p
CXFile = c_void_p

# enum CXChildVisitResult (*)(CXCursor, CXCursor, CXClientData)
CURSOR_VISITOR = CFUNCTYPE(c_int, CXCursor, CXCursor, py_object)

FunctionSpec = Tuple[str, List, Optional[type]]

FUNCTION_SPECS: Sequence[FunctionSpec] = (
    # Strings
    ("clang_getCString", [CXString], c_char_p),
    ("clang_disposeString", [CXString], None),
    # Index
    ("clang_createIndex", [c_int, c_int], CXIndex),
    ("clang_disposeIndex", [CXIndex], None),
    # Translation units
    (
        "clang_parseTranslationUnit",
        [CXIndex, c_char_p, POINTER(c_char_p), c_int, c_void_p, c_uint, c_uint],
        CXTranslationUnit,
    ),
    ("clang_disposeTranslationUnit", [CXTranslationUnit], None),
    ("clang_getTranslationUnitCursor", [CXTranslationUnit], CXCursor),
    ("clang_getTranslationUnitSpelling", [CXTranslationUnit], CXString),
    # Diagnostics
    ("clang_getNumDiagnostics", [CXTranslationUnit], c_uint),
    ("clang_getDiagnostic", [CXTranslationUnit, c_uint], CXDiagnostic),
    ("clang_getDiagnosticSeverity", [CXDiagnostic], c_int),
    ("clang_getDiagnosticSpelling", [CXDiagnostic], CXString),
    ("clang_formatDiagnostic", [CXDiagnostic, c_uint], CXString),
    ("clang_defaultDiagnosticDisplayOptions", [], c_uint),
    ("clang_disposeDiagnostic", [CXDiagnostic], None),
    # Cursors
    ("clang_getCursorKind", [CXCursor], c_int),
    ("clang_getCursorSpelling", [CXCursor], CXString),
    ("clang_Cursor_isAnonymous", [CXCursor], c_uint),
    ("clang_Cursor_isNull", [CXCursor], c_int),
    ("clang_getCursorSemanticParent", [CXCursor], CXCursor),
    ("clang_getCanonicalCursor", [CXCursor], CXCursor),
    ("clang_equalCursors", [CXCursor, CXCursor], c_uint),
    ("clang_hashCursor", [CXCursor], c_uint),
    ("clang_getCursorLocation", [CXCursor], CXSourceLocation),
    (
        "clang_getSpellingLocation",
        [
            CXSourceLocation,
            POINTER(CXFile),
            POINTER(c_uint),
            POINTER(c_uint),
            POINTER(c_uint),
        ],
        None,
    ),
    ("clang_visitChildren", [CXCursor, CURSOR_VISITOR, py_object], c_uint),
    # Comments
    ("clang_Cursor_getRawCommentText", [CXCursor], CXString),
    ("clang_Cursor_getParsedComment", [CXCursor], CXComment),
    ("clang_Comment_getKind", [CXComment], c_int),
    ("clang_FullComment_getAsHTML", [CXComment], CXString),
    # Files
    ("clang_getFile", [CXTranslationUnit, c_char_p], CXFile),
    ("clang_getFileName", [CXFile], CXString),
    ("clang_File_isEqual", [CXFile, CXFile], c_int),
    ("clang_getFileUniqueID", [CXFile, POINTER(CXFileUniqueID)], c_int),
)


def register_functions(lib: ctypes.CDLL) -> None:
    """Attach argument and result types to every function this package uses.

    Raises:
        LibraryLoadError: If the library does not export one of them.
    """
    for name, argtypes, restype in FUNCTION_SPECS:
        try:
            func = getattr(lib, name)
        except AttributeError as exc:
            raise LibraryLoadError(
                f"libclang does not export {name}; the library is too old"
            ) from exc
        func.argtypes = argtypes
        func.restype = restype


def resolve_library_filename() -> str:
    """Return the libclang file to load.

    An explicitly configured file wins; otherwise ``clang.cindex`` decides,
    honoring a configured directory.
    """
    if config.LIBCLANG_FILE:
        return config.LIBCLANG_FILE

    from clang.cindex import Config, conf

    if config.LIBCLANG_PATH and not Config.loaded:
        Config.set_library_path(config.LIBCLANG_PATH)
    return conf.get_filename()


def load_library(filename: Optional[str] = None) -> ctypes.CDLL:
    """Load libclang from ``filename`` (or the resolved default) and register prototypes.

    Raises:
        LibraryLoadError: If the file cannot be loaded or lacks a function.
    """
    filename = filename or resolve_library_filename()
    try:
        lib = ctypes.cdll.LoadLibrary(filename)
    except OSError as exc:
        raise LibraryLoadError(
            f"{exc}. Set CLANGDOC_LIBCLANG_FILE or 'libclang.file' in "
            f"{config.CONFIG_PATH} to point at libclang."
        ) from exc

    register_functions(lib)
    logger.debug("Loaded libclang from %s", filename)
    return lib


@functools.lru_cache(maxsize=None)
def get_library() -> ctypes.CDLL:
    """Return the process-wide libclang handle, loading it on first use."""
    return load_library()
