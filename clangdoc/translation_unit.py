"""
Parsing a source file into a libclang translation unit.

A ``TranslationUnit`` owns its own ``Index`` and the parsed AST. Parsing is
gated on diagnostics: any diagnostic at error severity or above fails the
whole parse with a single ``ParseError``.
"""

import logging
import os
from ctypes import c_char_p
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from clangdoc.config import (
    DEFAULT_DISPLAY_DIAGNOSTICS,
    DEFAULT_EXCLUDE_DECLARATIONS_FROM_PCH,
    DEFAULT_PARSE_ARGUMENTS,
    PARSE_ERROR_MESSAGE,
    PARSE_OPTIONS,
)
from clangdoc.cursor import Cursor
from clangdoc.diagnostics import DiagnosticRecord, collect_diagnostics
from clangdoc.exceptions import NotAFileError, ParseError
from clangdoc.index import Index
from clangdoc.native import get_library
from clangdoc.strings import to_text

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _encode_arguments(arguments: Sequence[Union[str, bytes]]):
    encoded = [a if isinstance(a, bytes) else os.fsencode(a) for a in arguments]
    return (c_char_p * len(encoded))(*encoded), len(encoded)


class TranslationUnit:
    """One parsed source file.

    Use as a context manager so the AST and its index are released when the
    block ends; every ``Cursor`` taken from the unit is invalid afterwards.

    Example:
        >>> with TranslationUnit("widget.cpp") as tu:
        ...     names = [c.spelling for c in tu.cursor.children()]
    """

    def __init__(
        self,
        filepath: PathLike,
        arguments: Optional[Sequence[Union[str, bytes]]] = None,
    ):
        """Parse ``filepath``.

        Args:
            filepath: Path to an existing regular file.
            arguments: Raw compiler flags. None selects the default C++ dialect.

        Raises:
            NotAFileError: If ``filepath`` is not an existing regular file.
            IndexCreationError: If libclang cannot allocate an index.
            ParseError: If parsing produced no unit or an error diagnostic.
        """
        self._handle = None
        self._index = None
        self.path = Path(filepath)

        if not self.path.is_file():
            raise NotAFileError(f"{self.path} is not a file")

        if arguments is None:
            arguments = DEFAULT_PARSE_ARGUMENTS
        self.arguments: Tuple = tuple(arguments)

        self._lib = get_library()
        index = Index(
            DEFAULT_EXCLUDE_DECLARATIONS_FROM_PCH, DEFAULT_DISPLAY_DIAGNOSTICS
        )
        try:
            self._handle, self.diagnostics = self._parse(index)
        except BaseException:
            index.close()
            raise
        self._index = index

    @classmethod
    def from_path(cls, filepath: PathLike) -> "TranslationUnit":
        """Parse ``filepath`` with the default dialect (C++20)."""
        return cls(filepath)

    @classmethod
    def with_arguments(
        cls,
        filepath: PathLike,
        arguments: Sequence[Union[str, bytes]],
    ) -> "TranslationUnit":
        """Parse ``filepath`` with caller-supplied compiler flags.

        Example:
            >>> TranslationUnit.with_arguments("lib.c", ["-xc", "-std=c11", "-Iinclude"])
        """
        return cls(filepath, list(arguments))

    def _parse(self, index: Index) -> Tuple[int, Tuple[DiagnosticRecord, ...]]:
        argv, argc = _encode_arguments(self.arguments)
        logger.debug("Parsing %s with arguments: %s", self.path, self.arguments)

        raw_tu = self._lib.clang_parseTranslationUnit(
            index.handle,
            os.fsencode(self.path),
            argv,
            argc,
            None,
            0,
            PARSE_OPTIONS,
        )
        if not raw_tu:
            logger.warning("libclang returned no translation unit for %s", self.path)
            raise ParseError(PARSE_ERROR_MESSAGE)

        try:
            diagnostics = tuple(collect_diagnostics(self._lib, raw_tu))
        except BaseException:
            self._lib.clang_disposeTranslationUnit(raw_tu)
            raise

        errors = [d for d in diagnostics if d.is_error]
        if errors:
            for diagnostic in errors:
                logger.warning("%s", diagnostic.formatted)
            self._lib.clang_disposeTranslationUnit(raw_tu)
            raise ParseError(PARSE_ERROR_MESSAGE, diagnostics=diagnostics)

        for diagnostic in diagnostics:
            logger.debug("Tolerated diagnostic: %s", diagnostic.formatted)
        logger.debug(
            "Parsed %s (%d diagnostics below error severity)",
            self.path,
            len(diagnostics),
        )
        return raw_tu, diagnostics

    @property
    def handle(self):
        """The raw ``CXTranslationUnit``, or None once closed."""
        return self._handle

    @property
    def closed(self) -> bool:
        return self._handle is None

    @property
    def cursor(self) -> Cursor:
        """The root cursor of the AST."""
        return Cursor(self._lib.clang_getTranslationUnitCursor(self._handle), self)

    @property
    def spelling(self) -> Optional[str]:
        """The main file name as libclang recorded it."""
        return to_text(
            self._lib.clang_getTranslationUnitSpelling(self._handle), self._lib
        )

    def close(self) -> None:
        """Dispose the AST and then its index. Later calls do nothing."""
        handle, self._handle = self._handle, None
        if handle is not None:
            self._lib.clang_disposeTranslationUnit(handle)
            logger.debug("Disposed translation unit for %s", self.path)
        index, self._index = self._index, None
        if index is not None:
            index.close()

    def __enter__(self) -> "TranslationUnit":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self):
        if getattr(self, "_handle", None) is not None:
            self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"TranslationUnit({str(self.path)!r}, {state})"
