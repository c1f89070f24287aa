"""
Exception hierarchy for the libclang binding.

Every failure raised by ``clangdoc`` derives from ``ClangDocError`` except the
scope restriction on comment rendering, which uses ``NotImplementedError``.
"""

from typing import Tuple


class ClangDocError(Exception):
    """Base class for binding errors."""


class LibraryLoadError(ClangDocError):
    """Raised when the libclang shared library cannot be loaded or is incomplete."""


class IndexCreationError(ClangDocError):
    """Raised when libclang returns a null index handle."""


class NotAFileError(ClangDocError, FileNotFoundError):
    """Raised when a source path does not name an existing regular file."""


class ParseError(ClangDocError):
    """Raised when parsing yields no unit or any error-severity diagnostic.

    The message is always the same. The ``diagnostics`` attribute holds the
    records captured before the unit was disposed, for callers that want them.
    """

    def __init__(self, message: str, diagnostics: Tuple = ()):
        super().__init__(message)
        self.diagnostics = tuple(diagnostics)


class FileResolutionError(ClangDocError):
    """Raised when a path cannot be resolved to a file inside a parsed unit."""


class InternalConsistencyError(ClangDocError):
    """Raised when libclang reports a value outside a closed mapping.

    Not meant to be handled: it means the engine no longer matches the
    classification tables compiled into this package.
    """
