"""
libclang index: the session context every translation unit is parsed in.
"""

import logging

from clangdoc.config import (
    DEFAULT_DISPLAY_DIAGNOSTICS,
    DEFAULT_EXCLUDE_DECLARATIONS_FROM_PCH,
)
from clangdoc.exceptions import IndexCreationError
from clangdoc.native import get_library

logger = logging.getLogger(__name__)


class Index:
    """Owns one ``CXIndex`` and releases it exactly once.

    Example:
        >>> with Index(exclude_declarations_from_pch=0, display_diagnostics=0) as index:
        ...     index.handle is not None
        True
    """

    def __init__(
        self,
        exclude_declarations_from_pch: int = DEFAULT_EXCLUDE_DECLARATIONS_FROM_PCH,
        display_diagnostics: int = DEFAULT_DISPLAY_DIAGNOSTICS,
    ):
        self._handle = None
        self._lib = get_library()
        self.exclude_declarations_from_pch = int(exclude_declarations_from_pch)
        self.display_diagnostics = int(display_diagnostics)

        handle = self._lib.clang_createIndex(
            self.exclude_declarations_from_pch, self.display_diagnostics
        )
        if not handle:
            raise IndexCreationError("Failed to create index")

        self._handle = handle
        logger.debug(
            "Created index (exclude_pch=%d, display_diagnostics=%d)",
            self.exclude_declarations_from_pch,
            self.display_diagnostics,
        )

    @property
    def handle(self):
        """The raw ``CXIndex``, or None once closed."""
        return self._handle

    @property
    def closed(self) -> bool:
        return self._handle is None

    def close(self) -> None:
        """Dispose the index. Later calls do nothing."""
        handle, self._handle = self._handle, None
        if handle is not None:
            self._lib.clang_disposeIndex(handle)
            logger.debug("Disposed index")

    def __enter__(self) -> "Index":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self):
        if getattr(self, "_handle", None) is not None:
            self.close()
