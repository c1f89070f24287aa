"""Conversion of engine-owned ``CXString`` values into Python text."""

from typing import Optional

from clangdoc.native import CXString, get_library


def to_text(handle: CXString, lib=None) -> Optional[str]:
    """Copy a ``CXString`` into a Python ``str`` and release it.

    The engine buffer is disposed exactly once whatever happens, including
    when the handle carries no data.

    Args:
        handle: A ``CXString`` returned by a libclang call.
        lib: Loaded libclang; defaults to the process-wide library.

    Returns:
        The decoded text (undecodable bytes replaced), or None if the handle
        carries no data.
    """
    if lib is None:
        lib = get_library()
    try:
        if not handle.data:
            return None
        raw = lib.clang_getCString(handle)
        if raw is None:
            return None
        return raw.decode("utf-8", errors="replace")
    finally:
        lib.clang_disposeString(handle)
