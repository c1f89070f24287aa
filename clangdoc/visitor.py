"""
Bridge between libclang's C traversal callback and Python callables.

libclang owns the traversal loop and calls a C function pointer once per
visited node with an opaque client-data pointer. A single module-level ctypes
trampoline receives that pointer as a ``_VisitContext`` holding the caller's
callback and state, re-dispatches to the callback, and hands its
``ChildVisitResult`` back to libclang as a raw integer.
"""

import logging
from enum import IntEnum
from typing import Any, Callable, Optional, TypeVar

from clangdoc.native import CURSOR_VISITOR, CXCursor

logger = logging.getLogger(__name__)

S = TypeVar("S")


class ChildVisitResult(IntEnum):
    """``enum CXChildVisitResult``; values cross the C boundary unchanged."""

    BREAK = 0
    CONTINUE = 1
    RECURSE = 2


class _VisitContext:
    """Client data for one ``clang_visitChildren`` call."""

    __slots__ = ("callback", "state", "wrap", "error")

    def __init__(
        self, callback: Callable, state: Any, wrap: Callable[[CXCursor], Any]
    ):
        self.callback = callback
        self.state = state
        self.wrap = wrap
        self.error: Optional[BaseException] = None


def _trampoline(cursor: CXCursor, parent: CXCursor, context: _VisitContext) -> int:
    # An exception must not unwind through libclang: park it and stop the walk.
    try:
        result = context.callback(
            context.wrap(cursor), context.wrap(parent), context.state
        )
        if not isinstance(result, ChildVisitResult):
            raise TypeError(
                "visitor callback must return a ChildVisitResult, "
                f"got {type(result).__name__}"
            )
        return int(result)
    except BaseException as exc:
        context.error = exc
        return int(ChildVisitResult.BREAK)


_TRAMPOLINE = CURSOR_VISITOR(_trampoline)


def visit_children(
    lib,
    cursor: CXCursor,
    wrap: Callable[[CXCursor], Any],
    callback: Callable[[Any, Any, S], ChildVisitResult],
    state: S,
) -> None:
    """Run a depth-first walk below ``cursor``.

    ``callback(cursor, parent, state)`` is called for every visited node with
    the same ``state`` object, which is where results must be accumulated.
    Returns once the walk is exhausted or a callback returned ``BREAK``.

    Args:
        lib: Loaded libclang.
        cursor: Raw cursor whose children are visited.
        wrap: Converts a raw ``CXCursor`` into the object passed to ``callback``.
        callback: Per-node decision function.
        state: Caller state threaded through every call.

    Raises:
        Whatever ``callback`` raised, after libclang has returned.
    """
    context = _VisitContext(callback, state, wrap)
    lib.clang_visitChildren(cursor, _TRAMPOLINE, context)
    if context.error is not None:
        logger.debug("Traversal aborted by callback error: %r", context.error)
        raise context.error
