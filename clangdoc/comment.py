"""
Documentation comments parsed by libclang.

Classification covers every ``CXCommentKind``. Rendering is limited to full
comments, which libclang converts to HTML.
"""

from enum import IntEnum
from typing import Optional

from clangdoc.exceptions import InternalConsistencyError
from clangdoc.native import CXComment, get_library
from clangdoc.strings import to_text


class CommentKind(IntEnum):
    """``enum CXCommentKind``."""

    NULL = 0
    TEXT = 1
    INLINE_COMMAND = 2
    HTML_START_TAG = 3
    HTML_END_TAG = 4
    PARAGRAPH = 5
    BLOCK_COMMAND = 6
    PARAM_COMMAND = 7
    TPARAM_COMMAND = 8
    VERBATIM_BLOCK_COMMAND = 9
    VERBATIM_BLOCK_LINE = 10
    VERBATIM_LINE = 11
    FULL_COMMENT = 12

    @classmethod
    def from_raw(cls, raw: int) -> "CommentKind":
        """Map a raw engine value.

        Raises:
            InternalConsistencyError: If libclang reported a kind outside the enum.
        """
        try:
            return cls(raw)
        except ValueError as exc:
            raise InternalConsistencyError(
                f"libclang reported unknown comment kind {raw}"
            ) from exc


class ParsedComment:
    """A ``CXComment`` attached to a cursor.

    Valid only while the translation unit it came from is open.
    """

    def __init__(self, comment: CXComment, translation_unit=None):
        self._comment = comment
        self._tu = translation_unit

    @property
    def kind(self) -> CommentKind:
        raw = get_library().clang_Comment_getKind(self._comment)
        return CommentKind.from_raw(raw)

    def get_text(self) -> Optional[str]:
        """Render the comment.

        Returns:
            None for an absent comment, HTML for a full comment.

        Raises:
            NotImplementedError: For every other comment kind; check ``kind`` first.
        """
        kind = self.kind
        if kind is CommentKind.NULL:
            return None
        if kind is CommentKind.FULL_COMMENT:
            lib = get_library()
            return to_text(lib.clang_FullComment_getAsHTML(self._comment), lib)
        raise NotImplementedError(f"rendering {kind.name} comments is not supported")

    def __repr__(self) -> str:
        return f"ParsedComment({self.kind.name})"
