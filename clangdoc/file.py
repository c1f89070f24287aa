"""
Files known to a parsed translation unit.
"""

import os
from ctypes import byref
from typing import NamedTuple, Optional, Tuple, Union

from clangdoc.exceptions import FileResolutionError, InternalConsistencyError
from clangdoc.native import CXFileUniqueID, get_library
from clangdoc.strings import to_text


class FileHandle:
    """A ``CXFile`` scoped to the translation unit that resolved it.

    Holds the unit without owning it; the handle is meaningless once the unit
    is closed.
    """

    def __init__(self, translation_unit, filepath: Union[str, os.PathLike]):
        """Resolve ``filepath`` inside ``translation_unit``.

        Raises:
            FileResolutionError: If the unit never saw that file.
        """
        lib = get_library()
        raw_file = lib.clang_getFile(translation_unit.handle, os.fsencode(filepath))
        if not raw_file:
            raise FileResolutionError(f"failed to get target file: {filepath}")
        self._file = raw_file
        self._tu = translation_unit

    @classmethod
    def _from_raw(cls, translation_unit, raw_file) -> "FileHandle":
        handle = cls.__new__(cls)
        handle._file = raw_file
        handle._tu = translation_unit
        return handle

    @property
    def handle(self):
        return self._file

    @property
    def name(self) -> Optional[str]:
        return to_text(get_library().clang_getFileName(self._file))

    @property
    def unique_id(self) -> Tuple[int, int, int]:
        """Device/inode style identity; the same for every handle to the file.

        Raises:
            InternalConsistencyError: If libclang cannot identify the file.
        """
        unique_id = CXFileUniqueID()
        if get_library().clang_getFileUniqueID(self._file, byref(unique_id)):
            raise InternalConsistencyError(f"no unique id for file {self.name!r}")
        return tuple(unique_id.data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FileHandle):
            return NotImplemented
        return bool(get_library().clang_File_isEqual(self._file, other._file))

    def __hash__(self) -> int:
        # clang_File_isEqual compares these ids, not pointers
        return hash(self.unique_id)

    def __repr__(self) -> str:
        return f"FileHandle({self.name!r})"


class SourceLocation(NamedTuple):
    """Spelling location of a cursor. ``file`` is None for builtin entities."""

    file: Optional[FileHandle]
    line: int
    column: int
