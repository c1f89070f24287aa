"""
Diagnostics reported by libclang for a parsed translation unit.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import List

from clangdoc.strings import to_text


class DiagnosticSeverity(IntEnum):
    """``enum CXDiagnosticSeverity``."""

    IGNORED = 0
    NOTE = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


@dataclass(frozen=True)
class DiagnosticRecord:
    """A diagnostic copied out of the engine.

    Attributes:
        severity: Severity level.
        spelling: Bare message text, e.g. ``expected ';' after top level declarator``.
        formatted: Message with location as clang would print it.
    """

    severity: DiagnosticSeverity
    spelling: str
    formatted: str

    @property
    def is_error(self) -> bool:
        return self.severity >= DiagnosticSeverity.ERROR


def _severity(raw: int) -> DiagnosticSeverity:
    # Unknown levels above FATAL still block parsing.
    if raw > DiagnosticSeverity.FATAL:
        return DiagnosticSeverity.FATAL
    try:
        return DiagnosticSeverity(raw)
    except ValueError:
        return DiagnosticSeverity.IGNORED


def collect_diagnostics(lib, tu_handle) -> List[DiagnosticRecord]:
    """Copy every diagnostic of ``tu_handle`` into records, disposing each one."""
    records = []
    display_options = lib.clang_defaultDiagnosticDisplayOptions()
    for diag_id in range(lib.clang_getNumDiagnostics(tu_handle)):
        diag = lib.clang_getDiagnostic(tu_handle, diag_id)
        try:
            records.append(
                DiagnosticRecord(
                    severity=_severity(lib.clang_getDiagnosticSeverity(diag)),
                    spelling=to_text(lib.clang_getDiagnosticSpelling(diag), lib) or "",
                    formatted=to_text(
                        lib.clang_formatDiagnostic(diag, display_options), lib
                    ) or "",
                )
            )
        finally:
            lib.clang_disposeDiagnostic(diag)
    return records
