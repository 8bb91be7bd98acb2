"""
Diagnostics -- append-only record of every repair and ambiguity.

Contract:
    Any component may call ``sink.report(message)``. One message per repaired
    or ambiguous condition (inverted date, shifted or disambiguated identifier,
    unmapped enumeration value, skipped record).

Guarantees:
    ``DiagnosticLog`` never drops or rewrites an entry. Each entry captures the
    record kind and id bound in ``LogContext`` at report time, and is echoed to
    the ``archive_kernel.diagnostics`` logger.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from archive_kernel.logging_config import LogContext, get_logger

logger = get_logger("diagnostics")


class DiagnosticCode:
    """Machine-readable diagnostic codes."""

    NOTE = "CONVERSION_NOTE"
    DATE_INVERTED = "DATE_END_BEFORE_BEGIN"
    IDENTIFIER_SHIFTED = "IDENTIFIER_SHIFTED"
    IDENTIFIER_DUPLICATE = "IDENTIFIER_DUPLICATE"
    ENUM_UNMAPPED = "ENUM_VALUE_UNMAPPED"
    RECORD_SKIPPED = "RECORD_SKIPPED"


@dataclass(frozen=True)
class Diagnostic:
    """A single human-readable diagnostic with its record context."""

    code: str
    message: str
    record_kind: str | None = None
    record_id: str | None = None


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Append-only destination for diagnostics."""

    def report(self, message: str, code: str = DiagnosticCode.NOTE) -> None:
        ...


class DiagnosticLog:
    """In-memory DiagnosticsSink used for one conversion run."""

    def __init__(self) -> None:
        self._entries: list[Diagnostic] = []

    def report(self, message: str, code: str = DiagnosticCode.NOTE) -> None:
        entry = Diagnostic(
            code=code,
            message=message,
            record_kind=LogContext.get("record_kind"),
            record_id=LogContext.get("record_id"),
        )
        self._entries.append(entry)
        logger.info("diagnostic_reported", extra={"diagnostic_code": code, "diagnostic": message})

    @property
    def entries(self) -> tuple[Diagnostic, ...]:
        return tuple(self._entries)

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(e.message for e in self._entries)

    def __len__(self) -> int:
        return len(self._entries)
