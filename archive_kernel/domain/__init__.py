"""
Pure kernel domain layer: clock abstraction and diagnostics.

No I/O apart from SystemClock and the diagnostics logger.
"""

from archive_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from archive_kernel.domain.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticLog,
    DiagnosticsSink,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticLog",
    "DiagnosticsSink",
]
