"""
archive_convert.domain -- Pure source record types, target note tree and text helpers.

ZERO I/O. Imports only from the standard library.
"""

from archive_convert.domain.text import UNSPECIFIED, fix_empty_string, fix_url, is_blank
from archive_convert.domain.types import (
    RECORD_TYPES,
    IdentifierClass,
    RecordKind,
    SourceRecord,
    TargetDocument,
)

__all__ = [
    "RECORD_TYPES",
    "UNSPECIFIED",
    "IdentifierClass",
    "RecordKind",
    "SourceRecord",
    "TargetDocument",
    "fix_empty_string",
    "fix_url",
    "is_blank",
]
