"""Source record adapters (file I/O only)."""

from archive_convert.adapters.json_adapter import JsonRecordAdapter, RecordProbe
from archive_convert.adapters.records import record_from_dict

__all__ = [
    "JsonRecordAdapter",
    "RecordProbe",
    "record_from_dict",
]
