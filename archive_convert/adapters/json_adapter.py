"""
JSON source record adapter.

Handles a JSON array (file is [{...}, {...}, ...]) and JSON Lines (one object
per line). Options: ``format`` "array" | "jsonl", ``json_path`` for a nested
array (e.g. "export.records"), ``encoding``.
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from archive_kernel.exceptions import SourceRecordFormatError
from archive_kernel.logging_config import get_logger

from archive_convert.adapters.records import record_from_dict
from archive_convert.domain.types import SourceRecord

logger = get_logger("convert.adapters.json")


def _get_nested(data: Any, path: str) -> Any:
    """Follow dot-separated path into dict/list. Returns None if key missing."""
    if not path.strip():
        return data
    for key in path.split("."):
        key = key.strip()
        if not key:
            continue
        if isinstance(data, list):
            try:
                data = data[int(key)]
            except (ValueError, IndexError):
                return None
        elif isinstance(data, dict) and key in data:
            data = data[key]
        else:
            return None
    return data


@dataclass(frozen=True)
class RecordProbe:
    """Result of probing a source file: record count and per-kind counts."""

    record_count: int
    kinds: dict[str, int]
    encoding: str | None = None


class JsonRecordAdapter:
    """Read JSON array or JSON Lines files as typed source records."""

    def read_rows(self, source_path: Path, options: dict[str, Any] | None = None) -> Iterator[dict[str, Any]]:
        """Yield one raw dict per record. Non-object entries are an error."""
        options = options or {}
        fmt = options.get("format", "array")
        encoding = options.get("encoding", "utf-8")

        if fmt == "jsonl":
            with source_path.open("r", encoding=encoding) as f:
                for line_no, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        item = json.loads(line)
                    except json.JSONDecodeError as exc:
                        raise SourceRecordFormatError(None, f"line {line_no}: {exc}") from exc
                    if not isinstance(item, dict):
                        raise SourceRecordFormatError(None, f"line {line_no}: expected an object")
                    yield item
            return

        with source_path.open("r", encoding=encoding) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise SourceRecordFormatError(None, f"{source_path}: {exc}") from exc
        json_path = options.get("json_path")
        root = _get_nested(data, json_path) if json_path else data
        if not isinstance(root, list):
            raise SourceRecordFormatError(None, f"{source_path}: no record array found")
        for index, item in enumerate(root):
            if not isinstance(item, dict):
                raise SourceRecordFormatError(None, f"entry {index}: expected an object")
            yield item

    def read(self, source_path: Path, options: dict[str, Any] | None = None) -> Iterator[SourceRecord]:
        """Yield typed records in file order. Streams for JSON Lines."""
        count = 0
        for count, row in enumerate(self.read_rows(source_path, options), start=1):
            try:
                yield record_from_dict(row)
            except SourceRecordFormatError as exc:
                raise SourceRecordFormatError(exc.record_kind, f"record {count}: {exc.reason}") from exc
        logger.info("source_records_read", extra={"source_path": str(source_path), "record_count": count})

    def probe(self, source_path: Path, options: dict[str, Any] | None = None) -> RecordProbe:
        """Count records per kind without building them."""
        kinds = Counter(str(row.get("kind")) for row in self.read_rows(source_path, options))
        return RecordProbe(
            record_count=sum(kinds.values()),
            kinds=dict(kinds),
            encoding=(options or {}).get("encoding", "utf-8"),
        )
