"""
Build typed source records from plain dicts.

Every record dict carries a ``kind`` key naming its RecordKind; the remaining
keys are the dataclass field names. Values are coerced from their JSON form
using the dataclass annotations:

    date      ISO string, "2001-05-17"
    Decimal   string or number
    tuple     JSON array of the element type
    note part object tagged with a ``part`` key (text, ordered_list,
              defined_list, chronology, bibliography, index)

Missing text fields default to "" and missing optional values to None.
Unknown keys are rejected so that typos in exports are not silently dropped.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from types import UnionType
from typing import Any, Union, get_args, get_origin, get_type_hints

from archive_kernel.exceptions import SourceRecordFormatError

from archive_convert.domain.types import (
    RECORD_TYPES,
    Bibliography,
    Chronology,
    DefinedList,
    Index,
    NotePart,
    OrderedList,
    RecordKind,
    SourceRecord,
    StructuredNote,
    TextPart,
)

NOTE_PARTS: dict[str, type] = {
    "text": TextPart,
    "ordered_list": OrderedList,
    "defined_list": DefinedList,
    "chronology": Chronology,
    "bibliography": Bibliography,
    "index": Index,
}

_STRUCTURED_PARTS = ("bibliography", "index")


@lru_cache(maxsize=None)
def _hints(cls: type) -> dict[str, Any]:
    return get_type_hints(cls)


def _note_part(value: Any, allowed: tuple[str, ...]) -> Any:
    if not isinstance(value, Mapping):
        raise TypeError(f"note part must be an object, got {type(value).__name__}")
    tag = value.get("part")
    if tag not in allowed:
        raise ValueError(f"unknown note part {tag!r}; expected one of {', '.join(allowed)}")
    return _build(NOTE_PARTS[tag], value)


def _coerce(value: Any, hint: Any) -> Any:
    if hint == NotePart:
        return _note_part(value, tuple(NOTE_PARTS))
    if hint == StructuredNote:
        return _note_part(value, _STRUCTURED_PARTS)

    origin = get_origin(hint)
    if origin in (Union, UnionType):
        if value is None:
            return None
        inner = [a for a in get_args(hint) if a is not type(None)]
        return _coerce(value, inner[0])
    if origin is tuple:
        if not isinstance(value, list | tuple):
            raise TypeError(f"expected a list, got {type(value).__name__}")
        element = get_args(hint)[0]
        return tuple(_coerce(v, element) for v in value)

    if dataclasses.is_dataclass(hint):
        if not isinstance(value, Mapping):
            raise TypeError(f"expected an object for {hint.__name__}")
        return _build(hint, value)
    if hint is str:
        return "" if value is None else str(value)
    if hint is bool:
        if not isinstance(value, bool):
            raise TypeError(f"expected true/false, got {value!r}")
        return value
    if hint is int:
        if isinstance(value, bool):
            raise TypeError(f"expected an integer, got {value!r}")
        return int(value)
    if hint is Decimal:
        return Decimal(str(value))
    if hint is date:
        return value if isinstance(value, date) else date.fromisoformat(value)
    return value


def _build(cls: type, data: Mapping[str, Any]) -> Any:
    names = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(data) - names - {"kind", "part"})
    if unknown:
        raise ValueError(f"unknown fields for {cls.__name__}: {', '.join(unknown)}")
    hints = _hints(cls)
    kwargs = {}
    for name, value in data.items():
        if name not in names:
            continue
        try:
            kwargs[name] = _coerce(value, hints[name])
        except (TypeError, ValueError, InvalidOperation) as exc:
            raise ValueError(f"{cls.__name__}.{name}: {exc}") from exc
    return cls(**kwargs)


def record_from_dict(data: Mapping[str, Any]) -> SourceRecord:
    """Build one typed source record.

    Raises:
        SourceRecordFormatError: unknown kind, unknown field, missing
            record_id, or a value that cannot be coerced.
    """
    raw_kind = data.get("kind")
    try:
        kind = RecordKind(raw_kind)
    except ValueError:
        raise SourceRecordFormatError(None, f"unknown record kind {raw_kind!r}") from None

    if data.get("record_id") is None:
        raise SourceRecordFormatError(kind.value, "record_id is required")
    try:
        return _build(RECORD_TYPES[kind], data)
    except (TypeError, ValueError) as exc:
        raise SourceRecordFormatError(kind.value, str(exc)) from exc
