"""
Date normalizer: repaired date entries from partial scalar input.

All functions are pure apart from reporting to the diagnostics sink; inputs
are never mutated and every DateRange is built fresh.

Invariant: for every DateRange with both ``begin`` and ``end``, end >= begin.
An inverted range is repaired to end := begin and reported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from archive_kernel.domain.diagnostics import DiagnosticCode, DiagnosticsSink

from archive_convert.domain.text import UNSPECIFIED, is_blank
from archive_convert.domain.types import DateRecord


class DateType:
    SINGLE = "single"
    BULK = "bulk"
    INCLUSIVE = "inclusive"


@dataclass(frozen=True)
class DateRange:
    """One target date entry."""

    date_type: str
    label: str
    begin: str | None = None
    end: str | None = None
    expression: str | None = None
    certainty: str | None = None
    era: str | None = None
    calendar: str | None = None

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"date_type": self.date_type, "label": self.label}
        for key in ("expression", "begin", "end", "certainty", "era", "calendar"):
            value = getattr(self, key)
            if value is not None:
                doc[key] = value
        return doc


def _report_inverted(begin: Any, end: Any, sink: DiagnosticsSink, identifier: str, bulk: bool) -> None:
    prefix = "Bulk end date" if bulk else "End date"
    begin_word = "bulk begin date" if bulk else "begin date"
    sink.report(
        f"{prefix}: {end} before {begin_word}: {begin}, ignoring end date\n{identifier}",
        DiagnosticCode.DATE_INVERTED,
    )


def _end_or_begin(
    begin: Any,
    end: Any,
    sink: DiagnosticsSink,
    identifier: str,
    *,
    bulk: bool = False,
) -> Any:
    if end is None:
        return begin
    if end >= begin:
        return end
    _report_inverted(begin, end, sink, identifier, bulk)
    return begin


def normalize_default_date(
    *,
    label: str,
    expression: str | None,
    begin: int | None,
    end: int | None,
    identifier: str,
    sink: DiagnosticsSink,
    bulk_begin: int | None = None,
    bulk_end: int | None = None,
) -> tuple[DateRange, ...]:
    """
    The synthesized date entries for a record's scalar date fields.

    Returns zero, one or two entries: the default entry (emitted when
    ``begin`` is present or ``expression`` is non-blank) and a bulk entry
    (emitted when ``bulk_begin`` is present).
    """
    entries: list[DateRange] = []
    if begin is not None:
        fixed_end = _end_or_begin(begin, end, sink, identifier)
        entries.append(
            DateRange(
                date_type=DateType.INCLUSIVE,
                label=label,
                begin=str(begin),
                end=str(fixed_end),
                expression=None if is_blank(expression) else expression,
            )
        )
    elif not is_blank(expression):
        entries.append(DateRange(date_type=DateType.SINGLE, label=label, expression=expression))

    if bulk_begin is not None:
        fixed_bulk_end = _end_or_begin(bulk_begin, bulk_end, sink, identifier, bulk=True)
        entries.append(
            DateRange(
                date_type=DateType.BULK,
                label=label,
                begin=str(bulk_begin),
                end=str(fixed_bulk_end),
            )
        )
    return tuple(entries)


def _iso_value(text: str | None) -> str | None:
    value = (text or "").strip()
    if not value or value == "0":
        return None
    return value


_ISO_PREFIX = re.compile(r"^(-?\d+)(?:-(\d{1,2}))?(?:-(\d{1,2}))?")


def _iso_key(value: str) -> tuple[int, int, int] | None:
    """(year, month, day) of an ISO date prefix; years of any width."""
    match = _ISO_PREFIX.match(value)
    if match is None:
        return None
    year, month, day = match.groups()
    return int(year), int(month or 1), int(day or 1)


def _structured_end(begin: str, end: str | None, sink: DiagnosticsSink, identifier: str) -> str:
    # Values without an ISO date prefix are never repaired.
    if end is None:
        return begin
    begin_key, end_key = _iso_key(begin), _iso_key(end)
    if begin_key is None or end_key is None or end_key >= begin_key:
        return end
    _report_inverted(begin, end, sink, identifier, False)
    return begin


def normalize_structured_date(
    record: DateRecord,
    *,
    label: str,
    identifier: str,
    sink: DiagnosticsSink,
    certainty: str | None = None,
    era: str | None = None,
    calendar: str | None = None,
) -> DateRange:
    """
    Convert one structured date child. Always emits an entry.

    ISO begin/end of "0" or blank count as absent. Without a begin, a blank
    expression becomes "unspecified" so the entry stays valid. Label and
    qualifiers arrive already resolved by the caller.
    """
    begin = _iso_value(record.iso_begin)
    expression = record.expression if not is_blank(record.expression) else None

    if begin is None:
        return DateRange(
            date_type=DateType.SINGLE,
            label=label,
            expression=expression or UNSPECIFIED,
            certainty=certainty,
            era=era,
            calendar=calendar,
        )

    end = _structured_end(begin, _iso_value(record.iso_end), sink, identifier)
    return DateRange(
        date_type=DateType.INCLUSIVE,
        label=label,
        begin=begin,
        end=end,
        expression=expression,
        certainty=certainty,
        era=era,
        calendar=calendar,
    )


def event_date(day: date | None, fallback: date) -> DateRange:
    """Single event date; the accession date stands in when ``day`` is absent."""
    value = (day or fallback).isoformat()
    return DateRange(date_type=DateType.SINGLE, label="other", begin=value, end=value)


def deaccession_date(day: date) -> DateRange:
    value = day.isoformat()
    return DateRange(
        date_type=DateType.SINGLE,
        label="deaccession",
        begin=value,
        expression=value,
        era="ce",
        calendar="gregorian",
    )
