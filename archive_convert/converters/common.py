"""Building blocks shared by the description converters."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from archive_convert.converters.base import ConversionContext
from archive_convert.domain.text import fix_empty_string, fix_url, number_text, put
from archive_convert.domain.types import (
    ArchDescription,
    CollectionDescription,
    Deaccession,
    ExternalReference,
    PhysicalDescription,
)
from archive_convert.mapping.dates import (
    deaccession_date,
    normalize_default_date,
    normalize_structured_date,
)
from archive_convert.mapping.enums import EnumCategory


# -----------------------------------------------------------------------------
# Extents
# -----------------------------------------------------------------------------


def whole_extent(
    ctx: ConversionContext,
    number: Decimal | None,
    extent_type: str,
    container_summary: str,
) -> dict[str, Any]:
    extent: dict[str, Any] = {
        "portion": "whole",
        "number": number_text(number, "0"),
        "extent_type": ctx.lookup(EnumCategory.EXTENT_TYPE, extent_type, required=True),
    }
    put(extent, "container_summary", container_summary or None)
    return extent


def part_extents(ctx: ConversionContext, descriptions: Iterable[PhysicalDescription]) -> list[dict[str, Any]]:
    extents = []
    for pd in descriptions:
        extent: dict[str, Any] = {
            "portion": "part",
            "number": number_text(pd.extent_number, "1.0"),
            "extent_type": ctx.lookup(EnumCategory.EXTENT_TYPE, pd.extent_type, required=True),
        }
        put(extent, "container_summary", pd.container_summary or None)
        put(extent, "physical_details", pd.physical_detail or None)
        put(extent, "dimensions", pd.dimensions or None)
        extents.append(extent)
    return extents


def collection_extents(ctx: ConversionContext, record: CollectionDescription) -> list[dict[str, Any]]:
    """One whole extent plus one part per physical description."""
    return [
        whole_extent(ctx, record.extent_number, record.extent_type, record.container_summary),
        *part_extents(ctx, record.physical_descriptions),
    ]


# -----------------------------------------------------------------------------
# Dates
# -----------------------------------------------------------------------------


def description_dates(
    ctx: ConversionContext,
    record: ArchDescription,
    label: str,
    identifier: str,
) -> list[dict[str, Any]]:
    """The synthesized default date(s) followed by the structured dates."""
    bulk_begin = bulk_end = None
    if isinstance(record, CollectionDescription):
        bulk_begin, bulk_end = record.bulk_date_begin, record.bulk_date_end

    ranges = list(
        normalize_default_date(
            label=label,
            expression=record.date_expression,
            begin=record.date_begin,
            end=record.date_end,
            identifier=identifier,
            sink=ctx.sink,
            bulk_begin=bulk_begin,
            bulk_end=bulk_end,
        )
    )
    for date_record in record.dates:
        ranges.append(
            normalize_structured_date(
                date_record,
                label=ctx.lookup(EnumCategory.DATE_LABEL, date_record.date_type) or "other",
                identifier=identifier,
                sink=ctx.sink,
                certainty=ctx.lookup(EnumCategory.DATE_CERTAINTY, date_record.certainty),
                era=ctx.lookup(EnumCategory.DATE_ERA, date_record.era),
                calendar=ctx.lookup(EnumCategory.DATE_CALENDAR, date_record.calendar),
            )
        )
    return [r.to_document() for r in ranges]


# -----------------------------------------------------------------------------
# Linked documents
# -----------------------------------------------------------------------------


def external_documents(references: Iterable[ExternalReference]) -> list[dict[str, str]]:
    return [
        {"title": fix_empty_string(ref.title), "location": fix_url(ref.href)}
        for ref in references
    ]


def deaccessions(ctx: ConversionContext, items: Iterable[Deaccession], identifier: str) -> list[dict[str, Any]]:
    """Convert deaccession children. Callers reject undated deaccessions first."""
    docs = []
    for item in items:
        if item.deaccession_date is None:
            raise ValueError(f"Deaccession without a date for {identifier}")
        doc: dict[str, Any] = {
            "scope": "part",
            "description": fix_empty_string(item.description),
            "date": deaccession_date(item.deaccession_date).to_document(),
        }
        put(doc, "reason", item.reason or None)
        put(doc, "disposition", item.disposition or None)
        put(doc, "notification", item.notification)
        if item.extent is not None:
            doc["extents"] = [whole_extent(ctx, item.extent, item.extent_type, item.description)]
        docs.append(doc)
    return docs


def put_language(ctx: ConversionContext, doc: dict[str, Any], language_code: str) -> None:
    put(doc, "language", ctx.lookup(EnumCategory.LANGUAGE, language_code))


def has_undated_deaccession(record: CollectionDescription) -> bool:
    return any(item.deaccession_date is None for item in record.deaccessions)
