"""
Resource and resource-component converters.

Resource identifiers go through the identity registry (resource class) and
the EAD id through the finding-aid class. Components get a ref id built from
their persistent id and a fresh random token, independent of the registry.
"""

from __future__ import annotations

from typing import Any

from archive_convert.converters.accession import identifier_fields
from archive_convert.converters.base import ConversionContext
from archive_convert.converters.common import (
    collection_extents,
    deaccessions,
    description_dates,
    external_documents,
    has_undated_deaccession,
    part_extents,
    put_language,
    whole_extent,
)
from archive_convert.domain.text import UNSPECIFIED, fix_empty_string, is_blank, non_blank, put
from archive_convert.domain.types import (
    IdentifierClass,
    RecordKind,
    ResourceComponentRecord,
    ResourceRecord,
    TargetDocument,
)
from archive_convert.mapping.enums import EnumCategory
from archive_convert.mapping.notes import build_notes, container_summary_note

OTHER_LEVEL = "otherlevel"


def finding_aid_title(title: str, subtitle: str) -> str | None:
    """Title and subtitle joined by a newline; blank parts are left out."""
    parts = [p for p in (title, subtitle) if not is_blank(p)]
    return "\n".join(parts) or None


def _put_level(doc: dict[str, Any], level: str, other_level: str) -> None:
    doc["level"] = level
    if level == OTHER_LEVEL:
        doc["other_level"] = fix_empty_string(other_level)


class ResourceConverter:
    """Converts resource records. Record kind: resource."""

    record_kind: RecordKind = RecordKind.RESOURCE

    def convert(self, record: ResourceRecord, ctx: ConversionContext) -> TargetDocument | None:
        resource_id = record.resource_identifier
        record_label = f"Resource: {resource_id}"
        if has_undated_deaccession(record):
            ctx.skip(f"Deaccession without a date for {record_label}")
            return None

        doc: dict[str, Any] = {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "title": fix_empty_string(record.title),
        }
        put_language(ctx, doc, record.language_code)
        doc["extents"] = collection_extents(ctx, record)

        dates = description_dates(ctx, record, "other", record_label)
        if dates:
            doc["dates"] = dates
        if record.external_references:
            doc["external_documents"] = external_documents(record.external_references)

        identifier = ctx.registry.repair_identifier(IdentifierClass.RESOURCE, record.identifier_segments)
        doc.update(identifier_fields(identifier.segments))

        _put_level(
            doc,
            ctx.lookup(EnumCategory.RESOURCE_LEVEL, record.level, required=True),
            record.other_level,
        )
        doc["publish"] = not record.internal_only
        doc["restrictions"] = record.restrictions_apply
        put(doc, "repository_processing_note", non_blank(record.repository_processing_note))
        put(doc, "container_summary", non_blank(record.container_summary))

        ead_id = ctx.registry.ensure_unique_single(IdentifierClass.FINDING_AID, record.ead_id)
        put(doc, "ead_id", ead_id or None)
        put(doc, "ead_location", non_blank(record.ead_location))
        put(doc, "finding_aid_title", finding_aid_title(record.finding_aid_title, record.finding_aid_subtitle))
        put(doc, "finding_aid_date", non_blank(record.finding_aid_date))
        put(doc, "finding_aid_author", non_blank(record.author))
        put(
            doc,
            "finding_aid_description_rules",
            ctx.lookup(EnumCategory.FINDING_AID_DESCRIPTION_RULES, record.description_rules),
        )
        put(doc, "finding_aid_language", non_blank(record.finding_aid_language))
        put(doc, "finding_aid_sponsor", non_blank(record.sponsor_note))
        put(doc, "finding_aid_edition_statement", non_blank(record.edition_statement))
        put(doc, "finding_aid_series_statement", non_blank(record.series))
        put(doc, "finding_aid_revision_date", non_blank(record.revision_date))
        put(doc, "finding_aid_revision_description", non_blank(record.revision_description))
        put(doc, "finding_aid_status", ctx.lookup(EnumCategory.FINDING_AID_STATUS, record.finding_aid_status))
        put(doc, "finding_aid_note", non_blank(record.finding_aid_note))

        if record.deaccessions:
            doc["deaccessions"] = deaccessions(ctx, record.deaccessions, record_label)
        doc["notes"] = [n.to_document() for n in build_notes(record, ctx.resolver, ctx.sink)]
        return doc


class ResourceComponentConverter:
    """Converts resource components to archival objects. Record kind: resource_component."""

    record_kind: RecordKind = RecordKind.RESOURCE_COMPONENT

    def convert(self, record: ResourceComponentRecord, ctx: ConversionContext) -> TargetDocument:
        record_label = f"Resource Component: {ctx.resource_identifier}/{record.persistent_id}"

        doc: dict[str, Any] = {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "title": record.title,
        }
        put_language(ctx, doc, record.language_code)

        dates = description_dates(ctx, record, "other", record_label)
        if dates:
            doc["dates"] = dates
        elif is_blank(record.title):
            doc["title"] = UNSPECIFIED

        doc["ref_id"] = f"{record.persistent_id}_{ctx.registry.new_token()}"
        _put_level(
            doc,
            ctx.lookup(EnumCategory.ARCHIVAL_OBJECT_LEVEL, record.level, required=True),
            record.other_level,
        )
        put(doc, "component_id", non_blank(record.component_unique_identifier))
        doc["position"] = record.sequence_number

        notes = build_notes(record, ctx.resolver, ctx.sink)
        extents: list[dict[str, Any]] = []
        if not is_blank(record.extent_type):
            extents.append(whole_extent(ctx, record.extent_number, record.extent_type, record.container_summary))
        elif not is_blank(record.container_summary):
            notes.append(container_summary_note(record.container_summary))
        extents.extend(part_extents(ctx, record.physical_descriptions))

        doc["notes"] = [n.to_document() for n in notes]
        if extents:
            doc["extents"] = extents
        return doc
