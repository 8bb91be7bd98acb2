"""
Accession converter and accession-derived events.

Fatal per-record conditions (checked before any identifier is registered):
    - no accession date;
    - a deaccession without a date.

The accession identifier is shift-repaired and made unique within the
accession class by the run's IdentityRegistry.
"""

from __future__ import annotations

from typing import Any

from archive_convert.converters.base import ConversionContext, reference
from archive_convert.converters.common import (
    collection_extents,
    deaccessions,
    description_dates,
    external_documents,
    has_undated_deaccession,
    put_language,
)
from archive_convert.domain.text import fix_empty_string, non_blank, put
from archive_convert.domain.types import (
    AccessionRecord,
    IdentifierClass,
    RecordKind,
    TargetDocument,
    UserDefinedFields,
)
from archive_convert.mapping.dates import event_date
from archive_convert.mapping.enums import EnumCategory
from archive_convert.mapping.notes import build_notes


def identifier_fields(segments: tuple[str, ...]) -> dict[str, str]:
    """``id_0`` is always present; later blank segments are omitted."""
    fields = {"id_0": segments[0] if segments else ""}
    for position, segment in enumerate(segments[1:], start=1):
        if segment:
            fields[f"id_{position}"] = segment
    return fields


class AccessionConverter:
    """Converts accession records. Record kind: accession."""

    record_kind: RecordKind = RecordKind.ACCESSION

    def convert(self, record: AccessionRecord, ctx: ConversionContext) -> TargetDocument | None:
        accession_number = record.accession_number
        if record.accession_date is None:
            ctx.skip(f"Invalid Accession Date for {accession_number}")
            return None
        if has_undated_deaccession(record):
            ctx.skip(f"Deaccession without a date for Accession: {accession_number}")
            return None

        identifier = ctx.registry.repair_identifier(IdentifierClass.ACCESSION, record.identifier_segments)
        record_label = f"Accession: {accession_number}"

        doc: dict[str, Any] = {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "title": fix_empty_string(record.title),
            "accession_date": record.accession_date.isoformat(),
            **identifier_fields(identifier.segments),
        }
        put_language(ctx, doc, record.language_code)
        put(doc, "content_description", non_blank(record.description))
        put(doc, "condition_description", non_blank(record.condition_note))
        put(doc, "inventory", non_blank(record.inventory))

        doc["extents"] = collection_extents(ctx, record)

        dates = description_dates(ctx, record, "other", record_label)
        if dates:
            doc["dates"] = dates
        if record.external_references:
            doc["external_documents"] = external_documents(record.external_references)
        if record.deaccessions:
            doc["deaccessions"] = deaccessions(ctx, record.deaccessions, record_label)
        if record.rights_transferred:
            doc["rights_statements"] = [
                {"rights_type": "intellectual_property", "ip_status": "copyrighted", "jurisdiction": "US"}
            ]

        doc["collection_management"] = self._collection_management(record, ctx)
        doc["suppressed"] = record.internal_only
        put(doc, "acquisition_type", ctx.lookup(EnumCategory.ACQUISITION_TYPE, record.acquisition_type))
        put(doc, "resource_type", ctx.lookup(EnumCategory.ACCESSION_RESOURCE_TYPE, record.resource_type))
        doc["restrictions_apply"] = record.restrictions_apply
        put(doc, "retention_rule", non_blank(record.retention_rule))
        put(doc, "general_note", non_blank(record.general_note))
        doc["access_restrictions"] = record.access_restrictions
        put(doc, "use_restrictions_note", non_blank(record.access_restrictions_note))

        notes = build_notes(record, ctx.resolver, ctx.sink)
        if notes:
            doc["notes"] = [n.to_document() for n in notes]

        user_defined = user_defined_fields(record.user_defined)
        if user_defined:
            doc["user_defined"] = user_defined
        return doc

    def _collection_management(self, record: AccessionRecord, ctx: ConversionContext) -> dict[str, Any]:
        cm: dict[str, Any] = {}
        put(cm, "cataloged_note", non_blank(record.cataloged_note))
        put(cm, "processing_plan", non_blank(record.processing_plan))
        put(cm, "processing_priority", ctx.lookup(EnumCategory.PROCESSING_PRIORITY, record.processing_priority))
        put(cm, "processing_status", ctx.lookup(EnumCategory.PROCESSING_STATUS, record.processing_status))
        put(cm, "processors", non_blank(record.processors))
        cm["rights_determined"] = bool(record.rights_transferred)
        return cm


def user_defined_fields(fields: UserDefinedFields) -> dict[str, Any]:
    """Carry user-defined values over; numbers become text, dates ISO strings."""
    doc: dict[str, Any] = {}
    put(doc, "boolean_1", fields.boolean_1)
    put(doc, "boolean_2", fields.boolean_2)
    for key in ("integer_1", "integer_2", "real_1", "real_2"):
        value = getattr(fields, key)
        if value is not None:
            doc[key] = str(value)
    for key in ("string_1", "string_2", "string_3", "text_1", "text_2", "text_3", "text_4"):
        put(doc, key, non_blank(getattr(fields, key)))
    for key in ("date_1", "date_2"):
        value = getattr(fields, key)
        if value is not None:
            doc[key] = value.isoformat()
    return doc


# -----------------------------------------------------------------------------
# Events
# -----------------------------------------------------------------------------

# (event type, flag attribute, date attribute); a None flag means the event
# is emitted whenever its date is present.
_MILESTONES: tuple[tuple[str, str | None, str], ...] = (
    ("processed", "accession_processed", "accession_processed_date"),
    ("acknowledgement_sent", "acknowledgement_sent", "acknowledgement_date"),
    ("agreement_signed", "agreement_received", "agreement_received_date"),
    ("agreement_sent", "agreement_sent", "agreement_sent_date"),
    ("cataloged", "cataloged", "cataloged_date"),
    ("processing_started", None, "processing_started_date"),
    ("copyright_transfer", "rights_transferred", "rights_transferred_date"),
)


def build_accession_events(
    record: AccessionRecord,
    ctx: ConversionContext,
    agent_uri: str,
    accession_uri: str,
) -> list[TargetDocument]:
    """
    Event documents for an accession's milestone fields.

    Each event's date falls back to the accession date. The linked agent is a
    placeholder reference the target requires.
    """
    if record.accession_date is None:
        return []

    events: list[TargetDocument] = []
    for event_type, flag, date_attr in _MILESTONES:
        day = getattr(record, date_attr)
        if flag is None:
            if day is None:
                continue
        elif not getattr(record, flag):
            continue

        event: dict[str, Any] = {
            "event_type": event_type,
            "date": event_date(day, record.accession_date).to_document(),
            "linked_agents": [{"role": "recipient", **reference(agent_uri)}],
            "linked_records": [{"role": "source", **reference(accession_uri)}],
        }
        if event_type == "copyright_transfer":
            put(event, "outcome_note", non_blank(record.rights_transferred_note))
        events.append(event)
    return events
