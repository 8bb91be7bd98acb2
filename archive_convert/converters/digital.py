"""Digital object and digital object component converters."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from archive_convert.converters.base import ConversionContext
from archive_convert.converters.common import description_dates, put_language
from archive_convert.domain.text import fix_empty_string, non_blank, put
from archive_convert.domain.types import (
    DigitalObjectComponentRecord,
    DigitalObjectRecord,
    FileVersion,
    RecordKind,
    TargetDocument,
)
from archive_convert.mapping.enums import EnumCategory
from archive_convert.mapping.notes import build_notes

DIGITIZED = "digitized"


def file_versions(ctx: ConversionContext, versions: Iterable[FileVersion]) -> list[dict[str, Any]]:
    docs = []
    for version in versions:
        doc: dict[str, Any] = {"file_uri": version.uri}
        put(doc, "use_statement", ctx.lookup(EnumCategory.FILE_VERSION_USE_STATEMENT, version.use_statement))
        put(doc, "xlink_actuate_attribute", non_blank(version.actuate))
        put(doc, "xlink_show_attribute", non_blank(version.show))
        docs.append(doc)
    return docs


class DigitalObjectConverter:
    """Converts digital objects. Record kind: digital_object."""

    record_kind: RecordKind = RecordKind.DIGITAL_OBJECT

    def convert(self, record: DigitalObjectRecord, ctx: ConversionContext) -> TargetDocument:
        doc: dict[str, Any] = {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "title": fix_empty_string(record.title),
        }
        put_language(ctx, doc, record.language_code)

        dates = description_dates(ctx, record, DIGITIZED, f"Digital Object: {record.mets_identifier}")
        if dates:
            doc["dates"] = dates

        doc["file_versions"] = file_versions(ctx, record.file_versions)
        doc["digital_object_id"] = ctx.registry.digital_object_id(record.mets_identifier)
        put(doc, "digital_object_type", ctx.lookup(EnumCategory.DIGITAL_OBJECT_TYPE, record.object_type))
        doc["restrictions"] = record.restrictions_apply
        doc["notes"] = [n.to_document() for n in build_notes(record, ctx.resolver, ctx.sink, digital=True)]
        return doc


class DigitalObjectComponentConverter:
    """Converts digital object components. Record kind: digital_object_component."""

    record_kind: RecordKind = RecordKind.DIGITAL_OBJECT_COMPONENT

    def convert(self, record: DigitalObjectComponentRecord, ctx: ConversionContext) -> TargetDocument:
        doc: dict[str, Any] = {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "title": fix_empty_string(record.title),
        }
        put_language(ctx, doc, record.language_code)
        doc["file_versions"] = file_versions(ctx, record.file_versions)
        put(doc, "label", non_blank(record.label))
        doc["component_id"] = fix_empty_string(record.component_id, f"ID_{ctx.registry.new_token()}")

        dates = description_dates(
            ctx, record, DIGITIZED, f"Digital Object Component: {record.component_id}"
        )
        if dates:
            doc["dates"] = dates
        doc["notes"] = [n.to_document() for n in build_notes(record, ctx.resolver, ctx.sink, digital=True)]
        return doc
