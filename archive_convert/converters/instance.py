"""
Instance converters: analog containers, digital-object links and the
placeholder instance that carries an accession's location.

Container locations need a start date; it comes from the context's Clock.
"""

from __future__ import annotations

from typing import Any

from archive_convert.converters.base import ConversionContext, reference
from archive_convert.domain.text import fix_empty_string, is_blank, non_blank, put
from archive_convert.domain.types import (
    AccessionRecord,
    AnalogInstanceRecord,
    RecordKind,
    TargetDocument,
)
from archive_convert.mapping.enums import EnumCategory

NOT_SPECIFIED = "not specified"


def container_location(ctx: ConversionContext, location_uri: str, note: str | None = None) -> dict[str, Any]:
    location: dict[str, Any] = {
        "status": "current",
        "start_date": ctx.clock.today().isoformat(),
        "ref": location_uri,
    }
    put(location, "note", note)
    return location


class AnalogInstanceConverter:
    """Converts analog instances. Record kind: analog_instance."""

    record_kind: RecordKind = RecordKind.ANALOG_INSTANCE

    def convert(
        self,
        record: AnalogInstanceRecord,
        ctx: ConversionContext,
        location_uri: str | None = None,
    ) -> TargetDocument:
        container: dict[str, Any] = {
            "type_1": ctx.lookup(EnumCategory.CONTAINER_TYPE, record.container_1_type, required=True),
            "indicator_1": fix_empty_string(record.container_1_indicator, NOT_SPECIFIED),
        }
        put(container, "barcode_1", non_blank(record.barcode))
        for n in (2, 3):
            container_type = getattr(record, f"container_{n}_type")
            if is_blank(container_type):
                continue
            container[f"type_{n}"] = ctx.lookup(EnumCategory.CONTAINER_TYPE, container_type, required=True)
            put(container, f"indicator_{n}", non_blank(getattr(record, f"container_{n}_indicator")))

        if location_uri:
            container["container_locations"] = [container_location(ctx, location_uri)]

        return {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "instance_type": ctx.lookup(EnumCategory.INSTANCE_TYPE, record.instance_type, required=True),
            "container": container,
        }


def convert_digital_instance(digital_object_uri: str | None) -> TargetDocument | None:
    """Instance linking to a digital object; None without a URI."""
    if not digital_object_uri:
        return None
    return {"instance_type": "digital_object", "digital_object": reference(digital_object_uri)}


def create_accession_instance(
    record: AccessionRecord,
    ctx: ConversionContext,
    location_uri: str,
    location_note: str | None = None,
) -> TargetDocument:
    """Placeholder instance that holds an accession's location."""
    return {
        "instance_type": "accession",
        "container": {
            "type_1": "item",
            "indicator_1": fix_empty_string(record.accession_number, NOT_SPECIFIED),
            "container_locations": [container_location(ctx, location_uri, location_note)],
        },
    }
