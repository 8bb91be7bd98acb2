"""
Repository, location and user converters.

These kinds carry no dates, notes or identifiers beyond their external-id
back-reference; each is a field-for-field projection with placeholder
fallbacks for the strings the target requires.
"""

from __future__ import annotations

from typing import Any

from archive_convert.converters.base import ConversionContext, reference
from archive_convert.domain.text import fix_empty_string, fix_url, non_blank, put
from archive_convert.domain.types import (
    LocationRecord,
    RecordKind,
    RepositoryRecord,
    TargetDocument,
    UserRecord,
)

UNKNOWN_BUILDING = "Unknown Building"
FULL_NAME_NOT_ENTERED = "full name not entered"
ACCESS_CLASS_PREFIX = "_AccessClass_"

# Target permission group -> source access class.
GROUP_ACCESS_CLASSES: dict[str, int] = {
    "administrators": 5,
    "repository-managers": 4,
    "repository-archivists": 3,
    "repository-advanced-data-entry": 2,
    "repository-basic-data-entry": 1,
    "repository-viewers": 0,
}


class RepositoryConverter:
    """Converts repository records. Record kind: repository."""

    record_kind: RecordKind = RecordKind.REPOSITORY

    def convert(
        self,
        record: RepositoryRecord,
        ctx: ConversionContext,
        agent_uri: str | None = None,
    ) -> TargetDocument:
        doc: dict[str, Any] = {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "repo_code": record.short_name,
            "name": fix_empty_string(record.name),
            "url": fix_url(record.url),
        }
        put(doc, "org_code", non_blank(record.agency_code))
        put(doc, "parent_institution_name", non_blank(record.institution_name))
        if agent_uri:
            doc["agent_representation"] = reference(agent_uri)
        return doc


class LocationConverter:
    """Converts location records. Record kind: location."""

    record_kind: RecordKind = RecordKind.LOCATION

    def convert(self, record: LocationRecord, ctx: ConversionContext) -> TargetDocument:
        doc: dict[str, Any] = {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "building": fix_empty_string(record.building, UNKNOWN_BUILDING),
        }
        for key, value in (
            ("floor", record.floor),
            ("room", record.room),
            ("area", record.area),
            ("barcode", record.barcode),
            ("classification", record.classification_number),
            ("coordinate_1_label", record.coordinate_1_label),
            ("coordinate_1_indicator", record.coordinate_1),
            ("coordinate_2_label", record.coordinate_2_label),
            ("coordinate_2_indicator", record.coordinate_2),
            ("coordinate_3_label", record.coordinate_3_label),
            ("coordinate_3_indicator", record.coordinate_3),
        ):
            put(doc, key, non_blank(value))
        return doc


class UserConverter:
    """Converts user records. Record kind: user."""

    record_kind: RecordKind = RecordKind.USER

    def convert(self, record: UserRecord, ctx: ConversionContext) -> TargetDocument:
        doc: dict[str, Any] = {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "username": record.username.strip(),
            "name": fix_empty_string(record.full_name, FULL_NAME_NOT_ENTERED),
        }
        put(doc, "email", non_blank(record.email))
        put(doc, "title", non_blank(record.title))
        put(doc, "department", non_blank(record.department))
        return doc


def access_class_key(repository_uri: str, group_code: str) -> str | None:
    """
    Key that binds a target permission group to a source access class.

    ``("/repositories/2", "repository-managers") -> "/repositories/2_AccessClass_4"``.
    Unknown group codes return None.
    """
    access_class = GROUP_ACCESS_CLASSES.get(group_code)
    if access_class is None:
        return None
    return f"{repository_uri}{ACCESS_CLASS_PREFIX}{access_class}"
