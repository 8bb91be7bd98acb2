"""
Enumeration resolver: source controlled vocabulary -> target enumeration values.

Contract:
    ``resolve(category, value)`` never raises. A value with no mapping comes
    back as the ``UNMAPPED`` sentinel (or the source value itself when the
    resolver runs in return-source-value mode). Reporting the miss is the
    caller's job; some callers test for a miss on purpose (singlepart note types,
    salutations) and must not produce a diagnostic.

Dynamic lists are the user-extensible target enumerations. A category bound
to a dynamic list accepts any value already registered on that list.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from archive_kernel.domain.diagnostics import DiagnosticCode, DiagnosticsSink

UNMAPPED = "UNMAPPED"


class EnumCategory:
    """Category names used by the converters (keys of the enum tables)."""

    SUBJECT_SOURCE = "subject_source"
    TERM_TYPE = "term_type"
    SALUTATION = "salutation"
    NAME_SOURCE = "name_source"
    NAME_RULE = "name_rule"
    NAME_DESCRIPTION_TYPE = "name_description_type"
    EXTENT_TYPE = "extent_type"
    DATE_LABEL = "date_label"
    DATE_CERTAINTY = "date_certainty"
    DATE_ERA = "date_era"
    DATE_CALENDAR = "date_calendar"
    LANGUAGE = "language"
    ACQUISITION_TYPE = "acquisition_type"
    ACCESSION_RESOURCE_TYPE = "accession_resource_type"
    PROCESSING_PRIORITY = "processing_priority"
    PROCESSING_STATUS = "processing_status"
    RESOURCE_LEVEL = "resource_level"
    ARCHIVAL_OBJECT_LEVEL = "archival_object_level"
    FINDING_AID_DESCRIPTION_RULES = "finding_aid_description_rules"
    FINDING_AID_STATUS = "finding_aid_status"
    DIGITAL_OBJECT_TYPE = "digital_object_type"
    FILE_VERSION_USE_STATEMENT = "file_version_use_statement"
    DIGITAL_OBJECT_NOTE_TYPE = "digital_object_note_type"
    SINGLEPART_NOTE_TYPE = "singlepart_note_type"
    MULTIPART_NOTE_TYPE = "multipart_note_type"
    ORDERED_LIST_ENUMERATION = "orderedlist_enumeration"
    INSTANCE_TYPE = "instance_type"
    CONTAINER_TYPE = "container_type"


# Categories callers test for UNMAPPED; these never echo the source value.
_PROBED_CATEGORIES = frozenset({EnumCategory.SINGLEPART_NOTE_TYPE, EnumCategory.SALUTATION})


@runtime_checkable
class EnumResolver(Protocol):
    """Call contract for the external vocabulary service."""

    def resolve(self, category: str, value: str | None) -> str:
        ...

    def register_dynamic_value(self, list_name: str, value: str) -> None:
        ...


def _key(value: str | None) -> str:
    return "" if value is None else str(value).strip().lower()


class TableEnumResolver:
    """
    EnumResolver backed by in-memory lookup tables.

    Tables are matched case-insensitively on the trimmed source value.
    ``dynamic_bindings`` maps a category to the dynamic list consulted when
    the static table has no entry.
    """

    def __init__(
        self,
        tables: Mapping[str, Mapping[str, str]],
        dynamic_lists: Mapping[str, Iterable[str]] | None = None,
        dynamic_bindings: Mapping[str, str] | None = None,
        return_source_value: bool = False,
    ) -> None:
        self._tables: dict[str, dict[str, str]] = {
            category: {_key(src): target for src, target in table.items()}
            for category, table in tables.items()
        }
        self._dynamic: dict[str, list[str]] = {
            name: [_key(v) for v in values] for name, values in (dynamic_lists or {}).items()
        }
        self._bindings = dict(dynamic_bindings or {})
        self.return_source_value = return_source_value

    def resolve(self, category: str, value: str | None) -> str:
        key = _key(value)
        table = self._tables.get(category, {})
        if key in table:
            return table[key]
        list_name = self._bindings.get(category)
        if list_name is not None and key and key in self._dynamic.get(list_name, ()):
            return key
        if self.return_source_value and key and category not in _PROBED_CATEGORIES:
            return str(value).strip()
        return UNMAPPED

    def register_dynamic_value(self, list_name: str, value: str) -> None:
        values = self._dynamic.setdefault(list_name, [])
        key = _key(value)
        if key and key not in values:
            values.append(key)

    def dynamic_values(self, list_name: str) -> tuple[str, ...]:
        return tuple(self._dynamic.get(list_name, ()))

    def merge_lookup_list(self, list_name: str, values: Iterable[str]) -> tuple[str, ...]:
        """
        Add source lookup-list values the target list cannot already resolve.

        Returns the (lowercased) values added, in source order. Values that a
        category bound to this list already maps statically are skipped.
        """
        bound = [c for c, name in self._bindings.items() if name == list_name]
        added: list[str] = []
        for value in values:
            key = _key(value)
            if not key:
                continue
            if any(key in self._tables.get(c, {}) for c in bound):
                continue
            if key in self._dynamic.get(list_name, ()):
                continue
            self.register_dynamic_value(list_name, key)
            added.append(key)
        return tuple(added)


def resolve_reported(
    resolver: EnumResolver,
    sink: DiagnosticsSink,
    category: str,
    value: str | None,
) -> str:
    """Resolve ``value`` and report it when the result is the UNMAPPED marker."""
    resolved = resolver.resolve(category, value)
    if resolved == UNMAPPED:
        sink.report(
            f"Unmapped {category} value: {value!r}",
            DiagnosticCode.ENUM_UNMAPPED,
        )
    return resolved
