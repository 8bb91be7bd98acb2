"""
archive_convert.domain.types -- Pure frozen dataclasses for source records.

ZERO I/O. Every source record kind is one frozen dataclass exposing a
class-level ``kind``; linked child collections are tuples of frozen
dataclasses. Blank text is the empty string, never None, so converters can
test for blankness uniformly; optional numbers and dates are None.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Union


# =============================================================================
# Closed enumerations
# =============================================================================


class RecordKind(str, Enum):
    """Every source entity type the engine converts."""

    SUBJECT = "subject"
    NAME = "name"
    REPOSITORY = "repository"
    LOCATION = "location"
    USER = "user"
    ACCESSION = "accession"
    RESOURCE = "resource"
    RESOURCE_COMPONENT = "resource_component"
    DIGITAL_OBJECT = "digital_object"
    DIGITAL_OBJECT_COMPONENT = "digital_object_component"
    ANALOG_INSTANCE = "analog_instance"


class IdentifierClass(str, Enum):
    """Identifier classes whose values must be unique within a run."""

    ACCESSION = "accession"
    RESOURCE = "resource"
    DIGITAL_OBJECT = "digital_object"
    FINDING_AID = "ead"


# Target documents are plain JSON-ready dicts.
TargetDocument = dict[str, Any]


# =============================================================================
# Linked child records
# =============================================================================


@dataclass(frozen=True)
class DateRecord:
    """A structured date attached to an archival description."""

    date_type: str = ""  # Source label, e.g. "Creation"
    expression: str = ""
    iso_begin: str = ""
    iso_end: str = ""
    certainty: str = ""
    era: str = ""
    calendar: str = ""


@dataclass(frozen=True)
class PhysicalDescription:
    """Extent statement for part of the described material."""

    extent_number: Decimal | None = None
    extent_type: str = ""
    container_summary: str = ""
    physical_detail: str = ""
    dimensions: str = ""


@dataclass(frozen=True)
class ExternalReference:
    title: str = ""
    href: str = ""


@dataclass(frozen=True)
class Deaccession:
    deaccession_date: date | None = None
    description: str = ""
    reason: str = ""
    disposition: str = ""
    notification: bool | None = None
    extent: Decimal | None = None
    extent_type: str = ""


@dataclass(frozen=True)
class FileVersion:
    uri: str = ""
    use_statement: str = ""
    actuate: str = ""
    show: str = ""


@dataclass(frozen=True)
class ContactNote:
    label: str = ""
    note_text: str = ""


@dataclass(frozen=True)
class UserDefinedFields:
    """Free-form accession fields carried over verbatim."""

    boolean_1: bool | None = None
    boolean_2: bool | None = None
    integer_1: int | None = None
    integer_2: int | None = None
    real_1: Decimal | None = None
    real_2: Decimal | None = None
    string_1: str = ""
    string_2: str = ""
    string_3: str = ""
    text_1: str = ""
    text_2: str = ""
    text_3: str = ""
    text_4: str = ""
    date_1: date | None = None
    date_2: date | None = None


# =============================================================================
# Note parts (children of a multi-part note, or top-level structured notes)
# =============================================================================


@dataclass(frozen=True)
class TextPart:
    content: str = ""


@dataclass(frozen=True)
class OrderedList:
    title: str = ""
    numeration: str = ""
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class DefinedListItem:
    label: str = ""
    value: str = ""


@dataclass(frozen=True)
class DefinedList:
    title: str = ""
    items: tuple[DefinedListItem, ...] = ()


@dataclass(frozen=True)
class ChronologyItem:
    event_date: str = ""
    events: tuple[str, ...] = ()


@dataclass(frozen=True)
class Chronology:
    title: str = ""
    ingest_problem: str = ""
    items: tuple[ChronologyItem, ...] = ()


@dataclass(frozen=True)
class Bibliography:
    title: str = ""
    content: str = ""
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class IndexItem:
    value: str = ""
    item_type: str = ""
    reference: str = ""
    reference_text: str = ""


@dataclass(frozen=True)
class Index:
    title: str = ""
    content: str = ""
    items: tuple[IndexItem, ...] = ()


NotePart = Union[TextPart, OrderedList, DefinedList, Chronology, Bibliography, Index]
StructuredNote = Union[Bibliography, Index]


@dataclass(frozen=True)
class Note:
    """A free-text note, optionally with structured children."""

    title: str = ""
    content: str = ""
    note_type: str = ""  # Source notes-etc name, e.g. "Scope and Contents note"
    multi_part: bool | None = None
    children: tuple[NotePart, ...] = ()


# =============================================================================
# Source records
# =============================================================================


@dataclass(frozen=True)
class SubjectRecord:
    kind: ClassVar[RecordKind] = RecordKind.SUBJECT

    record_id: int
    term: str = ""
    term_type: str = ""
    source: str = ""


@dataclass(frozen=True)
class NameRecord:
    kind: ClassVar[RecordKind] = RecordKind.NAME

    PERSON_TYPE: ClassVar[str] = "Person"
    FAMILY_TYPE: ClassVar[str] = "Family"
    CORPORATE_BODY_TYPE: ClassVar[str] = "Corporate Body"

    record_id: int
    name_type: str = ""
    sort_name: str = ""
    name_source: str = ""
    name_rule: str = ""
    qualifier: str = ""
    number: str = ""
    # Person
    personal_primary_name: str = ""
    personal_title: str = ""
    personal_prefix: str = ""
    personal_rest_of_name: str = ""
    personal_suffix: str = ""
    personal_fuller_form: str = ""
    personal_dates: str = ""
    # Family
    family_name: str = ""
    family_name_prefix: str = ""
    # Corporate body
    corporate_primary_name: str = ""
    corporate_subordinate_1: str = ""
    corporate_subordinate_2: str = ""
    # Contact
    salutation: str = ""
    contact_address_1: str = ""
    contact_address_2: str = ""
    contact_city: str = ""
    contact_region: str = ""
    contact_country: str = ""
    contact_mail_code: str = ""
    contact_phone: str = ""
    contact_fax: str = ""
    contact_email: str = ""
    contact_notes: tuple[ContactNote, ...] = ()
    # Biographical / historical
    description_type: str = ""
    description_note: str = ""
    citation: str = ""


@dataclass(frozen=True)
class RepositoryRecord:
    kind: ClassVar[RecordKind] = RecordKind.REPOSITORY

    record_id: int
    short_name: str = ""
    name: str = ""
    agency_code: str = ""
    institution_name: str = ""
    url: str = ""
    address_1: str = ""
    address_2: str = ""
    address_3: str = ""
    city: str = ""
    country: str = ""
    country_code: str = ""
    mail_code: str = ""
    telephone: str = ""
    fax: str = ""
    email: str = ""


@dataclass(frozen=True)
class LocationRecord:
    kind: ClassVar[RecordKind] = RecordKind.LOCATION

    record_id: int
    building: str = ""
    floor: str = ""
    room: str = ""
    area: str = ""
    barcode: str = ""
    classification_number: str = ""
    coordinate_1_label: str = ""
    coordinate_1: str = ""
    coordinate_2_label: str = ""
    coordinate_2: str = ""
    coordinate_3_label: str = ""
    coordinate_3: str = ""


@dataclass(frozen=True)
class UserRecord:
    kind: ClassVar[RecordKind] = RecordKind.USER

    record_id: int
    username: str = ""
    full_name: str = ""
    email: str = ""
    title: str = ""
    department: str = ""


@dataclass(frozen=True)
class ArchDescription:
    """Fields shared by every described archival unit."""

    record_id: int
    title: str = ""
    language_code: str = ""
    date_expression: str = ""
    date_begin: int | None = None
    date_end: int | None = None
    dates: tuple[DateRecord, ...] = ()
    notes: tuple[Note, ...] = ()
    structured_notes: tuple[StructuredNote, ...] = ()
    external_references: tuple[ExternalReference, ...] = ()
    physical_descriptions: tuple[PhysicalDescription, ...] = ()


@dataclass(frozen=True)
class CollectionDescription(ArchDescription):
    """Fields shared by accessions and resources."""

    id_1: str = ""
    id_2: str = ""
    id_3: str = ""
    id_4: str = ""
    extent_number: Decimal | None = None
    extent_type: str = ""
    container_summary: str = ""
    bulk_date_begin: int | None = None
    bulk_date_end: int | None = None
    internal_only: bool = False
    restrictions_apply: bool = False
    deaccessions: tuple[Deaccession, ...] = ()

    @property
    def identifier_segments(self) -> tuple[str, str, str, str]:
        return (self.id_1, self.id_2, self.id_3, self.id_4)

    @property
    def display_identifier(self) -> str:
        """The source identifier as operators know it (non-blank parts joined by '.')."""
        return ".".join(s.strip() for s in self.identifier_segments if s and s.strip())


@dataclass(frozen=True)
class AccessionRecord(CollectionDescription):
    kind: ClassVar[RecordKind] = RecordKind.ACCESSION

    accession_date: date | None = None
    description: str = ""
    condition_note: str = ""
    inventory: str = ""
    acquisition_type: str = ""
    resource_type: str = ""
    retention_rule: str = ""
    general_note: str = ""
    access_restrictions: bool = False
    access_restrictions_note: str = ""
    # Milestones
    accession_processed: bool | None = None
    accession_processed_date: date | None = None
    acknowledgement_sent: bool | None = None
    acknowledgement_date: date | None = None
    agreement_sent: bool | None = None
    agreement_sent_date: date | None = None
    agreement_received: bool | None = None
    agreement_received_date: date | None = None
    cataloged: bool | None = None
    cataloged_date: date | None = None
    processing_started_date: date | None = None
    rights_transferred: bool | None = None
    rights_transferred_date: date | None = None
    rights_transferred_note: str = ""
    # Collection management
    cataloged_note: str = ""
    processing_plan: str = ""
    processing_priority: str = ""
    processing_status: str = ""
    processors: str = ""
    user_defined: UserDefinedFields = field(default_factory=UserDefinedFields)

    @property
    def accession_number(self) -> str:
        return self.display_identifier


@dataclass(frozen=True)
class ResourceRecord(CollectionDescription):
    kind: ClassVar[RecordKind] = RecordKind.RESOURCE

    level: str = ""
    other_level: str = ""
    repository_processing_note: str = ""
    ead_id: str = ""
    ead_location: str = ""
    finding_aid_title: str = ""
    finding_aid_subtitle: str = ""
    finding_aid_date: str = ""
    author: str = ""
    description_rules: str = ""
    finding_aid_language: str = ""
    sponsor_note: str = ""
    edition_statement: str = ""
    series: str = ""
    revision_date: str = ""
    revision_description: str = ""
    finding_aid_status: str = ""
    finding_aid_note: str = ""

    @property
    def resource_identifier(self) -> str:
        return self.display_identifier


@dataclass(frozen=True)
class ResourceComponentRecord(ArchDescription):
    kind: ClassVar[RecordKind] = RecordKind.RESOURCE_COMPONENT

    persistent_id: str = ""
    level: str = ""
    other_level: str = ""
    component_unique_identifier: str = ""
    sequence_number: int = 0
    extent_number: Decimal | None = None
    extent_type: str = ""
    container_summary: str = ""


@dataclass(frozen=True)
class DigitalObjectBase(ArchDescription):
    """Fields shared by digital objects and their components."""

    mets_identifier: str = ""
    label: str = ""
    component_id: str = ""
    object_type: str = ""
    restrictions_apply: bool = False
    file_versions: tuple[FileVersion, ...] = ()


@dataclass(frozen=True)
class DigitalObjectRecord(DigitalObjectBase):
    kind: ClassVar[RecordKind] = RecordKind.DIGITAL_OBJECT


@dataclass(frozen=True)
class DigitalObjectComponentRecord(DigitalObjectBase):
    kind: ClassVar[RecordKind] = RecordKind.DIGITAL_OBJECT_COMPONENT


@dataclass(frozen=True)
class AnalogInstanceRecord:
    kind: ClassVar[RecordKind] = RecordKind.ANALOG_INSTANCE

    record_id: int
    instance_type: str = ""
    barcode: str = ""
    container_1_type: str = ""
    container_1_indicator: str = ""
    container_2_type: str = ""
    container_2_indicator: str = ""
    container_3_type: str = ""
    container_3_indicator: str = ""


SourceRecord = Union[
    SubjectRecord,
    NameRecord,
    RepositoryRecord,
    LocationRecord,
    UserRecord,
    AccessionRecord,
    ResourceRecord,
    ResourceComponentRecord,
    DigitalObjectRecord,
    DigitalObjectComponentRecord,
    AnalogInstanceRecord,
]

RECORD_TYPES: dict[RecordKind, type] = {
    SubjectRecord.kind: SubjectRecord,
    NameRecord.kind: NameRecord,
    RepositoryRecord.kind: RepositoryRecord,
    LocationRecord.kind: LocationRecord,
    UserRecord.kind: UserRecord,
    AccessionRecord.kind: AccessionRecord,
    ResourceRecord.kind: ResourceRecord,
    ResourceComponentRecord.kind: ResourceComponentRecord,
    DigitalObjectRecord.kind: DigitalObjectRecord,
    DigitalObjectComponentRecord.kind: DigitalObjectComponentRecord,
    AnalogInstanceRecord.kind: AnalogInstanceRecord,
}
