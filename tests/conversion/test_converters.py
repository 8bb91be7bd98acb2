"""Tests for the subject, agent, repository, location, user, digital and instance converters."""

from decimal import Decimal

from archive_convert.converters import (
    AnalogInstanceConverter,
    DigitalObjectComponentConverter,
    DigitalObjectConverter,
    LocationConverter,
    NameConverter,
    RepositoryConverter,
    SubjectConverter,
    UserConverter,
    access_class_key,
    convert_digital_instance,
    corporate_agent_for_repository,
    create_accession_instance,
    default_converter_registry,
)
from archive_convert.converters.subject import split_terms
from archive_convert.domain.types import (
    AccessionRecord,
    AnalogInstanceRecord,
    ContactNote,
    DateRecord,
    DigitalObjectComponentRecord,
    DigitalObjectRecord,
    FileVersion,
    LocationRecord,
    NameRecord,
    Note,
    RecordKind,
    RepositoryRecord,
    SubjectRecord,
    UserRecord,
)
from archive_convert.mapping.enums import UNMAPPED
from archive_convert.mapping.identity import DISAMBIGUATION_MARK
from archive_kernel.domain.diagnostics import DiagnosticCode


class TestRegistry:

    def test_every_kind_has_a_converter(self):
        registry = default_converter_registry()
        assert set(registry) == set(RecordKind)
        for kind, converter in registry.items():
            assert converter.record_kind == kind


# =============================================================================
# Subjects
# =============================================================================


class TestSubjectConverter:

    def test_split_terms(self):
        assert split_terms("United States -- History--Civil War, 1861-1865") == [
            "United States",
            "History",
            "Civil War, 1861-1865",
        ]

    def test_convert(self, ctx, diagnostics):
        record = SubjectRecord(
            record_id=5,
            term="Whaling -- Massachusetts",
            term_type="Topical Term (650)",
            source="Library of Congress Subject Headings",
        )
        doc = SubjectConverter().convert(record, ctx)
        assert doc["source"] == "lcsh"
        assert doc["vocabulary"] == "/vocabularies/1"
        assert doc["terms"] == [
            {"term": "Whaling", "term_type": "topical", "vocabulary": "/vocabularies/1"},
            {"term": "Massachusetts", "term_type": "topical", "vocabulary": "/vocabularies/1"},
        ]
        assert doc["external_ids"][0]["source"] == "Archivists Toolkit Database::SUBJECT"
        assert len(diagnostics) == 0

    def test_blank_source_omitted_and_unknown_term_type_reported(self, ctx, diagnostics):
        doc = SubjectConverter().convert(SubjectRecord(record_id=1, term="Maps", term_type="Odd"), ctx)
        assert "source" not in doc
        assert doc["terms"][0]["term_type"] == UNMAPPED
        assert [e.code for e in diagnostics.entries] == [DiagnosticCode.ENUM_UNMAPPED]


# =============================================================================
# Names
# =============================================================================


class TestNameConverter:

    def test_unknown_type_skips_with_one_diagnostic(self, ctx, diagnostics):
        record = NameRecord(record_id=3, name_type="Robot", sort_name="R2", name_source="Bogus", salutation="Dr.")
        assert NameConverter().convert(record, ctx) is None
        (entry,) = diagnostics.entries
        assert entry.message == "R2:: Unknown name type: Robot"
        assert entry.code == DiagnosticCode.RECORD_SKIPPED

    def test_person(self, ctx, diagnostics):
        record = NameRecord(
            record_id=9,
            name_type="person",
            sort_name="Melville, Herman, 1819-1891",
            name_source="Library of Congress Name Authority File",
            name_rule="Anglo-American Cataloging Rules",
            personal_primary_name="Melville",
            personal_rest_of_name="Herman",
            personal_dates="1819-1891",
            salutation="Mr.",
            contact_city="New York",
            contact_notes=(ContactNote(label="Office", note_text="Customs house"),),
            description_type="Biography",
            description_note="Novelist.",
        )
        doc = NameConverter().convert(record, ctx)

        assert doc["agent_type"] == "agent_person"
        (name,) = doc["names"]
        assert name["primary_name"] == "Melville"
        assert name["rest_of_name"] == "Herman"
        assert name["title"] == "unspecified"
        assert name["dates"] == "1819-1891"
        assert name["source"] == "naf"
        assert name["rules"] == "aacr"
        assert name["sort_name"] == "Melville, Herman, 1819-1891"
        assert "prefix" not in name

        (contact,) = doc["agent_contacts"]
        assert contact["name"] == "Melville"
        assert contact["salutation"] == "mr"
        assert contact["city"] == "New York"
        assert contact["note"].startswith("Label: Office\n")

        (note,) = doc["notes"]
        assert note["jsonmodel_type"] == "note_bioghist"
        assert note["label"] == "Biographical Note"
        assert len(diagnostics) == 0

    def test_unmatched_salutation_dropped_silently(self, ctx, diagnostics):
        doc = NameConverter().convert(
            NameRecord(record_id=1, name_type="Person", personal_primary_name="X", salutation="Dr."), ctx
        )
        assert "salutation" not in doc["agent_contacts"][0]
        assert len(diagnostics) == 0

    def test_family(self, ctx):
        doc = NameConverter().convert(
            NameRecord(record_id=2, name_type="Family", family_name="Adams", family_name_prefix="The"), ctx
        )
        assert doc["agent_type"] == "agent_family"
        assert doc["names"][0]["family_name"] == "Adams"
        assert doc["names"][0]["prefix"] == "The"
        assert doc["agent_contacts"][0]["name"] == "Adams"
        assert "notes" not in doc

    def test_corporate_body(self, ctx):
        doc = NameConverter().convert(
            NameRecord(
                record_id=4,
                name_type="Corporate Body",
                corporate_primary_name="Whaling Company",
                corporate_subordinate_1="Board",
            ),
            ctx,
        )
        assert doc["agent_type"] == "agent_corporate_entity"
        assert doc["names"][0]["subordinate_name_1"] == "Board"
        assert "subordinate_name_2" not in doc["names"][0]

    def test_repository_agent(self):
        doc = corporate_agent_for_repository(
            RepositoryRecord(record_id=1, name="Special Collections", country="USA", country_code="US")
        )
        assert doc["names"] == [
            {"source": "local", "primary_name": "Special Collections", "sort_name": "Special Collections"}
        ]
        assert doc["agent_contacts"][0]["country"] == "USA US"


# =============================================================================
# Repository, location, user
# =============================================================================


class TestRepositoryConverter:

    def test_convert(self, ctx):
        record = RepositoryRecord(
            record_id=1, short_name="SC", name="", agency_code="MaU", url="archives.example.edu"
        )
        doc = RepositoryConverter().convert(record, ctx, agent_uri="/agents/corporate_entities/1")
        assert doc["repo_code"] == "SC"
        assert doc["name"] == "unspecified"
        assert doc["org_code"] == "MaU"
        assert doc["url"] == "http://archives.example.edu"
        assert doc["agent_representation"] == {"ref": "/agents/corporate_entities/1"}
        assert "parent_institution_name" not in doc

    def test_without_agent(self, ctx):
        assert "agent_representation" not in RepositoryConverter().convert(RepositoryRecord(record_id=1), ctx)

    def test_access_class_key(self):
        assert access_class_key("/repositories/2", "repository-managers") == "/repositories/2_AccessClass_4"
        assert access_class_key("/repositories/2", "nobody") is None


class TestLocationConverter:

    def test_building_fallback_and_coordinates(self, ctx):
        doc = LocationConverter().convert(
            LocationRecord(record_id=8, coordinate_1_label="Range", coordinate_1="4", room=" "), ctx
        )
        assert doc["building"] == "Unknown Building"
        assert doc["coordinate_1_label"] == "Range"
        assert doc["coordinate_1_indicator"] == "4"
        assert "room" not in doc


class TestUserConverter:

    def test_name_fallback(self, ctx):
        doc = UserConverter().convert(UserRecord(record_id=1, username=" jdoe "), ctx)
        assert doc["username"] == "jdoe"
        assert doc["name"] == "full name not entered"
        assert "email" not in doc


# =============================================================================
# Digital objects
# =============================================================================


class TestDigitalObjectConverter:

    def test_convert(self, ctx, diagnostics):
        record = DigitalObjectRecord(
            record_id=11,
            title="Letter",
            mets_identifier="mets-11",
            object_type="still image",
            date_expression="1851",
            dates=(DateRecord(date_type="Digitized", iso_begin="2010-01-01"),),
            file_versions=(FileVersion(uri="http://img/1.jpg", use_statement="Image-Master", show="new"),),
            notes=(Note(content="A letter", note_type="General note"),),
        )
        doc = DigitalObjectConverter().convert(record, ctx)
        assert doc["digital_object_id"] == "mets-11"
        assert doc["digital_object_type"] == "still_image"
        assert doc["file_versions"] == [
            {"file_uri": "http://img/1.jpg", "use_statement": "image-master", "xlink_show_attribute": "new"}
        ]
        assert [d["label"] for d in doc["dates"]] == ["digitized", "digitized"]
        assert doc["notes"][0]["jsonmodel_type"] == "note_digital_object"
        assert doc["notes"][0]["type"] == "note"
        assert doc["restrictions"] is False
        assert len(diagnostics) == 0

    def test_duplicate_mets_identifier_disambiguated(self, ctx, diagnostics):
        converter = DigitalObjectConverter()
        first = converter.convert(DigitalObjectRecord(record_id=1, mets_identifier="m"), ctx)
        second = converter.convert(DigitalObjectRecord(record_id=2, mets_identifier="m"), ctx)
        assert first["digital_object_id"] == "m"
        assert second["digital_object_id"].startswith("m" + DISAMBIGUATION_MARK)
        assert diagnostics.entries[-1].code == DiagnosticCode.IDENTIFIER_DUPLICATE

    def test_component_id_fallback(self, ctx):
        doc = DigitalObjectComponentConverter().convert(
            DigitalObjectComponentRecord(record_id=3, label="page 1"), ctx
        )
        assert doc["component_id"].startswith("ID_")
        assert len(doc["component_id"]) == 6
        assert doc["label"] == "page 1"
        assert doc["title"] == "unspecified"
        assert "dates" not in doc


# =============================================================================
# Instances
# =============================================================================


class TestInstances:

    def test_analog_instance(self, ctx):
        record = AnalogInstanceRecord(
            record_id=21,
            instance_type="Mixed materials",
            container_1_type="Box",
            container_1_indicator="",
            container_2_type="Folder",
            container_2_indicator="3",
            barcode="3901",
        )
        doc = AnalogInstanceConverter().convert(record, ctx, location_uri="/locations/4")
        assert doc["instance_type"] == "mixed_materials"
        container = doc["container"]
        assert container["type_1"] == "box"
        assert container["indicator_1"] == "not specified"
        assert container["type_2"] == "folder"
        assert container["indicator_2"] == "3"
        assert container["barcode_1"] == "3901"
        assert "type_3" not in container
        assert container["container_locations"] == [
            {"status": "current", "start_date": "2024-01-01", "ref": "/locations/4"}
        ]

    def test_start_date_follows_clock(self, ctx, deterministic_clock):
        from datetime import datetime, timezone

        deterministic_clock.set_time(datetime(2030, 6, 1, tzinfo=timezone.utc))
        doc = AnalogInstanceConverter().convert(
            AnalogInstanceRecord(record_id=1, instance_type="Text", container_1_type="Box"),
            ctx,
            location_uri="/locations/1",
        )
        assert doc["container"]["container_locations"][0]["start_date"] == "2030-06-01"

    def test_digital_instance(self):
        assert convert_digital_instance(None) is None
        assert convert_digital_instance("/digital_objects/3") == {
            "instance_type": "digital_object",
            "digital_object": {"ref": "/digital_objects/3"},
        }

    def test_accession_instance(self, ctx):
        record = AccessionRecord(record_id=1, id_1="2001", id_2="7", extent_number=Decimal("1"))
        doc = create_accession_instance(record, ctx, "/locations/9", "Shelf 3")
        assert doc["instance_type"] == "accession"
        assert doc["container"]["indicator_1"] == "2001.7"
        assert doc["container"]["container_locations"][0]["note"] == "Shelf 3"
