"""Tests for the source record adapter (dict -> typed record, JSON files)."""

import json
from datetime import date
from decimal import Decimal

import pytest

from archive_convert.adapters import JsonRecordAdapter, record_from_dict
from archive_convert.domain.types import (
    AccessionRecord,
    Bibliography,
    Deaccession,
    Note,
    OrderedList,
    ResourceRecord,
    SubjectRecord,
    TextPart,
)
from archive_kernel.exceptions import SourceRecordFormatError


class TestRecordFromDict:
    """Field coercion driven by the record dataclass annotations."""

    def test_subject(self):
        record = record_from_dict({"kind": "subject", "record_id": 4, "term": "Maps", "source": None})
        assert record == SubjectRecord(record_id=4, term="Maps", source="")

    def test_accession_values_coerced(self):
        record = record_from_dict(
            {
                "kind": "accession",
                "record_id": "12",
                "id_1": "2001",
                "accession_date": "2001-05-17",
                "extent_number": "2.50",
                "date_begin": 1900,
                "internal_only": True,
                "deaccessions": [{"deaccession_date": "2010-01-01", "extent": 1.5}],
                "user_defined": {"real_1": "3.25", "date_1": "1999-12-31"},
            }
        )
        assert isinstance(record, AccessionRecord)
        assert record.record_id == 12
        assert record.accession_date == date(2001, 5, 17)
        assert record.extent_number == Decimal("2.50")
        assert record.internal_only is True
        assert record.deaccessions == (Deaccession(deaccession_date=date(2010, 1, 1), extent=Decimal("1.5")),)
        assert record.user_defined.real_1 == Decimal("3.25")
        assert record.user_defined.date_1 == date(1999, 12, 31)
        assert record.date_end is None

    def test_note_parts(self):
        record = record_from_dict(
            {
                "kind": "resource",
                "record_id": 1,
                "notes": [
                    {
                        "content": "Series",
                        "note_type": "Arrangement note",
                        "multi_part": True,
                        "children": [
                            {"part": "text", "content": "Intro"},
                            {"part": "ordered_list", "numeration": "arabic", "items": ["a", "b"]},
                        ],
                    }
                ],
                "structured_notes": [{"part": "bibliography", "title": "Works", "items": ["X"]}],
            }
        )
        assert isinstance(record, ResourceRecord)
        (note,) = record.notes
        assert note == Note(
            content="Series",
            note_type="Arrangement note",
            multi_part=True,
            children=(TextPart("Intro"), OrderedList(numeration="arabic", items=("a", "b"))),
        )
        assert record.structured_notes == (Bibliography(title="Works", items=("X",)),)

    def test_unknown_kind(self):
        with pytest.raises(SourceRecordFormatError) as exc_info:
            record_from_dict({"kind": "widget", "record_id": 1})
        assert exc_info.value.record_kind is None

    def test_missing_record_id(self):
        with pytest.raises(SourceRecordFormatError, match="record_id"):
            record_from_dict({"kind": "subject"})

    def test_unknown_field(self):
        with pytest.raises(SourceRecordFormatError, match="trem"):
            record_from_dict({"kind": "subject", "record_id": 1, "trem": "typo"})

    def test_bad_date(self):
        with pytest.raises(SourceRecordFormatError) as exc_info:
            record_from_dict({"kind": "accession", "record_id": 1, "accession_date": "17/05/2001"})
        assert exc_info.value.record_kind == "accession"
        assert exc_info.value.code == "SOURCE_RECORD_FORMAT_INVALID"

    def test_bad_decimal(self):
        with pytest.raises(SourceRecordFormatError):
            record_from_dict({"kind": "accession", "record_id": 1, "extent_number": "lots"})

    def test_structured_note_must_be_bibliography_or_index(self):
        with pytest.raises(SourceRecordFormatError, match="unknown note part"):
            record_from_dict(
                {"kind": "resource", "record_id": 1, "structured_notes": [{"part": "text", "content": "x"}]}
            )

    def test_boolean_must_be_boolean(self):
        with pytest.raises(SourceRecordFormatError):
            record_from_dict({"kind": "resource", "record_id": 1, "internal_only": "yes"})


class TestJsonRecordAdapter:
    """JSON array and JSON Lines files."""

    def test_read_array(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text(json.dumps([
            {"kind": "subject", "record_id": 1, "term": "Maps"},
            {"kind": "user", "record_id": 2, "username": "jdoe"},
        ]))
        records = list(JsonRecordAdapter().read(path))
        assert [r.kind.value for r in records] == ["subject", "user"]

    def test_read_nested_array(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text(json.dumps({"export": {"records": [{"kind": "subject", "record_id": 1}]}}))
        records = list(JsonRecordAdapter().read(path, {"json_path": "export.records"}))
        assert records == [SubjectRecord(record_id=1)]

    def test_read_jsonl(self, tmp_path):
        path = tmp_path / "export.jsonl"
        path.write_text('{"kind": "subject", "record_id": 1}\n\n{"kind": "location", "record_id": 2}\n')
        records = list(JsonRecordAdapter().read(path, {"format": "jsonl"}))
        assert [r.record_id for r in records] == [1, 2]

    def test_error_names_record_position(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text(json.dumps([{"kind": "subject", "record_id": 1}, {"kind": "subject"}]))
        with pytest.raises(SourceRecordFormatError, match="record 2"):
            list(JsonRecordAdapter().read(path))

    def test_malformed_jsonl_line_names_line(self, tmp_path):
        path = tmp_path / "export.jsonl"
        path.write_text('{"kind": "subject", "record_id": 1}\n{"kind": "subject", \n')
        with pytest.raises(SourceRecordFormatError, match="line 2") as exc_info:
            list(JsonRecordAdapter().read(path, {"format": "jsonl"}))
        assert exc_info.value.record_kind is None

    def test_malformed_array_file(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text("[{\"kind\": ")
        with pytest.raises(SourceRecordFormatError, match="export.json"):
            list(JsonRecordAdapter().read(path))

    def test_non_array_root(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text(json.dumps({"records": []}))
        with pytest.raises(SourceRecordFormatError):
            list(JsonRecordAdapter().read(path))

    def test_probe_counts_kinds(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text(json.dumps([
            {"kind": "subject", "record_id": 1},
            {"kind": "subject", "record_id": 2},
            {"kind": "name", "record_id": 3},
        ]))
        probe = JsonRecordAdapter().probe(path)
        assert probe.record_count == 3
        assert probe.kinds == {"subject": 2, "name": 1}
