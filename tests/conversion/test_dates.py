"""Tests for the date normalizer."""

from datetime import date

from archive_convert.domain.types import DateRecord
from archive_convert.mapping.dates import (
    DateType,
    deaccession_date,
    event_date,
    normalize_default_date,
    normalize_structured_date,
)
from archive_kernel.domain.diagnostics import DiagnosticCode


def _default(sink, **kwargs):
    params = {"label": "other", "expression": "", "begin": None, "end": None, "identifier": "Accession: X"}
    params.update(kwargs)
    return normalize_default_date(sink=sink, **params)


class TestDefaultDate:

    def test_inverted_range_is_repaired(self, diagnostics):
        (entry,) = _default(diagnostics, begin=1990, end=1980)
        assert entry.to_document() == {
            "date_type": "inclusive",
            "label": "other",
            "begin": "1990",
            "end": "1990",
        }
        (diag,) = diagnostics.entries
        assert "before begin date" in diag.message
        assert diag.code == DiagnosticCode.DATE_INVERTED
        assert diag.message.endswith("\nAccession: X")

    def test_no_begin_and_blank_expression_emits_nothing(self, diagnostics):
        assert _default(diagnostics, begin=None, expression="") == ()
        assert len(diagnostics) == 0

    def test_expression_only_is_single(self, diagnostics):
        (entry,) = _default(diagnostics, expression="circa 1900")
        assert entry.date_type == DateType.SINGLE
        assert entry.to_document() == {"date_type": "single", "label": "other", "expression": "circa 1900"}

    def test_missing_end_defaults_to_begin(self, diagnostics):
        (entry,) = _default(diagnostics, begin=1950, expression="1950s")
        assert (entry.begin, entry.end, entry.expression) == ("1950", "1950", "1950s")

    def test_valid_range_kept(self, diagnostics):
        (entry,) = _default(diagnostics, begin=1900, end=1950)
        assert (entry.begin, entry.end) == ("1900", "1950")
        assert len(diagnostics) == 0

    def test_bulk_entry_follows_default(self, diagnostics):
        default, bulk = _default(diagnostics, begin=1900, end=1980, bulk_begin=1940, bulk_end=1930)
        assert default.date_type == DateType.INCLUSIVE
        assert bulk.date_type == DateType.BULK
        assert (bulk.begin, bulk.end) == ("1940", "1940")
        assert diagnostics.messages[0].startswith("Bulk end date: 1930 before bulk begin date: 1940")

    def test_bulk_without_default(self, diagnostics):
        (bulk,) = _default(diagnostics, bulk_begin=1940)
        assert bulk.to_document() == {"date_type": "bulk", "label": "other", "begin": "1940", "end": "1940"}


class TestStructuredDate:

    def test_iso_range(self, diagnostics):
        entry = normalize_structured_date(
            DateRecord(date_type="Creation", expression="1900-1910", iso_begin="1900", iso_end="1910"),
            label="creation",
            identifier="Resource: MS.1",
            sink=diagnostics,
            certainty="approximate",
            era="ce",
            calendar="gregorian",
        )
        assert entry.to_document() == {
            "date_type": "inclusive",
            "label": "creation",
            "expression": "1900-1910",
            "begin": "1900",
            "end": "1910",
            "certainty": "approximate",
            "era": "ce",
            "calendar": "gregorian",
        }

    def test_zero_begin_counts_as_absent(self, diagnostics):
        entry = normalize_structured_date(
            DateRecord(expression="undated", iso_begin="0", iso_end="0"),
            label="other",
            identifier="x",
            sink=diagnostics,
        )
        assert entry.date_type == DateType.SINGLE
        assert entry.expression == "undated"
        assert entry.begin is None

    def test_empty_record_is_unspecified(self, diagnostics):
        entry = normalize_structured_date(DateRecord(), label="other", identifier="x", sink=diagnostics)
        assert entry.to_document() == {"date_type": "single", "label": "other", "expression": "unspecified"}

    def test_inverted_iso_range_repaired(self, diagnostics):
        entry = normalize_structured_date(
            DateRecord(iso_begin="1990-05-01", iso_end="1980-01-01"),
            label="other",
            identifier="Digital Object: m1",
            sink=diagnostics,
        )
        assert (entry.begin, entry.end) == ("1990-05-01", "1990-05-01")
        assert diagnostics.entries[0].code == DiagnosticCode.DATE_INVERTED

    def test_years_of_different_width_compare_numerically(self, diagnostics):
        entry = normalize_structured_date(
            DateRecord(iso_begin="950-06-01", iso_end="1010-01-01"),
            label="other",
            identifier="Resource: MS.1",
            sink=diagnostics,
        )
        assert (entry.begin, entry.end) == ("950-06-01", "1010-01-01")
        assert len(diagnostics) == 0

    def test_year_only_values_compare_numerically(self, diagnostics):
        entry = normalize_structured_date(
            DateRecord(iso_begin="999", iso_end="1000"), label="other", identifier="x", sink=diagnostics
        )
        assert entry.end == "1000"
        assert len(diagnostics) == 0

    def test_same_year_compares_month_and_day(self, diagnostics):
        entry = normalize_structured_date(
            DateRecord(iso_begin="1900-11", iso_end="1900-02-15"), label="other", identifier="x", sink=diagnostics
        )
        assert entry.end == "1900-11"
        assert diagnostics.entries[0].code == DiagnosticCode.DATE_INVERTED

    def test_input_is_not_mutated(self, diagnostics):
        record = DateRecord(iso_begin="1990", iso_end="1980")
        normalize_structured_date(record, label="other", identifier="x", sink=diagnostics)
        assert record.iso_end == "1980"


class TestFixedDates:

    def test_event_date_falls_back(self):
        entry = event_date(None, date(2001, 5, 17))
        assert entry.to_document() == {
            "date_type": "single",
            "label": "other",
            "begin": "2001-05-17",
            "end": "2001-05-17",
        }

    def test_event_date_uses_own_day(self):
        assert event_date(date(2002, 1, 2), date(2001, 5, 17)).begin == "2002-01-02"

    def test_deaccession_date(self):
        assert deaccession_date(date(2010, 3, 4)).to_document() == {
            "date_type": "single",
            "label": "deaccession",
            "expression": "2010-03-04",
            "begin": "2010-03-04",
            "era": "ce",
            "calendar": "gregorian",
        }
