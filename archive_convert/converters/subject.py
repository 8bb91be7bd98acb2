"""Subject converter: subject term -> target subject with split terms."""

from __future__ import annotations

import re
from typing import Any

from archive_convert.converters.base import ConversionContext
from archive_convert.domain.text import fix_empty_string
from archive_convert.domain.types import RecordKind, SubjectRecord, TargetDocument
from archive_convert.mapping.enums import EnumCategory

_TERM_SEPARATOR = re.compile(r"\s*--\s*")


def split_terms(term: str) -> list[str]:
    """``"A -- B--C"`` -> ``["A", "B", "C"]``."""
    return _TERM_SEPARATOR.split(term.strip())


class SubjectConverter:
    """Converts subject records. Record kind: subject."""

    record_kind: RecordKind = RecordKind.SUBJECT

    def convert(self, record: SubjectRecord, ctx: ConversionContext) -> TargetDocument:
        vocabulary = ctx.settings.vocabulary_uri
        doc: dict[str, Any] = {"external_ids": ctx.external_ids(record.record_id, self.record_kind)}

        source = ctx.lookup(EnumCategory.SUBJECT_SOURCE, record.source)
        if source is not None:
            doc["source"] = source

        term_type = ctx.lookup(EnumCategory.TERM_TYPE, record.term_type, required=True)
        doc["terms"] = [
            {"term": fix_empty_string(term), "term_type": term_type, "vocabulary": vocabulary}
            for term in split_terms(record.term)
        ]
        doc["vocabulary"] = vocabulary
        return doc
