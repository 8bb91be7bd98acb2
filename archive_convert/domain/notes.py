"""
archive_convert.domain.notes -- Target note tree (NoteNode variants).

Each node is a frozen dataclass tagged by ``jsonmodel_type`` and renders
itself with ``to_document()``. Invariant: a MultipartNode's first child is the
synthesized TextNode carrying the note's base content; construct multipart
nodes through ``MultipartNode.with_base_text`` to keep it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


def _with_label(doc: dict[str, Any], label: str | None) -> dict[str, Any]:
    if label is not None:
        doc["label"] = label
    return doc


@dataclass(frozen=True)
class TextNode:
    content: str

    jsonmodel_type = "note_text"

    def to_document(self) -> dict[str, Any]:
        return {"jsonmodel_type": self.jsonmodel_type, "content": self.content}


@dataclass(frozen=True)
class CitationNode:
    content: tuple[str, ...]

    jsonmodel_type = "note_citation"

    def to_document(self) -> dict[str, Any]:
        return {"jsonmodel_type": self.jsonmodel_type, "content": list(self.content)}


@dataclass(frozen=True)
class OrderedListNode:
    title: str
    enumeration: str
    items: tuple[str, ...]

    jsonmodel_type = "note_orderedlist"

    def to_document(self) -> dict[str, Any]:
        return {
            "jsonmodel_type": self.jsonmodel_type,
            "title": self.title,
            "enumeration": self.enumeration,
            "items": list(self.items),
        }


@dataclass(frozen=True)
class DefinedListNode:
    title: str
    items: tuple[tuple[str, str], ...]  # (label, value)

    jsonmodel_type = "note_definedlist"

    def to_document(self) -> dict[str, Any]:
        return {
            "jsonmodel_type": self.jsonmodel_type,
            "title": self.title,
            "items": [{"label": label, "value": value} for label, value in self.items],
        }


@dataclass(frozen=True)
class ChronologyEntry:
    event_date: str
    events: tuple[str, ...]


@dataclass(frozen=True)
class ChronologyNode:
    title: str
    items: tuple[ChronologyEntry, ...]
    ingest_problem: str | None = None

    jsonmodel_type = "note_chronology"

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "jsonmodel_type": self.jsonmodel_type,
            "title": self.title,
            "items": [
                {"event_date": item.event_date, "events": list(item.events)}
                for item in self.items
            ],
        }
        if self.ingest_problem:
            doc["ingest_problem"] = self.ingest_problem
        return doc


@dataclass(frozen=True)
class BibliographyNode:
    """Bibliography placeholder; label/content only set at top level."""

    label: str | None = None
    content: tuple[str, ...] = ()
    items: tuple[str, ...] = ()

    jsonmodel_type = "note_bibliography"

    def to_document(self) -> dict[str, Any]:
        doc = _with_label({"jsonmodel_type": self.jsonmodel_type}, self.label)
        if self.content:
            doc["content"] = list(self.content)
        if self.items:
            doc["items"] = list(self.items)
        return doc


@dataclass(frozen=True)
class IndexEntry:
    value: str
    entry_type: str
    reference: str
    reference_text: str


@dataclass(frozen=True)
class IndexNode:
    items: tuple[IndexEntry, ...]
    label: str | None = None
    content: tuple[str, ...] = ()

    jsonmodel_type = "note_index"

    def to_document(self) -> dict[str, Any]:
        doc = _with_label({"jsonmodel_type": self.jsonmodel_type}, self.label)
        if self.content:
            doc["content"] = list(self.content)
        doc["items"] = [
            {
                "value": item.value,
                "type": item.entry_type,
                "reference": item.reference,
                "reference_text": item.reference_text,
            }
            for item in self.items
        ]
        return doc


@dataclass(frozen=True)
class SinglepartNode:
    """A one-paragraph note; also used for digital-object notes."""

    note_type: str
    content: tuple[str, ...]
    label: str | None = None
    jsonmodel_type: str = "note_singlepart"

    def to_document(self) -> dict[str, Any]:
        doc = _with_label({"jsonmodel_type": self.jsonmodel_type}, self.label)
        doc["type"] = self.note_type
        doc["content"] = list(self.content)
        return doc


SubnoteNode = Union[
    TextNode,
    CitationNode,
    OrderedListNode,
    DefinedListNode,
    ChronologyNode,
    BibliographyNode,
    IndexNode,
]


@dataclass(frozen=True)
class MultipartNode:
    """A note made of subnotes. ``note_type`` is None for agent bioghist notes."""

    note_type: str | None
    children: tuple[SubnoteNode, ...]
    label: str | None = None
    jsonmodel_type: str = "note_multipart"

    def __post_init__(self) -> None:
        if not self.children or not isinstance(self.children[0], TextNode):
            raise ValueError("MultipartNode must start with a TextNode")

    @classmethod
    def with_base_text(
        cls,
        base_content: str,
        children: tuple[SubnoteNode, ...] = (),
        *,
        note_type: str | None = None,
        label: str | None = None,
        jsonmodel_type: str = "note_multipart",
    ) -> MultipartNode:
        return cls(
            note_type=note_type,
            children=(TextNode(base_content), *children),
            label=label,
            jsonmodel_type=jsonmodel_type,
        )

    def to_document(self) -> dict[str, Any]:
        doc = _with_label({"jsonmodel_type": self.jsonmodel_type}, self.label)
        if self.note_type is not None:
            doc["type"] = self.note_type
        doc["subnotes"] = [child.to_document() for child in self.children]
        return doc


NoteNode = Union[MultipartNode, SinglepartNode, BibliographyNode, IndexNode, SubnoteNode]
