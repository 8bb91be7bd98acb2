"""
Note model builder: source notes -> NoteNode trees.

A note becomes multipart when it is flagged multi-part, or when its type has
no singlepart form in the target (the singlepart lookup returns UNMAPPED).
Digital-object notes are always ``note_digital_object``. Every multipart node
starts with a synthesized text node carrying the note's own content.
"""

from __future__ import annotations

from collections.abc import Iterable

from archive_kernel.domain.diagnostics import DiagnosticsSink

from archive_convert.domain.notes import (
    BibliographyNode,
    ChronologyEntry,
    ChronologyNode,
    CitationNode,
    DefinedListNode,
    IndexEntry,
    IndexNode,
    MultipartNode,
    NoteNode,
    OrderedListNode,
    SinglepartNode,
    SubnoteNode,
    TextNode,
)
from archive_convert.domain.text import fix_empty_string, is_blank
from archive_convert.domain.types import (
    ArchDescription,
    Bibliography,
    Chronology,
    ContactNote,
    DefinedList,
    Index,
    Note,
    NotePart,
    OrderedList,
)
from archive_convert.mapping.enums import UNMAPPED, EnumCategory, EnumResolver, resolve_reported

NO_CONTENT = "no content"
MULTIPART_CONTENT = "multi-part note content"
MISSING_TITLE = "Missing Title"
CONTAINER_SUMMARY_LABEL = "Container Summary"


def _label(title: str) -> str | None:
    return None if is_blank(title) else title


# -----------------------------------------------------------------------------
# Sub-notes
# -----------------------------------------------------------------------------


def _index_node(part: Index, *, label: str | None = None, content: tuple[str, ...] = ()) -> IndexNode:
    return IndexNode(
        items=tuple(
            IndexEntry(
                value=item.value,
                entry_type=item.item_type,
                reference=item.reference,
                reference_text=item.reference_text,
            )
            for item in part.items
        ),
        label=label,
        content=content,
    )


def build_subnote(part: NotePart, resolver: EnumResolver, sink: DiagnosticsSink) -> SubnoteNode:
    """Convert one child of a multipart note. Unknown parts become text."""
    if isinstance(part, OrderedList):
        return OrderedListNode(
            title=fix_empty_string(part.title, MISSING_TITLE),
            enumeration=resolve_reported(
                resolver, sink, EnumCategory.ORDERED_LIST_ENUMERATION, part.numeration
            ),
            items=tuple(part.items),
        )
    if isinstance(part, DefinedList):
        return DefinedListNode(
            title=fix_empty_string(part.title, MISSING_TITLE),
            items=tuple((item.label, item.value) for item in part.items),
        )
    if isinstance(part, Chronology):
        return ChronologyNode(
            title=fix_empty_string(part.title, MISSING_TITLE),
            items=tuple(ChronologyEntry(item.event_date, tuple(item.events)) for item in part.items),
            ingest_problem=part.ingest_problem or None,
        )
    if isinstance(part, Bibliography):
        return BibliographyNode(items=tuple(part.items))
    if isinstance(part, Index):
        return _index_node(part)
    return TextNode(getattr(part, "content", ""))


# -----------------------------------------------------------------------------
# Top-level notes
# -----------------------------------------------------------------------------


def build_multipart_note(note: Note, resolver: EnumResolver, sink: DiagnosticsSink) -> MultipartNode:
    return MultipartNode.with_base_text(
        fix_empty_string(note.content, MULTIPART_CONTENT),
        tuple(build_subnote(child, resolver, sink) for child in note.children),
        note_type=resolve_reported(resolver, sink, EnumCategory.MULTIPART_NOTE_TYPE, note.note_type),
        label=_label(note.title),
    )


def build_note(
    note: Note,
    resolver: EnumResolver,
    sink: DiagnosticsSink,
    *,
    digital: bool = False,
) -> MultipartNode | SinglepartNode:
    """Convert one free-text note, choosing its representation."""
    content = (fix_empty_string(note.content, NO_CONTENT),)

    if digital:
        return SinglepartNode(
            note_type=resolve_reported(
                resolver, sink, EnumCategory.DIGITAL_OBJECT_NOTE_TYPE, note.note_type
            ),
            content=content,
            label=_label(note.title),
            jsonmodel_type="note_digital_object",
        )

    if note.multi_part:
        return build_multipart_note(note, resolver, sink)

    # Probe only: a type with no singlepart form is multipart in the target.
    singlepart_type = resolver.resolve(EnumCategory.SINGLEPART_NOTE_TYPE, note.note_type)
    if singlepart_type == UNMAPPED:
        return build_multipart_note(note, resolver, sink)

    return SinglepartNode(note_type=singlepart_type, content=content, label=_label(note.title))


def build_structured_note(note: Bibliography | Index) -> BibliographyNode | IndexNode:
    """Top-level bibliography or index, with its label and content."""
    content = (fix_empty_string(note.content, NO_CONTENT),)
    if isinstance(note, Index):
        return _index_node(note, label=_label(note.title), content=content)
    return BibliographyNode(label=_label(note.title), content=content, items=tuple(note.items))


def build_notes(
    record: ArchDescription,
    resolver: EnumResolver,
    sink: DiagnosticsSink,
    *,
    digital: bool = False,
) -> list[NoteNode]:
    """All notes of a record: free-text notes first, then structured notes."""
    nodes: list[NoteNode] = [build_note(n, resolver, sink, digital=digital) for n in record.notes]
    nodes.extend(build_structured_note(n) for n in record.structured_notes)
    return nodes


def container_summary_note(container_summary: str) -> SinglepartNode:
    """Container summary demoted to a physical-description note."""
    return SinglepartNode(
        note_type="physdesc",
        content=(container_summary,),
        label=CONTAINER_SUMMARY_LABEL,
    )


def bioghist_note(description_note: str, citation: str, label: str | None) -> MultipartNode:
    """Agent biographical/historical note: a text subnote plus optional citation."""
    children: tuple[SubnoteNode, ...] = ()
    if not is_blank(citation):
        children = (CitationNode((citation,)),)
    return MultipartNode.with_base_text(
        description_note,
        children,
        label=label,
        jsonmodel_type="note_bioghist",
    )


def contact_note_text(notes: Iterable[ContactNote]) -> str | None:
    """Concatenate contact notes into one text; None when there are none."""
    chunks: list[str] = []
    for note in notes:
        if note.label:
            chunks.append(f"Label: {note.label}\n")
        chunks.append(f"Content: \n{note.note_text}\n\n")
    return "".join(chunks) or None
