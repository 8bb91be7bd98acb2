"""
Agent converters: name records and repository corporate agents.

A name record becomes exactly one of three agent sub-schemas (person, family,
corporate entity), selected by its case-insensitive name type. An unknown
type skips the record with one diagnostic before any other work, so no
partial document or unrelated diagnostic is produced.
"""

from __future__ import annotations

from typing import Any

from archive_convert.converters.base import ConversionContext
from archive_convert.domain.text import fix_empty_string, non_blank, put
from archive_convert.domain.types import NameRecord, RecordKind, RepositoryRecord, TargetDocument
from archive_convert.mapping.enums import UNMAPPED, EnumCategory
from archive_convert.mapping.notes import bioghist_note, contact_note_text

PERSON = "agent_person"
FAMILY = "agent_family"
CORPORATE_ENTITY = "agent_corporate_entity"

_AGENT_TYPES = {
    NameRecord.PERSON_TYPE.lower(): PERSON,
    NameRecord.FAMILY_TYPE.lower(): FAMILY,
    NameRecord.CORPORATE_BODY_TYPE.lower(): CORPORATE_ENTITY,
}


def agent_type_for(name_type: str) -> str | None:
    return _AGENT_TYPES.get(name_type.strip().lower())


class NameConverter:
    """Converts name records to agents. Record kind: name."""

    record_kind: RecordKind = RecordKind.NAME

    def convert(self, record: NameRecord, ctx: ConversionContext) -> TargetDocument | None:
        agent_type = agent_type_for(record.name_type)
        if agent_type is None:
            ctx.skip(f"{record.sort_name}:: Unknown name type: {record.name_type}")
            return None

        name = self._name_entry(record, ctx)
        contact = self._contact(record, ctx)

        if agent_type == PERSON:
            primary_name = fix_empty_string(record.personal_primary_name)
            name.update(
                primary_name=primary_name,
                title=fix_empty_string(record.personal_title),
                name_order="direct",
            )
            put(name, "prefix", non_blank(record.personal_prefix))
            put(name, "rest_of_name", non_blank(record.personal_rest_of_name))
            put(name, "suffix", non_blank(record.personal_suffix))
            put(name, "fuller_form", non_blank(record.personal_fuller_form))
            put(name, "number", non_blank(record.number))
            contact["name"] = primary_name
        elif agent_type == FAMILY:
            family_name = fix_empty_string(record.family_name)
            name["family_name"] = family_name
            put(name, "prefix", non_blank(record.family_name_prefix))
            contact["name"] = family_name
        else:
            primary_name = fix_empty_string(record.corporate_primary_name)
            name["primary_name"] = primary_name
            put(name, "subordinate_name_1", non_blank(record.corporate_subordinate_1))
            put(name, "subordinate_name_2", non_blank(record.corporate_subordinate_2))
            put(name, "number", non_blank(record.number))
            contact["name"] = primary_name

        doc: dict[str, Any] = {
            "external_ids": ctx.external_ids(record.record_id, self.record_kind),
            "agent_type": agent_type,
            "agent_contacts": [contact],
            "names": [name],
        }
        if record.description_note:
            label = ctx.lookup(EnumCategory.NAME_DESCRIPTION_TYPE, record.description_type)
            note = bioghist_note(record.description_note, record.citation, label)
            doc["notes"] = [note.to_document()]
        return doc

    def _name_entry(self, record: NameRecord, ctx: ConversionContext) -> dict[str, Any]:
        name: dict[str, Any] = {"authority_id": "unknown"}
        put(name, "dates", non_blank(record.personal_dates))
        put(name, "qualifier", non_blank(record.qualifier))
        put(name, "source", ctx.lookup(EnumCategory.NAME_SOURCE, record.name_source))
        put(name, "rules", ctx.lookup(EnumCategory.NAME_RULE, record.name_rule))
        name["sort_name"] = fix_empty_string(record.sort_name)
        return name

    def _contact(self, record: NameRecord, ctx: ConversionContext) -> dict[str, Any]:
        contact: dict[str, Any] = {}
        # Salutations have no reliable mapping; only carry values that match.
        salutation = ctx.resolver.resolve(EnumCategory.SALUTATION, record.salutation)
        if salutation != UNMAPPED:
            contact["salutation"] = salutation
        for key, value in (
            ("address_1", record.contact_address_1),
            ("address_2", record.contact_address_2),
            ("city", record.contact_city),
            ("region", record.contact_region),
            ("country", record.contact_country),
            ("post_code", record.contact_mail_code),
            ("telephone", record.contact_phone),
            ("fax", record.contact_fax),
            ("email", record.contact_email),
        ):
            put(contact, key, non_blank(value))
        put(contact, "note", contact_note_text(record.contact_notes))
        return contact


def corporate_agent_for_repository(repository: RepositoryRecord) -> TargetDocument:
    """The corporate agent that represents a repository."""
    primary_name = fix_empty_string(repository.name)
    contact: dict[str, Any] = {"name": primary_name}
    for key, value in (
        ("address_1", repository.address_1),
        ("address_2", repository.address_2),
        ("address_3", repository.address_3),
        ("city", repository.city),
        ("country", f"{repository.country} {repository.country_code}".strip()),
        ("post_code", repository.mail_code),
        ("telephone", repository.telephone),
        ("fax", repository.fax),
        ("email", repository.email),
    ):
        put(contact, key, non_blank(value))

    return {
        "agent_type": CORPORATE_ENTITY,
        "agent_contacts": [contact],
        "names": [{"source": "local", "primary_name": primary_name, "sort_name": primary_name}],
    }
