"""Per-kind converters: source record -> target document."""

from archive_convert.converters.accession import AccessionConverter, build_accession_events
from archive_convert.converters.agent import NameConverter, corporate_agent_for_repository
from archive_convert.converters.base import ConversionContext, RecordConverter
from archive_convert.converters.digital import DigitalObjectComponentConverter, DigitalObjectConverter
from archive_convert.converters.instance import (
    AnalogInstanceConverter,
    convert_digital_instance,
    create_accession_instance,
)
from archive_convert.converters.repository import (
    LocationConverter,
    RepositoryConverter,
    UserConverter,
    access_class_key,
)
from archive_convert.converters.resource import ResourceComponentConverter, ResourceConverter
from archive_convert.converters.subject import SubjectConverter
from archive_convert.domain.types import RecordKind


def default_converter_registry() -> dict[RecordKind, RecordConverter]:
    """Return a dict of record kind -> builtin converter for every kind."""
    converters: list[RecordConverter] = [
        SubjectConverter(),
        NameConverter(),
        RepositoryConverter(),
        LocationConverter(),
        UserConverter(),
        AccessionConverter(),
        ResourceConverter(),
        ResourceComponentConverter(),
        DigitalObjectConverter(),
        DigitalObjectComponentConverter(),
        AnalogInstanceConverter(),
    ]
    return {c.record_kind: c for c in converters}


__all__ = [
    "AccessionConverter",
    "AnalogInstanceConverter",
    "ConversionContext",
    "DigitalObjectComponentConverter",
    "DigitalObjectConverter",
    "LocationConverter",
    "NameConverter",
    "RecordConverter",
    "RepositoryConverter",
    "ResourceComponentConverter",
    "ResourceConverter",
    "SubjectConverter",
    "UserConverter",
    "access_class_key",
    "build_accession_events",
    "convert_digital_instance",
    "corporate_agent_for_repository",
    "create_accession_instance",
    "default_converter_registry",
]
