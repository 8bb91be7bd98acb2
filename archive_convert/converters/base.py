"""
Converter protocol and the per-run ConversionContext.

Converters are pure given ``(record, context)``: everything that spans a run
(identity registry, diagnostics sink, resolver, clock) is carried explicitly
by the context, never held in module state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from archive_config.schema import ConversionSettings
from archive_kernel.domain.clock import Clock, SystemClock
from archive_kernel.domain.diagnostics import DiagnosticCode, DiagnosticsSink

from archive_convert.domain.text import is_blank
from archive_convert.domain.types import RecordKind, TargetDocument
from archive_convert.mapping.enums import EnumResolver, resolve_reported
from archive_convert.mapping.identity import IdentityRegistry


@dataclass(frozen=True)
class ConversionContext:
    """Collaborators for one conversion run."""

    resolver: EnumResolver
    registry: IdentityRegistry
    sink: DiagnosticsSink
    settings: ConversionSettings = field(default_factory=ConversionSettings)
    clock: Clock = field(default_factory=SystemClock)
    resource_identifier: str = ""

    def for_resource(self, resource_identifier: str) -> ConversionContext:
        """Context for the components of one resource."""
        return replace(self, resource_identifier=resource_identifier)

    def lookup(self, category: str, value: str | None, *, required: bool = False) -> str | None:
        """
        Resolve a vocabulary value, reporting it when unmapped.

        A blank optional value resolves to None without a diagnostic.
        """
        if is_blank(value) and not required:
            return None
        return resolve_reported(self.resolver, self.sink, category, value)

    def external_ids(self, record_id: Any, kind: RecordKind | str) -> list[dict[str, str]]:
        """Back-reference from a target document to its source record."""
        tag = kind.value if isinstance(kind, RecordKind) else kind
        return [
            {
                "external_id": str(record_id),
                "source": f"{self.settings.external_id_source_prefix}::{tag.upper()}",
            }
        ]

    def skip(self, message: str) -> None:
        """Report a fatal per-record condition; the converter then returns None."""
        self.sink.report(message, DiagnosticCode.RECORD_SKIPPED)


class RecordConverter(Protocol):
    """Converts one record kind to its target document."""

    @property
    def record_kind(self) -> RecordKind:
        ...

    def convert(self, record: Any, ctx: ConversionContext) -> TargetDocument | None:
        """Return the target document, or None for a fatal per-record condition."""
        ...


def reference(uri: str) -> dict[str, str]:
    return {"ref": uri}
