"""
Conversion run service: drives a sequence of source records through the
dispatcher for one run.

One service instance is one run: it owns the run's DiagnosticLog, the
IdentityRegistry and the ConversionContext, and tallies converted and
skipped records. Uses structured logging (LogContext, get_logger("convert.*")).

Exceptions raised while converting a record (resolver failures, override
contract violations, exhausted identifier space) are not caught here; they
abort the run and reach the caller.
"""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from archive_config.bridges import build_enum_resolver
from archive_config.schema import ConversionConfig, ConversionSettings
from archive_kernel.domain.clock import Clock, SystemClock
from archive_kernel.domain.diagnostics import Diagnostic, DiagnosticLog
from archive_kernel.logging_config import LogContext, get_logger

from archive_convert.converters import ConversionContext
from archive_convert.domain.types import RecordKind, ResourceRecord, SourceRecord, TargetDocument
from archive_convert.mapping.enums import EnumResolver
from archive_convert.mapping.identity import IdentityRegistry
from archive_convert.services.dispatcher import (
    ConversionDispatcher,
    OverrideHook,
    build_dispatch_plan,
    record_kind_of,
)

logger = get_logger("convert.service")


@dataclass(frozen=True)
class ConvertedRecord:
    record_kind: RecordKind
    record_id: int
    document: TargetDocument


@dataclass(frozen=True)
class SkippedRecord:
    record_kind: RecordKind
    record_id: int


@dataclass(frozen=True)
class ConversionReport:
    """Outcome of one conversion run."""

    run_id: str
    converted: tuple[ConvertedRecord, ...]
    skipped: tuple[SkippedRecord, ...]
    diagnostics: tuple[Diagnostic, ...]

    @property
    def converted_count(self) -> int:
        return len(self.converted)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def tally(self) -> dict[str, dict[str, int]]:
        """Per-kind counts: ``{"accession": {"converted": 3, "skipped": 1}}``."""
        converted = Counter(r.record_kind.value for r in self.converted)
        skipped = Counter(r.record_kind.value for r in self.skipped)
        return {
            kind: {"converted": converted[kind], "skipped": skipped[kind]}
            for kind in sorted(set(converted) | set(skipped))
        }


class ConversionService:
    """
    Converts records for one run.

    Usage:
        service = ConversionService(get_active_config())
        report = service.run(records)
    """

    def __init__(
        self,
        config: ConversionConfig | None = None,
        *,
        resolver: EnumResolver | None = None,
        overrides: Mapping[RecordKind, OverrideHook] | None = None,
        global_override: OverrideHook | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        run_id: str | None = None,
    ) -> None:
        if resolver is None:
            if config is None:
                raise ValueError("ConversionService needs a config or an explicit resolver")
            resolver = build_enum_resolver(config)
        settings = config.settings if config is not None else ConversionSettings()

        self.run_id = run_id or str(uuid4())
        self.diagnostics = DiagnosticLog()
        self.registry = IdentityRegistry(
            self.diagnostics,
            token_length=settings.token_length,
            long_token_length=settings.long_token_length,
            rng=rng,
            max_attempts=settings.max_disambiguation_attempts,
        )
        self._base_ctx = ConversionContext(
            resolver=resolver,
            registry=self.registry,
            sink=self.diagnostics,
            settings=settings,
            clock=clock or SystemClock(),
        )
        self._ctx = self._base_ctx
        self._dispatcher = ConversionDispatcher(
            build_dispatch_plan(overrides, global_override), self._base_ctx
        )
        self._converted: list[ConvertedRecord] = []
        self._skipped: list[SkippedRecord] = []

    @property
    def context(self) -> ConversionContext:
        return self._ctx

    @property
    def dispatcher(self) -> ConversionDispatcher:
        return self._dispatcher

    def convert_one(self, record: SourceRecord) -> TargetDocument | None:
        """Convert one record, tallying it as converted or skipped."""
        kind = record_kind_of(record)
        if isinstance(record, ResourceRecord):
            # Components that follow are labelled with this resource.
            self._ctx = self._base_ctx.for_resource(record.resource_identifier)

        with LogContext.bind(
            run_id=self.run_id,
            record_kind=kind.value,
            record_id=str(record.record_id),
            resource_identifier=self._ctx.resource_identifier or None,
        ):
            document = self._dispatcher.convert(record, self._ctx)
            if document is None:
                self._skipped.append(SkippedRecord(kind, record.record_id))
                logger.warning("record_skipped")
                return None
            self._converted.append(ConvertedRecord(kind, record.record_id, dict(document)))
            logger.debug("record_converted")
            return document

    def run(self, records: Iterable[SourceRecord]) -> ConversionReport:
        """Convert every record in order and return the run report."""
        with LogContext.bind(run_id=self.run_id):
            logger.info("run_started")
            for record in records:
                self.convert_one(record)
            report = self.report()
            logger.info(
                "run_completed",
                extra={
                    "converted_count": report.converted_count,
                    "skipped_count": report.skipped_count,
                    "diagnostic_count": len(report.diagnostics),
                    "tally": report.tally(),
                },
            )
        return report

    def report(self) -> ConversionReport:
        return ConversionReport(
            run_id=self.run_id,
            converted=tuple(self._converted),
            skipped=tuple(self._skipped),
            diagnostics=self.diagnostics.entries,
        )


def documents_by_kind(report: ConversionReport) -> dict[str, list[Any]]:
    """Group converted documents by record kind, preserving run order."""
    grouped: dict[str, list[Any]] = {}
    for item in report.converted:
        grouped.setdefault(item.record_kind.value, []).append(item.document)
    return grouped
