"""
archive_convert.services.dispatcher -- Routes each record to one converter.

Responsibility:
    For every record kind, exactly one of {builtin converter, registered
    override} runs. The choice is fixed once, when the DispatchPlan is
    built, before any record is converted. A global override hook forces the
    override route for every kind.

Invariants enforced:
    - Exhaustiveness: building a plan fails unless every RecordKind has a
      builtin converter or an override.
    - Registration consistency: a converter's ``record_kind`` must match the
      key it is registered under.
    - Immutability: a DispatchPlan cannot be changed after it is built.

Failure modes:
    - DispatchConfigurationError: missing or mismatched registrations.
    - UnknownRecordKindError: the object handed to ``convert`` is not a
      source record.
    - OverrideContractError: an override returned neither a mapping nor None.
    - Exceptions raised by converters, the enum resolver or an override
      propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from archive_kernel.exceptions import (
    DispatchConfigurationError,
    OverrideContractError,
    UnknownRecordKindError,
)
from archive_kernel.logging_config import get_logger

from archive_convert.converters import ConversionContext, RecordConverter, default_converter_registry
from archive_convert.domain.types import RECORD_TYPES, RecordKind, SourceRecord, TargetDocument

logger = get_logger("convert.dispatcher")

OverrideHook = Callable[[SourceRecord], "TargetDocument | None"]


class Route(str, Enum):
    BUILTIN = "builtin"
    OVERRIDE = "override"


@dataclass(frozen=True)
class RouteEntry:
    route: Route
    handler: Any  # RecordConverter for BUILTIN, OverrideHook for OVERRIDE


@dataclass(frozen=True)
class DispatchPlan:
    """Immutable {kind -> route} table resolved at configuration time."""

    entries: Mapping[RecordKind, RouteEntry]

    def route_for(self, kind: RecordKind) -> Route:
        return self.entries[kind].route


def build_dispatch_plan(
    overrides: Mapping[RecordKind, OverrideHook] | None = None,
    global_override: OverrideHook | None = None,
    converters: Mapping[RecordKind, RecordConverter] | None = None,
) -> DispatchPlan:
    """
    Resolve the route for every record kind.

    Raises:
        DispatchConfigurationError: a kind has no builtin converter and no
            override, or a converter is registered under the wrong kind.
    """
    builtins = dict(default_converter_registry() if converters is None else converters)
    overrides = dict(overrides or {})

    mismatched = [k.value for k, c in builtins.items() if c.record_kind != k]
    if mismatched:
        raise DispatchConfigurationError(
            tuple(mismatched), "converter record_kind does not match its registration"
        )

    entries: dict[RecordKind, RouteEntry] = {}
    missing: list[str] = []
    for kind in RecordKind:
        hook = global_override or overrides.get(kind)
        if hook is not None:
            entries[kind] = RouteEntry(Route.OVERRIDE, hook)
        elif kind in builtins:
            entries[kind] = RouteEntry(Route.BUILTIN, builtins[kind])
        else:
            missing.append(kind.value)
    if missing:
        raise DispatchConfigurationError(tuple(missing))

    logger.info(
        "dispatch_plan_built",
        extra={
            "override_kinds": sorted(k.value for k, e in entries.items() if e.route is Route.OVERRIDE),
            "global_override": global_override is not None,
        },
    )
    return DispatchPlan(entries=MappingProxyType(entries))


def record_kind_of(record: Any) -> RecordKind:
    """The kind of a source record; anything else raises UnknownRecordKindError."""
    kind = getattr(type(record), "kind", None)
    if not isinstance(kind, RecordKind) or not isinstance(record, RECORD_TYPES[kind]):
        raise UnknownRecordKindError(type(record).__name__)
    return kind


class ConversionDispatcher:
    """
    Converts one record through the route its kind was assigned.

    Usage:
        dispatcher = ConversionDispatcher(build_dispatch_plan(), ctx)
        document = dispatcher.convert(record)
    """

    def __init__(self, plan: DispatchPlan, ctx: ConversionContext) -> None:
        self._plan = plan
        self._ctx = ctx

    @property
    def plan(self) -> DispatchPlan:
        return self._plan

    def convert(self, record: Any, ctx: ConversionContext | None = None) -> TargetDocument | None:
        """Return the target document, or None when the record is skipped."""
        kind = record_kind_of(record)
        entry = self._plan.entries[kind]
        if entry.route is Route.BUILTIN:
            return entry.handler.convert(record, ctx or self._ctx)

        result = entry.handler(record)
        if result is not None and not isinstance(result, Mapping):
            raise OverrideContractError(kind.value, type(result).__name__)
        return result
