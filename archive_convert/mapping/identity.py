"""
Identity registry: per-class identifier uniqueness and segment repair.

The target rejects duplicate identifiers within a class (accession, resource,
digital object, finding aid); the source enforces neither uniqueness nor dense
segments. One IdentityRegistry lives for exactly one conversion run and owns
an append-only seen-set per class.

Invariants:
    - Within a class, every value returned by ``ensure_unique`` /
      ``ensure_unique_single`` is distinct for the lifetime of the registry.
    - Repaired identifiers never contain blank segments between non-blank ones.

Disambiguation tokens are random; callers must not depend on their value.
"""

from __future__ import annotations

import random
import string
import threading
from collections.abc import Sequence
from dataclasses import dataclass

from archive_kernel.domain.diagnostics import DiagnosticCode, DiagnosticsSink
from archive_kernel.exceptions import IdentifierSpaceExhaustedError
from archive_kernel.logging_config import get_logger

from archive_convert.domain.types import IdentifierClass

logger = get_logger("convert.identity")

MAX_SEGMENTS = 4
DISAMBIGUATION_MARK = " ##"
_TOKEN_ALPHABET = string.ascii_letters + string.digits

_CLASS_LABELS = {
    IdentifierClass.ACCESSION: "Accession",
    IdentifierClass.RESOURCE: "Resource",
    IdentifierClass.DIGITAL_OBJECT: "Digital Object",
    IdentifierClass.FINDING_AID: "EAD",
}


# -----------------------------------------------------------------------------
# Pure segment handling
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class SegmentRepair:
    """Dense, left-packed identifier segments and whether any moved."""

    segments: tuple[str, ...]
    shifted: bool

    def padded(self, width: int = MAX_SEGMENTS) -> tuple[str, ...]:
        return self.segments + ("",) * (width - len(self.segments))


def shift_and_repair(segments: Sequence[str | None]) -> SegmentRepair:
    """
    Left-pack up to four possibly-blank segments, skipping blanks.

    ``["", "B", "", "D"] -> ("B", "D")`` with shifted=True. A segment counts
    as shifted when it lands at an earlier position than it started in.
    """
    if len(segments) > MAX_SEGMENTS:
        raise ValueError(f"At most {MAX_SEGMENTS} identifier segments, got {len(segments)}")
    packed: list[str] = []
    shifted = False
    for position, segment in enumerate(segments):
        value = (segment or "").strip()
        if not value:
            continue
        if len(packed) < position:
            shifted = True
        packed.append(value)
    return SegmentRepair(segments=tuple(packed), shifted=shifted)


def concat_segments(segments: Sequence[str | None]) -> str:
    """Join non-blank segments with '.'; blank segments are never represented."""
    return ".".join(s for s in segments if s and s.strip())


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class IdentifierResult:
    """Outcome of registering one identifier."""

    id_class: IdentifierClass
    original: str
    value: str
    segments: tuple[str, ...]
    disambiguated: bool = False
    shifted: bool = False


class IdentityRegistry:
    """
    Append-only per-class seen-sets for one conversion run.

    Contract:
        Registration is serialized by one lock, so the registry may be shared
        by parallel workers of the same run.

    Non-goals:
        Persisting identifiers between runs. Create a new registry per run.
    """

    def __init__(
        self,
        sink: DiagnosticsSink,
        *,
        token_length: int = 3,
        long_token_length: int = 6,
        rng: random.Random | None = None,
        max_attempts: int = 10_000,
    ) -> None:
        self._sink = sink
        self._token_length = token_length
        self._long_token_length = long_token_length
        self._rng = rng or random.Random()
        self._max_attempts = max_attempts
        self._seen: dict[IdentifierClass, set[str]] = {c: set() for c in IdentifierClass}
        self._lock = threading.Lock()

    # -- inspection ----------------------------------------------------------

    def seen(self, id_class: IdentifierClass) -> frozenset[str]:
        with self._lock:
            return frozenset(self._seen[id_class])

    def is_registered(self, id_class: IdentifierClass, value: str) -> bool:
        with self._lock:
            return value in self._seen[id_class]

    def new_token(self, length: int | None = None) -> str:
        """Random alphanumeric disambiguation token."""
        n = self._token_length if length is None else length
        return "".join(self._rng.choice(_TOKEN_ALPHABET) for _ in range(n))

    # -- multi-segment identifiers (accession, resource) ---------------------

    def ensure_unique(
        self,
        id_class: IdentifierClass,
        candidate: str,
        segments: Sequence[str],
    ) -> IdentifierResult:
        """
        Register ``candidate`` or a disambiguated variant of it.

        On collision a random token is appended to the FIRST segment and the
        concatenation recomputed until unseen. One diagnostic names the
        original and replacement identifiers.
        """
        candidate = candidate.strip()
        parts = list(segments) or [""]
        with self._lock:
            seen = self._seen[id_class]
            if candidate not in seen:
                seen.add(candidate)
                return IdentifierResult(
                    id_class=id_class,
                    original=candidate,
                    value=candidate,
                    segments=tuple(parts),
                )

            first = parts[0]
            for _ in range(self._max_attempts):
                parts[0] = first + DISAMBIGUATION_MARK + self.new_token()
                full_id = concat_segments(parts)
                if full_id not in seen:
                    seen.add(full_id)
                    break
            else:
                raise IdentifierSpaceExhaustedError(id_class.value, candidate, self._max_attempts)

        label = _CLASS_LABELS[id_class]
        self._sink.report(
            f"Duplicate {label} Id: {candidate} Changed to: {full_id}",
            DiagnosticCode.IDENTIFIER_DUPLICATE,
        )
        logger.info(
            "identifier_disambiguated",
            extra={"id_class": id_class.value, "original_id": candidate, "new_id": full_id},
        )
        return IdentifierResult(
            id_class=id_class,
            original=candidate,
            value=full_id,
            segments=tuple(parts),
            disambiguated=True,
        )

    def repair_identifier(
        self,
        id_class: IdentifierClass,
        segments: Sequence[str | None],
    ) -> IdentifierResult:
        """Shift-and-repair four raw segments, then make the result unique."""
        repair = shift_and_repair(segments)
        result = self.ensure_unique(id_class, concat_segments(repair.segments), repair.padded())
        if repair.shifted:
            self._sink.report(
                f"{_CLASS_LABELS[id_class]} Id Cleaned Up: {result.value}",
                DiagnosticCode.IDENTIFIER_SHIFTED,
            )
            return IdentifierResult(
                id_class=result.id_class,
                original=result.original,
                value=result.value,
                segments=result.segments,
                disambiguated=result.disambiguated,
                shifted=True,
            )
        return result

    # -- single-segment identifiers (finding aid, digital object) ------------

    def ensure_unique_single(
        self,
        id_class: IdentifierClass,
        value: str | None,
        *,
        blank_fallback: str | None = None,
        token_length: int | None = None,
    ) -> str:
        """
        Single-segment variant of ``ensure_unique``.

        A blank value returns "" unregistered, unless ``blank_fallback`` is
        given, in which case the fallback is registered in its place.
        """
        candidate = (value or "").strip()
        if not candidate:
            if blank_fallback is None:
                return ""
            candidate = blank_fallback

        with self._lock:
            seen = self._seen[id_class]
            if candidate not in seen:
                seen.add(candidate)
                return candidate
            for _ in range(self._max_attempts):
                new_id = candidate + DISAMBIGUATION_MARK + self.new_token(token_length)
                if new_id not in seen:
                    seen.add(new_id)
                    break
            else:
                raise IdentifierSpaceExhaustedError(id_class.value, candidate, self._max_attempts)

        self._sink.report(
            f"Duplicate {_CLASS_LABELS[id_class]} Id: {candidate} Changed to: {new_id}",
            DiagnosticCode.IDENTIFIER_DUPLICATE,
        )
        logger.info(
            "identifier_disambiguated",
            extra={"id_class": id_class.value, "original_id": candidate, "new_id": new_id},
        )
        return new_id

    def digital_object_id(self, mets_identifier: str | None) -> str:
        """Collision-checked digital object id; blank ids get a generated one."""
        return self.ensure_unique_single(
            IdentifierClass.DIGITAL_OBJECT,
            mets_identifier,
            blank_fallback="Digital Object ID" + DISAMBIGUATION_MARK + self.new_token(self._long_token_length),
            token_length=self._long_token_length,
        )
