"""
Typed exception hierarchy for the archive conversion kernel.

Every error carries a class-level ``code`` (machine-readable) and stores its
context as attributes, so log lines and callers never parse message text.

    ArchiveKernelError (base)
    |
    +-- DispatchError
    |   +-- DispatchConfigurationError
    |   +-- UnknownRecordKindError
    |   +-- OverrideContractError
    |
    +-- IdentityError
    |   +-- IdentifierSpaceExhaustedError
    |
    +-- ConfigurationLoadError
    |
    +-- SourceRecordFormatError

Fatal per-record conditions (unknown agent type, missing accession date) are
NOT exceptions: the converter reports a diagnostic and returns None so the
caller can skip and tally. The classes below are for conditions that must
abort the record or the run.
"""


class ArchiveKernelError(Exception):
    """Base exception for all archive conversion errors."""

    code: str = "ARCHIVE_KERNEL_ERROR"


# Dispatch


class DispatchError(ArchiveKernelError):
    """Base exception for dispatch errors."""

    code: str = "DISPATCH_ERROR"


class DispatchConfigurationError(DispatchError):
    """The dispatch plan cannot route every record kind."""

    code: str = "DISPATCH_CONFIGURATION_INVALID"

    def __init__(self, missing_kinds: tuple[str, ...], reason: str = ""):
        self.missing_kinds = missing_kinds
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"No converter for record kinds {', '.join(missing_kinds)}{detail}"
        )


class UnknownRecordKindError(DispatchError):
    """The object handed to the dispatcher is not a known source record."""

    code: str = "UNKNOWN_RECORD_KIND"

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unknown source record type: {type_name}")


class OverrideContractError(DispatchError):
    """An override hook returned something other than a document or None."""

    code: str = "OVERRIDE_CONTRACT_VIOLATION"

    def __init__(self, record_kind: str, returned_type: str):
        self.record_kind = record_kind
        self.returned_type = returned_type
        super().__init__(
            f"Override for {record_kind} returned {returned_type}, "
            "expected a mapping or None"
        )


# Identity


class IdentityError(ArchiveKernelError):
    """Base exception for identifier registry errors."""

    code: str = "IDENTITY_ERROR"


class IdentifierSpaceExhaustedError(IdentityError):
    """Disambiguation could not find an unused identifier."""

    code: str = "IDENTIFIER_SPACE_EXHAUSTED"

    def __init__(self, id_class: str, candidate: str, attempts: int):
        self.id_class = id_class
        self.candidate = candidate
        self.attempts = attempts
        super().__init__(
            f"No unique {id_class} identifier for {candidate!r} "
            f"after {attempts} attempts"
        )


# Configuration and input


class ConfigurationLoadError(ArchiveKernelError):
    """A configuration file is missing required keys or has bad values."""

    code: str = "CONFIGURATION_LOAD_FAILED"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration {path}: {reason}")


class SourceRecordFormatError(ArchiveKernelError):
    """A source record dict cannot be built into a typed record."""

    code: str = "SOURCE_RECORD_FORMAT_INVALID"

    def __init__(self, record_kind: str | None, reason: str):
        self.record_kind = record_kind
        self.reason = reason
        super().__init__(f"Bad source record ({record_kind or 'unknown kind'}): {reason}")
