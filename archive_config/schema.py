"""
Conversion configuration schema.

The YAML configuration set is parsed into these frozen dataclasses by the
loader; ``ConversionConfig`` is the only object handed to runtime code.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConversionSettings:
    """Scalar settings consumed by the converters and identity registry."""

    vocabulary_uri: str = "/vocabularies/1"
    external_id_source_prefix: str = "Archivists Toolkit Database"
    token_length: int = 3
    long_token_length: int = 6
    max_disambiguation_attempts: int = 10_000
    return_source_value: bool = False

    def __post_init__(self) -> None:
        if self.token_length < 1 or self.long_token_length < 1:
            raise ValueError("Disambiguation token lengths must be positive")
        if self.max_disambiguation_attempts < 1:
            raise ValueError("max_disambiguation_attempts must be positive")


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EnumTables:
    """
    Vocabulary lookup tables.

    tables:           category -> {source value -> target value}
    dynamic_lists:    user-extensible target list -> known values
    dynamic_bindings: category -> dynamic list consulted on a table miss
    """

    tables: dict[str, dict[str, str]] = field(default_factory=dict)
    dynamic_lists: dict[str, tuple[str, ...]] = field(default_factory=dict)
    dynamic_bindings: dict[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConversionConfig:
    """A loaded configuration set with its identity."""

    config_id: str
    version: int
    settings: ConversionSettings
    enums: EnumTables
    checksum: str
    description: str = ""
