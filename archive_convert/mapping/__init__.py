"""Field-level normalization: enumerations, dates, notes and identifiers."""

from archive_convert.mapping.enums import UNMAPPED, EnumCategory, EnumResolver, TableEnumResolver
from archive_convert.mapping.identity import IdentityRegistry, shift_and_repair

__all__ = [
    "UNMAPPED",
    "EnumCategory",
    "EnumResolver",
    "IdentityRegistry",
    "TableEnumResolver",
    "shift_and_repair",
]
