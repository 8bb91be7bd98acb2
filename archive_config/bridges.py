"""
Config -> converter bridges.

Usage:
    from archive_config.bridges import build_enum_resolver

    config = get_active_config()
    resolver = build_enum_resolver(config)
"""

from __future__ import annotations

from archive_config.schema import ConversionConfig
from archive_convert.mapping.enums import TableEnumResolver


def build_enum_resolver(config: ConversionConfig) -> TableEnumResolver:
    """Build a TableEnumResolver from the configuration's enum tables."""
    return TableEnumResolver(
        tables=config.enums.tables,
        dynamic_lists=config.enums.dynamic_lists,
        dynamic_bindings=config.enums.dynamic_bindings,
        return_source_value=config.settings.return_source_value,
    )
