"""
archive_config -- single public entrypoint for conversion configuration.

Responsibility:
    ``get_active_config()`` is the only way runtime code obtains settings and
    vocabulary tables. YAML loading lives in ``archive_config.loader`` and is
    not called directly by services or converters.

Architecture position:
    Sits above ``archive_kernel`` and beside ``archive_convert``. The kernel
    never imports this package; ``archive_config.bridges`` turns a loaded
    configuration into the collaborators the converters consume.

Audit relevance:
    Every successful ``get_active_config()`` call emits an
    ``ARCHIVE_CONFIG_TRACE`` log entry with the config id, version and
    checksum, tying each conversion run to the exact tables that drove it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from archive_config.loader import load_config
from archive_config.schema import ConversionConfig, ConversionSettings, EnumTables

_logger = logging.getLogger("archive_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(config_path: Path | None = None) -> ConversionConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: Configuration set file. Defaults to the shipped
            ``archive_config/sets/default.yaml``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationLoadError: If required keys are missing or malformed.
    """
    path = Path(config_path) if config_path is not None else _DEFAULT_CONFIG_PATH
    config = load_config(path)

    _logger.info(
        "ARCHIVE_CONFIG_TRACE",
        extra={
            "trace_type": "ARCHIVE_CONFIG_TRACE",
            "config_set_id": config.config_id,
            "config_set_version": config.version,
            "checksum": config.checksum,
            "enum_category_count": len(config.enums.tables),
            "dynamic_list_count": len(config.enums.dynamic_lists),
        },
    )
    return config


__all__ = [
    "ConversionConfig",
    "ConversionSettings",
    "EnumTables",
    "get_active_config",
]
