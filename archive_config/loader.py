"""
Configuration loader (``archive_config.loader``).

Loads a YAML configuration set and parses it into ``archive_config.schema``
dataclasses. Runtime code goes through ``archive_config.get_active_config()``
rather than calling this module.

Failure modes
-------------
* Missing file -> ``FileNotFoundError`` propagates.
* Malformed YAML -> ``yaml.YAMLError`` propagates.
* Missing keys or wrongly-typed sections -> ``ConfigurationLoadError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from archive_kernel.exceptions import ConfigurationLoadError

from archive_config.schema import ConversionConfig, ConversionSettings, EnumTables


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file and return its contents as a dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization; deterministic."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _mapping(data: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigurationLoadError(str(path), f"'{key}' must be a mapping")
    return value


def parse_settings(data: dict[str, Any]) -> ConversionSettings:
    """Parse the ``settings`` section; absent keys keep their defaults."""
    known = ConversionSettings.__dataclass_fields__
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}")
    return ConversionSettings(**data)


def parse_enum_tables(data: dict[str, Any], path: Path) -> EnumTables:
    tables: dict[str, dict[str, str]] = {}
    for category, table in _mapping(data, "tables", path).items():
        if not isinstance(table, dict):
            raise ConfigurationLoadError(str(path), f"enum table '{category}' must be a mapping")
        tables[category] = {str(src): str(target) for src, target in table.items()}

    dynamic_lists = {
        name: tuple(str(v) for v in (values or ()))
        for name, values in _mapping(data, "dynamic_lists", path).items()
    }
    bindings = {str(c): str(n) for c, n in _mapping(data, "dynamic_bindings", path).items()}
    missing = sorted(n for n in bindings.values() if n not in dynamic_lists)
    if missing:
        raise ConfigurationLoadError(str(path), f"bound to undefined dynamic lists: {', '.join(missing)}")

    return EnumTables(tables=tables, dynamic_lists=dynamic_lists, dynamic_bindings=bindings)


def load_config(path: Path) -> ConversionConfig:
    """Load and parse one configuration set file."""
    raw = load_yaml_file(path)
    try:
        config_id = raw["config_id"]
        version = int(raw["version"])
    except KeyError as exc:
        raise ConfigurationLoadError(str(path), f"missing required key {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigurationLoadError(str(path), "'version' must be an integer") from exc

    try:
        settings = parse_settings(_mapping(raw, "settings", path))
    except (TypeError, ValueError) as exc:
        raise ConfigurationLoadError(str(path), str(exc)) from exc

    return ConversionConfig(
        config_id=str(config_id),
        version=version,
        settings=settings,
        enums=parse_enum_tables(_mapping(raw, "enums", path), path),
        checksum=compute_checksum(raw),
        description=str(raw.get("description", "")),
    )
