#!/usr/bin/env python3
"""
Convert an exported source record file into target JSON documents.

Records are converted in file order; a resource must precede its components
so that component diagnostics carry the resource identifier.

Usage:
    python3 scripts/convert_records.py --file <path> --out <dir> [options]

Examples:
    # Convert a JSON array export with the shipped default configuration
    python3 scripts/convert_records.py --file export.json --out converted/

    # JSON Lines input, custom configuration set
    python3 scripts/convert_records.py --file export.jsonl --format jsonl \\
        --config my_tables.yaml --out converted/

    # Count records per kind and exit
    python3 scripts/convert_records.py --file export.json --probe-only
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert source records to target documents using the active configuration.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--file",
        required=True,
        type=Path,
        help="Path to source record file (JSON array or JSON Lines).",
    )
    parser.add_argument(
        "--format",
        choices=("array", "jsonl"),
        default=None,
        help="Input format (default: jsonl for *.jsonl files, array otherwise).",
    )
    parser.add_argument(
        "--json-path",
        default=None,
        help="Dot path to the record array inside a JSON document (e.g. export.records).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration set YAML (default: shipped default set).",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("converted"),
        help="Output directory for documents.json and diagnostics.json (default: ./converted).",
    )
    parser.add_argument(
        "--probe-only",
        action="store_true",
        help="Count records per kind and exit. Nothing is converted.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for structured logs on stderr (default: WARNING).",
    )
    return parser.parse_args()


def main() -> int:
    args = _parse_args()

    source_path = args.file.resolve()
    if not source_path.is_file():
        print(f"ERROR: File not found: {source_path}", file=sys.stderr)
        return 1

    # Lazy imports so we fail fast on args first
    from archive_config import get_active_config
    from archive_convert.adapters import JsonRecordAdapter
    from archive_convert.services import ConversionService
    from archive_convert.services.conversion_service import documents_by_kind
    from archive_kernel.exceptions import ArchiveKernelError
    from archive_kernel.logging_config import configure_logging

    configure_logging(level=args.log_level.upper())

    fmt = args.format or ("jsonl" if source_path.suffix == ".jsonl" else "array")
    options = {"format": fmt, "json_path": args.json_path}
    adapter = JsonRecordAdapter()

    if args.probe_only:
        probe = adapter.probe(source_path, options)
        print(f"Records: {probe.record_count}")
        for kind, count in sorted(probe.kinds.items()):
            print(f"  {kind}: {count}")
        return 0

    try:
        config = get_active_config(args.config)
    except (OSError, ArchiveKernelError) as e:
        print(f"ERROR: Failed to load config: {e}", file=sys.stderr)
        return 1

    service = ConversionService(config)
    try:
        report = service.run(adapter.read(source_path, options))
    except ArchiveKernelError as e:
        print(f"ERROR [{e.code}]: {e}", file=sys.stderr)
        return 1

    args.out.mkdir(parents=True, exist_ok=True)
    documents_path = args.out / "documents.json"
    diagnostics_path = args.out / "diagnostics.json"
    with documents_path.open("w", encoding="utf-8") as f:
        json.dump(documents_by_kind(report), f, indent=2, default=str)
    with diagnostics_path.open("w", encoding="utf-8") as f:
        json.dump(
            [
                {
                    "code": d.code,
                    "record_kind": d.record_kind,
                    "record_id": d.record_id,
                    "message": d.message,
                }
                for d in report.diagnostics
            ],
            f,
            indent=2,
        )

    print(f"Run {report.run_id}")
    for kind, counts in report.tally().items():
        print(f"  {kind}: {counts['converted']} converted, {counts['skipped']} skipped")
    print(f"  {len(report.diagnostics)} diagnostics")
    print(f"Wrote {documents_path} and {diagnostics_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
