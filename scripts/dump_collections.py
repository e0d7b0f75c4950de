#!/usr/bin/env python3
"""Dump every fleet collection fleetsync can load.

Loads each entity kind through :class:`fleetsync.FleetData` (remote tables
when Supabase credentials are configured, the local store otherwise) and
prints the application-shaped records.

Usage
-----
Set environment variables and run::

    export SUPABASE_URL="https://<project>.supabase.co"
    export SUPABASE_ANON_KEY="..."
    python scripts/dump_collections.py

Options::

    --kind vehicles      Only dump this kind (repeatable; default: all)
    --local              Ignore remote credentials and read the local store
    --storage-dir DIR    Local store directory (default: $FLEETSYNC_STORAGE_DIR)
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from fleetsync import EntityKind, FleetData, FleetSyncConfig  # noqa: E402
from fleetsync._redact import redact_for_log  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_record(record: dict[str, Any]) -> list[str]:
    lines = [f"  - id: {record.get('id')}"]
    for key, value in record.items():
        if key == "id":
            continue
        lines.append(f"      {key}: {value}")
    return lines


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump fleet collections for debugging / development.",
    )
    parser.add_argument(
        "--kind",
        action="append",
        choices=[kind.value for kind in EntityKind],
        help="Only dump this kind (repeatable; default: all)",
    )
    parser.add_argument("--local", action="store_true", help="Ignore remote credentials and read the local store")
    parser.add_argument("--storage-dir", help="Local store directory")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.local:
        overrides["remote_enabled"] = False
    if args.storage_dir:
        overrides["storage_dir"] = args.storage_dir
    config = FleetSyncConfig.from_env(**overrides)

    kinds = [EntityKind(kind) for kind in args.kind] if args.kind else list(EntityKind)
    result: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "source": "remote" if config.has_remote else f"local ({config.storage_dir})",
        "collections": {},
    }

    out: list[str] = [_section("fleetsync dump_collections")]
    out.append(f"  time      : {result['timestamp']}")
    out.append(f"  source    : {result['source']}")

    async with FleetData(config) as fleet:
        for kind in kinds:
            collection = await fleet.open(kind)
            records = [item.to_app_dict() for item in collection.items]
            entry: dict[str, Any] = {"mode": str(collection.mode), "count": len(records), "items": records}
            if collection.error is not None:
                entry["error"] = collection.error
            result["collections"][kind.value] = entry

            out.append(_section(f"{kind.value.upper()} ({len(records)}, {collection.mode})"))
            if collection.error is not None:
                out.append(f"  ERROR: {collection.error}")
            for record in records:
                out.extend(_format_record(redact_for_log(record)))

    if args.json_mode:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
    else:
        payload = "\n".join(out)

    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        print(f"Written to {args.output}", file=sys.stderr)
    else:
        print(payload)


if __name__ == "__main__":
    asyncio.run(main())
