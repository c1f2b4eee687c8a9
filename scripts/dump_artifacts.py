#!/usr/bin/env python3
"""Dump the current artifact state once.

This script fetches ``getArtifactPortals`` a single time, applies it to a
fresh store and prints one table per artifact kind (or JSON).

Usage
-----
Set environment variables and run::

    export ARTIFACTS_CSRF_TOKEN="..."
    export ARTIFACTS_SESSION_ID="..."
    export ARTIFACTS_API_VERSION="..."
    python scripts/dump_artifacts.py

Options::

    --json               Output as machine-readable JSON
    --raw                Include the raw entity records
    --output FILE        Write output to FILE instead of stdout
    -v, --verbose        Enable DEBUG logging (redacted API trace)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyartifacts import ArtifactClient, ArtifactConfig  # noqa: E402
from pyartifacts.views import build_artifact_tables  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_tables(client: ArtifactClient, *, include_raw: bool) -> list[str]:
    out: list[str] = []
    tables = build_artifact_tables(client.store)
    if not tables:
        out.append("No artifacts at this time")
    for table in tables:
        out.append(_section(table.display_name))
        if not table.rows:
            out.append("  No portals at this time")
        for row in table.rows:
            flags = []
            if row.is_target:
                flags.append("target portal")
            if row.has_fragments:
                flags.append("shard: yes")
            position = "?" if row.latitude is None else f"{row.latitude:.6f},{row.longitude:.6f}"
            out.append(f"  {row.title or row.location_id}  [{position}]  {', '.join(flags)}")
    if include_raw:
        out.append(_section("Raw entities"))
        for entity in client.store.list_entities():
            out.append(f"  {entity.location_id} @ {entity.timestamp}: {json.dumps(entity.raw, default=str)}")
    return out


def _as_json(client: ArtifactClient, *, include_raw: bool) -> dict[str, Any]:
    data: dict[str, Any] = {
        "tables": [table.model_dump() for table in build_artifact_tables(client.store)],
    }
    if include_raw:
        data["entities"] = [entity._asdict() for entity in client.store.list_entities()]
    return data


# ── main ─────────────────────────────────────────────────────


async def main(args: argparse.Namespace) -> int:
    config = ArtifactConfig.from_env(api_trace_enabled=args.verbose)

    async with ArtifactClient(config) as client:
        if not await client.refresh():
            print("Artifact fetch failed; see log output", file=sys.stderr)
            return 1

        if args.json:
            text = json.dumps(_as_json(client, include_raw=args.raw), indent=2, default=str, ensure_ascii=False)
        else:
            text = "\n".join(_format_tables(client, include_raw=args.raw))

    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Dump current intel artifact state")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--raw", action="store_true", help="Include raw entity records")
    parser.add_argument("--output", help="Write output to FILE")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    parsed = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if parsed.verbose else logging.WARNING)
    sys.exit(asyncio.run(main(parsed)))
