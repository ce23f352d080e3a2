#!/usr/bin/env python3
"""Dump the current Zonar position feed as pyzonar sees it.

Fetches the ``showposition`` report once, normalizes it and prints
every asset, so you can spot entries that are being excluded as
malformed or fields that aren't parsed yet.

Usage
-----
Set environment variables and run::

    export ZONAR_CUSTOMER="abc1234"
    export ZONAR_USERNAME="api-user"
    export ZONAR_PASSWORD="your-password"
    python scripts/dump_feed.py

Options::

    --search TEXT        Only show assets whose fleet id contains TEXT
    --json               Output as machine-readable JSON
    --raw                Also print the raw XML text
    --strict             Fail on the first malformed asset entry
    --verbose            Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyzonar import MalformedRecordPolicy, ZonarClient, ZonarConfig, ZonarError, normalize_feed  # noqa: E402
from pyzonar.lookup import search_substring  # noqa: E402
from pyzonar.responses import asset_metadata, readable_timestamp  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


async def main(args: argparse.Namespace) -> int:
    policy = MalformedRecordPolicy.STRICT if args.strict else MalformedRecordPolicy.EXCLUDE
    config = ZonarConfig.from_env(malformed_policy=policy)

    async with ZonarClient(config) as client:
        text = await client.fetch_snapshot_text()

    if args.raw:
        print(_section("Raw XML"))
        print(text)

    snapshot = normalize_feed(text, policy=policy)
    assets = search_substring(snapshot, args.search or "")

    if args.json:
        print(json.dumps({"skipped": snapshot.skipped, "assets": [asset_metadata(a) for a in assets]}, indent=2))
        return 0

    print(_section(f"{len(assets)} of {len(snapshot)} assets ({snapshot.skipped} malformed entries skipped)"))
    for asset in assets:
        print(f"\n  fleet {asset.fleet_id}")
        for key, value in asset_metadata(asset).items():
            print(f"    {key}: {value}")
        print(f"    readable: {readable_timestamp(asset.timestamp_unix)}")
    return 0


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--search", help="Only show assets whose fleet id contains TEXT")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--raw", action="store_true", help="Also print the raw XML text")
    parser.add_argument("--strict", action="store_true", help="Fail on malformed asset entries")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args()


if __name__ == "__main__":
    cli_args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if cli_args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        sys.exit(asyncio.run(main(cli_args)))
    except ZonarError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
