#!/usr/bin/env python3
"""
Load and index Bible versions, reporting verse counts and timings.

Useful to check that translation documents are reachable and well formed
before deploying.

Usage:
    python scripts/warm_versions.py kjv web
"""

import argparse
import asyncio
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.services.bible import bible_search

setup_logging()
logger = get_logger(__name__)


async def main(versions: list[str]) -> int:
    """Load all versions concurrently.

    Returns:
        0 = all loaded
        1 = some failed
        2 = all failed
    """
    start = time.perf_counter()
    results = await asyncio.gather(
        *(bible_search.load_version(v) for v in versions),
        return_exceptions=True,
    )
    duration = time.perf_counter() - start

    failed = 0
    print(f"\n{'='*50}")
    for version, result in zip(versions, results):
        if isinstance(result, Exception):
            failed += 1
            print(f"{version:<12} FAILED  {result}")
        else:
            print(f"{version:<12} {len(result):>6} verses  {len(result.books):>3} books")
    print(f"{'='*50}")
    print(f"Duration: {duration:.1f}s\n")

    logger.info(
        "versions_warmed",
        versions=versions,
        failed=failed,
        duration_seconds=round(duration, 1),
    )

    if failed:
        return 2 if failed == len(versions) else 1
    return 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load and index Bible versions",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "versions",
        nargs="*",
        default=[settings.default_bible_version],
        help="Version keys to load",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    sys.exit(asyncio.run(main(args.versions)))
