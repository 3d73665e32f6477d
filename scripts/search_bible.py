#!/usr/bin/env python3
"""
Search a Bible version from the terminal.

Usage:
    # Reference lookups
    python scripts/search_bible.py "John 3:16-18"
    python scripts/search_bible.py "Proverbs 1:6-5:2" --version web

    # Free text, saved to search history
    python scripts/search_bible.py "love one another" --limit 10 --record

    # Custom translation source
    python scripts/search_bible.py "Psalm 23" --version custom --source https://example.org/bible.json
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.services.bible import bible_search
from app.services.bible.exceptions import VersionLoadError

setup_logging()
logger = get_logger(__name__)


async def main(
    query: str,
    version: str,
    limit: int,
    threshold: float,
    source: str | None,
    record: bool,
) -> int:
    """Run the search and return exit code.

    Returns:
        0 = hits found
        1 = no hits
        2 = version could not be loaded
    """
    try:
        if source:
            await bible_search.register_custom_source(version, source)
        hits = await bible_search.search(query, version, limit=limit, threshold=threshold)
    except VersionLoadError as e:
        logger.error("search_failed", version=version, error=str(e))
        print(f"\nERROR: {e}")
        return 2

    if record:
        bible_search.save_search_to_history(query)

    print(f"\n{len(hits)} result(s) for {query!r} in {version}\n")
    for hit in hits:
        print(f"{hit.reference:<24} {hit.text}")

    return 0 if hits else 1


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Search a Bible version by reference or free text",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("query", help="Reference (e.g. 'John 3:16') or free text")
    parser.add_argument(
        "--version",
        default=settings.default_bible_version,
        help="Version key",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.search_default_limit,
        help="Maximum number of verses",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=settings.search_default_threshold,
        help="Minimum relevance score for free-text hits",
    )
    parser.add_argument(
        "--source",
        default=None,
        help="URL or path of a custom translation document for --version",
    )
    parser.add_argument(
        "--record",
        action="store_true",
        help="Save the query to search history",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    exit_code = asyncio.run(
        main(
            query=args.query,
            version=args.version,
            limit=args.limit,
            threshold=args.threshold,
            source=args.source,
            record=args.record,
        )
    )
    sys.exit(exit_code)
