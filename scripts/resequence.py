#!/usr/bin/env python3
"""
Re-sequence a single meeting page from the command line.

Runs the same pipeline as the webhook and prints the result as JSON.
Use --dry-run to compute the neighbors without writing them.
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from meeting_links.core import config
from meeting_links.core.errors import MeetingLinksError
from meeting_links.core.pipeline import sequence_meeting
from meeting_links.util.logging import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Recompute Previous/Next Meeting relations for one page")
    parser.add_argument("page_id", help="ID of the meeting page to re-sequence")
    parser.add_argument("--database-id", help="Meetings database ID (defaults to NOTION_MEETINGS_DATABASE_ID)")
    parser.add_argument("--dry-run", action="store_true", help="Compute neighbors without writing them")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger.set_debug(args.verbose or config.debug_enabled())

    try:
        database_id = args.database_id or config.require_database_id()
        store = config.get_meeting_store()
        result = sequence_meeting(
            store,
            database_id,
            args.page_id,
            page_size=config.get_page_size(),
            write=not args.dry_run,
        )
    except MeetingLinksError as e:
        print(f"❌ {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
