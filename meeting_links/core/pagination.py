"""
Paginated fetching of meetings from a store.
"""

from typing import List

from ..store.base import IMeetingStore
from ..store.types import MeetingQuery, Record
from ..util.logging import logger
from .errors import SourceUnavailable


def fetch_all(store: IMeetingStore, database_id: str, query: MeetingQuery) -> List[Record]:
    """
    Fetch every meeting matching the query, following cursors until exhausted.

    Pages are concatenated in the order the store returns them; nothing is
    re-sorted here. Store failures propagate as SourceUnavailable without retry.

    Args:
        store: The meeting store to query
        database_id: ID of the meetings database
        query: Filter and sort description passed to every page request

    Returns:
        All matching records across all pages
    """
    results: List[Record] = []
    start_cursor = None
    pages = 0

    while True:
        page = store.query(database_id, query, start_cursor)
        pages += 1
        results.extend(page.results)

        if not page.has_more:
            break
        if not page.next_cursor:
            raise SourceUnavailable(f"Page {pages} reported more results but no cursor")
        start_cursor = page.next_cursor

    logger.debug(f"Fetched {len(results)} records in {pages} page(s) from {database_id}")
    return results
