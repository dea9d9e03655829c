"""
In-memory meeting store for local development and tests.
Mirrors the Notion query semantics the engine relies on: exact title filter,
ascending date sort with empty dates last, cursor pagination.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from ..core.errors import SourceUnavailable, WriteRejected
from .base import IMeetingStore
from .types import MeetingQuery, QueryPage, Record


class InMemoryMeetingStore(IMeetingStore):
    """Simple in-memory implementation of IMeetingStore."""

    def __init__(self, records: List[Record] = None):
        self._records: Dict[str, Record] = {}  # record_id -> Record, insertion ordered
        self.updates: List[Tuple[str, Optional[str], Optional[str]]] = []
        self.query_calls = 0
        for record in records or []:
            self.add(record)

    def add(self, record: Record) -> None:
        """Add or replace a meeting."""
        self._records[record.id] = record

    def get(self, record_id: str) -> Optional[Record]:
        return self._records.get(record_id)

    def clear(self) -> None:
        self._records.clear()
        self.updates.clear()
        self.query_calls = 0

    def query(self, database_id: str, query: MeetingQuery, start_cursor: Optional[str] = None) -> QueryPage:
        self.query_calls += 1

        matches = list(self._records.values())
        if query.title_equals is not None:
            matches = [r for r in matches if r.title == query.title_equals]
        if query.date_ascending:
            matches.sort(key=_date_sort_key)

        try:
            offset = int(start_cursor) if start_cursor else 0
        except ValueError as e:
            raise SourceUnavailable(f"Invalid start cursor: {start_cursor!r}") from e

        end = offset + query.page_size
        has_more = end < len(matches)
        return QueryPage(
            results=matches[offset:end],
            next_cursor=str(end) if has_more else None,
            has_more=has_more,
        )

    def retrieve(self, record_id: str) -> Record:
        record = self._records.get(record_id)
        if record is None:
            raise SourceUnavailable(f"Record {record_id} not found")
        return record

    def update_relations(self, record_id: str, previous_id: Optional[str], next_id: Optional[str]) -> None:
        record = self._records.get(record_id)
        if record is None:
            raise WriteRejected(f"Record {record_id} not found")

        self._records[record_id] = replace(record, previous_id=previous_id, next_id=next_id)
        self.updates.append((record_id, previous_id, next_id))


_LATEST = datetime.max.replace(tzinfo=timezone.utc)


def _date_sort_key(record: Record):
    # Empty dates sort last, as in Notion's ascending sort
    return (record.date is None, record.date or _LATEST)
