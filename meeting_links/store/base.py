"""
Abstract interface for the external meeting store.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .types import MeetingQuery, QueryPage, Record


class IMeetingStore(ABC):
    """Abstract interface for meeting storage operations."""

    @abstractmethod
    def query(self, database_id: str, query: MeetingQuery, start_cursor: Optional[str] = None) -> QueryPage:
        """Return one page of meetings matching the query.

        Raises SourceUnavailable when the request fails.
        """
        pass

    @abstractmethod
    def retrieve(self, record_id: str) -> Record:
        """Return a single meeting with its full property set.

        Raises SourceUnavailable when the request fails.
        """
        pass

    @abstractmethod
    def update_relations(self, record_id: str, previous_id: Optional[str], next_id: Optional[str]) -> None:
        """Set both relation pointers on a meeting in one update.

        A None identifier clears the relation. Raises WriteRejected when the
        store refuses the update.
        """
        pass
