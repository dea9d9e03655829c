"""
Typed records exchanged between the sequencing engine and a meeting store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, List, Optional


@dataclass(frozen=True)
class Record:
    """A meeting as read from the store."""

    id: str
    """Opaque identifier of the meeting page"""

    date: Optional[datetime] = None
    """Timezone-aware start of the meeting; None when the date is empty"""

    title: str = ""
    """Plain-text title, empty when the page has none"""

    participants: FrozenSet[str] = frozenset()
    """Identifiers of the related people; order is irrelevant"""

    previous_id: Optional[str] = None
    """Current value of the previous-meeting relation"""

    next_id: Optional[str] = None
    """Current value of the next-meeting relation"""


@dataclass(frozen=True)
class MeetingQuery:
    """Store-neutral description of a database query."""

    title_equals: Optional[str] = None
    """Exact, case-sensitive title filter; None queries every meeting"""

    date_ascending: bool = True
    """Sort results by date ascending"""

    page_size: int = 100
    """Maximum number of results per page"""


@dataclass
class QueryPage:
    """One page of query results plus its continuation state."""

    results: List[Record] = field(default_factory=list)
    next_cursor: Optional[str] = None
    has_more: bool = False
