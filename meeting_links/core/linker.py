"""
Neighbor linking and relation writing for a single meeting.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..store.base import IMeetingStore
from ..store.types import Record


@dataclass(frozen=True)
class Neighbors:
    """The immediate predecessor and successor of a meeting in its cohort."""

    previous_id: Optional[str] = None
    next_id: Optional[str] = None


def link_neighbors(trigger_id: str, cohort: Sequence[Record]) -> Optional[Neighbors]:
    """
    Locate the triggering meeting in an ordered cohort and return its neighbors.

    Returns None when the meeting is not in the cohort. The cohort is used in
    the order given.
    """
    for index, record in enumerate(cohort):
        if record.id == trigger_id:
            break
    else:
        return None

    previous_id = cohort[index - 1].id if index > 0 else None
    next_id = cohort[index + 1].id if index < len(cohort) - 1 else None
    return Neighbors(previous_id=previous_id, next_id=next_id)


def write_relations(store: IMeetingStore, trigger_id: str, neighbors: Neighbors) -> None:
    """Persist both pointers on the triggering meeting in a single update."""
    store.update_relations(trigger_id, neighbors.previous_id, neighbors.next_id)
