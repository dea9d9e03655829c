"""
Cohort classification and resolution.

A meeting is sequenced either against every other meeting with exactly the
same single participant (a 1:1 series) or against every meeting sharing its
title (a recurring group meeting). Meetings with no single participant and
no title cannot be grouped.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Union

from ..store.base import IMeetingStore
from ..store.types import MeetingQuery, Record
from .config import MAX_PAGE_SIZE
from .pagination import fetch_all


@dataclass(frozen=True)
class SingleParticipant:
    participant_id: str
    name = "single_participant"


@dataclass(frozen=True)
class TitledGroup:
    title: str
    name = "titled_group"


@dataclass(frozen=True)
class Unclassifiable:
    name = "unclassifiable"


CohortKind = Union[SingleParticipant, TitledGroup, Unclassifiable]


def classify(record: Record) -> CohortKind:
    """Decide which partitioning rule applies to a meeting."""
    if len(record.participants) == 1:
        (participant_id,) = record.participants
        return SingleParticipant(participant_id)

    if record.title and record.title.strip():
        return TitledGroup(record.title)

    return Unclassifiable()


_LATEST = datetime.max.replace(tzinfo=timezone.utc)


def cohort_sort_key(record: Record):
    """Order by date ascending, undated meetings last, ties broken by id."""
    return (record.date is None, record.date or _LATEST, record.id)


def resolve_cohort(store: IMeetingStore, database_id: str, kind: CohortKind,
                   page_size: int = MAX_PAGE_SIZE) -> List[Record]:
    """
    Fetch the ordered cohort for a classified meeting.

    Relation filters in the store can express "contains X" but not "contains
    only X", so single-participant cohorts are fetched unfiltered and narrowed
    here. Titled groups use the store's exact title filter.
    """
    if isinstance(kind, SingleParticipant):
        records = fetch_all(store, database_id, MeetingQuery(page_size=page_size))
        records = [r for r in records if r.participants == frozenset((kind.participant_id,))]
    elif isinstance(kind, TitledGroup):
        records = fetch_all(store, database_id, MeetingQuery(title_equals=kind.title, page_size=page_size))
    else:
        raise ValueError(f"Cannot resolve a cohort for {kind!r}")

    return sorted(records, key=cohort_sort_key)
