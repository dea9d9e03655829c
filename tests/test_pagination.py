"""
Tests for paginated fetching.
"""

import pytest
from unittest.mock import MagicMock, call

from meeting_links.core.errors import SourceUnavailable
from meeting_links.core.pagination import fetch_all
from meeting_links.store.memory import InMemoryMeetingStore
from meeting_links.store.types import MeetingQuery, QueryPage


def _pages(record_factory, sizes):
    """Build k pages with has_more set on all but the last."""
    pages = []
    counter = 0
    for index, size in enumerate(sizes):
        records = []
        for _ in range(size):
            counter += 1
            records.append(record_factory(f"r{counter}"))
        last = index == len(sizes) - 1
        pages.append(QueryPage(
            results=records,
            next_cursor=None if last else f"cursor-{index + 1}",
            has_more=not last,
        ))
    return pages


@pytest.mark.parametrize("sizes", [[3], [2, 2], [1, 0, 4], [5, 5, 5, 1]])
def test_fetch_all_concatenates_every_page_in_order(record_factory, sizes):
    pages = _pages(record_factory, sizes)
    store = MagicMock()
    store.query.side_effect = pages
    query = MeetingQuery()

    results = fetch_all(store, "db", query)

    expected = [r for page in pages for r in page.results]
    assert results == expected
    assert store.query.call_count == len(sizes)


def test_fetch_all_threads_previous_cursor_into_next_query(record_factory):
    pages = _pages(record_factory, [1, 1, 1])
    store = MagicMock()
    store.query.side_effect = pages
    query = MeetingQuery(title_equals="Standup")

    fetch_all(store, "db", query)

    assert store.query.call_args_list == [
        call("db", query, None),
        call("db", query, "cursor-1"),
        call("db", query, "cursor-2"),
    ]


def test_fetch_all_does_not_resort_results(record_factory):
    late = record_factory("late", date="2024-03-01")
    early = record_factory("early", date="2024-01-01")
    store = MagicMock()
    store.query.return_value = QueryPage(results=[late, early], has_more=False)

    assert [r.id for r in fetch_all(store, "db", MeetingQuery())] == ["late", "early"]


def test_fetch_all_propagates_source_failure_without_retry(record_factory):
    store = MagicMock()
    store.query.side_effect = [
        QueryPage(results=[record_factory("r1")], next_cursor="c1", has_more=True),
        SourceUnavailable("boom"),
    ]

    with pytest.raises(SourceUnavailable):
        fetch_all(store, "db", MeetingQuery())
    assert store.query.call_count == 2


def test_fetch_all_rejects_more_results_without_cursor(record_factory):
    store = MagicMock()
    store.query.return_value = QueryPage(results=[record_factory("r1")], next_cursor=None, has_more=True)

    with pytest.raises(SourceUnavailable):
        fetch_all(store, "db", MeetingQuery())
    assert store.query.call_count == 1


def test_fetch_all_against_memory_store_pages(record_factory):
    records = [record_factory(f"r{i}", date=f"2024-01-{i:02d}") for i in range(1, 8)]
    store = InMemoryMeetingStore(records)

    results = fetch_all(store, "db", MeetingQuery(page_size=3))

    assert [r.id for r in results] == [f"r{i}" for i in range(1, 8)]
    assert store.query_calls == 3
