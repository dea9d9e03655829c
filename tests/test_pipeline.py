"""
Tests for the end-to-end sequencing pipeline against the in-memory store.
"""

import pytest
from unittest.mock import MagicMock

from meeting_links.core.errors import SourceUnavailable, WriteRejected
from meeting_links.core.pipeline import Outcome, sequence_meeting
from meeting_links.store.memory import InMemoryMeetingStore
from meeting_links.store.types import QueryPage


@pytest.fixture
def store(record_factory):
    return InMemoryMeetingStore([
        record_factory("R3", date="2024-03-01", title="Planning", participants=["alice", "bob"]),
        record_factory("R1", date="2024-01-01", title="Planning", participants=["alice", "bob"]),
        record_factory("R2", date="2024-02-01", title="Planning", participants=["carol", "dave"]),
        record_factory("A1", date="2024-01-10", title="1:1", participants=["alice"]),
        record_factory("B1", date="2024-01-15", title="1:1", participants=["bob"]),
        record_factory("A2", date="2024-01-20", title="1:1 notes", participants=["alice"]),
        record_factory("AB", date="2024-01-25", participants=["alice", "bob"]),
        record_factory("A3", date="2024-02-10", participants=["alice"]),
    ])


def test_titled_group_writes_neighbors(store):
    result = sequence_meeting(store, "db", "R2")

    assert result.outcome == Outcome.WRITTEN
    assert result.cohort_kind == "titled_group"
    assert result.cohort_size == 3
    assert (result.previous_id, result.next_id) == ("R1", "R3")
    assert store.updates == [("R2", "R1", "R3")]


def test_single_participant_ignores_title_and_shared_meetings(store):
    result = sequence_meeting(store, "db", "A2")

    assert result.cohort_kind == "single_participant"
    assert result.cohort_size == 3
    assert store.updates == [("A2", "A1", "A3")]


def test_first_and_last_clear_missing_side(store):
    sequence_meeting(store, "db", "A1")
    sequence_meeting(store, "db", "A3")

    assert store.updates == [("A1", None, "A2"), ("A3", "A2", None)]


def test_unclassifiable_completes_without_write(store):
    result = sequence_meeting(store, "db", "AB")

    assert result.outcome == Outcome.UNCLASSIFIABLE
    assert store.updates == []
    assert store.query_calls == 0


def test_not_in_cohort_completes_without_write(record_factory):
    trigger = record_factory("T1", date="2024-01-01", title="Retro", participants=[])
    store = MagicMock()
    store.retrieve.return_value = trigger
    store.query.return_value = QueryPage(
        results=[record_factory("other", date="2024-01-02", title="Retro")],
        has_more=False,
    )

    result = sequence_meeting(store, "db", "T1")

    assert result.outcome == Outcome.NOT_IN_COHORT
    assert result.cohort_size == 1
    store.update_relations.assert_not_called()


def test_repeated_runs_write_identical_pointers(store):
    first = sequence_meeting(store, "db", "R1")
    second = sequence_meeting(store, "db", "R1")

    assert first == second
    assert store.updates == [("R1", None, "R2"), ("R1", None, "R2")]


def test_dry_run_skips_write(store):
    result = sequence_meeting(store, "db", "R3", write=False)

    assert result.outcome == Outcome.DRY_RUN
    assert (result.previous_id, result.next_id) == ("R2", None)
    assert store.updates == []


def test_small_page_size_yields_same_result(store):
    result = sequence_meeting(store, "db", "A2", page_size=2)

    assert (result.previous_id, result.next_id) == ("A1", "A3")
    assert store.query_calls == 4


def test_retrieve_failure_propagates(store):
    with pytest.raises(SourceUnavailable):
        sequence_meeting(store, "db", "missing")
    assert store.updates == []


def test_write_failure_propagates(record_factory):
    store = MagicMock()
    store.retrieve.return_value = record_factory("R1", date="2024-01-01", participants=["alice"])
    store.query.return_value = QueryPage(results=[store.retrieve.return_value], has_more=False)
    store.update_relations.side_effect = WriteRejected("validation_error")

    with pytest.raises(WriteRejected):
        sequence_meeting(store, "db", "R1")
    store.update_relations.assert_called_once_with("R1", None, None)


def test_result_serializes_outcome_value(store):
    data = sequence_meeting(store, "db", "R2").to_dict()

    assert data["outcome"] == "written"
    assert data["record_id"] == "R2"
