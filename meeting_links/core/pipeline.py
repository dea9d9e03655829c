"""
Sequencing pipeline: retrieve, classify, resolve, link, write.

Each invocation builds its cohort from scratch and writes only the
triggering meeting's two relation pointers. Concurrent invocations over the
same cohort are not coordinated; the last write wins.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..store.base import IMeetingStore
from ..util.logging import logger
from .cohort import Unclassifiable, classify, resolve_cohort
from .config import MAX_PAGE_SIZE
from .linker import link_neighbors, write_relations


class Outcome(str, Enum):
    WRITTEN = "written"
    UNCLASSIFIABLE = "unclassifiable"
    NOT_IN_COHORT = "not_in_cohort"
    DRY_RUN = "dry_run"


@dataclass
class SequenceResult:
    """Summary of one pipeline invocation."""

    record_id: str
    outcome: Outcome
    cohort_kind: Optional[str] = None
    cohort_size: int = 0
    previous_id: Optional[str] = None
    next_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["outcome"] = self.outcome.value
        return data


def sequence_meeting(store: IMeetingStore, database_id: str, record_id: str,
                     page_size: int = MAX_PAGE_SIZE, write: bool = True) -> SequenceResult:
    """
    Recompute the previous/next relations of one meeting.

    Args:
        store: Meeting store used for every read and the final write
        database_id: ID of the meetings database
        record_id: ID of the meeting that triggered the invocation
        page_size: Page size for cohort queries
        write: When False, stop before the write and report a dry run

    Returns:
        SequenceResult describing the outcome

    Raises:
        MeetingLinksError subclasses from the store, unchanged, after logging
        the failing stage.
    """
    stage = "received"
    logger.log_stage(record_id, stage)

    try:
        stage = "retrieve"
        record = store.retrieve(record_id)

        stage = "classify"
        kind = classify(record)
        if isinstance(kind, Unclassifiable):
            logger.log_stage(record_id, "classified", "skipped", {"reason": "no single participant and no title"})
            return SequenceResult(record_id=record_id, outcome=Outcome.UNCLASSIFIABLE, cohort_kind=kind.name)
        logger.log_stage(record_id, "classified", details={"cohort_kind": kind.name})

        stage = "resolve"
        cohort = resolve_cohort(store, database_id, kind, page_size=page_size)
        logger.log_stage(record_id, "resolved", details={"cohort_size": len(cohort)})

        stage = "link"
        neighbors = link_neighbors(record_id, cohort)
        if neighbors is None:
            logger.log_stage(record_id, "linked", "skipped", {"reason": "record not found in its cohort"})
            return SequenceResult(
                record_id=record_id,
                outcome=Outcome.NOT_IN_COHORT,
                cohort_kind=kind.name,
                cohort_size=len(cohort),
            )

        result = SequenceResult(
            record_id=record_id,
            outcome=Outcome.WRITTEN if write else Outcome.DRY_RUN,
            cohort_kind=kind.name,
            cohort_size=len(cohort),
            previous_id=neighbors.previous_id,
            next_id=neighbors.next_id,
        )

        if not write:
            logger.log_stage(record_id, "linked", "dry_run",
                             {"previous_id": neighbors.previous_id, "next_id": neighbors.next_id})
            return result

        stage = "write"
        write_relations(store, record_id, neighbors)
        logger.log_relations_written(record_id, neighbors.previous_id, neighbors.next_id)
        return result

    except Exception as e:
        logger.log_stage(record_id, stage, "failed", {"error_type": type(e).__name__, "error": str(e)})
        raise
