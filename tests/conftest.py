import pytest
from datetime import datetime, timezone

from meeting_links.store.types import Record


CONFIG_ENV_VARS = [
    "NOTION_TOKEN",
    "NOTION_MEETINGS_DATABASE_ID",
    "NOTION_API_URL",
    "NOTION_VERSION",
    "NOTION_TIMEOUT_SEC",
    "STORE_PROVIDER",
    "QUERY_PAGE_SIZE",
    "DATE_PROPERTY",
    "TITLE_PROPERTY",
    "PEOPLE_PROPERTY",
    "PREVIOUS_PROPERTY",
    "NEXT_PROPERTY",
    "WEBHOOK_SECRET",
    "DEBUG",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test from an empty configuration."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def make_record(record_id, date=None, title="", participants=(), previous_id=None, next_id=None):
    """Build a Record from a YYYY-MM-DD date string."""
    parsed = None
    if date is not None:
        parsed = datetime.strptime(date, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    return Record(
        id=record_id,
        date=parsed,
        title=title,
        participants=frozenset(participants),
        previous_id=previous_id,
        next_id=next_id,
    )


@pytest.fixture
def record_factory():
    return make_record
