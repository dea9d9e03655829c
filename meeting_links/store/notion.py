"""
Notion-backed meeting store.
Talks to the Notion REST API with requests and decodes raw pages into Records.
"""

import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from ..core.config import DEFAULT_NOTION_API_URL, DEFAULT_NOTION_VERSION, get_property_names
from ..core.errors import MalformedRecord, SourceUnavailable, WriteRejected
from ..util.logging import logger
from .base import IMeetingStore
from .types import MeetingQuery, QueryPage, Record


def parse_notion_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a Notion date string into an aware datetime.

    Date-only values become midnight UTC; naive datetimes are taken as UTC.
    """
    if not value:
        return None

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise MalformedRecord(f"Unparseable date value: {value!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _relation_ids(prop: Dict[str, Any]):
    return [item["id"] for item in (prop.get("relation") or []) if item.get("id")]


def decode_record(page: Dict[str, Any], property_names: Dict[str, str] = None) -> Record:
    """
    Decode a raw Notion page object into a Record.

    Raises MalformedRecord when the page has no id, no properties, or lacks
    one of the people, title or date properties. Empty property values are
    fine: they decode to no participants, an empty title and no date.
    """
    names = property_names or get_property_names()

    if not isinstance(page, dict) or not page.get("id"):
        raise MalformedRecord("Page payload has no id")

    record_id = page["id"]
    properties = page.get("properties")
    if not isinstance(properties, dict):
        raise MalformedRecord(f"Page {record_id} has no properties")

    for key in ("people", "title", "date"):
        if not isinstance(properties.get(names[key]), dict):
            raise MalformedRecord(f"Page {record_id} is missing property '{names[key]}'")

    participants = frozenset(_relation_ids(properties[names["people"]]))

    title_parts = properties[names["title"]].get("title") or []
    title = "".join(part.get("plain_text", "") for part in title_parts)

    date_value = properties[names["date"]].get("date") or {}
    date = parse_notion_date(date_value.get("start"))

    previous_ids = _relation_ids(properties.get(names["previous"]) or {})
    next_ids = _relation_ids(properties.get(names["next"]) or {})

    return Record(
        id=record_id,
        date=date,
        title=title,
        participants=participants,
        previous_id=previous_ids[0] if previous_ids else None,
        next_id=next_ids[0] if next_ids else None,
    )


def build_query_body(query: MeetingQuery, start_cursor: Optional[str] = None,
                     property_names: Dict[str, str] = None) -> Dict[str, Any]:
    """Translate a MeetingQuery into a Notion database query body."""
    names = property_names or get_property_names()
    body: Dict[str, Any] = {"page_size": query.page_size}

    if query.date_ascending:
        body["sorts"] = [{"property": names["date"], "direction": "ascending"}]

    if query.title_equals is not None:
        body["filter"] = {
            "property": names["title"],
            "title": {"equals": query.title_equals},
        }

    # Notion rejects an explicit null cursor, so it is only sent when present
    if start_cursor:
        body["start_cursor"] = start_cursor

    return body


def build_relations_body(previous_id: Optional[str], next_id: Optional[str],
                         property_names: Dict[str, str] = None) -> Dict[str, Any]:
    """Build the page update body that sets both relation properties."""
    names = property_names or get_property_names()
    return {
        "properties": {
            names["previous"]: {"relation": [{"id": previous_id}] if previous_id else []},
            names["next"]: {"relation": [{"id": next_id}] if next_id else []},
        }
    }


class NotionMeetingStore(IMeetingStore):
    """IMeetingStore implementation over the Notion REST API."""

    def __init__(self, token: str, api_url: str = DEFAULT_NOTION_API_URL,
                 notion_version: str = DEFAULT_NOTION_VERSION, timeout: float = 30.0,
                 property_names: Dict[str, str] = None, session: requests.Session = None):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.property_names = property_names or get_property_names()
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": notion_version,
            "Content-Type": "application/json",
        }
        # requests.Session is not thread-safe; webhook calls run in a threadpool
        self._local = threading.local()
        self._shared_session = session
        if session is not None:
            session.headers.update(self.headers)

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread, or the injected one."""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
            self._local.session = session
        return session

    def _request(self, method: str, path: str, error_cls, payload: Dict[str, Any] = None) -> Dict[str, Any]:
        url = f"{self.api_url}{path}"
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.log_store_request(method, path, "failed", {"error": type(e).__name__})
            raise error_cls(f"{method} {path} failed: {e}") from e

        if not response.ok:
            code, message = _error_details(response)
            logger.log_store_request(method, path, "failed", {"status_code": response.status_code, "code": code})
            raise error_cls(f"{method} {path} returned {response.status_code} ({code}): {message}")

        logger.log_store_request(method, path, "success", {"status_code": response.status_code})
        try:
            return response.json()
        except ValueError as e:
            raise error_cls(f"{method} {path} returned a non-JSON body") from e

    def query(self, database_id: str, query: MeetingQuery, start_cursor: Optional[str] = None) -> QueryPage:
        body = build_query_body(query, start_cursor, self.property_names)
        data = self._request("POST", f"/databases/{database_id}/query", SourceUnavailable, body)

        return QueryPage(
            results=[decode_record(page, self.property_names) for page in data.get("results", [])],
            next_cursor=data.get("next_cursor"),
            has_more=bool(data.get("has_more", False)),
        )

    def retrieve(self, record_id: str) -> Record:
        data = self._request("GET", f"/pages/{record_id}", SourceUnavailable)
        return decode_record(data, self.property_names)

    def update_relations(self, record_id: str, previous_id: Optional[str], next_id: Optional[str]) -> None:
        body = build_relations_body(previous_id, next_id, self.property_names)
        self._request("PATCH", f"/pages/{record_id}", WriteRejected, body)


def _error_details(response: requests.Response):
    """Extract Notion's error code and message from a failed response."""
    try:
        data = response.json()
    except ValueError:
        return "unknown", response.text[:200]
    if not isinstance(data, dict):
        return "unknown", str(data)[:200]
    return data.get("code", "unknown"), data.get("message", "")
