"""
Webhook API for meeting links.
Receives Notion automation events and re-sequences the triggering meeting.
"""

import hmac
from functools import lru_cache
from typing import Any, Optional

from fastapi import FastAPI, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .schemas import ErrorResponse, HealthResponse, WebhookEvent, WebhookResponse
from ..core import config
from ..core.errors import MissingIdentifier
from ..core.pipeline import sequence_meeting
from ..store.base import IMeetingStore
from ..util.logging import logger

logger.set_debug(config.debug_enabled())

# Initialize the FastAPI application
app = FastAPI(
    title="Meeting Links API",
    version=config.VERSION,
    description="Maintains previous/next meeting relations in a Notion meetings database",
    docs_url="/docs" if config.debug_enabled() else None,
    redoc_url="/redoc" if config.debug_enabled() else None
)


@lru_cache(maxsize=1)
def get_store() -> IMeetingStore:
    """Process-wide store built from configuration."""
    return config.get_meeting_store()


def resolve_store(request: Request) -> IMeetingStore:
    """Build the store only once the request has been validated.

    Honors app.dependency_overrides so tests can swap in their own store.
    """
    provider = request.app.dependency_overrides.get(get_store, get_store)
    return provider()


def extract_record_id(payload: Any) -> str:
    """Pull data.id out of an inbound event, raising MissingIdentifier."""
    try:
        return WebhookEvent.model_validate(payload).data.id
    except ValidationError as e:
        raise MissingIdentifier("Webhook payload has no data.id") from e


def _secret_matches(provided: Optional[str]) -> bool:
    expected = config.get_webhook_secret()
    if expected is None:
        return True
    return provided is not None and hmac.compare_digest(provided.encode(), expected.encode())


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint():
    """Report version and configuration problems."""
    issues = config.validate_config()
    return HealthResponse(
        status="healthy" if not issues else "degraded",
        version=config.VERSION,
        store_provider=config.get_store_provider(),
        config_issues=issues,
    )


@app.post(
    "/api/notion-meetings-webhook",
    response_model=WebhookResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def notion_meetings_webhook(
    request: Request,
    x_webhook_secret: Optional[str] = Header(default=None),
):
    """
    Handle a Notion webhook event for a meeting page.

    1:1 meetings (exactly one attendee) are sequenced against the other
    meetings with that same attendee; group meetings against meetings with
    the same title. The page's Previous/Next Meeting relations are rewritten.
    """
    if not _secret_matches(x_webhook_secret):
        logger.warning("Webhook rejected: invalid or missing secret")
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    try:
        payload = await request.json()
    except ValueError:
        payload = None

    try:
        record_id = extract_record_id(payload)
    except MissingIdentifier:
        logger.log_webhook_received(None, "rejected")
        return JSONResponse(status_code=400, content={"error": "Missing page ID."})

    logger.log_webhook_received(record_id)

    try:
        database_id = config.require_database_id()
        store = resolve_store(request)
        result = await run_in_threadpool(sequence_meeting, store, database_id, record_id, config.get_page_size())
    except Exception:
        logger.exception(f"Error handling webhook for record {record_id}")
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    return WebhookResponse(
        success=True,
        outcome=result.outcome.value,
        cohort_kind=result.cohort_kind,
        cohort_size=result.cohort_size,
        previous_id=result.previous_id,
        next_id=result.next_id,
    )
