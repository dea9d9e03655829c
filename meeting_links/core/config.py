"""
Configuration for the meeting links service.
Values come from the environment (optionally a .env file) and are read at call time.
"""

import os
from typing import List

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

# Version string
VERSION = "1.0.0"

DEFAULT_NOTION_API_URL = "https://api.notion.com/v1"
DEFAULT_NOTION_VERSION = "2022-06-28"
MAX_PAGE_SIZE = 100  # Notion caps database queries at 100 results per page

STORE_PROVIDERS = ("notion", "memory")


def get_notion_token():
    """Get the Notion integration token, or None when unset."""
    token = os.getenv("NOTION_TOKEN")
    return token.strip() if token and token.strip() else None


def get_database_id():
    """Get the meetings database ID, or None when unset."""
    database_id = os.getenv("NOTION_MEETINGS_DATABASE_ID")
    return database_id.strip() if database_id and database_id.strip() else None


def get_notion_api_url():
    return os.getenv("NOTION_API_URL", DEFAULT_NOTION_API_URL).rstrip("/")


def get_notion_version():
    return os.getenv("NOTION_VERSION", DEFAULT_NOTION_VERSION)


def get_request_timeout():
    """Get the per-request timeout of the store client in seconds."""
    return float(os.getenv("NOTION_TIMEOUT_SEC", "30"))


def get_store_provider():
    """Get store provider (notion|memory)."""
    return os.getenv("STORE_PROVIDER", "notion").lower()


def get_page_size():
    """Get the database query page size, clamped to 1..100."""
    try:
        size = int(os.getenv("QUERY_PAGE_SIZE", str(MAX_PAGE_SIZE)))
    except ValueError:
        return MAX_PAGE_SIZE
    return max(1, min(size, MAX_PAGE_SIZE))


def get_property_names():
    """Get the names of the Notion properties the engine reads and writes."""
    return {
        "date": os.getenv("DATE_PROPERTY", "Date"),
        "title": os.getenv("TITLE_PROPERTY", "Meeting"),
        "people": os.getenv("PEOPLE_PROPERTY", "People"),
        "previous": os.getenv("PREVIOUS_PROPERTY", "Previous Meeting"),
        "next": os.getenv("NEXT_PROPERTY", "Next Meeting"),
    }


def get_webhook_secret():
    """Get the shared webhook secret. None disables the check."""
    secret = os.getenv("WEBHOOK_SECRET")
    return secret if secret else None


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def validate_config() -> List[str]:
    """Validate configuration and return any issues."""
    issues = []
    provider = get_store_provider()

    if provider not in STORE_PROVIDERS:
        issues.append(f"STORE_PROVIDER must be one of: {', '.join(STORE_PROVIDERS)}")

    if provider == "notion" and not get_notion_token():
        issues.append("NOTION_TOKEN is required when STORE_PROVIDER=notion")

    if not get_database_id():
        issues.append("NOTION_MEETINGS_DATABASE_ID is not set")

    try:
        if get_request_timeout() <= 0:
            issues.append("NOTION_TIMEOUT_SEC must be positive")
    except ValueError:
        issues.append("NOTION_TIMEOUT_SEC must be a number")

    return issues


def require_database_id():
    """Get the meetings database ID or raise ConfigurationError."""
    database_id = get_database_id()
    if not database_id:
        raise ConfigurationError("NOTION_MEETINGS_DATABASE_ID is not set")
    return database_id


def get_meeting_store():
    """Build the configured meeting store implementation."""
    provider = get_store_provider()

    if provider == "memory":
        from ..store.memory import InMemoryMeetingStore
        return InMemoryMeetingStore()

    if provider == "notion":
        token = get_notion_token()
        if not token:
            raise ConfigurationError("NOTION_TOKEN is required when STORE_PROVIDER=notion")

        try:
            timeout = get_request_timeout()
        except ValueError as e:
            raise ConfigurationError("NOTION_TIMEOUT_SEC must be a number") from e

        from ..store.notion import NotionMeetingStore
        return NotionMeetingStore(
            token=token,
            api_url=get_notion_api_url(),
            notion_version=get_notion_version(),
            timeout=timeout,
            property_names=get_property_names(),
        )

    raise ConfigurationError(f"Unknown STORE_PROVIDER: {provider}")
