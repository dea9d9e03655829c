"""
Request and response models for the webhook API.
"""

from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Optional


class WebhookEventData(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str

    @field_validator('id')
    @classmethod
    def id_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('id cannot be empty')
        return v.strip()


class WebhookEvent(BaseModel):
    """Inbound Notion automation event. Only data.id is used."""
    model_config = ConfigDict(extra="allow")

    data: WebhookEventData


class WebhookResponse(BaseModel):
    success: bool
    outcome: str
    cohort_kind: Optional[str] = None
    cohort_size: int = 0
    previous_id: Optional[str] = None
    next_id: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    version: str
    store_provider: str
    config_issues: List[str]
