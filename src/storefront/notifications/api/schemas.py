"""Pydantic request/response schemas for the notifications API."""

from pydantic import BaseModel, Field


class SystemNotificationRequest(BaseModel):
    user_id: str
    title: str = Field(max_length=200)
    message: str = Field(max_length=1000)
    related_id: str | None = None
    related_model: str | None = None


class MarkReadRequest(BaseModel):
    """Either a single notification id or ``mark_all``."""

    notification_id: str | None = None
    mark_all: bool = False


class MarkReadResponse(BaseModel):
    status: str = "ok"
    updated: int
