"""Pydantic models for tickets and comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class TicketCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    priority: str | None = None
    assignee_id: int | None = None


class TicketUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""

    status: str | None = None
    priority: str | None = None
    assignee_id: int | None = None


class TicketRead(BaseModel):
    id: int
    title: str
    description: str
    status: str
    priority: str
    creator_id: int
    assignee_id: int | None = None
    created_at: datetime
    updated_at: datetime | None = None


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)


class CommentRead(BaseModel):
    id: int
    ticket_id: int
    user_id: int
    content: str
    created_at: datetime


__all__ = ["TicketCreate", "TicketUpdate", "TicketRead", "CommentCreate", "CommentRead"]
