"""Pydantic schemas for leads captured by the chat widget."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LeadCreate(BaseModel):
    """Create or update-in-place: (bot_id, sender_id) identifies the lead."""

    bot_id: uuid.UUID
    sender_id: str = Field(min_length=1)
    name: str | None = Field(None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=20)
    metadata: dict[str, Any] | None = None


class LeadUpdate(BaseModel):
    name: str | None = Field(None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=20)
    metadata: dict[str, Any] | None = None


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    bot_id: uuid.UUID
    sender_id: str
    name: str | None
    email: str | None
    phone: str | None
    metadata: dict[str, Any] | None = Field(None, validation_alias="extra")
    created_at: datetime
