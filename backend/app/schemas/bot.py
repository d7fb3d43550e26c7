"""Pydantic schemas for bot API."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.bot import DEFAULT_BOT_MODEL, DEFAULT_WELCOME_MESSAGE


class BotCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    system_prompt: str = Field(min_length=1, max_length=5000)
    model: str = DEFAULT_BOT_MODEL
    welcome_message: str = Field(DEFAULT_WELCOME_MESSAGE, max_length=500)
    is_active: bool = True


class BotUpdate(BaseModel):
    """Body for updating a bot (partial)."""

    name: str | None = Field(None, min_length=1, max_length=100)
    system_prompt: str | None = Field(None, min_length=1, max_length=5000)
    model: str | None = None
    welcome_message: str | None = Field(None, max_length=500)
    is_active: bool | None = None


class BotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    system_prompt: str
    model: str
    welcome_message: str
    user_id: uuid.UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime
