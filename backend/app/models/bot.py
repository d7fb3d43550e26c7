from __future__ import annotations

import uuid
from datetime import datetime
from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.base import Base

DEFAULT_BOT_MODEL = "gemini-2.0-flash"
DEFAULT_WELCOME_MESSAGE = "Hi! How can I help you today?"


class Bot(Base):
    __tablename__ = "bots"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    system_prompt: Mapped[str] = mapped_column(Text, nullable=False)
    model: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_BOT_MODEL)
    welcome_message: Mapped[str] = mapped_column(String(500), nullable=False, default=DEFAULT_WELCOME_MESSAGE)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow
    )

    documents: Mapped[list["Document"]] = relationship(
        "Document", back_populates="bot", cascade="all, delete-orphan", passive_deletes=True
    )
    leads: Mapped[list["Lead"]] = relationship(
        "Lead", back_populates="bot", cascade="all, delete-orphan", passive_deletes=True
    )
    conversations: Mapped[list["Conversation"]] = relationship(
        "Conversation", back_populates="bot", cascade="all, delete-orphan", passive_deletes=True
    )
