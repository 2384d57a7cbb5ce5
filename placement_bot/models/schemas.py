"""Core schemas — InboundMessage, PlacementRecord, and Reply."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from placement_bot.utils.clock import now_utc


class InboundMessage(BaseModel):
    """One text update delivered by the chat transport.

    Ephemeral: lives for the duration of a single dispatch.
    """

    text: str = Field(description="Raw message text as typed by the student")
    message_id: int | str | None = Field(
        default=None,
        description="Opaque transport message id, compared by the dedup guard",
    )
    chat_id: int | str | None = Field(
        default=None,
        description="Conversation the reply goes back to (transport-specific)",
    )
    received_at: datetime = Field(default_factory=now_utc)

    @property
    def identifier(self) -> str:
        """The lookup identifier: message text trimmed of surrounding whitespace."""
        return self.text.strip()


class PlacementRecord(BaseModel):
    """Placement fields scraped from the portal results table.

    Every field stays ``None`` until a matching table row populates it.
    """

    admission_number: str | None = Field(default=None, description="Admission number")
    id_number: str | None = Field(default=None, description="Institutional ID (ID No.)")
    full_name: str | None = Field(default=None, description="Student full name")
    program: str | None = Field(default=None, description="Assigned program")
    section: str | None = Field(default=None, description="Assigned section")
    campus: str | None = Field(default=None, description="Assigned campus")
    dormitory: str | None = Field(default=None, description="Dormitory, whitespace-normalised")
    cafeteria: str | None = Field(default=None, description="Assigned cafeteria")

    @property
    def found(self) -> bool:
        """A lookup hit needs both a name and an admission number."""
        return bool(self.full_name) and bool(self.admission_number)


class Reply(BaseModel):
    """A single outbound chat message."""

    text: str = Field(description="Message body")
    markdown: bool = Field(default=False, description="Render with chat Markdown")
