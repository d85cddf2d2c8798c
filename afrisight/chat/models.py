"""Pydantic models for chat session management.

This module defines the core data structures for multi-turn conversations:
- Message: Individual conversation turn (immutable once created)
- ChatSession: Owned, append-only conversation transcript
- SessionSummary: Listing view of a session
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PREVIEW_LENGTH = 100


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """Single message in a conversation.

    Attributes:
        role: Who sent the message (user or assistant)
        content: Text content of the message
        timestamp: When the message was created
    """

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)


class ChatSession(BaseModel):
    """Conversation session with message history.

    Attributes:
        session_id: Unique identifier (client-chosen or generated)
        owner_id: Identity that created the session; never reassigned
        created_at: Session creation timestamp
        last_activity: Last append timestamp, never moves backwards
        messages: Chronologically ordered conversation history
    """

    session_id: str
    owner_id: str
    created_at: datetime = Field(default_factory=utc_now)
    last_activity: datetime = Field(default_factory=utc_now)
    messages: List[Message] = Field(default_factory=list)

    def add_message(self, message: Message, now: Optional[datetime] = None) -> None:
        """Add message and update last activity.

        Args:
            message: Message to add to conversation history
            now: Current time (defaults to the wall clock)
        """
        self.messages.append(message)
        now = now or utc_now()
        if now > self.last_activity:
            self.last_activity = now

    def get_recent_messages(self, n: int = 10) -> List[Message]:
        """Get last N messages.

        Args:
            n: Number of recent messages to retrieve

        Returns:
            List of most recent messages (up to n)
        """
        return self.messages[-n:] if len(self.messages) > n else list(self.messages)

    def summarize(self) -> "SessionSummary":
        last_message = None
        if self.messages:
            content = self.messages[-1].content
            last_message = (
                content[:PREVIEW_LENGTH] + "..." if len(content) > PREVIEW_LENGTH else content
            )
        return SessionSummary(
            session_id=self.session_id,
            message_count=len(self.messages),
            last_message=last_message,
            created_at=self.created_at,
            last_activity=self.last_activity,
        )


class SessionSummary(BaseModel):
    """Listing view of a chat session."""

    session_id: str
    message_count: int
    last_message: Optional[str] = None
    created_at: datetime
    last_activity: datetime
