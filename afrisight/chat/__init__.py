"""Chat session management module.

Provides session management infrastructure for multi-turn conversations:
- Pydantic models for sessions and messages
- In-memory, owner-scoped session storage with a retention cap
- Prompt assembly from the trailing conversation window
"""

from afrisight.chat.models import ChatSession, Message, SessionSummary
from afrisight.chat.session_store import ChatSessionStore

__all__ = ["Message", "ChatSession", "SessionSummary", "ChatSessionStore"]
