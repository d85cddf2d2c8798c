"""In-memory storage for chat sessions.

Holds short-lived multi-turn conversation state per identity:
- get-or-create by client-chosen or generated id
- append-only transcripts with full history retained
- owner-scoped reads, listings and deletes
- per-owner retention cap applied on every append

Nothing is persisted; a restart loses every session. Methods never await,
so under the asyncio event loop each call runs to completion without
interleaving with other requests. There is no lock: callers must stay on
the loop thread (the chat routes are all ``async def``).
"""

import itertools
import time
import uuid
from datetime import datetime
from typing import Callable, Dict, List, Optional

from afrisight.chat.models import ChatSession, Message, SessionSummary, utc_now
from afrisight.errors import SessionNotFoundError
from afrisight.utils.logger import LoggerManager

DEFAULT_MAX_SESSIONS = 100


class ChatSessionStore:
    """Process-local table of chat sessions keyed by session id.

    Attributes:
        max_sessions: Number of most recently active sessions kept per owner
    """

    def __init__(
        self,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize session store.

        Args:
            max_sessions: Retention cap per owner
            clock: Source of "now" (injectable for tests)
        """
        self.max_sessions = max_sessions
        self._clock = clock
        self._sessions: Dict[str, ChatSession] = {}
        # Append sequence numbers break lastActivity ties in the sweep
        self._sequence = itertools.count(1)
        self._touched: Dict[str, int] = {}
        self.logger = LoggerManager.get_logger("chat_sessions")

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def _generate_id(self, owner_id: str) -> str:
        millis = int(time.time() * 1000)
        return f"chat_{owner_id}_{millis}_{uuid.uuid4().hex[:6]}"

    def get_or_create(self, session_id: Optional[str], owner_id: str) -> ChatSession:
        """Return the session for ``session_id``, creating it if needed.

        A caller-supplied id is honored verbatim. An existing session is
        returned as-is whoever owns it; ownership is enforced by the
        caller (see ``get``).

        Args:
            session_id: Client-chosen id, or None to generate one
            owner_id: Identity creating the session

        Returns:
            ChatSession: Existing or newly inserted session
        """
        if session_id and session_id in self._sessions:
            return self._sessions[session_id]

        now = self._clock()
        session = ChatSession(
            session_id=session_id or self._generate_id(owner_id),
            owner_id=owner_id,
            created_at=now,
            last_activity=now,
        )
        self._sessions[session.session_id] = session
        self._touched[session.session_id] = next(self._sequence)

        self.logger.info(
            "Created chat session",
            extra={"extra_data": {"session_id": session.session_id, "owner_id": owner_id}},
        )
        return session

    def append(self, session: ChatSession, message: Message) -> None:
        """Append a message and enforce the owner's retention cap.

        Args:
            session: Session returned by ``get_or_create`` or ``get``
            message: Message to append
        """
        session.add_message(message, now=self._clock())
        if session.session_id in self._sessions:
            self._touched[session.session_id] = next(self._sequence)

        self.logger.debug(
            "Added message to session",
            extra={"extra_data": {"session_id": session.session_id, "role": message.role}},
        )
        self.retain_latest(session.owner_id)

    def retain_latest(self, owner_id: str, max_sessions: Optional[int] = None) -> int:
        """Delete the owner's sessions beyond the most recently active ones.

        Args:
            owner_id: Identity whose sessions are swept
            max_sessions: Override for the store's cap

        Returns:
            Number of sessions evicted
        """
        limit = self.max_sessions if max_sessions is None else max_sessions
        owned = self._owned_by(owner_id)
        if len(owned) <= limit:
            return 0

        evicted = 0
        for session in owned[limit:]:
            if self._sessions.pop(session.session_id, None) is not None:
                evicted += 1
            self._touched.pop(session.session_id, None)

        self.logger.info(
            "Evicted old chat sessions",
            extra={"extra_data": {"owner_id": owner_id, "count": evicted, "limit": limit}},
        )
        return evicted

    def get(self, session_id: str, requester_id: str) -> ChatSession:
        """Retrieve a session owned by the requester.

        Raises:
            SessionNotFoundError: If absent or owned by someone else
        """
        session = self._sessions.get(session_id)
        if session is None or session.owner_id != requester_id:
            raise SessionNotFoundError(session_id)
        return session

    def list(self, requester_id: str, limit: int = 20) -> List[SessionSummary]:
        """Summaries of the requester's sessions, most recently active first."""
        return [s.summarize() for s in self._owned_by(requester_id)[:max(limit, 0)]]

    def delete(self, session_id: str, requester_id: str) -> None:
        """Remove a session owned by the requester.

        Raises:
            SessionNotFoundError: If absent or owned by someone else
        """
        self.get(session_id, requester_id)
        self._sessions.pop(session_id, None)
        self._touched.pop(session_id, None)
        self.logger.info(
            "Deleted chat session",
            extra={"extra_data": {"session_id": session_id, "owner_id": requester_id}},
        )

    def _owned_by(self, owner_id: str) -> List[ChatSession]:
        owned = [s for s in self._sessions.values() if s.owner_id == owner_id]
        owned.sort(
            key=lambda s: (s.last_activity, self._touched.get(s.session_id, 0)),
            reverse=True,
        )
        return owned
