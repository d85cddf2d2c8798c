"""Multi-turn creator chat endpoints under /predict/chat.

Sessions live in the ``ChatSessionStore`` on ``app.state``; every read,
listing and delete is scoped to the caller's token identity.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Request

from afrisight.auth import Identity
from afrisight.chat import ChatSessionStore
from afrisight.chat.context import (
    CHAT_SUGGESTIONS,
    CONTENT_FORMATS,
    DATA_TYPES,
    build_chat_prompt,
    referenced_artists,
)
from afrisight.chat.models import Message
from afrisight.datasets import DatasetProvider
from afrisight.errors import SessionNotFoundError, ValidationError
from afrisight.genai import GenerativeTextGateway
from afrisight.utils.logger import LoggerManager
from app.api.dependencies import (
    chat_limit_key,
    chat_rate_limit,
    get_datasets,
    get_gateway,
    get_session_store,
    limiter,
    require_identity,
)
from app.api.errors import upstream_failure
from app.api.models import (
    ChatContextInfo,
    ChatRequest,
    ChatResponse,
    ChatTranscriptResponse,
    ConversationInfo,
    DeleteSessionRequest,
    MessageOut,
    MessageResponse,
    SessionInfo,
    SessionListResponse,
    SessionSummaryOut,
)

router = APIRouter(prefix="/predict/chat", tags=["chat"])

logger = LoggerManager.get_logger("api.chat")

DEFAULT_CREATOR_TYPE = "general"
DEFAULT_HISTORY_LIMIT = 50
MAX_HISTORY_LIMIT = 100
SESSION_LIST_LIMIT = 20


@router.post("", response_model=ChatResponse)
@limiter.limit(chat_rate_limit, key_func=chat_limit_key)
async def chat(
    request: Request,
    payload: ChatRequest,
    identity: Identity = Depends(require_identity),
    store: ChatSessionStore = Depends(get_session_store),
    datasets: DatasetProvider = Depends(get_datasets),
    gateway: GenerativeTextGateway = Depends(get_gateway),
):
    """Chat endpoint - one conversational turn.

    Rate limited per client address.

    Args:
        request: FastAPI Request object (for rate limiting)
        payload: ChatRequest with prompt and optional session_id

    Returns:
        ChatResponse with the assistant reply and conversation metadata

    Raises:
        ValidationError: If the prompt is missing
        SessionNotFoundError: If the session id belongs to another identity
        UpstreamError: If the gateway call fails
    """
    if not payload.prompt:
        raise ValidationError("Prompt is required and must be a string")

    creator_type = identity.creator_type or DEFAULT_CREATOR_TYPE
    session = store.get_or_create(payload.session_id, identity.user_id)
    if session.owner_id != identity.user_id:
        logger.warning(
            "Rejected chat on foreign session",
            extra={"extra_data": {"session_id": session.session_id, "user_id": identity.user_id}},
        )
        raise SessionNotFoundError(session.session_id)

    store.append(session, Message(role="user", content=payload.prompt))
    prompt = build_chat_prompt(session, datasets, creator_type, payload.prompt)

    logger.info(
        f"Generating chat response for {creator_type} creator",
        extra={"extra_data": {"user_id": identity.user_id, "session_id": session.session_id}},
    )
    with upstream_failure("Failed to process chat message"):
        reply = await gateway.generate(prompt)

    store.append(session, Message(role="assistant", content=reply))

    stats = datasets.get_data_stats()
    return ChatResponse(
        session_id=session.session_id,
        message=reply,
        conversation=ConversationInfo(
            message_count=len(session.messages),
            session_started=session.created_at,
            last_activity=session.last_activity,
        ),
        context=ChatContextInfo(
            user_creator_type=creator_type,
            data_points_available=stats.total_data_points,
            data_types=DATA_TYPES,
            top_artists_referenced=referenced_artists(datasets),
            business_categories_available=datasets.business_stats().unique_product_types,
            content_formats_analyzed=CONTENT_FORMATS,
        ),
        suggestions=CHAT_SUGGESTIONS,
    )


@router.get("/history", response_model=Union[ChatTranscriptResponse, SessionListResponse])
async def chat_history(
    session_id: Optional[str] = Query(None, alias="sessionId"),
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=1),
    identity: Identity = Depends(require_identity),
    store: ChatSessionStore = Depends(get_session_store),
):
    """One session's transcript, or the caller's recent sessions when no id is given."""
    if session_id:
        session = store.get(session_id, identity.user_id)
        return ChatTranscriptResponse(
            session_id=session.session_id,
            messages=[
                MessageOut(role=m.role, content=m.content, timestamp=m.timestamp)
                for m in session.get_recent_messages(min(limit, MAX_HISTORY_LIMIT))
            ],
            session_info=SessionInfo(
                message_count=len(session.messages),
                created_at=session.created_at,
                last_activity=session.last_activity,
            ),
        )

    return SessionListResponse(
        sessions=[
            SessionSummaryOut(**summary.model_dump())
            for summary in store.list(identity.user_id, limit=SESSION_LIST_LIMIT)
        ]
    )


@router.delete("/session", response_model=MessageResponse)
async def delete_session(
    payload: DeleteSessionRequest,
    identity: Identity = Depends(require_identity),
    store: ChatSessionStore = Depends(get_session_store),
):
    if not payload.session_id:
        raise ValidationError("Session ID is required")
    store.delete(payload.session_id, identity.user_id)
    return MessageResponse(message="Chat session deleted successfully")
