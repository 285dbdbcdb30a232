"""Chat, session, export-summary and health routes."""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from errors import AllProvidersFailedError, SummaryGenerationError
from intent import detect_topic_tags, determine_risk_level
from orchestrator import LLMOrchestrator
from schemas import (
    ChatHistoryItem,
    ChatMetadata,
    ChatRequest,
    ChatResponse,
    ExportSummaryRequest,
    ProviderInfo,
    SessionMessage,
    SessionSummary,
    SessionSummaryInfo,
)
from session_store import SessionStore
from summary_service import generate_session_summary
from telemetry import read_compliance_telemetry_summary
from deps import get_orchestrator, get_session_store
import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

_STARTED_AT = time.monotonic()

# Summaries go to Groq when it is configured, like the chat default.
SUMMARY_PROVIDER = "groq"


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
    store: SessionStore = Depends(get_session_store),
):
    message = request.message.strip()
    if not message or not request.session_id or not request.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: message, session_id, user_id",
        )
    if request.max_attempts is not None and request.max_attempts < 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="max_attempts must be at least 1")

    session = store.get_or_create(request.session_id, request.user_id)

    if request.messages is not None:
        store.replace_messages(
            session,
            [
                SessionMessage(
                    role=item.role,
                    content=item.content,
                    timestamp=item.timestamp or datetime.now(timezone.utc),
                    coherence_score=item.coherence_score,
                )
                for item in request.messages
            ],
        )

    new_tags = store.add_topic_tags(session, detect_topic_tags(message))
    session.risk_level = determine_risk_level(session.topic_tags)
    if new_tags:
        logger.info(
            "session=%s new topics=%s risk=%s",
            session.session_id, [t.value for t in new_tags], session.risk_level.value,
        )

    attempts = 1
    max_attempts = min(
        request.max_attempts or settings.AUTO_REPAIR_MAX_ATTEMPTS, settings.AUTO_REPAIR_ATTEMPTS_LIMIT
    )
    try:
        if request.auto_repair:
            result = await orchestrator.process_with_auto_repair(
                message,
                session,
                preferred_provider=request.provider,
                max_attempts=max_attempts,
            )
            attempts = result.attempts
        else:
            result = await orchestrator.process_message(message, session, preferred_provider=request.provider)
    except AllProvidersFailedError as exc:
        logger.error("chat failed session=%s: %s", session.session_id, exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))

    store.record_exchange(session, message, result)

    return ChatResponse(
        response=result.response.raw_response,
        validation=result.validation,
        metadata=ChatMetadata(
            provider=result.response.provider,
            latency_ms=result.response.latency_ms,
            token_count=result.response.token_count,
            risk_level=session.risk_level,
            topic_tags=list(session.topic_tags),
            attempts=attempts,
        ),
    )


@router.get("/session/{session_id}", response_model=SessionSummaryInfo)
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return store.summarize(session)


@router.post("/export-summary", response_model=SessionSummary)
async def export_summary(
    request: ExportSummaryRequest,
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
    store: SessionStore = Depends(get_session_store),
):
    messages = list(request.messages)
    coherence_scores = list(request.coherence_scores)
    if not messages and request.session_id:
        # Fall back to the server-side transcript.
        session = store.get(request.session_id)
        if session is not None:
            messages = [ChatHistoryItem(role=m.role, content=m.content) for m in session.messages]
            coherence_scores = coherence_scores or list(session.coherence_history)
    if not messages:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No messages to summarize")
    provider = orchestrator.get_provider(SUMMARY_PROVIDER) or orchestrator.get_provider()
    try:
        return await generate_session_summary(provider, messages, coherence_scores)
    except SummaryGenerationError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@router.get("/health")
async def health(
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
    store: SessionStore = Depends(get_session_store),
):
    return {
        "status": "ok",
        "providers": orchestrator.get_available_providers(),
        "sessions": len(store),
        "uptime": round(time.monotonic() - _STARTED_AT, 1),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/test")
async def test_endpoint():
    keys = settings.provider_api_keys()
    return {
        "status": "ok",
        "message": "Simple test endpoint working",
        "env": {f"has_{name}_key": bool(value) for name, value in keys.items()},
    }


@router.get("/telemetry/summary")
async def telemetry_summary(hours: int = 24, limit: int = 6):
    """Validation / failover counters and recent compliance events."""
    return read_compliance_telemetry_summary(hours=hours, limit=limit)


@router.get("/providers", response_model=list[ProviderInfo])
async def list_providers(orchestrator: LLMOrchestrator = Depends(get_orchestrator)):
    return orchestrator.describe_providers()
