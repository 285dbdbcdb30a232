"""In-memory therapeutic session store with idle expiry and LRU eviction."""

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, Iterable, Optional

from schemas import (
    ProcessResult,
    SessionMessage,
    SessionSummaryInfo,
    TherapeuticSession,
    TopicTag,
)
import settings

logger = logging.getLogger(__name__)


class SessionStore:
    """Sessions keyed by id, most recently used last.

    A session idle for longer than ``ttl_seconds`` is dropped on the next
    access. When more than ``max_sessions`` are held, the least recently used
    one is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float = settings.SESSION_TTL_SEC,
        max_sessions: int = settings.SESSION_MAX_COUNT,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self._clock = clock
        self._sessions: "OrderedDict[str, tuple[TherapeuticSession, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._sessions)

    def _purge_expired(self, now: float) -> None:
        expired = [sid for sid, (_, seen) in self._sessions.items() if now - seen > self.ttl_seconds]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("expired %d idle session(s)", len(expired))

    def get(self, session_id: str) -> Optional[TherapeuticSession]:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            self._sessions[session_id] = (entry[0], now)
            self._sessions.move_to_end(session_id)
            return entry[0]

    def get_or_create(self, session_id: str, user_id: str) -> TherapeuticSession:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            entry = self._sessions.get(session_id)
            if entry is not None:
                session = entry[0]
            else:
                session = TherapeuticSession(session_id=session_id, user_id=user_id)
                logger.info("created session %s", session_id)
            self._sessions[session_id] = (session, now)
            self._sessions.move_to_end(session_id)
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("evicted least recently used session %s", evicted)
            return session

    @staticmethod
    def replace_messages(session: TherapeuticSession, messages: Iterable[SessionMessage]) -> None:
        session.messages = list(messages)

    @staticmethod
    def add_topic_tags(session: TherapeuticSession, tags: Iterable[TopicTag]) -> list[TopicTag]:
        """Add unseen tags in order; return the ones that were new."""
        added = []
        for tag in tags:
            if tag not in session.topic_tags:
                session.topic_tags.append(tag)
                added.append(tag)
        return added

    @staticmethod
    def record_exchange(session: TherapeuticSession, prompt: str, result: ProcessResult) -> None:
        score = result.validation.coherence_score
        session.messages.append(SessionMessage(role="client", content=prompt))
        session.messages.append(
            SessionMessage(
                role="therapist",
                content=result.response.raw_response,
                coherence_score=score,
                llm_providers=[result.response.provider],
            )
        )
        session.coherence_history.append(score)

    @staticmethod
    def summarize(session: TherapeuticSession) -> SessionSummaryInfo:
        history = session.coherence_history
        average = round(sum(history) / len(history), 4) if history else None
        return SessionSummaryInfo(
            session_id=session.session_id,
            message_count=len(session.messages),
            topic_tags=list(session.topic_tags),
            risk_level=session.risk_level,
            average_coherence=average,
        )
