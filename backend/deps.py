"""Shared FastAPI dependencies used across route modules."""

import logging
from typing import Optional

from fastapi import HTTPException, status

from errors import OrchestratorConfigError
from orchestrator import LLMOrchestrator, create_orchestrator_from_env
from session_store import SessionStore

logger = logging.getLogger(__name__)

_orchestrator: Optional[LLMOrchestrator] = None
_session_store: Optional[SessionStore] = None


def get_orchestrator() -> LLMOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        try:
            _orchestrator = create_orchestrator_from_env()
        except OrchestratorConfigError as exc:
            logger.error("orchestrator unavailable: %s", exc)
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return _orchestrator


def get_session_store() -> SessionStore:
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store
