from typing import Callable, Dict, Optional, Tuple
import time
import uuid
import logging

from app.core.config import settings
from app.core.database import DatabaseManager
from app.core.storage import StorageManager
from app.services.submission_orchestrator import SubmissionOrchestrator

logger = logging.getLogger("dupeit.sessions")

class SessionManager:
    """
    Keeps one SubmissionOrchestrator per open form session.
    A single module-level instance is shared across router modules.

    Sessions untouched for longer than ttl_seconds are dropped on the next
    create/get, along with any image bytes held in their draft.
    """

    def __init__(self, ttl_seconds: float = settings.SESSION_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self.active_sessions: Dict[str, SubmissionOrchestrator] = {}
        self.last_seen: Dict[str, float] = {}

    def create(self, storage: StorageManager, database: DatabaseManager) -> Tuple[str, SubmissionOrchestrator]:
        self.evict_expired()
        session_id = uuid.uuid4().hex
        orchestrator = SubmissionOrchestrator(storage, database)
        self.active_sessions[session_id] = orchestrator
        self.last_seen[session_id] = self._clock()
        logger.info(f"Session {session_id} opened. Active sessions: {len(self.active_sessions)}")
        return session_id, orchestrator

    def get(self, session_id: str) -> Optional[SubmissionOrchestrator]:
        self.evict_expired()
        orchestrator = self.active_sessions.get(session_id)
        if orchestrator is not None:
            self.last_seen[session_id] = self._clock()
        return orchestrator

    def discard(self, session_id: str) -> bool:
        if session_id in self.active_sessions:
            del self.active_sessions[session_id]
            self.last_seen.pop(session_id, None)
            logger.info(f"Session {session_id} closed. Active sessions: {len(self.active_sessions)}")
            return True
        return False

    def evict_expired(self) -> int:
        now = self._clock()
        expired = [
            session_id
            for session_id, seen in self.last_seen.items()
            if now - seen > self.ttl_seconds
            # an in-flight submit keeps its session alive
            and not self.active_sessions[session_id].is_submitting
        ]
        for session_id in expired:
            del self.active_sessions[session_id]
            del self.last_seen[session_id]
        if expired:
            logger.info(f"Evicted {len(expired)} idle sessions. Active sessions: {len(self.active_sessions)}")
        return len(expired)

    def clear(self):
        self.active_sessions.clear()
        self.last_seen.clear()

session_manager = SessionManager()
