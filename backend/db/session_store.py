"""
db/session_store.py
--------------------
Where ConversationSession objects live between turns.

    SessionStore            — get / put / delete by conversation id, plus commit:
                              a put that only lands if the stored token is unchanged
    InMemorySessionStore    — process-local dict (default; tests, terminal chat)
    RedisSessionStore       — redis hash per conversation with a sliding TTL

Stores hand out copies: mutating a session returned by get() never changes
what is stored until put() is called.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Optional, Protocol

import redis

import config
from db import redis_client
from modules.errors import StaleStateError
from schemas.requirements import ConversationSession

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def get(self, conversation_id: str) -> Optional[ConversationSession]: ...

    def put(self, conversation_id: str, session: ConversationSession) -> None: ...

    def delete(self, conversation_id: str) -> None: ...

    def commit(self, conversation_id: str, expected_token: Optional[str], session: ConversationSession) -> None:
        """Write session only if the stored token is still expected_token, else StaleStateError."""


class InMemorySessionStore:
    def __init__(self) -> None:
        self._sessions: dict[str, ConversationSession] = {}
        self._lock = threading.Lock()

    def get(self, conversation_id: str) -> Optional[ConversationSession]:
        with self._lock:
            session = self._sessions.get(conversation_id)
            return copy.deepcopy(session) if session is not None else None

    def put(self, conversation_id: str, session: ConversationSession) -> None:
        with self._lock:
            self._sessions[conversation_id] = copy.deepcopy(session)

    def commit(self, conversation_id: str, expected_token: Optional[str], session: ConversationSession) -> None:
        with self._lock:
            current = self._sessions.get(conversation_id)
            if (current.token if current is not None else None) != expected_token:
                raise StaleStateError(conversation_id)
            self._sessions[conversation_id] = copy.deepcopy(session)

    def delete(self, conversation_id: str) -> None:
        with self._lock:
            self._sessions.pop(conversation_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class RedisSessionStore:
    def __init__(self, client: Optional[redis.Redis] = None) -> None:
        self._client = client

    def get(self, conversation_id: str) -> Optional[ConversationSession]:
        data = redis_client.get_conversation(conversation_id, self._client)
        return ConversationSession.from_dict(data) if data is not None else None

    def put(self, conversation_id: str, session: ConversationSession) -> None:
        redis_client.set_conversation(conversation_id, session.to_dict(), self._client)

    def commit(self, conversation_id: str, expected_token: Optional[str], session: ConversationSession) -> None:
        if not redis_client.commit_conversation(conversation_id, expected_token, session.to_dict(), self._client):
            raise StaleStateError(conversation_id)

    def delete(self, conversation_id: str) -> None:
        redis_client.delete_conversation(conversation_id, self._client)


def build_session_store(backend: Optional[str] = None) -> SessionStore:
    """Session store selected by SESSION_BACKEND ("in_memory" or "redis")."""
    backend = (backend or config.SESSION_BACKEND).lower()
    if backend == "redis":
        logger.info("Session store: redis %s:%s/%s", config.REDIS_HOST, config.REDIS_PORT, config.REDIS_DB)
        return RedisSessionStore()
    if backend != "in_memory":
        raise ValueError(f"Unknown SESSION_BACKEND '{backend}' (expected 'in_memory' or 'redis')")
    logger.info("Session store: in-memory")
    return InMemorySessionStore()
