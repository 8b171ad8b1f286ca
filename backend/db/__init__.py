"""
db/
----
Session storage for the conversation layer.

  Redis (redis-py) — shared session store for multi-process deployments
    conversation:{conversation_id}   TTL = CONVERSATION_TTL (24 h)

  In-process dict — default for tests and the terminal chat

Public exports (import from here for convenience):
    from db import build_session_store, get_redis
"""

from db.redis_client import get_redis
from db.session_store import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionStore,
    build_session_store,
)

__all__ = [
    "get_redis",
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
    "build_session_store",
]
