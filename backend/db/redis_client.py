"""
db/redis_client.py
-------------------
redis-py client — singleton plus helpers for the conversation key schema.

Key schema:

  conversation:{conversation_id}
       Type : Hash
       TTL  : CONVERSATION_TTL (default 86,400 s = 24 hours; reset on each write)
       Fields: token    — session token fixed when the conversation started
               session  — JSON of ConversationSession.to_dict()

       Turns commit with WATCH / MULTI on the key, comparing the token field,
       so a clear from another process is never overwritten.

Environment variables (set in config.py):
    REDIS_HOST        default: localhost
    REDIS_PORT        default: 6379
    REDIS_DB          default: 0
    REDIS_PASSWORD    default: ""  (empty = no auth)
    CONVERSATION_TTL  default: 86400
"""

from __future__ import annotations

import json
from typing import Any

import redis

import config

# Module-level singleton; initialised lazily on first call to get_redis()
_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Return the singleton Redis client, creating it on first call."""
    global _client
    if _client is None:
        kwargs: dict[str, Any] = {
            "host":             config.REDIS_HOST,
            "port":             config.REDIS_PORT,
            "db":               config.REDIS_DB,
            "decode_responses": True,   # return str, not bytes
        }
        if config.REDIS_PASSWORD:
            kwargs["password"] = config.REDIS_PASSWORD
        _client = redis.Redis(**kwargs)
    return _client


# ── Conversation hash ──────────────────────────────────────────────────────────

def _conversation_key(conversation_id: str) -> str:
    return f"conversation:{conversation_id}"


def set_conversation(conversation_id: str, data: dict[str, Any], client: redis.Redis | None = None) -> None:
    """
    Write the session hash, then reset the TTL.

    Both commands go through one pipeline so readers never see a session
    without its expiry.
    """
    r = client or get_redis()
    key = _conversation_key(conversation_id)
    pipe = r.pipeline()
    pipe.hset(key, mapping={"token": data["token"], "session": json.dumps(data)})
    pipe.expire(key, config.CONVERSATION_TTL)
    pipe.execute()


def get_conversation(conversation_id: str, client: redis.Redis | None = None) -> dict | None:
    """
    Return the decoded session dict.

    Returns None if the key does not exist (expired, cleared or never created).
    """
    r = client or get_redis()
    raw = r.hget(_conversation_key(conversation_id), "session")
    return json.loads(raw) if raw else None


def delete_conversation(conversation_id: str, client: redis.Redis | None = None) -> None:
    """Delete the session hash. Deleting a missing key is a no-op."""
    (client or get_redis()).delete(_conversation_key(conversation_id))


def commit_conversation(
    conversation_id: str,
    expected_token: str | None,
    data: dict[str, Any],
    client: redis.Redis | None = None,
) -> bool:
    """
    Compare-and-set write of the session hash.

    The write happens only if the stored `token` field still equals
    expected_token (None: the key must not exist). WATCH on the key makes a
    delete or rewrite by another process between the check and EXEC abort
    the transaction. Returns False, with nothing written, in either case.
    """
    r = client or get_redis()
    key = _conversation_key(conversation_id)
    with r.pipeline() as pipe:
        try:
            pipe.watch(key)
            current = pipe.hget(key, "token")
            if current != expected_token:
                pipe.unwatch()
                return False
            pipe.multi()
            pipe.hset(key, mapping={"token": data["token"], "session": json.dumps(data)})
            pipe.expire(key, config.CONVERSATION_TTL)
            pipe.execute()
        except redis.WatchError:
            return False
    return True
