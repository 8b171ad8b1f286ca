"""
modules/conversation/manager.py
--------------------------------
Runs turns against stored conversation sessions.

    process_turn(conversation_id, message) → TurnResult
    clear_conversation(conversation_id)    → None (idempotent)
    get_snapshot(conversation_id)          → {requirements, itinerary} | None

Concurrency:
  - Each conversation id has its own threading.Lock; a turn's
    load → handle → commit runs entirely under it. Different ids never
    share a lock, so they proceed in parallel.
  - Locks are reference counted and dropped once no turn or clear holds
    them, so the registry only ever contains ids that are in use.
  - clear_conversation takes the same lock, so a clear never lands in the
    middle of a turn in this process.
  - Commit: the store writes the session only if its stored token is still
    the one read at the start of the turn (or both absent). The check and
    the write are one step inside the store (a redis WATCH / MULTI
    transaction for the redis backend), so a clear from another process
    is never overwritten. On a mismatch StaleStateError is raised and
    nothing is written.

On a successful generation the {requirements, itinerary} snapshot goes to
snapshot_sink (if given) and to the structured event log. The manager never
persists trips itself.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from db.session_store import SessionStore, build_session_store
from modules.errors import InvalidBudgetError, NoHotelAvailableError, StaleStateError
from modules.input.dialogue import DialogueStateMachine
from modules.observability.logger import StructuredLogger
from schemas.itinerary import Itinerary
from schemas.requirements import ConversationSession

logger = logging.getLogger(__name__)

SnapshotSink = Callable[[str, dict], None]


@dataclass
class TurnResult:
    conversation_id: str
    assistant_reply: str
    generated_itinerary: Optional[Itinerary] = None
    snapshot: Optional[dict] = None


@dataclass
class _LockEntry:
    lock: threading.Lock
    holders: int = 0


class _LockRegistry:
    """One lock per conversation id, alive only while someone holds or waits on it."""

    def __init__(self) -> None:
        self._entries: dict[str, _LockEntry] = {}
        self._guard = threading.Lock()

    @contextmanager
    def hold(self, conversation_id: str) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(conversation_id)
            if entry is None:
                entry = self._entries[conversation_id] = _LockEntry(threading.Lock())
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[conversation_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


class ConversationManager:
    def __init__(
        self,
        store: Optional[SessionStore] = None,
        machine: Optional[DialogueStateMachine] = None,
        structured_logger: Optional[StructuredLogger] = None,
        snapshot_sink: Optional[SnapshotSink] = None,
    ) -> None:
        self.store = store if store is not None else build_session_store()
        self.machine = machine or DialogueStateMachine()
        self.events = structured_logger
        self.snapshot_sink = snapshot_sink
        self._locks = _LockRegistry()

    # ── public API ────────────────────────────────────────────────────────

    def process_turn(self, conversation_id: str, message: str) -> TurnResult:
        with self._locks.hold(conversation_id):
            loaded = self.store.get(conversation_id)
            loaded_token = loaded.token if loaded is not None else None
            session = loaded if loaded is not None else ConversationSession(conversation_id=conversation_id)

            result = self.machine.handle(session, message)
            self._commit(conversation_id, loaded_token, session)

        self._event(conversation_id, "turn_processed", {
            "turn": session.turn_count,
            "phase": session.phase.value,
            "generated": result.itinerary is not None,
        })
        if isinstance(result.error, (InvalidBudgetError, NoHotelAvailableError)):
            self._event(conversation_id, "generation_failed", {"error": str(result.error)})
        if result.snapshot is not None:
            self._event(conversation_id, "itinerary_generated", result.snapshot)
            if self.snapshot_sink is not None:
                self.snapshot_sink(conversation_id, result.snapshot)

        return TurnResult(
            conversation_id=conversation_id,
            assistant_reply=result.reply,
            generated_itinerary=result.itinerary,
            snapshot=result.snapshot,
        )

    def clear_conversation(self, conversation_id: str) -> None:
        with self._locks.hold(conversation_id):
            self.store.delete(conversation_id)
        logger.info("conversation=%s cleared", conversation_id)
        self._event(conversation_id, "conversation_cleared", {})

    def get_snapshot(self, conversation_id: str) -> Optional[dict]:
        session = self.store.get(conversation_id)
        return session.last_snapshot if session is not None else None

    def get_session(self, conversation_id: str) -> Optional[ConversationSession]:
        return self.store.get(conversation_id)

    # ── internals ─────────────────────────────────────────────────────────

    def _commit(self, conversation_id: str, loaded_token: Optional[str], session: ConversationSession) -> None:
        try:
            self.store.commit(conversation_id, loaded_token, session)
        except StaleStateError:
            logger.warning("conversation=%s stale turn discarded (loaded token %s)", conversation_id, loaded_token)
            raise

    def _event(self, conversation_id: str, event_type: str, payload: dict) -> None:
        if self.events is not None:
            self.events.log(conversation_id, event_type, payload)
