"""
test_conversation_manager.py
-----------------------------
ConversationManager over the session stores: clear/restart parity, stale
turn detection, per-conversation locking across threads, snapshot hand-off,
structured event log, store round trips and the redis compare-and-set commit.

Run:
    cd backend
    pytest test_conversation_manager.py -v
"""

from __future__ import annotations

import json
import threading
import time
from typing import Callable, Optional
from unittest.mock import MagicMock

import pytest
import redis

from db.session_store import InMemorySessionStore, RedisSessionStore, build_session_store
from modules.conversation.manager import ConversationManager
from modules.errors import StaleStateError
from modules.input.dialogue import DialogueStateMachine
from modules.input.prompts import preference_questions
from modules.observability.logger import StructuredLogger
from schemas.requirements import ConversationSession, DialoguePhase

# Italy conversation from destination to a generated itinerary
FULL_CONVERSATION = (
    ["Italy", "history and food"]
    + ["skip"] * (len(preference_questions("Italy")) - 1)
    + ["£2000", "7 days", "just me", "London", "mid-range", "cultural", "yes"]
)


class _FakePipeline:
    """
    redis-py pipeline semantics the session store relies on: commands queue
    until execute(), except between watch() and multi() where they run
    immediately; execute() raises WatchError if a watched key changed.
    """

    def __init__(self, fake: "_FakeRedis") -> None:
        self.fake = fake
        self._reset()

    def _reset(self) -> None:
        self.watched: Optional[tuple[str, Optional[dict]]] = None
        self.immediate = False
        self.queued: list[tuple] = []

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self._reset()

    def watch(self, key):
        self.watched = (key, self.fake.snapshot(key))
        self.immediate = True

    def unwatch(self):
        self.watched = None
        self.immediate = False

    def multi(self):
        if self.fake.on_multi is not None:
            self.fake.on_multi()
        self.immediate = False

    def hget(self, key, field):
        return self.fake.hget(key, field)

    def hset(self, key, mapping):
        self._run(self.fake.hset, key, mapping)

    def expire(self, key, seconds):
        self._run(self.fake.expire, key, seconds)

    def _run(self, command, *args):
        if self.immediate:
            command(*args)
        else:
            self.queued.append((command, args))

    def execute(self):
        try:
            if self.watched is not None:
                key, before = self.watched
                if self.fake.snapshot(key) != before:
                    raise redis.WatchError(f"Watched variable changed: {key}")
            for command, args in self.queued:
                command(*args)
            return [True] * len(self.queued)
        finally:
            self._reset()


class _FakeRedis:
    """Just enough of redis.Redis for the conversation hash."""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.ttls: dict[str, int] = {}
        self.on_multi: Optional[Callable[[], None]] = None   # runs when a transaction opens

    def pipeline(self):
        return _FakePipeline(self)

    def snapshot(self, key) -> Optional[dict]:
        value = self.hashes.get(key)
        return dict(value) if value is not None else None

    def hset(self, key, mapping):
        self.hashes.setdefault(key, {}).update(mapping)

    def expire(self, key, seconds):
        self.ttls[key] = seconds

    def hget(self, key, field):
        return self.hashes.get(key, {}).get(field)

    def delete(self, key):
        self.hashes.pop(key, None)
        self.ttls.pop(key, None)


class _RecordingMachine(DialogueStateMachine):
    """
    Tracks how many turns per conversation id run inside handle() at once.
    With a barrier, every turn waits for the others to arrive first.
    """

    def __init__(self, barrier: Optional[threading.Barrier] = None) -> None:
        super().__init__()
        self.barrier = barrier
        self.active: dict[str, int] = {}
        self.peak: dict[str, int] = {}
        self._guard = threading.Lock()

    def handle(self, session, message):
        cid = session.conversation_id
        with self._guard:
            self.active[cid] = self.active.get(cid, 0) + 1
            self.peak[cid] = max(self.peak.get(cid, 0), self.active[cid])
        try:
            if self.barrier is not None:
                self.barrier.wait()
            else:
                time.sleep(0.05)
            return super().handle(session, message)
        finally:
            with self._guard:
                self.active[cid] -= 1


class _InterferingMachine(DialogueStateMachine):
    """Simulates another writer touching the store while a turn is in flight."""

    def __init__(self, store, replace_with_new: bool) -> None:
        super().__init__()
        self.store = store
        self.replace_with_new = replace_with_new

    def handle(self, session, message):
        result = super().handle(session, message)
        self.store.delete(session.conversation_id)
        if self.replace_with_new:
            self.store.put(session.conversation_id, ConversationSession(conversation_id=session.conversation_id))
        return result


def _run(manager, conversation_id, messages):
    return [manager.process_turn(conversation_id, m) for m in messages]


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def manager(store):
    return ConversationManager(store=store)


# ── Turns ─────────────────────────────────────────────────────────────────────

def test_turn_creates_and_persists_session(manager, store):
    result = manager.process_turn("c1", "Italy")
    assert result.conversation_id == "c1"
    assert "fantastic choice" in result.assistant_reply
    saved = store.get("c1")
    assert saved.requirements.destination == "Italy"
    assert saved.turn_count == 1


def test_conversations_are_isolated(manager):
    manager.process_turn("a", "Italy, £2000")
    manager.process_turn("b", "Japan")
    assert manager.get_session("a").requirements.budget == 2000
    assert manager.get_session("b").requirements.budget is None
    assert manager.get_session("b").requirements.destination == "Japan"


def test_full_conversation_generates_and_snapshots(store):
    sink = MagicMock()
    manager = ConversationManager(store=store, snapshot_sink=sink)
    results = _run(manager, "trip", FULL_CONVERSATION)

    final = results[-1]
    assert final.generated_itinerary is not None
    assert all(r.generated_itinerary is None for r in results[:-1])
    sink.assert_called_once_with("trip", final.snapshot)
    assert manager.get_snapshot("trip") == final.snapshot
    assert store.get("trip").phase is DialoguePhase.GENERATED


# ── Clear ─────────────────────────────────────────────────────────────────────

def test_clear_then_restart_matches_a_fresh_conversation(manager):
    opening = ["Italy, £2000, 7 days", "museums and wine", "skip"]
    _run(manager, "reused", opening)
    manager.clear_conversation("reused")
    assert manager.get_session("reused") is None

    after_clear = [r.assistant_reply for r in _run(manager, "reused", opening)]
    fresh = [r.assistant_reply for r in _run(manager, "fresh", opening)]
    assert after_clear == fresh
    assert manager.get_session("reused").requirements.to_dict() == manager.get_session("fresh").requirements.to_dict()


def test_clear_unknown_conversation_is_a_no_op(manager):
    manager.clear_conversation("never-seen")
    assert manager.get_snapshot("never-seen") is None


# ── Concurrency ───────────────────────────────────────────────────────────────

def _in_threads(manager, jobs):
    """Run (conversation_id, message) jobs on their own threads; return raised errors."""
    errors: list[BaseException] = []

    def work(conversation_id, message):
        try:
            manager.process_turn(conversation_id, message)
        except BaseException as exc:
            errors.append(exc)

    threads = [threading.Thread(target=work, args=job) for job in jobs]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert not any(t.is_alive() for t in threads)
    return errors


def test_turns_on_one_conversation_run_one_at_a_time(store):
    machine = _RecordingMachine()
    manager = ConversationManager(store=store, machine=machine)
    errors = _in_threads(manager, [("same", "Italy")] * 4)
    assert errors == []
    assert machine.peak["same"] == 1
    assert store.get("same").turn_count == 4


def test_turns_on_different_conversations_run_in_parallel(store):
    # both turns must be inside handle() together for the barrier to release
    machine = _RecordingMachine(barrier=threading.Barrier(2, timeout=2))
    manager = ConversationManager(store=store, machine=machine)
    errors = _in_threads(manager, [("left", "Italy"), ("right", "Japan")])
    assert errors == []
    assert store.get("left").requirements.destination == "Italy"
    assert store.get("right").requirements.destination == "Japan"


def test_lock_registry_only_keeps_ids_in_use(manager):
    _run(manager, "short-lived", ["Italy", "history"])
    manager.clear_conversation("short-lived")
    manager.clear_conversation("never-seen")
    assert len(manager._locks) == 0

    with manager._locks.hold("busy"):
        assert len(manager._locks) == 1
    assert len(manager._locks) == 0


# ── Stale state ───────────────────────────────────────────────────────────────

def test_turn_racing_a_clear_is_rejected(store):
    ConversationManager(store=store).process_turn("c1", "Italy")
    racing = ConversationManager(store=store, machine=_InterferingMachine(store, replace_with_new=False))
    with pytest.raises(StaleStateError) as info:
        racing.process_turn("c1", "£2000")
    assert info.value.conversation_id == "c1"
    assert store.get("c1") is None


def test_turn_racing_a_replacement_is_rejected(store):
    racing = ConversationManager(store=store, machine=_InterferingMachine(store, replace_with_new=True))
    with pytest.raises(StaleStateError):
        racing.process_turn("c2", "Italy")
    # the replacement written by the other writer is left alone
    assert store.get("c2").requirements.destination is None


def test_in_memory_commit_compares_the_stored_token(store):
    session = ConversationSession(conversation_id="m1")
    store.commit("m1", None, session)
    with pytest.raises(StaleStateError):
        store.commit("m1", None, session)
    with pytest.raises(StaleStateError):
        store.commit("m1", "someone-else", session)
    session.turn_count = 3
    store.commit("m1", session.token, session)
    assert store.get("m1").turn_count == 3


def test_redis_commit_compares_the_stored_token():
    fake = _FakeRedis()
    store = RedisSessionStore(client=fake)
    session = ConversationSession(conversation_id="r3")
    store.commit("r3", None, session)
    with pytest.raises(StaleStateError):
        store.commit("r3", None, session)
    with pytest.raises(StaleStateError):
        store.commit("r3", "someone-else", session)
    session.turn_count = 3
    store.commit("r3", session.token, session)
    assert store.get("r3").turn_count == 3
    assert fake.ttls["conversation:r3"] == 86400


def test_redis_clear_during_commit_is_not_overwritten():
    fake = _FakeRedis()
    store = RedisSessionStore(client=fake)
    manager = ConversationManager(store=store)
    manager.process_turn("r2", "Italy")

    # another process clears the key after the token check, before EXEC
    fake.on_multi = lambda: fake.delete("conversation:r2")
    with pytest.raises(StaleStateError):
        manager.process_turn("r2", "£2000")
    assert "conversation:r2" not in fake.hashes
    assert store.get("r2") is None


# ── Structured event log ──────────────────────────────────────────────────────

def test_events_are_logged_per_conversation(store, tmp_path):
    events = StructuredLogger(tmp_path)
    manager = ConversationManager(store=store, structured_logger=events)
    _run(manager, "logged/../id", FULL_CONVERSATION)
    manager.clear_conversation("logged/../id")
    assert events.path_for("logged/../id").parent == tmp_path
    types = [r["event_type"] for r in events.read_events("logged/../id")]
    assert types.count("turn_processed") == len(FULL_CONVERSATION)
    assert "itinerary_generated" in types
    assert types[-1] == "conversation_cleared"

    generated = events.read_events("logged/../id", "itinerary_generated")
    assert generated[0]["payload"]["itinerary"]["destination"] == "Italy"
    assert events.read_events("nobody") == []
    events.close()


# ── Stores ────────────────────────────────────────────────────────────────────

def test_in_memory_store_hands_out_copies(store):
    session = ConversationSession(conversation_id="x")
    store.put("x", session)
    loaded = store.get("x")
    loaded.requirements.destination = "Japan"
    assert store.get("x").requirements.destination is None
    assert len(store) == 1


def test_redis_store_round_trip():
    fake = _FakeRedis()
    store = RedisSessionStore(client=fake)
    manager = ConversationManager(store=store)
    _run(manager, "r1", FULL_CONVERSATION)

    loaded = store.get("r1")
    assert loaded.phase is DialoguePhase.GENERATED
    assert loaded.preference_flow.gathered
    assert loaded.requirements.preferences[:2] == ["history", "food"]
    assert loaded.last_snapshot["itinerary"]["destination"] == "Italy"
    assert fake.hashes["conversation:r1"]["token"] == loaded.token
    assert fake.ttls["conversation:r1"] == 86400

    manager.clear_conversation("r1")
    assert store.get("r1") is None


def test_session_dict_round_trip():
    session = ConversationSession(conversation_id="rt")
    DialogueStateMachine().handle(session, "Italy, £2000, 2 weeks, 2 adults")
    restored = ConversationSession.from_dict(json.loads(json.dumps(session.to_dict())))
    assert restored == session


def test_build_session_store():
    assert isinstance(build_session_store("in_memory"), InMemorySessionStore)
    assert isinstance(build_session_store("redis"), RedisSessionStore)
    with pytest.raises(ValueError):
        build_session_store("postgres")
