"""
schemas/requirements.py
-----------------------
Dataclass definitions for everything the dialogue mutates turn by turn.

  TripRequirements   — what the traveller has told us so far
  RequirementFlags   — which requirement fields have been answered
  RequirementUpdate  — the fields one message yielded (output of extract_all)
  PreferenceFlow     — NOT_STARTED → IN_PROGRESS(queue) → COMPLETED, never backwards
  ConversationSession — all of the above plus dialogue phase, keyed by conversation id

Sessions round-trip through plain dicts (to_dict / from_dict) so any
SessionStore can hold them as JSON.
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Iterable, Optional

import config


# ── Requirements ──────────────────────────────────────────────────────────────

@dataclass
class TripRequirements:
    destination: Optional[str] = None
    budget: Optional[int] = None                 # whole currency units, all travellers
    currency: str = field(default_factory=lambda: config.DEFAULT_CURRENCY_SYMBOL)
    duration_days: Optional[int] = None
    travelers: Optional[int] = None
    departure: Optional[str] = None
    accommodation: Optional[str] = None
    travel_style: Optional[str] = None
    preferences: list[str] = field(default_factory=list)       # canonical, append-only, de-duplicated
    special_requests: list[str] = field(default_factory=list)  # raw preference answers

    @property
    def activities(self) -> list[str]:
        """Read-only view of the preference tags."""
        return list(self.preferences)

    def add_preferences(self, tags: Iterable[str]) -> list[str]:
        """Append unseen tags in order; returns the ones actually added."""
        added: list[str] = []
        for tag in tags:
            if tag and tag not in self.preferences:
                self.preferences.append(tag)
                added.append(tag)
        return added

    def apply(self, update: "RequirementUpdate") -> list[str]:
        """Copy every matched field of update onto self; returns the flag names set."""
        answered: list[str] = []
        for name in _SCALAR_FIELDS:
            value = getattr(update, name)
            if value is not None:
                setattr(self, name, value)
                answered.append(_FLAG_FOR_FIELD[name])
        if update.currency is not None:
            self.currency = update.currency
            answered.append("currency")
        return answered

    def to_dict(self) -> dict:
        data = asdict(self)
        data["activities"] = self.activities
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "TripRequirements":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# Requirement field → flag name
_FLAG_FOR_FIELD: dict[str, str] = {
    "destination":   "destination",
    "budget":        "budget",
    "duration_days": "duration",
    "travelers":     "travelers",
    "departure":     "departure",
    "accommodation": "accommodation",
    "travel_style":  "travel_style",
}
_SCALAR_FIELDS = tuple(_FLAG_FOR_FIELD)


@dataclass
class RequirementFlags:
    destination: bool = False
    budget: bool = False
    duration: bool = False
    travelers: bool = False
    departure: bool = False
    accommodation: bool = False
    travel_style: bool = False
    activities: bool = False
    currency: bool = False        # set once the budget currency is known

    def mark(self, names: Iterable[str]) -> None:
        for name in names:
            setattr(self, name, True)

    def missing(self) -> list[str]:
        names = [f.name for f in fields(self) if not getattr(self, f.name)]
        if "budget" in names and "currency" in names:
            names.remove("currency")
        return names

    @property
    def complete(self) -> bool:
        return not self.missing()

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "RequirementFlags":
        known = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in data.items() if k in known})


@dataclass
class RequirementUpdate:
    """Fields extracted from a single message. None means 'not mentioned'."""
    destination: Optional[str] = None
    budget: Optional[int] = None
    currency: Optional[str] = None
    duration_days: Optional[int] = None
    travelers: Optional[int] = None
    departure: Optional[str] = None
    accommodation: Optional[str] = None
    travel_style: Optional[str] = None

    def matched(self) -> list[str]:
        names = [name for name in _SCALAR_FIELDS if getattr(self, name) is not None]
        if self.currency is not None:
            names.append("currency")
        return names

    def __bool__(self) -> bool:
        return bool(self.matched())


# ── Preference sub-flow ───────────────────────────────────────────────────────

class FlowStage(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class PreferenceFlow:
    """
    Bounded follow-up questionnaire, entered once per conversation.

    The stage only moves forward. start() is legal from NOT_STARTED only, so a
    destination re-mentioned mid-flow (or after completion) cannot restart it.
    """
    stage: FlowStage = FlowStage.NOT_STARTED
    queue: list[str] = field(default_factory=list)

    @property
    def started(self) -> bool:
        return self.stage is not FlowStage.NOT_STARTED

    @property
    def gathered(self) -> bool:
        return self.stage is FlowStage.COMPLETED

    @property
    def current_question(self) -> Optional[str]:
        if self.stage is FlowStage.IN_PROGRESS and self.queue:
            return self.queue[0]
        return None

    def start(self, questions: list[str]) -> str:
        """Queue the questions and return the first one."""
        if self.stage is not FlowStage.NOT_STARTED:
            raise ValueError(f"Preference flow already {self.stage.value}")
        if not questions:
            raise ValueError("Preference flow needs at least one question")
        self.queue = list(questions)
        self.stage = FlowStage.IN_PROGRESS
        return self.queue[0]

    def advance(self) -> Optional[str]:
        """Pop the answered question; return the next one, or None once exhausted."""
        if self.stage is not FlowStage.IN_PROGRESS:
            raise ValueError(f"Cannot advance a preference flow that is {self.stage.value}")
        self.queue.pop(0)
        if self.queue:
            return self.queue[0]
        self.stage = FlowStage.COMPLETED
        return None

    def to_dict(self) -> dict:
        return {"stage": self.stage.value, "queue": list(self.queue)}

    @classmethod
    def from_dict(cls, data: dict) -> "PreferenceFlow":
        return cls(stage=FlowStage(data.get("stage", FlowStage.NOT_STARTED.value)),
                   queue=list(data.get("queue", [])))


# ── Session ───────────────────────────────────────────────────────────────────

class DialoguePhase(str, Enum):
    GATHERING_CORE = "gathering_core"
    GATHERING_PREFERENCES = "gathering_preferences"
    READY_TO_GENERATE = "ready_to_generate"
    GENERATED = "generated"


@dataclass
class ConversationSession:
    conversation_id: str = ""
    token: str = field(default_factory=lambda: uuid.uuid4().hex)
    requirements: TripRequirements = field(default_factory=TripRequirements)
    flags: RequirementFlags = field(default_factory=RequirementFlags)
    preference_flow: PreferenceFlow = field(default_factory=PreferenceFlow)
    phase: DialoguePhase = DialoguePhase.GATHERING_CORE
    pending_question: Optional[str] = None     # last outstanding question, re-asked verbatim
    expected_field: Optional[str] = None       # flag name the pending question asks for
    turn_count: int = 0
    last_snapshot: Optional[dict] = None       # {requirements, itinerary} of the last generation

    def to_dict(self) -> dict[str, Any]:
        return {
            "conversation_id": self.conversation_id,
            "token": self.token,
            "requirements": self.requirements.to_dict(),
            "flags": self.flags.to_dict(),
            "preference_flow": self.preference_flow.to_dict(),
            "phase": self.phase.value,
            "pending_question": self.pending_question,
            "expected_field": self.expected_field,
            "turn_count": self.turn_count,
            "last_snapshot": self.last_snapshot,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConversationSession":
        return cls(
            conversation_id=data.get("conversation_id", ""),
            token=data["token"],
            requirements=TripRequirements.from_dict(data.get("requirements", {})),
            flags=RequirementFlags.from_dict(data.get("flags", {})),
            preference_flow=PreferenceFlow.from_dict(data.get("preference_flow", {})),
            phase=DialoguePhase(data.get("phase", DialoguePhase.GATHERING_CORE.value)),
            pending_question=data.get("pending_question"),
            expected_field=data.get("expected_field"),
            turn_count=int(data.get("turn_count", 0)),
            last_snapshot=data.get("last_snapshot"),
        )
