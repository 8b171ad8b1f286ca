"""
modules/input/dialogue.py
--------------------------
Slot-filling state machine: one call to handle() per user message.

Phases (ConversationSession.phase):
  GATHERING_CORE         — asking destination, budget, duration, travelers,
                           departure, accommodation, travel style in order
  GATHERING_PREFERENCES  — preference questionnaire for the chosen destination
  READY_TO_GENERATE      — summary shown, waiting for a confirmation
  GENERATED              — itinerary produced; updates go back to READY

Turn order:
  1. extract_all() on the raw text (never raises)
  2. drop a destination the catalog has no hotels for, and say so
  3. apply matched fields, mark their flags
  4. phase-specific handling (below)

The preference flow is entered only when this turn's message supplied a
destination AND the flow has never started. PreferenceFlow.start() refuses
any other stage, so re-mentioning a destination later (mid-flow or after
completion) cannot queue the questions again.

Every non-empty answer to a preference question consumes it: matched tags
are added, and the raw text is kept in special_requests either way. Only a
message that updates the trip itself (budget, dates...) leaves the current
question in place.

A budget given as a plain number is held until the currency is known; the
next question asks for it.

A core-phase message that matches nothing while a question is outstanding
gets that question back verbatim; no field changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from modules.errors import (
    ExtractionNoMatch,
    IncompleteRequirementsError,
    InvalidBudgetError,
    NoHotelAvailableError,
    PlannerError,
)
from modules.input import prompts
from modules.input.extractors import (
    extract_all,
    extract_preferences,
    is_confirmation,
    is_generation_request,
    is_skip_answer,
    require,
)
from modules.planning.trip_planner import TripPlanner
from modules.tool_usage.catalog import bundled_destinations
from schemas.itinerary import Itinerary
from schemas.requirements import ConversationSession, DialoguePhase, RequirementUpdate

logger = logging.getLogger(__name__)


@dataclass
class DialogueResult:
    reply: str
    itinerary: Optional[Itinerary] = None
    snapshot: Optional[dict] = None           # {requirements, itinerary} on generation
    error: Optional[PlannerError] = None      # generation failure surfaced to the user


class DialogueStateMachine:
    """
    Usage
    -----
        machine = DialogueStateMachine()
        session = ConversationSession(conversation_id="abc")
        result  = machine.handle(session, "Italy, £2000, 7 days, just me")
        print(result.reply)
    """

    def __init__(self, planner: Optional[TripPlanner] = None) -> None:
        self.planner = planner or TripPlanner()

    # ─────────────────────────────────────────────────────────────────────────
    # Public entry point
    # ─────────────────────────────────────────────────────────────────────────

    def handle(self, session: ConversationSession, message: str) -> DialogueResult:
        text = (message or "").strip()
        session.turn_count += 1
        update = extract_all(
            text,
            expected_field=session.expected_field,
            travelers_hint=session.requirements.travelers,
        )
        phase = session.phase
        logger.debug(
            "conversation=%s turn=%d phase=%s matched=%s",
            session.conversation_id, session.turn_count, phase.value, update.matched(),
        )

        rejected = self._drop_unsupported_destination(session, update)
        if rejected and not update:
            return DialogueResult(reply=prompts.with_ack(rejected, self._current_question(session)))

        if phase is DialoguePhase.GATHERING_PREFERENCES:
            result = self._preference_turn(session, text, update)
        elif phase is DialoguePhase.READY_TO_GENERATE:
            result = self._ready_turn(session, text, update)
        elif phase is DialoguePhase.GENERATED:
            result = self._generated_turn(session, text, update)
        else:
            result = self._core_turn(session, text, update)

        if rejected:
            result.reply = prompts.with_ack(rejected, result.reply)
        if session.phase is not phase:
            logger.info(
                "conversation=%s phase %s → %s",
                session.conversation_id, phase.value, session.phase.value,
            )
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Phase handlers
    # ─────────────────────────────────────────────────────────────────────────

    def _core_turn(self, session: ConversationSession, text: str, update: RequirementUpdate) -> DialogueResult:
        answered = self._apply(session, update)
        ack = self._ack(session, update) if answered else ""

        if update.destination and not session.preference_flow.started:
            return self._enter_preferences(session, update)

        if is_generation_request(text) and not session.flags.complete:
            self._ask_next(session)
            return self._incomplete(session, ack)

        if session.pending_question is None and not answered:
            return self._welcome(session)

        try:
            require(update or None, session.expected_field or "message")
        except ExtractionNoMatch as exc:
            logger.debug("No match for '%s'; re-asking", exc.field_name)
            return DialogueResult(reply=session.pending_question)

        return DialogueResult(reply=prompts.with_ack(ack, self._ask_next(session)))

    def _preference_turn(self, session: ConversationSession, text: str, update: RequirementUpdate) -> DialogueResult:
        req = session.requirements
        flow = session.preference_flow
        answered = self._apply(session, update)
        ack = self._ack(session, update) if answered else ""

        if not text:
            return DialogueResult(reply=session.pending_question)

        tags = extract_preferences(text, req.destination)
        skipped = not tags and is_skip_answer(text)
        if not tags and not skipped:
            if is_generation_request(text):
                return self._incomplete(session, ack)
            if answered:
                # a trip update, not an answer to the question
                return DialogueResult(reply=prompts.with_ack(ack, session.pending_question))

        added = req.add_preferences(tags)
        req.special_requests.append(text)
        logger.debug("conversation=%s preferences +%s", session.conversation_id, added)

        next_question = flow.advance()
        if next_question is not None:
            session.pending_question = next_question
            followup = prompts.preference_followup(tags, next_question, skipped=skipped)
            return DialogueResult(reply=prompts.with_ack(ack, followup))

        # Questionnaire exhausted
        session.flags.activities = True
        session.phase = DialoguePhase.GATHERING_CORE
        done = prompts.preferences_done(req.destination, req.preferences)
        return DialogueResult(reply=prompts.with_ack(ack, f"{done}\n\n{self._ask_next(session)}"))

    def _ready_turn(self, session: ConversationSession, text: str, update: RequirementUpdate) -> DialogueResult:
        if self._apply(session, update):
            return DialogueResult(reply=prompts.with_ack(self._ack(session, update), self._ask_next(session)))
        if is_confirmation(text):
            return self._generate(session)
        return DialogueResult(reply=session.pending_question)

    def _generated_turn(self, session: ConversationSession, text: str, update: RequirementUpdate) -> DialogueResult:
        if self._apply(session, update):
            return DialogueResult(reply=prompts.with_ack(self._ack(session, update), self._ask_next(session)))
        if is_confirmation(text):
            return self._generate(session)
        return DialogueResult(reply=prompts.GENERATED_HINT)

    # ─────────────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────────────

    def _welcome(self, session: ConversationSession) -> DialogueResult:
        question = self._ask_next(session)
        return DialogueResult(reply=f"{prompts.WELCOME}\n\n{question}")

    def _enter_preferences(self, session: ConversationSession, update: RequirementUpdate) -> DialogueResult:
        destination = session.requirements.destination
        first = session.preference_flow.start(prompts.preference_questions(destination))
        session.phase = DialoguePhase.GATHERING_PREFERENCES
        session.pending_question = first
        session.expected_field = "activities"
        logger.info("conversation=%s preference flow started for %s", session.conversation_id, destination)

        others = self._ack(session, replace(update, destination=None))
        return DialogueResult(reply=prompts.preference_intro(destination, first, others))

    def _ask_next(self, session: ConversationSession) -> str:
        """Set the next outstanding question (or the summary) on the session and return it."""
        if session.flags.budget and not session.flags.currency:
            session.phase = DialoguePhase.GATHERING_CORE
            session.pending_question = prompts.currency_question(session.requirements.budget)
            session.expected_field = "currency"
            return session.pending_question

        for name in prompts.CORE_QUESTIONS:
            if not getattr(session.flags, name):
                session.phase = DialoguePhase.GATHERING_CORE
                session.pending_question = prompts.CORE_QUESTIONS[name]
                session.expected_field = name
                return session.pending_question

        if session.flags.complete:
            session.phase = DialoguePhase.READY_TO_GENERATE
            session.pending_question = prompts.summary(session.requirements)
            session.expected_field = None
            return session.pending_question

        # Only the questionnaire is outstanding
        return session.pending_question or ""

    def _current_question(self, session: ConversationSession) -> str:
        if session.pending_question:
            return session.pending_question
        if session.phase is DialoguePhase.GENERATED:
            return prompts.GENERATED_HINT
        return self._ask_next(session)

    def _incomplete(self, session: ConversationSession, ack: str) -> DialogueResult:
        try:
            self._require_complete(session)
        except IncompleteRequirementsError as exc:
            logger.info("conversation=%s generation blocked: %s", session.conversation_id, exc)
            reply = prompts.missing_fields(exc.missing_fields, session.pending_question)
            return DialogueResult(reply=prompts.with_ack(ack, reply), error=exc)
        return self._generate(session)

    def _generate(self, session: ConversationSession) -> DialogueResult:
        req = session.requirements
        try:
            self._require_complete(session)
            itinerary = self.planner.generate(req)
        except IncompleteRequirementsError as exc:
            question = self._ask_next(session)
            return DialogueResult(reply=prompts.missing_fields(exc.missing_fields, question), error=exc)
        except (InvalidBudgetError, NoHotelAvailableError) as exc:
            logger.warning("conversation=%s generation failed: %s", session.conversation_id, exc)
            session.phase = DialoguePhase.READY_TO_GENERATE
            return DialogueResult(reply=prompts.generation_failed(exc, req), error=exc)

        session.phase = DialoguePhase.GENERATED
        session.pending_question = None
        session.expected_field = None
        snapshot = {"requirements": req.to_dict(), "itinerary": itinerary.to_dict()}
        session.last_snapshot = snapshot
        return DialogueResult(
            reply=prompts.render_itinerary(itinerary, req),
            itinerary=itinerary,
            snapshot=snapshot,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _drop_unsupported_destination(self, session: ConversationSession, update: RequirementUpdate) -> str:
        """Clear a destination with no catalogued hotels; returns the apology, or ''."""
        destination = update.destination
        if not destination or self.planner.supports(destination):
            return ""
        logger.info("conversation=%s no hotels catalogued for %s", session.conversation_id, destination)
        update.destination = None
        return prompts.unsupported_destination(destination, bundled_destinations())

    @staticmethod
    def _ack(session: ConversationSession, update: RequirementUpdate) -> str:
        return prompts.acknowledge(update, session.requirements, session.flags.currency)

    @staticmethod
    def _apply(session: ConversationSession, update: RequirementUpdate) -> list[str]:
        answered = session.requirements.apply(update)
        session.flags.mark(answered)
        return answered

    @staticmethod
    def _require_complete(session: ConversationSession) -> None:
        missing = session.flags.missing()
        if missing:
            raise IncompleteRequirementsError(missing)
