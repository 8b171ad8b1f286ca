"""
api/routes/conversation.py
---------------------------
POST   /v1/conversations/{conversation_id}/turns
DELETE /v1/conversations/{conversation_id}
GET    /v1/conversations/{conversation_id}/snapshot

One ConversationManager per process, shared by all requests. Sessions live
in the store chosen by SESSION_BACKEND (in-memory or redis).
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from modules.conversation.manager import ConversationManager
from modules.errors import StaleStateError
from modules.observability.logger import StructuredLogger
from schemas.itinerary import Itinerary

router = APIRouter()

_manager: Optional[ConversationManager] = None


def get_manager() -> ConversationManager:
    """Process-wide manager, created on first request."""
    global _manager
    if _manager is None:
        _manager = ConversationManager(structured_logger=StructuredLogger())
    return _manager


# ── Request / Response schemas ─────────────────────────────────────────────────

class TurnRequest(BaseModel):
    message: str = Field(..., min_length=1, description="Raw user message")


class TurnResponse(BaseModel):
    conversation_id: str
    assistant_reply: str
    generated_itinerary: Optional[dict] = None


class ClearResponse(BaseModel):
    conversation_id: str
    cleared: bool = True


# ── Serialisers ────────────────────────────────────────────────────────────────

def _ser_itinerary(it: Itinerary) -> dict:
    hotel = it.hotel
    alloc = it.allocation
    return {
        "destination": it.destination,
        "generated_at": it.generated_at,
        "hotel": None if hotel is None else {
            "id":              hotel.id,
            "name":            hotel.name,
            "location":        hotel.location,
            "rating":          hotel.rating,
            "price_per_night": hotel.price_per_night,
            "review_score":    hotel.review_score,
            "review_count":    hotel.review_count,
        },
        "allocation": None if alloc is None else {
            "total_budget":  alloc.total_budget,
            "accommodation": alloc.accommodation,
            "activities":    alloc.activities,
            "food":          alloc.food,
            "per_night":     alloc.per_night,
        },
        "days": [
            {
                "day_index": d.day_index,
                "role":      d.role,
                "day_cost":  d.day_cost,
                "items": [
                    {
                        "name":          item.name,
                        "time_slot":     item.time_slot,
                        "activity_type": item.activity_type,
                        "cost":          item.cost,
                        "activity_id":   item.activity_id,
                        "notes":         item.notes,
                    }
                    for item in d.items
                ],
            }
            for d in it.days
        ],
        "total_cost":       it.total_cost,
        "remaining_budget": it.remaining_budget,
        "over_budget":      it.over_budget,
        "relaxations":      list(it.relaxations),
    }


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post("/{conversation_id}/turns", response_model=TurnResponse, summary="Send one user message")
def post_turn(
    conversation_id: str,
    req: TurnRequest,
    manager: ConversationManager = Depends(get_manager),
) -> TurnResponse:
    """
    Runs one dialogue turn. `generated_itinerary` is set only on the turn
    that produced a new itinerary.
    """
    try:
        result = manager.process_turn(conversation_id, req.message)
    except StaleStateError as exc:
        raise HTTPException(
            status_code=409,
            detail=f"{exc} Please resend your message.",
        ) from exc

    itinerary = result.generated_itinerary
    return TurnResponse(
        conversation_id=conversation_id,
        assistant_reply=result.assistant_reply,
        generated_itinerary=_ser_itinerary(itinerary) if itinerary is not None else None,
    )


@router.delete("/{conversation_id}", response_model=ClearResponse, summary="Clear a conversation")
def clear_conversation(
    conversation_id: str,
    manager: ConversationManager = Depends(get_manager),
) -> ClearResponse:
    manager.clear_conversation(conversation_id)
    return ClearResponse(conversation_id=conversation_id)


@router.get("/{conversation_id}/snapshot", summary="Last generated {requirements, itinerary}")
def get_snapshot(
    conversation_id: str,
    manager: ConversationManager = Depends(get_manager),
) -> dict:
    snapshot = manager.get_snapshot(conversation_id)
    if snapshot is None:
        raise HTTPException(
            status_code=404,
            detail=f"No itinerary generated yet for conversation '{conversation_id}'.",
        )
    return snapshot
