"""
api/server.py
-------------
FastAPI application entry point.

Run dev server:
    cd backend
    uvicorn api.server:app --reload --port 8000

Endpoints:
    GET    /v1/health
    POST   /v1/conversations/{conversation_id}/turns
    DELETE /v1/conversations/{conversation_id}
    GET    /v1/conversations/{conversation_id}/snapshot
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from api.routes import conversation, health

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Wanderplan Trip Planner API",
    version="1.0.0",
    description=(
        "Conversational trip-requirements intake and budget-constrained "
        "itinerary scheduling."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# Allow the chat frontend (any origin during development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router,        prefix="/v1",               tags=["Health"])
app.include_router(conversation.router,  prefix="/v1/conversations", tags=["Conversations"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.server:app", host="0.0.0.0", port=8000, reload=True)
