"""
Structured JSON event log — append-only, one object per line (.jsonl).

Usage:
    from modules.observability.logger import StructuredLogger

    events = StructuredLogger()
    events.log("conv_abc123", "turn_processed", {"phase": "gathering_core"})
    events.read_events("conv_abc123", "itinerary_generated")

Logs are written to  <LOGS_DIR>/<conversation_id>.jsonl  (default backend/logs).

Record shape:
    {"timestamp": ISO-8601 UTC, "session_id": ..., "event_type": ..., "payload": {...}}

Event types written by the conversation manager:
    turn_processed, conversation_cleared, itinerary_generated, generation_failed
"""

from __future__ import annotations

import json
import os
import re
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Optional

import config

_DEFAULT_LOGS_DIR: Path = Path(__file__).resolve().parents[2] / "logs"
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class StructuredLogger:
    """Thread-safe JSONL event log, one file per conversation."""

    def __init__(self, logs_dir: Path | str | None = None) -> None:
        self._logs_dir = Path(logs_dir or config.LOGS_DIR or _DEFAULT_LOGS_DIR)
        self._lock = threading.Lock()
        self._open_files: dict[str, IO[str]] = {}

    @property
    def logs_dir(self) -> Path:
        return self._logs_dir

    def path_for(self, conversation_id: str) -> Path:
        # conversation ids arrive from URLs; keep them inside logs_dir
        return self._logs_dir / f"{_UNSAFE_CHARS.sub('_', conversation_id)}.jsonl"

    # ── Writing ───────────────────────────────────────────────────────────────

    def log(self, conversation_id: str, event_type: str, payload: dict) -> None:
        """Append one event record for conversation_id."""
        line = json.dumps(
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "session_id": conversation_id,
                "event_type": event_type,
                "payload": payload,
            },
            default=str,
            ensure_ascii=False,
        )
        with self._lock:
            fh = self._open_files.get(conversation_id) or self._open(conversation_id)
            fh.write(line + "\n")
            fh.flush()

    def close(self, conversation_id: Optional[str] = None) -> None:
        """Close one conversation's file, or every open file."""
        with self._lock:
            if conversation_id is not None:
                targets = [conversation_id] if conversation_id in self._open_files else []
            else:
                targets = list(self._open_files)
            for cid in targets:
                self._open_files.pop(cid).close()

    def _open(self, conversation_id: str) -> IO[str]:
        os.makedirs(self._logs_dir, exist_ok=True)
        fh = open(self.path_for(conversation_id), "a", encoding="utf-8")  # noqa: SIM115
        self._open_files[conversation_id] = fh
        return fh

    # ── Reading ───────────────────────────────────────────────────────────────

    def read_events(self, conversation_id: str, event_type: Optional[str] = None) -> list[dict]:
        """
        Recorded events for a conversation, oldest first, optionally filtered
        by event_type. A conversation with no log yields [].
        """
        path = self.path_for(conversation_id)
        if not path.exists():
            return []

        with self._lock:
            fh = self._open_files.get(conversation_id)
            if fh is not None:
                fh.flush()

        records: list[dict] = []
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if line:
                    records.append(json.loads(line))
        if event_type is not None:
            records = [r for r in records if r.get("event_type") == event_type]
        return records
