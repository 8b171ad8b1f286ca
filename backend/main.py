"""
main.py
--------
Wanderplan terminal chat.

Runs the same ConversationManager the API uses, against an in-memory
session store, one line of input per turn.

Run:
  python main.py            chat until "quit"
  python main.py --json     also print each generated itinerary as JSON

Commands inside the chat:
  reset        forget everything said so far
  quit / exit  leave
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from typing import Optional

import config
from db.session_store import InMemorySessionStore
from modules.conversation.manager import ConversationManager
from modules.observability.logger import StructuredLogger

_QUIT_COMMANDS  = frozenset({"quit", "exit", "q"})
_RESET_COMMANDS = frozenset({"reset", "restart", "start over"})


def run_chat(
    manager: Optional[ConversationManager] = None,
    conversation_id: Optional[str] = None,
    show_json: bool = False,
) -> Optional[dict]:
    """
    Interactive loop. Returns the last {requirements, itinerary} snapshot
    produced during the session, or None if nothing was generated.
    """
    manager = manager or ConversationManager(store=InMemorySessionStore())
    conversation_id = conversation_id or f"cli_{uuid.uuid4().hex[:12]}"
    last_snapshot: Optional[dict] = None

    print("\n" + "=" * 60)
    print("  WANDERPLAN  ·  type 'reset' to start over, 'quit' to leave")
    print("=" * 60)

    first = manager.process_turn(conversation_id, "")
    print(f"\nAssistant: {first.assistant_reply}\n")

    while True:
        try:
            raw = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw:
            continue

        command = raw.lower()
        if command in _QUIT_COMMANDS:
            break
        if command in _RESET_COMMANDS:
            manager.clear_conversation(conversation_id)
            print("\n  (conversation cleared)\n")
            first = manager.process_turn(conversation_id, "")
            print(f"Assistant: {first.assistant_reply}\n")
            continue

        result = manager.process_turn(conversation_id, raw)
        print(f"\nAssistant: {result.assistant_reply}\n")

        if result.snapshot is not None:
            last_snapshot = result.snapshot
            if show_json:
                print(json.dumps(result.snapshot, indent=2, ensure_ascii=False))
                print()

    print("Goodbye!")
    return last_snapshot


if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _manager = ConversationManager(
        store=InMemorySessionStore(),
        structured_logger=StructuredLogger(),
    )
    run_chat(_manager, show_json="--json" in sys.argv)
