#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no Telegram).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable session id for the run
- Sends typed text and commands through the same ConversationUseCase as the bot
- Prints each reply with its buttons numbered; type #N to press button N
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from roombot.application.utils.callback_data import decode_choice
from roombot.domain.entities.inbound_event import (
    ButtonPress,
    CancelCommand,
    HelpCommand,
    StartCommand,
    TextMessage,
)
from roombot.domain.entities.reply import Button, Reply
from roombot.wiring.dependencies import get_conversation_use_case


def _print_header(session_id: str) -> None:
    print("\nLocal Booking Chat")
    print("-" * 60)
    print(f"session_id: {session_id}")
    print("Commands: /start, /cancel, /help, /quit. Type #N to press a button.")
    print("-" * 60)


def _print_reply(reply: Reply | None) -> list[Button]:
    if reply is None:
        print("(no reply)")
        return []
    mode = f"edit #{reply.edit_message_id}" if reply.edit_message_id is not None else "send"
    print(f"\n--- Reply ({mode}) ---")
    print(reply.text)
    buttons = [button for row in reply.buttons for button in row]
    for number, button in enumerate(buttons, 1):
        print(f"  [{number}] {button.label}")
    print("-" * 60)
    return buttons


def main() -> None:
    session_id = os.getenv("CHAT_SESSION_ID", "local_user_1")
    use_case = get_conversation_use_case()
    _print_header(session_id)

    buttons: list[Button] = []
    message_id = 1
    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return

        if cmd == "/start":
            event = StartCommand(session_id=session_id, contact_id=session_id, display_name="Local")
        elif cmd == "/cancel":
            event = CancelCommand(session_id=session_id)
        elif cmd == "/help":
            event = HelpCommand(session_id=session_id)
        elif user_text.startswith("#") and user_text[1:].isdigit():
            number = int(user_text[1:])
            if not 1 <= number <= len(buttons):
                print("No such button.")
                continue
            event = ButtonPress(
                session_id=session_id,
                message_id=message_id,
                callback_id=f"local_{number}",
                choice=decode_choice(buttons[number - 1].payload),
            )
        else:
            event = TextMessage(session_id=session_id, text=user_text)

        reply = use_case.handle(event)
        if reply is not None and reply.edit_message_id is None:
            message_id += 1
        buttons = _print_reply(reply) or buttons


if __name__ == "__main__":
    main()
