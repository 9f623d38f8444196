from __future__ import annotations

from datetime import date

from roombot.domain.entities.inbound_event import (
    BeginDateSelection,
    Choice,
    ChooseDate,
    ChooseEndSlot,
    ChooseRoom,
    ChooseStartSlot,
)

# Telegram caps callback_data at 64 bytes.
MAX_PAYLOAD_BYTES = 64

_BEGIN_DATE = "dt"
_DATE = "d"
_START = "s"
_END = "e"
_ROOM = "r"


def encode_choice(choice: Choice) -> str:
    if isinstance(choice, BeginDateSelection):
        payload = f"{_BEGIN_DATE}:{choice.token}:"
    elif isinstance(choice, ChooseDate):
        payload = f"{_DATE}:{choice.token}:{choice.date.isoformat()}"
    elif isinstance(choice, ChooseStartSlot):
        payload = f"{_START}:{choice.token}:{choice.index}"
    elif isinstance(choice, ChooseEndSlot):
        payload = f"{_END}:{choice.token}:{choice.index}"
    elif isinstance(choice, ChooseRoom):
        payload = f"{_ROOM}:{choice.token}:{choice.index}"
    else:
        raise TypeError(f"Unsupported choice: {choice!r}")

    if len(payload.encode("utf-8")) > MAX_PAYLOAD_BYTES:
        raise ValueError(f"Callback payload too long: {payload!r}")
    return payload


def decode_choice(payload: str | None) -> Choice | None:
    """Decode a button payload. Returns None for anything that does not parse."""
    if not payload:
        return None
    parts = payload.split(":", 2)
    if len(parts) != 3:
        return None
    action, token, param = parts
    if not token:
        return None

    try:
        if action == _BEGIN_DATE:
            return BeginDateSelection(token=token)
        if action == _DATE:
            return ChooseDate(token=token, date=date.fromisoformat(param))
        if action == _START:
            return ChooseStartSlot(token=token, index=_parse_index(param))
        if action == _END:
            return ChooseEndSlot(token=token, index=_parse_index(param))
        if action == _ROOM:
            return ChooseRoom(token=token, index=_parse_index(param))
    except ValueError:
        return None
    return None


def _parse_index(raw: str) -> int:
    if not raw.isdigit():
        raise ValueError(f"Not a slot index: {raw!r}")
    return int(raw)
