from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union


@dataclass(frozen=True)
class BeginDateSelection:
    token: str


@dataclass(frozen=True)
class ChooseDate:
    token: str
    date: date


@dataclass(frozen=True)
class ChooseStartSlot:
    token: str
    index: int


@dataclass(frozen=True)
class ChooseEndSlot:
    token: str
    index: int


@dataclass(frozen=True)
class ChooseRoom:
    token: str
    index: int


Choice = Union[BeginDateSelection, ChooseDate, ChooseStartSlot, ChooseEndSlot, ChooseRoom]


@dataclass(frozen=True)
class StartCommand:
    session_id: str
    contact_id: str
    display_name: str | None = None


@dataclass(frozen=True)
class CancelCommand:
    session_id: str


@dataclass(frozen=True)
class HelpCommand:
    session_id: str


@dataclass(frozen=True)
class ButtonPress:
    session_id: str
    message_id: int | None
    callback_id: str
    choice: Choice | None  # None when the payload could not be decoded


@dataclass(frozen=True)
class TextMessage:
    session_id: str
    text: str


InboundEvent = Union[StartCommand, CancelCommand, HelpCommand, ButtonPress, TextMessage]
