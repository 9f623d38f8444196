"""
Tests for button payload encoding.
"""

from __future__ import annotations

from datetime import date

import pytest

from roombot.application.utils.callback_data import MAX_PAYLOAD_BYTES, decode_choice, encode_choice
from roombot.domain.entities.inbound_event import (
    BeginDateSelection,
    ChooseDate,
    ChooseEndSlot,
    ChooseRoom,
    ChooseStartSlot,
)


def test_payload_format():
    assert encode_choice(BeginDateSelection("ab12")) == "dt:ab12:"
    assert encode_choice(ChooseDate("ab12", date(2026, 10, 20))) == "d:ab12:2026-10-20"
    assert encode_choice(ChooseStartSlot("ab12", 3)) == "s:ab12:3"
    assert encode_choice(ChooseEndSlot("ab12", 9)) == "e:ab12:9"
    assert encode_choice(ChooseRoom("ab12", 7)) == "r:ab12:7"


def test_decode_known_payloads():
    assert decode_choice("dt:ab12:") == BeginDateSelection("ab12")
    assert decode_choice("d:ab12:2026-10-20") == ChooseDate("ab12", date(2026, 10, 20))
    assert decode_choice("r:ab12:0") == ChooseRoom("ab12", 0)


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "",
        "select_date",
        "date_2026-10-20",
        "d:ab12:2026-13-40",
        "s:ab12:-1",
        "s:ab12:x",
        "r::1",
        "zz:ab12:1",
    ],
)
def test_decode_rejects_garbage(payload):
    assert decode_choice(payload) is None


def test_payload_length_is_checked():
    with pytest.raises(ValueError):
        encode_choice(ChooseRoom("x" * MAX_PAYLOAD_BYTES, 1))
