from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class Schedule:
    """Static room and time slot configuration shared by every session."""

    rooms: tuple[str, ...]
    time_slots: tuple[str, ...]
    timezone: ZoneInfo

    def slot_hour(self, index: int) -> int:
        return int(self.time_slots[index].split(":", 1)[0])

    def slot_datetime(self, day: date, index: int) -> datetime:
        return datetime.combine(day, time(hour=self.slot_hour(index)), tzinfo=self.timezone)

    def start_slot_indices(self) -> list[int]:
        return list(range(len(self.time_slots) - 1))

    def end_slot_indices(self, start_slot: int) -> list[int]:
        return list(range(start_slot + 1, len(self.time_slots)))

    def is_valid_start(self, index: int) -> bool:
        return 0 <= index < len(self.time_slots) - 1

    def is_valid_end(self, start_slot: int, index: int) -> bool:
        return start_slot < index <= len(self.time_slots) - 1

    def window_label(self, start_slot: int, end_slot: int) -> str:
        return f"{self.time_slots[start_slot]} - {self.time_slots[end_slot]}"
