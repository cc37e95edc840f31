from __future__ import annotations

from typing import NamedTuple, Sequence


class Slot(NamedTuple):
    """One workday of one week: (week index, workday name)."""

    week: int
    day: str


def build_slots(weeks: int, workdays: Sequence[str]) -> list[Slot]:
    """All slots in calendar order: week-major, then workday order."""
    return [Slot(week, day) for week in range(int(weeks)) for day in workdays]


def slot_key(slot: Slot) -> str:
    """Render a slot as "<week>-<day>", e.g. "0-Monday"."""
    return f"{slot.week}-{slot.day}"
