from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceMetrics:
    """Key figures summarising office attendance across the rota."""

    slots: int
    people: int
    minimum: int
    min_attendance: int
    max_attendance: int
    mean_attendance: float
    shortfall_slots: int
    total_deficit: int  # sum over slots of max(minimum - attendance, 0)
    max_target_deviation: int  # worst |tally.at_work - target_at_work|


@dataclass(frozen=True)
class SlotGap:
    """Gap record for a single (week, day)."""

    week: int
    day: str
    required: int
    assigned: int
    deficit: int  # max(required - assigned, 0)
    unattainable: bool  # required > people on the rota
