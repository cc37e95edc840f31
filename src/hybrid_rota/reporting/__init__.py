from __future__ import annotations

from .data_models import AttendanceMetrics, SlotGap
from .reporter import Reporter

__all__ = [
    "Reporter",
    "AttendanceMetrics",
    "SlotGap",
]
