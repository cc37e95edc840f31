# hybrid_rota/result_types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from hybrid_rota.slots import Slot


@dataclass
class DayAssignment:
    """Who is in the office and who works from home on one slot."""

    at_work: list[str] = field(default_factory=list)
    working_from_home: list[str] = field(default_factory=list)

    def is_assigned(self, name: str) -> bool:
        return name in self.at_work or name in self.working_from_home


@dataclass
class Tally:
    """Realised per-person counts, for reporting only."""

    at_work: int = 0
    working_from_home: int = 0

    @property
    def total(self) -> int:
        return self.at_work + self.working_from_home


@dataclass(frozen=True)
class Targets:
    """Per-person slot targets derived from the work/WFH ratio."""

    total_slots: int
    raw_at_work: float
    raw_wfh: float
    at_work: int
    wfh: int


@dataclass(frozen=True)
class ConstraintReport:
    """Outcome of the minimum-office-attendance check."""

    minimum: int
    minimum_met: bool
    shortfall_slots: list[tuple[Slot, int]] = field(default_factory=list)


@dataclass
class ScheduleResult:
    """Structured output of a generation run."""

    roster: dict[Slot, DayAssignment]
    tally: dict[str, Tally]
    report: ConstraintReport
    targets: Optional[Targets] = None
    strategy: str = "random"
    attempts: int = 0
    fallback_placements: int = 0
    status_name: str = "GENERATED"
    objective_value: Optional[float] = None
    progress_history: list[tuple[float, float, float]] | None = None

    @property
    def minimum_met(self) -> bool:
        return self.report.minimum_met
