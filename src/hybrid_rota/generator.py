# hybrid_rota/generator.py
from __future__ import annotations

from typing import Callable, Mapping, Optional, Sequence

import numpy as np

from hybrid_rota.config import Rounding
from hybrid_rota.errors import ValidationError
from hybrid_rota.precheck import check_targets, compute_targets
from hybrid_rota.result_types import (
    ConstraintReport,
    DayAssignment,
    ScheduleResult,
    Tally,
)
from hybrid_rota.slots import Slot, build_slots

RngLike = np.random.Generator | int | None


def _rng(seed: RngLike) -> np.random.Generator:
    if seed is None:
        return np.random.default_rng()
    if isinstance(seed, (int, np.integer)):
        return np.random.default_rng(int(seed))
    # anything exposing Generator.integers(high)
    return seed


def check_attendance(
    roster: Mapping[Slot, DayAssignment], minimum: int
) -> ConstraintReport:
    """
    Scan every slot (no early exit) and record the ones below `minimum`.
    """
    shortfall: list[tuple[Slot, int]] = []
    for slot, assignment in roster.items():
        attendance = len(assignment.at_work)
        if attendance < minimum:
            shortfall.append((slot, attendance))
    return ConstraintReport(
        minimum=int(minimum),
        minimum_met=not shortfall,
        shortfall_slots=shortfall,
    )


class _Placer:
    """
    Bounded rejection sampling over the slot grid for one generation call.

    Each placement draws at most `budget` random (week, day) pairs; once the
    budget is spent the next eligible slot in calendar order is taken instead,
    continuing round-robin from that person's previous fallback position.
    """

    def __init__(
        self,
        slots: list[Slot],
        weeks: int,
        workdays: Sequence[str],
        rng: np.random.Generator,
        budget: int,
    ) -> None:
        self.slots = slots
        self.weeks = weeks
        self.workdays = list(workdays)
        self.rng = rng
        self.budget = budget
        self.attempts = 0
        self.fallbacks = 0
        self._cursor: dict[str, int] = {}

    def place(self, name: str, eligible: Callable[[Slot], bool]) -> Slot:
        for _ in range(self.budget):
            self.attempts += 1
            week = int(self.rng.integers(self.weeks))
            day = self.workdays[int(self.rng.integers(len(self.workdays)))]
            slot = Slot(week, day)
            if eligible(slot):
                return slot
        return self._round_robin(name, eligible)

    def _round_robin(self, name: str, eligible: Callable[[Slot], bool]) -> Slot:
        n = len(self.slots)
        start = self._cursor.get(name, 0)
        for offset in range(n):
            idx = (start + offset) % n
            if eligible(self.slots[idx]):
                self._cursor[name] = (idx + 1) % n
                self.fallbacks += 1
                return self.slots[idx]
        # unreachable once check_targets() has passed
        raise RuntimeError(f"No eligible slot left for {name!r}.")


def generate_schedule(
    people: Sequence[str],
    workdays: Sequence[str],
    weeks: int,
    days_at_work: int,
    min_office_attendance: int,
    *,
    rng: RngLike = None,
    rounding: Rounding = "ceil",
    retry_factor: int = 20,
    workweek_length: int = 5,
) -> ScheduleResult:
    """
    Randomly place every person in the office and at home across the calendar.

    Parameters:
    people (Sequence[str]): unique, non-empty names in rota order
    workdays (Sequence[str]): the D workday names of a week, in order
    weeks (int): number of weeks W in the horizon
    days_at_work (int): office days per `workweek_length`-day week
    min_office_attendance (int): daily office head-count to check for
    rng (Generator | int | None): random source or seed; None draws fresh entropy
    rounding (str): "ceil" or "half_up" for the at-work target
    retry_factor (int): random draws per placement = total slots * retry_factor
    workweek_length (int): denominator of the work/WFH ratio

    Returns:
    ScheduleResult: roster, per-person tally and the attendance report. The
    attendance minimum is only checked; a short roster is still returned.

    Raises:
    ValidationError: when names or workdays repeat
    InfeasibleTargetsError: when the targets cannot fit the calendar
    """
    if len(set(people)) != len(people):
        raise ValidationError("people must be unique.")
    if len(set(workdays)) != len(workdays):
        raise ValidationError("workdays must be unique.")

    slots = build_slots(weeks, workdays)
    roster: dict[Slot, DayAssignment] = {slot: DayAssignment() for slot in slots}
    tally: dict[str, Tally] = {name: Tally() for name in people}

    targets = compute_targets(len(slots), days_at_work, workweek_length, rounding)
    if not people:
        return ScheduleResult(
            roster=roster,
            tally=tally,
            report=ConstraintReport(minimum=int(min_office_attendance), minimum_met=True),
            targets=targets,
        )
    check_targets(targets)

    placer = _Placer(
        slots,
        int(weeks),
        workdays,
        _rng(rng),
        budget=max(1, len(slots) * int(retry_factor)),
    )

    # At-work pass
    for name in people:
        for _ in range(targets.at_work):
            slot = placer.place(name, lambda s: name not in roster[s].at_work)
            roster[slot].at_work.append(name)
            tally[name].at_work += 1

    # WFH pass
    for name in people:
        for _ in range(targets.wfh):
            slot = placer.place(name, lambda s: not roster[s].is_assigned(name))
            roster[slot].working_from_home.append(name)
            tally[name].working_from_home += 1

    return ScheduleResult(
        roster=roster,
        tally=tally,
        report=check_attendance(roster, min_office_attendance),
        targets=targets,
        strategy="random",
        attempts=placer.attempts,
        fallback_placements=placer.fallbacks,
    )


def generate_from_config(
    cfg, people: Sequence[str], rng: RngLike = None
) -> ScheduleResult:
    """Run generate_schedule() with every knob taken from a Config."""
    seed: Optional[RngLike] = rng if rng is not None else cfg.SEED
    return generate_schedule(
        people,
        cfg.WORKDAYS,
        cfg.WEEKS,
        cfg.DAYS_AT_WORK,
        cfg.MIN_OFFICE_ATTENDANCE,
        rng=seed,
        rounding=cfg.ROUNDING,
        retry_factor=cfg.RETRY_FACTOR,
        workweek_length=cfg.WORKWEEK_LENGTH,
    )
