from __future__ import annotations

from dataclasses import asdict

import numpy as np
import pandas as pd

from hybrid_rota.result_types import ScheduleResult

from .data_models import AttendanceMetrics, SlotGap


def attendance_counts(res: ScheduleResult) -> np.ndarray:
    """Office head-count per slot, in calendar order."""
    return np.array([len(a.at_work) for a in res.roster.values()], dtype=int)


def compute_attendance_metrics(res: ScheduleResult) -> AttendanceMetrics:
    counts = attendance_counts(res)
    minimum = int(res.report.minimum)
    deficits = np.clip(minimum - counts, 0, None) if counts.size else counts

    deviation = 0
    if res.targets is not None and res.tally:
        deviation = max(
            abs(t.at_work - res.targets.at_work) for t in res.tally.values()
        )

    return AttendanceMetrics(
        slots=int(counts.size),
        people=len(res.tally),
        minimum=minimum,
        min_attendance=int(counts.min()) if counts.size else 0,
        max_attendance=int(counts.max()) if counts.size else 0,
        mean_attendance=float(counts.mean()) if counts.size else 0.0,
        shortfall_slots=int(np.count_nonzero(deficits)),
        total_deficit=int(deficits.sum()),
        max_target_deviation=int(deviation),
    )


def compute_slot_gaps(
    res: ScheduleResult, top: int | None = None
) -> tuple[list[SlotGap], pd.DataFrame]:
    """
    Per-slot gaps against the daily minimum.

    Returns the `top` worst gaps (largest deficit first, calendar order on
    ties) plus a DataFrame with one row per slot.
    """
    minimum = int(res.report.minimum)
    people = len(res.tally)
    gaps: list[SlotGap] = []
    for slot, assignment in res.roster.items():
        assigned = len(assignment.at_work)
        gaps.append(
            SlotGap(
                week=slot.week,
                day=slot.day,
                required=minimum,
                assigned=assigned,
                deficit=max(minimum - assigned, 0),
                unattainable=minimum > people,
            )
        )

    df = pd.DataFrame(
        [asdict(g) for g in gaps],
        columns=["week", "day", "required", "assigned", "deficit", "unattainable"],
    )
    worst = sorted(
        (g for g in gaps if g.deficit > 0), key=lambda g: -g.deficit
    )
    if top is not None:
        worst = worst[:top]
    return worst, df
