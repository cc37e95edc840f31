# hybrid_rota/extract.py
from __future__ import annotations

import pandas as pd

from hybrid_rota.result_types import ScheduleResult
from hybrid_rota.slots import slot_key

AT_WORK = "at_work"
WFH = "wfh"

ROSTER_COLUMNS = ["week", "day", "slot", "name", "status"]


def roster_frame(res: ScheduleResult) -> pd.DataFrame:
    """One row per (slot, person) placement, in calendar order."""
    rows: list[dict] = []
    for slot, assignment in res.roster.items():
        for name in assignment.at_work:
            rows.append(
                {
                    "week": slot.week,
                    "day": slot.day,
                    "slot": slot_key(slot),
                    "name": name,
                    "status": AT_WORK,
                }
            )
        for name in assignment.working_from_home:
            rows.append(
                {
                    "week": slot.week,
                    "day": slot.day,
                    "slot": slot_key(slot),
                    "name": name,
                    "status": WFH,
                }
            )
    if not rows:
        return pd.DataFrame(columns=ROSTER_COLUMNS)
    return pd.DataFrame(rows, columns=ROSTER_COLUMNS)


def tally_frame(res: ScheduleResult) -> pd.DataFrame:
    """Per-person realised counts next to their targets."""
    target_at = res.targets.at_work if res.targets is not None else None
    target_wfh = res.targets.wfh if res.targets is not None else None
    rows = [
        {
            "name": name,
            "at_work": t.at_work,
            "wfh": t.working_from_home,
            "target_at_work": target_at,
            "target_wfh": target_wfh,
        }
        for name, t in res.tally.items()
    ]
    return pd.DataFrame(
        rows, columns=["name", "at_work", "wfh", "target_at_work", "target_wfh"]
    )


def attendance_frame(res: ScheduleResult) -> pd.DataFrame:
    """Week x workday grid of office head-count, columns in workday order."""
    days: list[str] = []
    for slot in res.roster:
        if slot.day not in days:
            days.append(slot.day)
    records = [
        {"week": slot.week, "day": slot.day, "attendance": len(a.at_work)}
        for slot, a in res.roster.items()
    ]
    if not records:
        return pd.DataFrame()
    df = pd.DataFrame(records)
    grid = df.pivot(index="week", columns="day", values="attendance")
    return grid.reindex(columns=days).astype(int)
