from __future__ import annotations

from hybrid_rota.extract import attendance_frame, roster_frame, tally_frame
from hybrid_rota.generator import check_attendance, generate_schedule
from hybrid_rota.result_types import DayAssignment, ScheduleResult
from hybrid_rota.slots import Slot

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def make_result() -> ScheduleResult:
    return generate_schedule(["A", "B", "C"], WEEKDAYS, 2, 3, 1, rng=5)


def test_roster_frame_has_one_row_per_placement():
    res = make_result()
    df = roster_frame(res)
    assert list(df.columns) == ["week", "day", "slot", "name", "status"]
    # every person is placed on every slot exactly once
    assert len(df) == 3 * 10
    assert set(df["status"]) <= {"at_work", "wfh"}
    for name in ("A", "B", "C"):
        assert ((df["name"] == name) & (df["status"] == "at_work")).sum() == 6
    assert df.iloc[0]["slot"] == "0-Monday"


def test_roster_frame_empty_keeps_columns():
    res = generate_schedule([], WEEKDAYS, 1, 3, 1, rng=0)
    df = roster_frame(res)
    assert df.empty
    assert list(df.columns) == ["week", "day", "slot", "name", "status"]


def test_tally_frame_lists_targets():
    df = tally_frame(make_result())
    assert df["name"].tolist() == ["A", "B", "C"]
    assert df["at_work"].tolist() == [6, 6, 6]
    assert df["wfh"].tolist() == [4, 4, 4]
    assert set(df["target_at_work"]) == {6}
    assert set(df["target_wfh"]) == {4}


def test_attendance_frame_is_week_by_day_grid():
    roster = {
        Slot(0, "Tue"): DayAssignment(at_work=["A", "B"]),
        Slot(0, "Mon"): DayAssignment(at_work=["A"]),
        Slot(1, "Tue"): DayAssignment(),
        Slot(1, "Mon"): DayAssignment(at_work=["B"], working_from_home=["A"]),
    }
    res = ScheduleResult(roster=roster, tally={}, report=check_attendance(roster, 1))
    grid = attendance_frame(res)
    assert list(grid.columns) == ["Tue", "Mon"]
    assert grid.loc[0].tolist() == [2, 1]
    assert grid.loc[1].tolist() == [0, 1]


def test_attendance_frame_without_slots_is_empty():
    res = ScheduleResult(roster={}, tally={}, report=check_attendance({}, 1))
    assert attendance_frame(res).empty
