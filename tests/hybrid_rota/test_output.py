from __future__ import annotations

from pathlib import Path

import pandas as pd

from hybrid_rota.generator import check_attendance, generate_from_config
from hybrid_rota.output import produce_outputs
from hybrid_rota.result_types import ScheduleResult


def test_produce_outputs_writes_csvs_and_heatmap(small_cfg):
    res = generate_from_config(small_cfg, ["A", "B", "C"])

    written = produce_outputs(res, small_cfg)

    names = [p.name for p in written]
    assert names == [
        "roster.csv",
        "tally.csv",
        "attendance.csv",
        "attendance_heatmap.png",
    ]
    assert all(p.exists() for p in written)

    roster = pd.read_csv(Path(small_cfg.OUTPUT_DIR) / "roster.csv")
    assert len(roster) == 3 * small_cfg.total_slots
    grid = pd.read_csv(Path(small_cfg.OUTPUT_DIR) / "attendance.csv", index_col=0)
    assert grid.shape == (small_cfg.WEEKS, len(small_cfg.WORKDAYS))
    assert int(grid.to_numpy().sum()) == 3 * 6


def test_produce_outputs_skips_grid_without_slots(small_cfg):
    res = ScheduleResult(roster={}, tally={}, report=check_attendance({}, 1))
    written = produce_outputs(res, small_cfg)
    assert [p.name for p in written] == ["roster.csv", "tally.csv"]
