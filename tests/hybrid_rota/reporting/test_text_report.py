from __future__ import annotations

from pathlib import Path

from hybrid_rota.generator import generate_schedule
from hybrid_rota.reporting.text_report import (
    MINIMUM_NOT_MET_BANNER,
    ReportDocument,
    _log_print,
    render_text_report,
    set_active_report,
)
from hybrid_rota.result_types import ConstraintReport, DayAssignment, ScheduleResult
from hybrid_rota.slots import Slot

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def test_report_lists_schedule_and_summary(capsys):
    res = generate_schedule(["Ana", "Ben", "Cai"], WEEKDAYS, 2, 3, 1, rng=1)

    render_text_report(res)
    out = capsys.readouterr().out

    assert "Rota status: GENERATED (strategy=random)" in out
    assert "Week 1" in out and "Week 2" in out
    assert "At Work:" in out
    assert "Work Days Summary:" in out
    assert "Ana: At Work: 6, WFH: 4" in out
    assert "Random draws:" in out
    assert MINIMUM_NOT_MET_BANNER not in out
    assert "every day has at least 1 in the office" in out


def test_report_prints_banner_and_gaps(capsys):
    # minimum above the head-count can never be met
    res = generate_schedule(["Ana"], WEEKDAYS, 1, 3, 2, rng=1)

    render_text_report(res, num_print_examples=2)
    out = capsys.readouterr().out

    assert MINIMUM_NOT_MET_BANNER in out
    assert "5 day(s) below the minimum" in out
    assert "Worst days (top 2):" in out
    assert "no rota can meet it" in out


def test_report_with_nobody(capsys):
    roster = {Slot(0, "Monday"): DayAssignment()}
    res = ScheduleResult(
        roster=roster,
        tally={},
        report=ConstraintReport(minimum=1, minimum_met=True),
    )

    render_text_report(res)
    out = capsys.readouterr().out

    assert "Monday | At Work: - | WFH: -" in out
    assert "(nobody on the rota)" in out
    assert "No people on the rota" in out


def test_log_print_mirrors_into_active_report(tmp_path, capsys):
    doc = ReportDocument(Path(tmp_path) / "report.pdf")
    set_active_report(doc)
    try:
        _log_print("hello", "rota")
    finally:
        set_active_report(None)

    assert capsys.readouterr().out == "hello rota\n"
    assert doc.lines == ["hello rota"]
    doc.write()
    assert (tmp_path / "report.pdf").exists()
