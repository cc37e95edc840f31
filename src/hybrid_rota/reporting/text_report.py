from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from hybrid_rota.result_types import ScheduleResult

from .metrics import compute_attendance_metrics, compute_slot_gaps

MINIMUM_NOT_MET_BANNER = (
    "⚠️ The minimum office attendance requirement is not met for all days. "
    "Please adjust your parameters."
)


class ReportDocument:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(self.path) as pdf:
            if self.lines:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.01,
                    0.99,
                    "\n".join(self.lines),
                    ha="left",
                    va="top",
                    fontsize=8,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            elif not self.figures:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.5,
                    0.5,
                    "Report contains no data.",
                    ha="center",
                    va="center",
                    fontsize=12,
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    from io import StringIO

    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_names(names: list[str]) -> str:
    return ", ".join(names) if names else "-"


def _print_schedule_grid(res: ScheduleResult) -> None:
    _log_print("\nSchedule:")
    current_week = None
    width = max((len(slot.day) for slot in res.roster), default=0)
    for slot, assignment in res.roster.items():
        if slot.week != current_week:
            current_week = slot.week
            _log_print(f"\nWeek {slot.week + 1}")
        _log_print(
            f"  {slot.day:<{width}} | At Work: {_fmt_names(assignment.at_work)}"
            f" | WFH: {_fmt_names(assignment.working_from_home)}"
        )


def _print_work_days_summary(res: ScheduleResult) -> None:
    _log_print("\nWork Days Summary:")
    if not res.tally:
        _log_print("  (nobody on the rota)")
        return
    for name, counts in res.tally.items():
        _log_print(
            f"  {name}: At Work: {counts.at_work}, WFH: {counts.working_from_home}"
        )


def render_text_report(
    res: ScheduleResult,
    cfg: Any = None,
    *,
    num_print_examples: int = 5,
) -> None:
    _log_print(f"Rota status: {res.status_name} (strategy={res.strategy})")
    if not res.minimum_met:
        _log_print(f"\n{MINIMUM_NOT_MET_BANNER}")

    _print_schedule_grid(res)
    _print_work_days_summary(res)

    if not res.tally:
        _log_print("\nNo people on the rota; nothing to check against the minimum.")
        return

    if res.targets is not None:
        _log_print(
            f"\nTargets per person: at work={res.targets.at_work} "
            f"(raw {res.targets.raw_at_work:.2f}) | WFH={res.targets.wfh} "
            f"(raw {res.targets.raw_wfh:.2f}) | days={res.targets.total_slots}"
        )

    m = compute_attendance_metrics(res)
    _log_print(
        f"\nOffice attendance per day: min={m.min_attendance} | "
        f"mean={m.mean_attendance:.2f} | max={m.max_attendance} | "
        f"required={m.minimum}"
    )
    if m.max_target_deviation > 0:
        _log_print(
            f"⚠️ Someone's office days differ from the target by {m.max_target_deviation}."
        )

    if res.strategy == "random":
        _log_print(
            f"Random draws: {res.attempts:,} | round-robin placements: "
            f"{res.fallback_placements:,}"
        )
    elif res.objective_value is not None:
        _log_print(f"Solver shortfall (objective): {res.objective_value:,.0f}")

    top_gaps, df_gaps = compute_slot_gaps(res, top=num_print_examples)
    if not top_gaps:
        _log_print(
            f"\nPer-day gaps: every day has at least {m.minimum} in the office."
        )
        return

    _log_print(
        f"\n{m.shortfall_slots} day(s) below the minimum "
        f"(total missing office places: {m.total_deficit})."
    )
    _log_print(f"Worst days (top {len(top_gaps)}):")
    worst = pd.DataFrame(
        [
            {
                "week": g.week + 1,
                "day": g.day,
                "required": g.required,
                "assigned": g.assigned,
                "deficit": g.deficit,
            }
            for g in top_gaps
        ]
    )
    _log_print(worst.to_string(index=False))
    if bool(df_gaps["unattainable"].any()):
        _log_print(
            "Minimum exceeds the number of people on the rota; no rota can meet it."
        )
