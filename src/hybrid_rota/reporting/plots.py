from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt

from hybrid_rota.result_types import ScheduleResult
from hybrid_rota.slots import slot_key

from .metrics import attendance_counts
from .text_report import get_active_report


def _save_and_show(fig: plt.Figure, filename: str, out_dir: str = "outputs") -> None:
    """Persist the plot under out_dir and show it."""
    path = Path(out_dir)
    path.mkdir(parents=True, exist_ok=True)
    fig.savefig(path / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def show_daily_attendance(
    res: ScheduleResult, enable_plot: bool = True, out_dir: str = "outputs"
) -> None:
    """Bar chart of office head-count per day, with the minimum as a line."""
    if not enable_plot or not res.roster:
        return

    counts = attendance_counts(res)
    labels = [slot_key(slot) for slot in res.roster]
    minimum = res.report.minimum
    colors = ["tab:red" if c < minimum else "tab:blue" for c in counts]

    fig, ax = plt.subplots(figsize=(max(6.0, 0.35 * len(labels)), 4), dpi=150)
    ax.set_title("Office attendance per day", pad=20)
    ax.bar(range(len(labels)), counts, color=colors, alpha=0.8, width=0.9)
    ax.axhline(
        minimum,
        color="black",
        linestyle="--",
        linewidth=1,
        label=f"Minimum ({minimum})",
    )
    ax.set_xticks(range(len(labels)), labels, rotation=90, fontsize=7)
    ax.set_ylabel("People in the office")
    ax.set_ylim(0, max(int(counts.max()) if counts.size else 0, minimum) + 1)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(loc="upper right", frameon=False)
    fig.tight_layout()
    _save_and_show(fig, "daily_attendance.png", out_dir)
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)


def show_solution_progress(
    history: Sequence[tuple[float, float, float]], out_dir: str = "outputs"
) -> None:
    """
    Plot the best shortfall/bound versus solution index.

    history entries are (wall_time_sec, best_obj, bound).
    """
    if not history:
        return
    solution_idx = list(range(1, len(history) + 1))
    best_vals = [pt[1] for pt in history]
    bound_vals = [pt[2] for pt in history]

    fig, ax = plt.subplots(figsize=(7.5, 4), dpi=150)
    ax.set_title("Attendance shortfall history", pad=20)
    ax.plot(solution_idx, best_vals, label="Shortfall", color="tab:blue")
    ax.plot(
        solution_idx,
        bound_vals,
        label="Solver bound",
        color="tab:red",
        linestyle="--",
        linewidth=1.25,
    )
    ax.set_xlabel("Solution # (in discovery order)")
    ax.set_ylabel("Missing office places")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.xaxis.set_major_locator(plt.MaxNLocator(integer=True))
    ax.legend(loc="upper right", frameon=False)
    ax.grid(alpha=0.3)
    fig.tight_layout()
    _save_and_show(fig, "solution_progress.png", out_dir)
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)
