from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from hybrid_rota.config import Config
from hybrid_rota.extract import attendance_frame, roster_frame, tally_frame
from hybrid_rota.result_types import ScheduleResult


def produce_outputs(res: ScheduleResult, cfg: Config) -> list[Path]:
    """Persist roster/tally/attendance CSVs plus an attendance heatmap."""
    out_dir = Path(cfg.OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for name, frame in (
        ("roster.csv", roster_frame(res)),
        ("tally.csv", tally_frame(res)),
    ):
        frame.to_csv(out_dir / name, index=False)
        written.append(out_dir / name)

    grid = attendance_frame(res)
    if grid.empty:
        return written
    grid.to_csv(out_dir / "attendance.csv")
    written.append(out_dir / "attendance.csv")

    written.append(attendance_heatmap(grid, res.report.minimum, out_dir))
    return written


def attendance_heatmap(grid: pd.DataFrame, minimum: int, out_dir: Path) -> Path:
    """Week x workday heatmap of office head-count; days below minimum are outlined."""
    n_weeks, n_days = grid.shape
    fig, ax = plt.subplots(
        figsize=(1.2 * n_days + 2, 0.5 * n_weeks + 2), dpi=150
    )
    im = ax.imshow(grid.to_numpy(), cmap="Blues", aspect="auto", vmin=0)
    for w in range(n_weeks):
        for d in range(n_days):
            value = int(grid.iat[w, d])
            short = value < minimum
            ax.text(
                d,
                w,
                str(value),
                ha="center",
                va="center",
                fontsize=8,
                color="tab:red" if short else "black",
                fontweight="bold" if short else "normal",
            )
    ax.set_xticks(range(n_days), list(grid.columns))
    ax.set_yticks(range(n_weeks), [f"Week {int(w) + 1}" for w in grid.index])
    ax.set_title(f"Office attendance (minimum {minimum})", fontsize=11)
    fig.colorbar(im, ax=ax, label="People in the office")
    fig.tight_layout()

    out_path = out_dir / "attendance_heatmap.png"
    fig.savefig(out_path, dpi=fig.dpi, bbox_inches="tight")
    plt.close(fig)
    return out_path
