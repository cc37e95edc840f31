from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from hybrid_rota.input_data import InputData
from hybrid_rota.precheck import precheck_attendance
from hybrid_rota.reporting.plots import show_daily_attendance, show_solution_progress
from hybrid_rota.reporting.text_report import (
    ReportDocument,
    render_text_report,
    set_active_report,
)
from hybrid_rota.result_types import ScheduleResult


class Reporter:
    """High-level orchestrator: runs the pre-check and renders reports."""

    def __init__(
        self,
        cfg: Any,
        num_print_examples: int = 5,
        enable_plots: bool = True,
        confirm_precheck: bool = True,
    ) -> None:
        self.cfg = cfg
        self.num_print_examples = num_print_examples
        self.enable_plots = enable_plots
        self.confirm_precheck = confirm_precheck

    def pre_solve(self, data: InputData) -> None:
        """
        Print the attendance pre-check. When the daily minimum cannot be reached
        by any rota, ask whether to continue (default yes).
        """
        if not data.people:
            print("Pre-check: (nobody on the rota; skipping)")
            return

        cap, dem, ok_cap, _ = precheck_attendance(self.cfg, data)
        if not ok_cap and self.confirm_precheck:
            proceed = self._prompt_yes_no_default_yes(
                "Pre-check shows the daily minimum cannot be met. Continue anyway?"
            )
            if not proceed:
                raise SystemExit("Stopped by user after failed pre-check.")

    def render_text_report(self, res: ScheduleResult) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_report(res, self.cfg, num_print_examples=self.num_print_examples)

    def post_solve(self, res: ScheduleResult, data: InputData) -> None:
        """Render the textual report (and optional plots) into outputs/report.pdf."""
        out_dir = str(getattr(self.cfg, "OUTPUT_DIR", "outputs"))
        report_doc = ReportDocument(Path(out_dir) / "report.pdf")
        set_active_report(report_doc)
        try:
            self.render_text_report(res)
            if not self.enable_plots or not data.people:
                return
            show_daily_attendance(res, enable_plot=self.enable_plots, out_dir=out_dir)
            show_solution_progress(res.progress_history or [], out_dir=out_dir)
        finally:
            set_active_report(None)
            report_doc.write()

    # ---------- helpers ----------

    def _prompt_yes_no_default_yes(self, msg: str) -> bool:
        """Prompt '[Y/n]' and return True for yes (default)."""
        try:
            if not sys.stdin or not sys.stdin.isatty():
                print(f"{msg} [Y/n] (non-interactive -> default: Y)")
                return True

            while True:
                resp = input(f"{msg} [Y/n]: ").strip().lower()
                if resp in ("", "y", "yes"):
                    return True
                if resp in ("n", "no"):
                    return False
                print("Please type 'y' or 'n'.")
        except (EOFError, KeyboardInterrupt):
            print("\nAborted by user.")
            return False
