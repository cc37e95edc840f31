from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Sequence

from hybrid_rota.config import ROUNDING_POLICIES, STRATEGIES, Config, cfg, clamp_min_attendance
from hybrid_rota.errors import RotaError
from hybrid_rota.generator import RngLike, generate_from_config
from hybrid_rota.input_data import InputData, build_input
from hybrid_rota.output import produce_outputs
from hybrid_rota.progress import MinimalProgress
from hybrid_rota.reporting import Reporter
from hybrid_rota.result_types import ScheduleResult
from hybrid_rota.solver import solve_balanced


def run_scheduler(
    config: Config | None = None,
    data: InputData | None = None,
    names: Iterable[str] | None = None,
    reporter: Reporter | None = None,
    enable_reporting: bool = True,
    validate_config: bool = True,
    rng: RngLike = None,
    export: bool = False,
) -> ScheduleResult:
    """
    Build, generate, and optionally report on a work/WFH rota.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `hybrid_rota.config.cfg` when
        omitted. The object passed in is not modified; minimum attendance is
        clamped on a copy.
    data:
        Pre-built `InputData`. When omitted, `names` is normalised into one.
    names:
        Raw names (blanks dropped, whitespace trimmed). Ignored when `data` is
        supplied.
    reporter:
        Custom reporter instance. When `enable_reporting` is True and no reporter
        is provided, the default `Reporter` is used.
    enable_reporting:
        When False, skips reporter pre/post hooks even if a reporter is provided.
    validate_config:
        Toggle to run `Config.validate()` before generating.
    rng:
        Random source or seed for the "random" strategy; falls back to
        `Config.SEED`.
    export:
        Write CSV/PNG exports to `Config.OUTPUT_DIR`.

    Returns
    -------
    ScheduleResult
        The rota, per-person tally and attendance report. A missed minimum is
        reported in `result.report`, not raised.
    """
    cfg_obj = replace(config or cfg)
    cfg_obj.WORKDAYS = list(cfg_obj.WORKDAYS)

    if validate_config:
        cfg_obj.validate()

    input_data = data if data is not None else build_input(cfg_obj, names=names)
    input_data = InputData(people=input_data.people, cfg=cfg_obj)
    clamp_min_attendance(cfg_obj, len(input_data.people))

    active_reporter = reporter if enable_reporting else None
    if active_reporter is None and enable_reporting:
        active_reporter = Reporter(cfg_obj)
    if active_reporter is not None:
        active_reporter.cfg = cfg_obj
        active_reporter.pre_solve(input_data)

    if cfg_obj.STRATEGY == "balanced":
        progress = MinimalProgress(
            cfg_obj.TIME_LIMIT_SEC, cfg_obj.LOG_SOLUTIONS_FREQUENCY_SECONDS
        )
        result = solve_balanced(cfg_obj, input_data, progress_cb=progress)
    else:
        result = generate_from_config(cfg_obj, input_data.names, rng=rng)

    if active_reporter is not None:
        active_reporter.post_solve(result, input_data)

    if export:
        produce_outputs(result, cfg_obj)

    return result


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a work / work-from-home rota."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--names", nargs="+", default=None, help="Names of the people on the rota."
    )
    source.add_argument(
        "--people-json",
        type=Path,
        default=None,
        help="JSON file with the people on the rota.",
    )
    parser.add_argument("--weeks", type=int, default=cfg.WEEKS)
    parser.add_argument(
        "--workdays",
        nargs="+",
        default=None,
        help="Workday names, in order (default: Monday..Friday).",
    )
    parser.add_argument(
        "--days-at-work",
        type=int,
        default=cfg.DAYS_AT_WORK,
        help="Office days per 5-day week; the rest are WFH.",
    )
    parser.add_argument(
        "--min-attendance",
        type=int,
        default=cfg.MIN_OFFICE_ATTENDANCE,
        help="People who should be in the office every day (checked, not enforced).",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--strategy", choices=STRATEGIES, default=cfg.STRATEGY)
    parser.add_argument("--rounding", choices=ROUNDING_POLICIES, default=cfg.ROUNDING)
    parser.add_argument("--output-dir", default=cfg.OUTPUT_DIR)
    parser.add_argument(
        "--export", action="store_true", help="Write CSV and chart exports."
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip charts.")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Config:
    return replace(
        cfg,
        WEEKS=args.weeks,
        WORKDAYS=list(args.workdays) if args.workdays else list(cfg.WORKDAYS),
        DAYS_AT_WORK=args.days_at_work,
        MIN_OFFICE_ATTENDANCE=args.min_attendance,
        SEED=args.seed,
        STRATEGY=args.strategy,
        ROUNDING=args.rounding,
        OUTPUT_DIR=args.output_dir,
    )


def main(argv: Sequence[str] | None = None) -> ScheduleResult:
    """CLI entry point."""
    args = parse_args(argv)
    config = config_from_args(args)
    data = build_input(config, names=args.names, people_json=args.people_json)
    return run_scheduler(
        config=config,
        data=data,
        reporter=Reporter(config, enable_plots=not args.no_plots),
        enable_reporting=True,
        export=args.export,
    )


def cli() -> None:
    try:
        main()
    except RotaError as exc:
        print(f"hybrid-rota: error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc


if __name__ == "__main__":
    cli()
