"""
Module with example code for running the rota generator.

There are three ways to run the code:

1. Run the code with default options and a handful of names.
2. Run the code over several weeks with a seeded random source and the
   CP-SAT "balanced" strategy for comparison.
3. Run the code with people pre-defined in a JSON file and export the
   CSV/PNG outputs.

Usage via cli:
    python3 -m src.example --option 1
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from hybrid_rota import Config, build_input, run_scheduler
from hybrid_rota.reporting import Reporter

cfg = Config(
    WEEKS=2,
    DAYS_AT_WORK=3,
    MIN_OFFICE_ATTENDANCE=2,
    SEED=11,
    TIME_LIMIT_SEC=5.0,
    NUM_PARALLEL_WORKERS=2,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run rota examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=1,
        choices=(1, 2, 3),
        help="Example scenario to run (default: 1).",
    )
    return parser.parse_args()


def run_option(option: int) -> None:
    print(f"Running example code with option {option}")

    if option == 1:
        run_scheduler(cfg, names=["Ana", "Ben", "Chloe", "Dev"])

    # Same people, random placement vs CP-SAT placement.
    elif option == 2:
        names = ["Ana", "Ben", "Chloe", "Dev", "Eli", "Fay"]
        wide = replace(cfg, WEEKS=4, MIN_OFFICE_ATTENDANCE=4)
        random_res = run_scheduler(
            wide, names=names, reporter=Reporter(wide, enable_plots=False)
        )
        balanced = replace(wide, STRATEGY="balanced")
        balanced_res = run_scheduler(
            balanced, names=names, reporter=Reporter(balanced, enable_plots=False)
        )
        print(
            f"\nrandom: minimum met={random_res.minimum_met} | "
            f"balanced: minimum met={balanced_res.minimum_met}"
        )

    # Typical production use: people from JSON, exports on disk.
    elif option == 3:
        data = build_input(cfg, people_json=Path("src/example_people.json"))
        run_scheduler(cfg, data=data, export=True)
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    args = parse_args()
    run_option(args.option)


if __name__ == "__main__":
    main()
