# hybrid_rota/precheck.py
from __future__ import annotations

import sys
from typing import Any, Dict, Tuple

from hybrid_rota.config import Config, Rounding
from hybrid_rota.errors import InfeasibleTargetsError, ValidationError
from hybrid_rota.input_data import InputData
from hybrid_rota.result_types import Targets


def _round_ratio(num: int, den: int, rounding: Rounding) -> int:
    """Round num/den with integer arithmetic so 0.2 steps never drift."""
    if rounding == "ceil":
        return -(-num // den)
    if rounding == "half_up":
        return (2 * num + den) // (2 * den)
    raise ValidationError(f"Unknown rounding policy {rounding!r}.")


def compute_targets(
    total_slots: int,
    days_at_work: int,
    workweek_length: int = 5,
    rounding: Rounding = "ceil",
) -> Targets:
    """
    Per-person targets over the whole horizon.

      raw_at_work = total_slots * days_at_work / workweek_length
      raw_wfh     = total_slots * (workweek_length - days_at_work) / workweek_length

    The at-work target is rounded with `rounding`; the WFH target is whatever
    is left of the calendar, so a person is placed in every slot.
    """
    if workweek_length <= 0:
        raise ValidationError("workweek_length must be > 0.")
    if int(days_at_work) != days_at_work:
        raise ValidationError(f"days_at_work must be a whole number, got {days_at_work!r}.")
    total_slots = int(total_slots)
    raw_at_work = total_slots * days_at_work / workweek_length
    raw_wfh = total_slots * (workweek_length - days_at_work) / workweek_length
    at_work = _round_ratio(total_slots * int(days_at_work), workweek_length, rounding)
    return Targets(
        total_slots=total_slots,
        raw_at_work=raw_at_work,
        raw_wfh=raw_wfh,
        at_work=at_work,
        wfh=max(0, total_slots - at_work),
    )


def check_targets(targets: Targets) -> None:
    """Raise InfeasibleTargetsError when the targets cannot fit the calendar."""
    T = targets.total_slots
    if targets.at_work < 0 or targets.wfh < 0:
        raise InfeasibleTargetsError(
            f"Targets must be non-negative (at_work={targets.at_work}, wfh={targets.wfh}).",
            target_at_work=targets.at_work,
            target_wfh=targets.wfh,
            total_slots=T,
        )
    if targets.at_work > T:
        raise InfeasibleTargetsError(
            f"At-work target {targets.at_work} exceeds the {T} slot(s) in the calendar.",
            target_at_work=targets.at_work,
            target_wfh=targets.wfh,
            total_slots=T,
        )
    if targets.at_work + targets.wfh > T:
        raise InfeasibleTargetsError(
            f"At-work + WFH targets ({targets.at_work} + {targets.wfh}) exceed "
            f"the {T} slot(s) in the calendar.",
            target_at_work=targets.at_work,
            target_wfh=targets.wfh,
            total_slots=T,
        )


def attendance_capacity(
    n_people: int, targets: Targets, minimum: int
) -> Tuple[int, int, bool]:
    """
    Compare office person-days on offer with what the daily minimum asks for.

      cap = n_people * target_at_work
      dem = minimum * total_slots

    ok is True only when cap >= dem and the minimum does not exceed the
    head-count. That makes the minimum attainable by some roster; the random
    generator may still miss it.
    """
    cap = int(n_people) * int(targets.at_work)
    dem = int(minimum) * int(targets.total_slots)
    ok = cap >= dem and int(minimum) <= int(n_people)
    return cap, dem, ok


def precheck_attendance(
    cfg: Config,
    data: InputData,
    *,
    verbose: bool = True,
    stream=None,
) -> Tuple[int, int, bool, Dict[str, Any]]:
    """
    Returns:
      cap: office person-days the targets will place
      dem: person-days needed to hit the minimum on every slot
      ok_cap: minimum attainable in principle
      stats: {
          'people': head-count,
          'total_slots': W * D,
          'target_at_work' / 'target_wfh': per-person targets,
          'raw_at_work' / 'raw_wfh': unrounded targets,
          'minimum': MIN_OFFICE_ATTENDANCE,
          'avg_attendance': cap / total_slots (expected people in per slot),
      }
    Raises InfeasibleTargetsError when the targets themselves do not fit.
    """
    stream = stream or sys.stdout
    targets = compute_targets(
        cfg.total_slots, cfg.DAYS_AT_WORK, cfg.WORKWEEK_LENGTH, cfg.ROUNDING
    )
    check_targets(targets)

    n = len(data.people)
    cap, dem, ok_cap = attendance_capacity(n, targets, cfg.MIN_OFFICE_ATTENDANCE)
    stats: Dict[str, Any] = {
        "people": n,
        "total_slots": targets.total_slots,
        "target_at_work": targets.at_work,
        "target_wfh": targets.wfh,
        "raw_at_work": targets.raw_at_work,
        "raw_wfh": targets.raw_wfh,
        "minimum": cfg.MIN_OFFICE_ATTENDANCE,
        "avg_attendance": cap / targets.total_slots if targets.total_slots else 0.0,
    }

    if verbose:
        print_precheck_header(cap, dem, ok_cap, stream=stream)
        print_target_summary(stats, stream=stream)

    return cap, dem, ok_cap, stats


def print_precheck_header(cap: int, dem: int, ok_cap: bool, *, stream=None) -> None:
    """Print 'Pre-check' on its own line, then capacity line with ✅/❌"""
    stream = stream or sys.stdout
    print("\nPre-check:\n", file=stream)
    if ok_cap:
        print(
            f"✅ Office person-days = {cap:,} | needed for daily minimum = {dem:,} | OK",
            file=stream,
        )
    else:
        print(
            f"❌ Office person-days = {cap:,} | needed for daily minimum = {dem:,} | NOT OK",
            file=stream,
        )
    print(
        "ℹ️  Pre-check only verifies raw capacity; a randomly placed rota may still leave some days short.",
        file=stream,
    )


def print_target_summary(stats: Dict[str, Any], *, stream=None) -> None:
    stream = stream or sys.stdout
    print(
        f"Per person: at work {stats['target_at_work']} "
        f"(raw {stats['raw_at_work']:.2f}), WFH {stats['target_wfh']} "
        f"(raw {stats['raw_wfh']:.2f}) over {stats['total_slots']} day(s)",
        file=stream,
    )
    if stats["people"] and stats["minimum"] > stats["people"]:
        print(
            f"❌ Minimum attendance {stats['minimum']} exceeds head-count {stats['people']}",
            file=stream,
        )
    print(
        f"Expected office attendance per day ≈ {stats['avg_attendance']:.2f} "
        f"(minimum {stats['minimum']})",
        file=stream,
    )
