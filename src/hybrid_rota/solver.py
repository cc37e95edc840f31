# hybrid_rota/solver.py
from __future__ import annotations

from ortools.sat.python import cp_model

from hybrid_rota.config import Config
from hybrid_rota.errors import InfeasibleTargetsError
from hybrid_rota.generator import check_attendance
from hybrid_rota.input_data import InputData
from hybrid_rota.precheck import check_targets, compute_targets
from hybrid_rota.result_types import (
    ConstraintReport,
    DayAssignment,
    ScheduleResult,
    Tally,
)
from hybrid_rota.slots import Slot, build_slots

PS = tuple[int, int]  # (person, slot)


def setup_solver(cfg: Config) -> cp_model.CpSolver:
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = cfg.TIME_LIMIT_SEC
    solver.parameters.num_workers = cfg.NUM_PARALLEL_WORKERS
    solver.parameters.log_search_progress = False
    if cfg.SEED is not None:
        solver.parameters.random_seed = int(cfg.SEED)
    return solver


class BalancedModel:
    """
    CP-SAT model with the generator's per-person targets as hard constraints
    and the total attendance shortfall as the objective:

      x[p,s] + h[p,s] <= 1
      sum_s x[p,s] == target_at_work
      sum_s h[p,s] == target_wfh
      short[s] >= minimum - sum_p x[p,s]
      minimise sum_s short[s]
    """

    def __init__(self, cfg: Config, data: InputData) -> None:
        self.cfg = cfg
        self.data = data
        self.slots: list[Slot] = build_slots(cfg.WEEKS, cfg.WORKDAYS)
        self.targets = compute_targets(
            len(self.slots), cfg.DAYS_AT_WORK, cfg.WORKWEEK_LENGTH, cfg.ROUNDING
        )
        self.m = cp_model.CpModel()
        self.x: dict[PS, cp_model.IntVar] = {}  # in the office
        self.h: dict[PS, cp_model.IntVar] = {}  # working from home
        self.short: dict[int, cp_model.IntVar] = {}  # missing office places

    def build(self) -> "BalancedModel":
        check_targets(self.targets)
        P, S = len(self.data.people), len(self.slots)
        minimum = int(self.cfg.MIN_OFFICE_ATTENDANCE)
        m = self.m

        for p in range(P):
            for s in range(S):
                self.x[(p, s)] = m.NewBoolVar(f"x_p{p}_s{s}")
                self.h[(p, s)] = m.NewBoolVar(f"h_p{p}_s{s}")
                m.Add(self.x[(p, s)] + self.h[(p, s)] <= 1)
            m.Add(sum(self.x[(p, s)] for s in range(S)) == self.targets.at_work)
            m.Add(sum(self.h[(p, s)] for s in range(S)) == self.targets.wfh)

        for s in range(S):
            self.short[s] = m.NewIntVar(0, minimum, f"short_s{s}")
            m.Add(self.short[s] >= minimum - sum(self.x[(p, s)] for p in range(P)))

        m.Minimize(sum(self.short.values()))
        return self

    def extract(self, solver: cp_model.CpSolver) -> tuple[
        dict[Slot, DayAssignment], dict[str, Tally]
    ]:
        names = self.data.names
        roster = {slot: DayAssignment() for slot in self.slots}
        tally = {name: Tally() for name in names}
        for s, slot in enumerate(self.slots):
            for p, name in enumerate(names):
                if solver.Value(self.x[(p, s)]) == 1:
                    roster[slot].at_work.append(name)
                    tally[name].at_work += 1
                elif solver.Value(self.h[(p, s)]) == 1:
                    roster[slot].working_from_home.append(name)
                    tally[name].working_from_home += 1
        return roster, tally


def solve_balanced(
    cfg: Config, data: InputData, progress_cb=None
) -> ScheduleResult:
    """
    Place people with CP-SAT so that daily office attendance is as close to
    the minimum as the targets allow. The minimum is still only reported.
    """
    model = BalancedModel(cfg, data)
    if not data.people:
        return ScheduleResult(
            roster={slot: DayAssignment() for slot in model.slots},
            tally={},
            report=ConstraintReport(
                minimum=int(cfg.MIN_OFFICE_ATTENDANCE), minimum_met=True
            ),
            targets=model.targets,
            strategy="balanced",
        )
    model.build()

    print("\nSolving...")
    solver = setup_solver(cfg)
    status = solver.Solve(model.m, progress_cb)
    status_name = solver.StatusName(status)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        raise InfeasibleTargetsError(
            f"CP-SAT found no rota (status {status_name}).",
            target_at_work=model.targets.at_work,
            target_wfh=model.targets.wfh,
            total_slots=model.targets.total_slots,
        )

    progress_history = None
    if progress_cb is not None:
        if callable(getattr(progress_cb, "solution_history", None)):
            progress_history = progress_cb.solution_history()
        else:
            progress_history = getattr(progress_cb, "history", None)

    roster, tally = model.extract(solver)
    return ScheduleResult(
        roster=roster,
        tally=tally,
        report=check_attendance(roster, cfg.MIN_OFFICE_ATTENDANCE),
        targets=model.targets,
        strategy="balanced",
        status_name=status_name,
        objective_value=solver.ObjectiveValue(),
        progress_history=progress_history,
    )
