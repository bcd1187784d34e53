"""CP-SAT formulation of a machine, used to cross-check the exact solver."""

from __future__ import annotations

from typing import Collection, Sequence

from ortools.sat.python import cp_model

from .errors import InvalidInput, NoSolution, SolveError


def _press_bound(targets: Sequence[int], mask: Collection[int]) -> int:
    return min((targets[row] for row in mask), default=0)


def build_model(
    targets: Sequence[int], masks: Sequence[Collection[int]]
) -> tuple[cp_model.CpModel, list[cp_model.IntVar]]:
    """Integer program: one press counter per mask, one equality per target row."""
    if not targets or not masks:
        raise InvalidInput("Machine requires at least one target and one mask")

    model = cp_model.CpModel()
    presses = [model.NewIntVar(0, _press_bound(targets, mask), f"press_{j}") for j, mask in enumerate(masks)]
    for row, target in enumerate(targets):
        touching = [presses[j] for j, mask in enumerate(masks) if row in mask]
        if not touching:
            if target != 0:
                raise NoSolution(f"Row {row} has target {target} but no mask touches it")
            continue
        model.Add(sum(touching) == target)
    model.Minimize(sum(presses))
    return model, presses


def solve_with_cp_sat(
    targets: Sequence[int],
    masks: Sequence[Collection[int]],
    time_limit_seconds: float = 10.0,
) -> int:
    """Minimum total presses according to CP-SAT."""
    model, _ = build_model(targets, masks)
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = time_limit_seconds

    status = solver.Solve(model)
    if status == cp_model.OPTIMAL:
        return int(round(solver.objective_value))
    if status == cp_model.INFEASIBLE:
        raise NoSolution("CP-SAT reports the machine infeasible")
    if status == cp_model.UNKNOWN:
        raise SolveError(f"CP-SAT gave up after {time_limit_seconds}s")
    raise SolveError(f"CP-SAT finished with status {solver.StatusName(status)}")
