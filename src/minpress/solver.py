"""Minimum-press solver: elimination, parametrization and bounded search."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Collection, Sequence

from .errors import NoSolution, SolveError
from .lights import min_toggle_presses
from .matrix import build_matrix, eliminate, mask_bits, validate_machine
from .models import Machine, MachineResult, Options, SolveRequest, SolveResponse
from .parametrization import MAX_FREE_VARIABLES, build_parametrization
from .reference import solve_with_cp_sat
from .search import BoundedSearch

logger = logging.getLogger(__name__)


@dataclass
class MachineSolution:
    """Optimal press counts for one machine."""

    total: int
    presses: list[int]
    free_columns: list[int] = field(default_factory=list)
    statistics: dict[str, int | float] = field(default_factory=dict)


def normalize_masks(masks: Sequence[Collection[int]]) -> tuple[list[frozenset[int]], list[int | None]]:
    """Deduplicate masks and order them by bitmask value.

    Returns the unique masks and, for every input mask, the index of its unique
    copy, or ``None`` for a repeat of an earlier mask.
    """
    by_bits: dict[int, frozenset[int]] = {}
    for mask in masks:
        by_bits.setdefault(mask_bits(mask), frozenset(mask))
    ordered = sorted(by_bits)
    position = {bits: i for i, bits in enumerate(ordered)}

    seen: set[int] = set()
    mapping: list[int | None] = []
    for mask in masks:
        bits = mask_bits(mask)
        if bits in seen:
            mapping.append(None)
        else:
            seen.add(bits)
            mapping.append(position[bits])
    return [by_bits[bits] for bits in ordered], mapping


def solve_machine(
    targets: Sequence[int],
    masks: Sequence[Collection[int]],
    *,
    max_free_variables: int = MAX_FREE_VARIABLES,
) -> MachineSolution:
    """Solve one machine and report the press count of every input mask."""
    started = time.perf_counter()
    validate_machine(targets, masks)
    unique, mapping = normalize_masks(masks)

    matrix = build_matrix(targets, unique)
    pivot_columns = eliminate(matrix)
    parametrization = build_parametrization(
        matrix, pivot_columns, targets, unique, max_free_variables=max_free_variables
    )
    result = BoundedSearch(parametrization).run()

    values = result.column_values
    presses = [values.get(index, 0) if index is not None else 0 for index in mapping]
    statistics: dict[str, int | float] = {
        "solveTimeMs": int((time.perf_counter() - started) * 1000),
        "uniqueMasks": len(unique),
        "freeVariables": parametrization.dimension,
        **result.statistics,
    }
    return MachineSolution(
        total=result.total,
        presses=presses,
        free_columns=list(parametrization.free_columns),
        statistics=statistics,
    )


def solve(
    targets: Sequence[int],
    masks: Sequence[Collection[int]],
    *,
    max_free_variables: int = MAX_FREE_VARIABLES,
) -> int:
    """Minimum total presses that drive every counter exactly to its target."""
    return solve_machine(targets, masks, max_free_variables=max_free_variables).total


def _cross_check(machine: Machine, total: int, options: Options) -> str:
    try:
        expected = solve_with_cp_sat(machine.targets, machine.masks, options.timeLimitSeconds)
    except NoSolution as exc:
        logger.warning("Cross check mismatch for machine %s: exact=%d cp-sat=infeasible (%s)", machine.id, total, exc)
        return "MISMATCH"
    except SolveError as exc:
        logger.warning("Cross check unavailable for machine %s: %s", machine.id, exc)
        return "UNAVAILABLE"
    if expected != total:
        logger.warning("Cross check mismatch for machine %s: exact=%d cp-sat=%d", machine.id, total, expected)
        return "MISMATCH"
    return "MATCH"


def _solve_one(index: int, machine: Machine, options: Options) -> MachineResult:
    solution = solve_machine(machine.targets, machine.masks, max_free_variables=options.maxFreeVariables)
    result = MachineResult(
        index=index,
        id=machine.id,
        status="OPTIMAL",
        total=solution.total,
        presses=solution.presses,
        statistics=solution.statistics,
    )
    if machine.lights is not None:
        result.lightPresses = min_toggle_presses(machine.lights, machine.masks)
    if options.crossCheck:
        result.crossCheck = _cross_check(machine, solution.total, options)
    return result


def solve_request(request: SolveRequest) -> SolveResponse:
    """Solve every machine of a request and sum the totals of the solved ones."""
    options: Options = request.options or Options()
    results: list[MachineResult] = []
    for index, machine in enumerate(request.machines):
        try:
            results.append(_solve_one(index, machine, options))
        except SolveError as exc:
            logger.warning("Machine %d (%s) failed: %s", index, machine.id, exc)
            if not options.continueOnError:
                return SolveResponse(
                    status="ERROR",
                    results=results,
                    error=f"machine {index}: {exc}",
                )
            results.append(
                MachineResult(index=index, id=machine.id, status="ERROR", errorKind=exc.kind, error=str(exc))
            )

    solved = [r for r in results if r.status == "OPTIMAL"]
    if results and not solved:
        status = "ERROR"
    elif len(solved) < len(results):
        status = "PARTIAL"
    else:
        status = "OPTIMAL"
    total = sum(r.total or 0 for r in solved) if solved or not results else None
    light_presses = [r.lightPresses for r in solved if r.lightPresses is not None]
    light_total = sum(light_presses) if light_presses else None
    logger.info("Solved %d of %d machines, total presses %s", len(solved), len(results), total)
    return SolveResponse(status=status, total=total, lightTotal=light_total, results=results)
