"""Free-variable parametrization of a reduced system."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection, Optional, Sequence

from .errors import ArithmeticOverflow, UnsupportedStructure
from .matrix import Matrix
from .rational import Rational, check_range, common_denominator

logger = logging.getLogger(__name__)

MAX_FREE_VARIABLES = 3


@dataclass(frozen=True)
class ScaledExpression:
    """Pivot variable as ``(base + sum(coefficients[i] * free[i])) / scale``."""

    column: int
    scale: int
    base: int
    coefficients: tuple[int, ...]

    def numerator(self, values: Sequence[int]) -> int:
        return self.base + sum(coef * value for coef, value in zip(self.coefficients, values))


@dataclass(frozen=True)
class Parametrization:
    """Free columns in search order, their bounds, and the pivot expressions."""

    free_columns: tuple[int, ...]
    bounds: tuple[int, ...]
    expressions: tuple[ScaledExpression, ...]

    @property
    def dimension(self) -> int:
        return len(self.free_columns)


def find_free_columns(pivot_columns: Sequence[Optional[int]], column_count: int) -> list[int]:
    """Columns that no row pivots on, in ascending order."""
    used = {col for col in pivot_columns if col is not None}
    return [col for col in range(column_count) if col not in used]


def upper_bounds(
    targets: Sequence[int],
    masks: Sequence[Collection[int]],
    free_columns: Sequence[int],
) -> list[int]:
    """Largest value each free column can take without overshooting a row it touches."""
    ceiling = sum(targets)
    bounds: list[int] = []
    for col in free_columns:
        bound = min((targets[row] for row in masks[col]), default=ceiling)
        bounds.append(max(0, min(bound, ceiling)))
    return bounds


def objective_weights(
    matrix: Matrix,
    pivot_columns: Sequence[Optional[int]],
    free_columns: Sequence[int],
) -> list[float]:
    """Approximate change of the total per unit of each free variable.

    Only used to order the search; never for correctness.
    """
    weights = [1.0] * len(free_columns)
    for r, pivot in enumerate(pivot_columns):
        if pivot is None:
            continue
        for i, col in enumerate(free_columns):
            weights[i] -= float(matrix.rows[r][col])
    return weights


def _scale_expression(column: int, base: Rational, coefficients: list[Rational]) -> ScaledExpression:
    scale = common_denominator([base, *coefficients])
    if scale <= 0:
        raise ArithmeticOverflow(f"Invalid common denominator {scale} for column {column}")
    scaled_base = check_range(base.numerator * (scale // base.denominator), "scaled base")
    scaled = tuple(
        check_range(coef.numerator * (scale // coef.denominator), "scaled coefficient") for coef in coefficients
    )
    return ScaledExpression(column=column, scale=scale, base=scaled_base, coefficients=scaled)


def build_parametrization(
    matrix: Matrix,
    pivot_columns: Sequence[Optional[int]],
    targets: Sequence[int],
    masks: Sequence[Collection[int]],
    max_free_variables: int = MAX_FREE_VARIABLES,
) -> Parametrization:
    """Express every pivot variable through the free variables of a reduced matrix."""
    free = find_free_columns(pivot_columns, matrix.column_count)
    if len(free) > max_free_variables:
        raise UnsupportedStructure(
            f"Nullspace dimension {len(free)} exceeds the supported maximum of {max_free_variables}"
        )

    bounds = upper_bounds(targets, masks, free)
    weights = objective_weights(matrix, pivot_columns, free)
    order = sorted(range(len(free)), key=lambda i: (weights[i], bounds[i]))
    ordered_columns = [free[i] for i in order]

    expressions: list[ScaledExpression] = []
    for r, pivot in enumerate(pivot_columns):
        if pivot is None:
            continue
        coefficients = [-matrix.rows[r][col] for col in ordered_columns]
        expressions.append(_scale_expression(pivot, matrix.rhs[r], coefficients))

    logger.debug("Free columns %s with bounds %s", ordered_columns, [bounds[i] for i in order])
    return Parametrization(
        free_columns=tuple(ordered_columns),
        bounds=tuple(bounds[i] for i in order),
        expressions=tuple(expressions),
    )
