"""Coefficient matrix construction and exact Gauss-Jordan elimination."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection, Iterable, Optional, Sequence

from .errors import InvalidInput, NoSolution
from .rational import ONE, ZERO, Rational

logger = logging.getLogger(__name__)


@dataclass
class Matrix:
    """Augmented system ``A x = rhs`` with 0/1 coefficients before elimination."""

    rows: list[list[Rational]]
    rhs: list[Rational]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def swap_rows(self, first: int, second: int) -> None:
        self.rows[first], self.rows[second] = self.rows[second], self.rows[first]
        self.rhs[first], self.rhs[second] = self.rhs[second], self.rhs[first]

    def row_is_zero(self, row: int) -> bool:
        return all(value.is_zero() for value in self.rows[row])


def mask_bits(mask: Iterable[int]) -> int:
    """Bitmask with bit ``i`` set for every row ``i`` in ``mask``."""
    bits = 0
    for row in mask:
        bits |= 1 << row
    return bits


def validate_machine(targets: Sequence[int], masks: Sequence[Collection[int]]) -> None:
    """Raise :class:`InvalidInput` unless targets and masks describe a well-formed machine."""
    if not targets:
        raise InvalidInput("Machine requires at least one target")
    if not masks:
        raise InvalidInput("Machine requires at least one mask")

    row_count = len(targets)
    for index, target in enumerate(targets):
        if target < 0:
            raise InvalidInput(f"Target {index} is negative ({target})")
    for index, mask in enumerate(masks):
        for row in mask:
            if row < 0 or row >= row_count:
                raise InvalidInput(f"Mask {index} references row {row} outside [0, {row_count})")


def build_matrix(targets: Sequence[int], masks: Sequence[Collection[int]]) -> Matrix:
    """Build ``A[i][j] = 1`` when row ``i`` belongs to mask ``j``, with ``rhs = targets``."""
    validate_machine(targets, masks)
    row_count = len(targets)

    rows = [[ONE if i in mask else ZERO for mask in masks] for i in range(row_count)]
    return Matrix(rows=rows, rhs=[Rational(target) for target in targets])


def reduce_to_rref(matrix: Matrix) -> list[Optional[int]]:
    """Reduce ``matrix`` in place to reduced row-echelon form.

    Columns are scanned left to right and the topmost usable row becomes the
    pivot row, so the result only depends on the input order.

    Returns:
        For every row, the column it pivots on, or ``None``.
    """
    pivot_columns: list[Optional[int]] = [None] * matrix.row_count
    columns = matrix.column_count
    row = 0
    for col in range(columns):
        if row >= matrix.row_count:
            break
        pivot = next((r for r in range(row, matrix.row_count) if not matrix.rows[r][col].is_zero()), None)
        if pivot is None:
            continue
        if pivot != row:
            matrix.swap_rows(pivot, row)

        pivot_row = matrix.rows[row]
        pivot_value = pivot_row[col]
        if pivot_value != ONE:
            for j in range(col, columns):
                pivot_row[j] = pivot_row[j] / pivot_value
            matrix.rhs[row] = matrix.rhs[row] / pivot_value

        for r in range(matrix.row_count):
            if r == row:
                continue
            factor = matrix.rows[r][col]
            if factor.is_zero():
                continue
            target_row = matrix.rows[r]
            for j in range(col, columns):
                target_row[j] = target_row[j] - factor * pivot_row[j]
            matrix.rhs[r] = matrix.rhs[r] - factor * matrix.rhs[row]

        pivot_columns[row] = col
        row += 1
    return pivot_columns


def check_consistency(matrix: Matrix) -> None:
    """Raise :class:`NoSolution` when a zero row has a non-zero right-hand side."""
    for r in range(matrix.row_count):
        if matrix.row_is_zero(r) and not matrix.rhs[r].is_zero():
            raise NoSolution(f"Inconsistent system: row {r} reads 0 = {matrix.rhs[r]}")


def eliminate(matrix: Matrix) -> list[Optional[int]]:
    """Reduce ``matrix`` to RREF and verify the system is consistent."""
    pivot_columns = reduce_to_rref(matrix)
    check_consistency(matrix)
    rank = sum(1 for col in pivot_columns if col is not None)
    logger.debug("Eliminated %dx%d system to rank %d", matrix.row_count, matrix.column_count, rank)
    return pivot_columns
