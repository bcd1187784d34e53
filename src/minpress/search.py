"""Bounded depth-first search over free-variable assignments."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from .errors import NoSolution
from .parametrization import Parametrization

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    """Mutable state of one search; discarded when the search returns."""

    values: list[int]
    partial_sum: int = 0
    best: float = math.inf
    best_values: Optional[tuple[int, ...]] = None
    best_pivots: Optional[dict[int, int]] = None
    leaves: int = 0
    pruned: int = 0


@dataclass
class SearchResult:
    """Minimum total and the assignment that reaches it."""

    total: int
    free_values: dict[int, int]
    pivot_values: dict[int, int]
    statistics: dict[str, int] = field(default_factory=dict)

    @property
    def column_values(self) -> dict[int, int]:
        return {**self.pivot_values, **self.free_values}


class BoundedSearch:
    """Enumerate free variables within their bounds and keep the cheapest integer point.

    Two rules cut branches before a position is expanded: the partial sum
    already reaching the best total, and a pivot numerator that stays negative
    even if every remaining variable with a positive coefficient is pushed to
    its bound.
    """

    def __init__(self, parametrization: Parametrization) -> None:
        self.parametrization = parametrization
        self.state = SearchState(values=[0] * parametrization.dimension)

    def run(self) -> SearchResult:
        """Search exhaustively and return the best point, or raise :class:`NoSolution`."""
        self._descend(0)
        state = self.state
        if state.best_values is None or state.best_pivots is None:
            raise NoSolution("No non-negative integer point satisfies the system")

        free_columns = self.parametrization.free_columns
        statistics = {"leavesVisited": state.leaves, "branchesPruned": state.pruned}
        logger.debug("Search finished: best=%s leaves=%d pruned=%d", state.best, state.leaves, state.pruned)
        return SearchResult(
            total=int(state.best),
            free_values=dict(zip(free_columns, state.best_values)),
            pivot_values=dict(state.best_pivots),
            statistics=statistics,
        )

    def _can_stay_nonnegative(self, pos: int) -> bool:
        values = self.state.values
        bounds = self.parametrization.bounds
        for expr in self.parametrization.expressions:
            reachable = expr.base
            for i, coef in enumerate(expr.coefficients):
                if i < pos:
                    reachable += coef * values[i]
                elif coef > 0:
                    reachable += coef * bounds[i]
            if reachable < 0:
                return False
        return True

    def _value_order(self, pos: int) -> range:
        weight = 1.0
        for expr in self.parametrization.expressions:
            weight += expr.coefficients[pos] / expr.scale
        bound = self.parametrization.bounds[pos]
        if weight < 0:
            return range(bound, -1, -1)
        return range(0, bound + 1)

    def _evaluate_leaf(self) -> None:
        state = self.state
        state.leaves += 1
        total = state.partial_sum
        pivots: dict[int, int] = {}
        for expr in self.parametrization.expressions:
            numerator = expr.numerator(state.values)
            if numerator < 0 or numerator % expr.scale != 0:
                return
            value = numerator // expr.scale
            total += value
            if total >= state.best:
                return
            pivots[expr.column] = value
        state.best = total
        state.best_values = tuple(state.values)
        state.best_pivots = pivots

    def _descend(self, pos: int) -> None:
        state = self.state
        if state.partial_sum >= state.best or not self._can_stay_nonnegative(pos):
            state.pruned += 1
            return
        if pos == self.parametrization.dimension:
            self._evaluate_leaf()
            return

        for value in self._value_order(pos):
            state.values[pos] = value
            state.partial_sum += value
            self._descend(pos + 1)
            state.partial_sum -= value
        state.values[pos] = 0
